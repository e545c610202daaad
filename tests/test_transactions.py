from decimal import Decimal

from models import Tagihan, Transaction
from models.tagihan import TagihanStatus
from services import midtrans
from tests.conftest import auth_headers


def _fake_snap(captured):
    def create(payload):
        captured.append(payload)
        return {"token": "snap-123", "redirect_url": "https://app.sandbox.midtrans.com/snap/v2/vtweb/snap-123"}
    return create


def _gateway_down(payload):
    raise midtrans.PaymentGatewayError("Midtrans unreachable")


def test_create_transaction_for_tagihan(client, db, tagihan, penyewa, pemilik, monkeypatch):
    captured = []
    monkeypatch.setattr(midtrans, "create_snap_transaction", _fake_snap(captured))

    response = client.post(
        "/api/mobile/transactions",
        json={"tagihan_id": tagihan.id, "payment_method": "gopay"},
        headers=auth_headers(penyewa),
    )
    assert response.status_code == 201

    data = response.json()["data"]
    assert data["midtrans"]["token"] == "snap-123"
    transaction = data["transaction"]
    assert transaction["payment_status"] == "pending"
    assert transaction["user_penyedia_id"] == pemilik.id
    assert transaction["amount"] == 1500000
    assert transaction["invoice_number"].startswith("INV-")

    details = captured[0]["transaction_details"]
    assert details == {"order_id": transaction["invoice_number"], "gross_amount": 1500000}
    assert captured[0]["callbacks"]["finish"] == midtrans.MOBILE_CALLBACKS["finish"]

    stored = db.query(Transaction).one()
    assert stored.snap_token == "snap-123"
    assert stored.payment_method == "gopay"
    assert stored.mitrans_status == "pending"


def test_gateway_failure_keeps_pending_transaction(client, db, tagihan, penyewa, monkeypatch):
    monkeypatch.setattr(midtrans, "create_snap_transaction", _gateway_down)

    response = client.post(
        "/api/mobile/transactions", json={"tagihan_id": tagihan.id}, headers=auth_headers(penyewa)
    )
    assert response.status_code == 201
    assert response.json()["data"]["midtrans"] is None
    stored = db.query(Transaction).one()
    assert stored.payment_method == "midtrans"
    assert stored.mitrans_status == "pending"


def test_create_transaction_unknown_tagihan(client, penyewa):
    response = client.post(
        "/api/mobile/transactions", json={"tagihan_id": "missing"}, headers=auth_headers(penyewa)
    )
    assert response.status_code == 404
    assert response.json()["error"] == "Tagihan tidak ditemukan"


def _pending_transaction(db, tagihan, penyewa, invoice="INV-1700000000000-ABC123"):
    transaction = Transaction(
        tagihan_id=tagihan.id,
        kos_id=tagihan.sewa.kos_id,
        user_penyewa_id=penyewa.id,
        user_penyedia_id=tagihan.sewa.kos.user_id,
        amount=Decimal("1500000"),
        invoice_number=invoice,
    )
    db.add(transaction)
    db.commit()
    return transaction


def test_patch_success_marks_tagihan_paid(client, db, tagihan, penyewa):
    transaction = _pending_transaction(db, tagihan, penyewa)

    response = client.patch(
        "/api/mobile/transactions",
        json={"order_id": transaction.invoice_number, "status": "success", "transaction_status": "settlement"},
        headers=auth_headers(penyewa),
    )
    assert response.status_code == 200
    assert response.json()["data"]["payment_status"] == "success"

    db.expire_all()
    assert db.get(Tagihan, tagihan.id).status == TagihanStatus.PAID
    assert db.get(Transaction, transaction.id).mitrans_status == "settlement"


def test_patch_other_status_changes_nothing(client, db, tagihan, penyewa):
    transaction = _pending_transaction(db, tagihan, penyewa)

    response = client.patch(
        "/api/mobile/transactions",
        json={"order_id": transaction.invoice_number, "status": "pending"},
        headers=auth_headers(penyewa),
    )
    assert response.status_code == 200
    assert response.json()["data"] is None

    db.expire_all()
    assert db.get(Transaction, transaction.id).payment_status == "pending"
    assert db.get(Tagihan, tagihan.id).status == TagihanStatus.UNPAID


def test_list_own_transactions(client, db, tagihan, penyewa, web_user):
    _pending_transaction(db, tagihan, penyewa)

    response = client.get("/api/mobile/transactions", headers=auth_headers(penyewa))
    assert len(response.json()["data"]) == 1

    response = client.get("/api/mobile/transactions", headers=auth_headers(web_user))
    assert response.json()["data"] == []


RENT_FORM = {
    "startDate": "2026-11-01",
    "duration": 3,
    "totalPrice": 4500000,
    "ktpNumber": "3404012345670001",
    "customerDetails": {"firstName": "Budi", "lastName": "Santoso", "email": "budi@kosku.id"},
    "kosName": "Kos Melati",
}


def test_web_payment_uses_transaction_id_as_order_id(client, db, kos, web_user, monkeypatch):
    captured = []
    monkeypatch.setattr(midtrans, "create_snap_transaction", _fake_snap(captured))

    response = client.post("/api/payment", json={**RENT_FORM, "kosId": kos.id}, headers=auth_headers(web_user))
    assert response.status_code == 200

    body = response.json()
    assert body["token"] == "snap-123"
    assert captured[0]["transaction_details"]["order_id"] == body["transactionId"]

    stored = db.get(Transaction, body["transactionId"])
    assert stored.duration_months == 3
    assert stored.payment_status == "pending"


def test_web_payment_gateway_failure(client, db, kos, web_user, monkeypatch):
    monkeypatch.setattr(midtrans, "create_snap_transaction", _gateway_down)

    response = client.post("/api/payment", json={**RENT_FORM, "kosId": kos.id}, headers=auth_headers(web_user))
    assert response.status_code == 500
    assert response.json()["success"] is False
    assert db.query(Transaction).count() == 0


def test_payment_notification_uses_status_api(client, db, kos, web_user, monkeypatch):
    monkeypatch.setattr(midtrans, "create_snap_transaction", _fake_snap([]))
    response = client.post("/api/payment", json={**RENT_FORM, "kosId": kos.id}, headers=auth_headers(web_user))
    transaction_id = response.json()["transactionId"]

    monkeypatch.setattr(
        midtrans, "get_transaction_status",
        lambda order_id: {
            "transaction_status": "capture",
            "fraud_status": "challenge",
            "transaction_id": "mt-1",
            "payment_type": "credit_card",
        },
    )
    response = client.post("/api/payment/notification", json={"order_id": transaction_id})
    assert response.status_code == 200
    assert response.json()["data"]["payment_status"] == "challenge"

    db.expire_all()
    stored = db.get(Transaction, transaction_id)
    assert stored.mitrans_id == "mt-1"
    assert stored.payment_method == "credit_card"


def test_owner_approves_transaction(client, db, tagihan, penyewa, pemilik):
    transaction = _pending_transaction(db, tagihan, penyewa)

    response = client.get("/api/transactions", headers=auth_headers(pemilik))
    assert [t["id"] for t in response.json()["data"]] == [transaction.id]

    response = client.patch(
        f"/api/transactions/{transaction.id}/status",
        json={"status": "approved"},
        headers=auth_headers(pemilik),
    )
    assert response.status_code == 200
    assert response.json()["data"]["payment_status"] == "approved"


def test_approval_rejects_unknown_status(client, db, tagihan, penyewa, pemilik):
    transaction = _pending_transaction(db, tagihan, penyewa)
    response = client.patch(
        f"/api/transactions/{transaction.id}/status",
        json={"status": "paid"},
        headers=auth_headers(pemilik),
    )
    assert response.status_code == 400


def test_tenant_cannot_list_dashboard_transactions(client, penyewa):
    response = client.get("/api/transactions", headers=auth_headers(penyewa))
    assert response.status_code == 403
