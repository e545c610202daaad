import uuid
from decimal import Decimal

from models import Sewa, Tagihan
from services.sewa_service import SewaService
from tests.conftest import auth_headers, make_kos


def test_create_sewa_generates_monthly_tagihan(client, db, kos, penyewa):
    response = client.post(
        "/api/mobile/sewa",
        json={"kos_id": kos.id, "start_date": "2026-01-15", "end_date": "2026-03-20"},
        headers=auth_headers(penyewa),
    )
    assert response.status_code == 201

    data = response.json()["data"]
    assert data["sewa"]["kos_id"] == kos.id
    assert data["sewa"]["monthly_price"] == 1500000
    assert data["tagihan"]["billing_month"] == 1
    assert data["tagihan"]["billing_year"] == 2026
    assert data["tagihan"]["due_date"] == "2026-01-01"
    assert data["tagihan"]["status"] == "unpaid"

    bills = db.query(Tagihan).order_by(Tagihan.due_date).all()
    assert [(b.billing_year, b.billing_month) for b in bills] == [(2026, 1), (2026, 2), (2026, 3)]


def test_open_ended_sewa_bills_first_month(client, db, kos, penyewa):
    response = client.post(
        "/api/mobile/sewa",
        json={"kos_id": kos.id, "start_date": "2026-04-02T00:00:00.000Z"},
        headers=auth_headers(penyewa),
    )
    assert response.status_code == 201
    assert db.query(Tagihan).count() == 1


def test_requires_kos_id_and_start_date(client, penyewa):
    response = client.post("/api/mobile/sewa", json={"kos_id": "x"}, headers=auth_headers(penyewa))
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "kos_id dan start_date harus disertakan"}


def test_rejects_unparsable_date(client, kos, penyewa):
    response = client.post(
        "/api/mobile/sewa",
        json={"kos_id": kos.id, "start_date": "besok"},
        headers=auth_headers(penyewa),
    )
    assert response.status_code == 400
    assert response.json()["error"] == "start_date tidak valid"


def test_rejects_end_before_start(client, kos, penyewa):
    response = client.post(
        "/api/mobile/sewa",
        json={"kos_id": kos.id, "start_date": "2026-05-01", "end_date": "2026-04-01"},
        headers=auth_headers(penyewa),
    )
    assert response.status_code == 400
    assert response.json()["error"] == "end_date tidak boleh sebelum start_date"


def test_unknown_kos(client, penyewa):
    response = client.post(
        "/api/mobile/sewa",
        json={"kos_id": str(uuid.uuid4()), "start_date": "2026-05-01"},
        headers=auth_headers(penyewa),
    )
    assert response.status_code == 404
    assert response.json()["error"] == "Kos tidak ditemukan"


def test_rejects_non_positive_price(client, db, pemilik, penyewa):
    free = make_kos(db, pemilik, name="Kos Gratis", monthly_price=Decimal("0"))
    response = client.post(
        "/api/mobile/sewa",
        json={"kos_id": free.id, "start_date": "2026-05-01"},
        headers=auth_headers(penyewa),
    )
    assert response.status_code == 400
    assert response.json()["error"] == "monthly_price tidak valid"
    assert db.query(Sewa).count() == 0


def test_sewa_is_removed_when_tagihan_insert_fails(client, db, kos, penyewa, monkeypatch):
    def fail(db, sewa, bills):
        raise RuntimeError("insert failed")

    monkeypatch.setattr(SewaService, "insert_tagihan", staticmethod(fail))

    response = client.post(
        "/api/mobile/sewa",
        json={"kos_id": kos.id, "start_date": "2026-01-15", "end_date": "2026-06-15"},
        headers=auth_headers(penyewa),
    )
    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Gagal membuat tagihan bulanan"}
    assert db.query(Sewa).count() == 0
    assert db.query(Tagihan).count() == 0


def test_list_sewa_includes_tagihan(client, tagihan, penyewa):
    response = client.get("/api/mobile/sewa", headers=auth_headers(penyewa))
    assert response.status_code == 200
    leases = response.json()["data"]
    assert len(leases) == 1
    assert [t["id"] for t in leases[0]["tagihan"]] == [tagihan.id]
