import uuid

import pytest

import azure_blob
from models import GambarKos, Kos, RoleName
from tests.conftest import auth_headers, make_kos, make_user

FORM = {
    "name": "Kos Anggrek",
    "address": "Jl. Anggrek 7",
    "city": "Malang",
    "roomType": "Kamar mandi luar",
    "nomorPemilik": "0812 3456 7890",
    "monthlyPrice": 850000,
    "totalRooms": 8,
    "availableRooms": 2,
    "genderType": "putri",
    "fasilitasKamar": ["Kasur", "Lemari"],
}


def test_requires_token(client):
    response = client.get("/api/kos")
    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Unauthorized: Token tidak ditemukan"}


def test_rejects_invalid_token(client):
    response = client.get("/api/kos", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["error"] == "Unauthorized: Token tidak valid atau kadaluarsa"


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Route not found"}


def test_pemilik_creates_kos(client, db, pemilik):
    response = client.post("/api/kos", json=FORM, headers=auth_headers(pemilik))
    assert response.status_code == 201

    data = response.json()["data"]
    assert data["userId"] == pemilik.id
    assert data["roomType"] == "Kamar mandi luar"
    assert data["genderType"] == "putri"
    assert data["nomorPemilik"] == "081234567890"
    assert data["monthlyPrice"] == 850000
    assert data["fasilitas_kamar"] == ["Kasur", "Lemari"]

    stored = db.query(Kos).filter(Kos.id == data["id"]).one()
    assert stored.fasilitas_kamar == "Kasur, Lemari"


def test_create_rejects_more_available_than_total(client, pemilik):
    response = client.post("/api/kos", json={**FORM, "availableRooms": 9}, headers=auth_headers(pemilik))
    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error": "Kamar tersedia tidak boleh lebih dari total kamar.",
    }


def test_tenant_cannot_create_kos(client, penyewa):
    response = client.post("/api/kos", json=FORM, headers=auth_headers(penyewa))
    assert response.status_code == 403


def test_get_kos_validates_uuid(client, web_user):
    response = client.get("/api/kos/123", headers=auth_headers(web_user))
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid UUID format"


def test_get_missing_kos(client, web_user):
    response = client.get(f"/api/kos/{uuid.uuid4()}", headers=auth_headers(web_user))
    assert response.status_code == 404
    assert response.json()["error"] == "Kos tidak ditemukan"


def test_get_kos_detail(client, kos, web_user):
    response = client.get(f"/api/kos/{kos.id}", headers=auth_headers(web_user))
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "Kos Melati"
    assert data["isLiked"] is False
    assert data["location"] == ""


def test_list_kos_newest_first(client, db, pemilik, web_user):
    make_kos(db, pemilik, name="Kos A")
    make_kos(db, pemilik, name="Kos B")
    response = client.get("/api/kos", headers=auth_headers(web_user))
    assert response.status_code == 200
    assert {k["name"] for k in response.json()["data"]} == {"Kos A", "Kos B"}


def test_owner_updates_kos(client, db, kos, pemilik):
    response = client.put(
        f"/api/kos/{kos.id}",
        json={"monthlyPrice": 1750000, "availableRooms": 5},
        headers=auth_headers(pemilik),
    )
    assert response.status_code == 200
    assert response.json()["data"]["monthlyPrice"] == 1750000
    assert response.json()["data"]["availableRooms"] == 5


def test_update_checks_merged_room_counts(client, kos, pemilik):
    # Stored total_rooms is 10
    response = client.put(f"/api/kos/{kos.id}", json={"availableRooms": 11}, headers=auth_headers(pemilik))
    assert response.status_code == 400
    assert response.json()["error"] == "Kamar tersedia tidak boleh lebih dari total kamar."


@pytest.mark.parametrize("body, field", [
    ({"totalRooms": None}, "total_rooms"),
    ({"name": None}, "name"),
    ({"monthlyPrice": None, "genderType": None}, "monthly_price"),
])
def test_update_rejects_null_for_required_fields(client, db, kos, pemilik, body, field):
    response = client.put(f"/api/kos/{kos.id}", json=body, headers=auth_headers(pemilik))
    assert response.status_code == 400
    assert response.json()["error"] == f"{field} tidak boleh kosong"
    db.refresh(kos)
    assert kos.name == "Kos Melati"
    assert kos.total_rooms == 10


def test_update_can_clear_optional_fields(client, db, kos, pemilik):
    kos.description = "Dekat kampus"
    db.commit()
    response = client.put(f"/api/kos/{kos.id}", json={"description": None}, headers=auth_headers(pemilik))
    assert response.status_code == 200
    db.refresh(kos)
    assert kos.description is None


def test_other_owner_cannot_update(client, db, kos):
    other = make_user(db, "lain@kosku.id", RoleName.PEMILIK.value)
    response = client.put(f"/api/kos/{kos.id}", json={"name": "Diambil"}, headers=auth_headers(other))
    assert response.status_code == 404


def test_admin_can_update_any_kos(client, kos, admin):
    response = client.put(f"/api/kos/{kos.id}", json={"isFeatured": True}, headers=auth_headers(admin))
    assert response.status_code == 200
    assert response.json()["data"]["isFeatured"] is True


def test_mine_lists_only_own_kos(client, db, kos, pemilik):
    other = make_user(db, "lain@kosku.id", RoleName.PEMILIK.value)
    make_kos(db, other, name="Kos Orang Lain")
    response = client.get("/api/kos/mine", headers=auth_headers(pemilik))
    assert [k["id"] for k in response.json()["data"]] == [kos.id]


def test_upload_and_delete_image(client, db, kos, pemilik, monkeypatch):
    deleted = []
    monkeypatch.setattr(
        azure_blob, "upload_to_blob",
        lambda file, container, prefix: (f"{prefix}/foto.jpg", f"https://blob.test/{prefix}/foto.jpg"),
    )
    monkeypatch.setattr(azure_blob, "delete_from_blob", lambda container, name: deleted.append(name))

    response = client.post(
        f"/api/kos/{kos.id}/images",
        files={"file": ("foto.jpg", b"\xff\xd8\xff", "image/jpeg")},
        headers=auth_headers(pemilik),
    )
    assert response.status_code == 201
    image = response.json()["data"]
    assert image["urlGambar"] == f"https://blob.test/{kos.id}/foto.jpg"

    response = client.delete(f"/api/kos/{kos.id}/images/{image['id']}", headers=auth_headers(pemilik))
    assert response.status_code == 200
    assert deleted == [f"{kos.id}/foto.jpg"]
    assert db.query(GambarKos).count() == 0


def test_upload_rejects_non_images(client, kos, pemilik):
    response = client.post(
        f"/api/kos/{kos.id}/images",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=auth_headers(pemilik),
    )
    assert response.status_code == 400


def test_delete_kos_removes_stored_images(client, db, kos, pemilik, monkeypatch):
    deleted = []
    monkeypatch.setattr(azure_blob, "delete_from_blob", lambda container, name: deleted.append(name))
    db.add(GambarKos(kos_id=kos.id, nama_file=f"{kos.id}/a.jpg", url_gambar="https://blob.test/a.jpg"))
    db.commit()

    response = client.delete(f"/api/kos/{kos.id}", headers=auth_headers(pemilik))
    assert response.status_code == 200
    assert deleted == [f"{kos.id}/a.jpg"]
    db.expire_all()
    assert db.query(Kos).count() == 0
