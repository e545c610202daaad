from datetime import datetime, timedelta
from decimal import Decimal

from models import GenderType, Kos, KosStatus
from services.kos_service import filter_kos
from tests.conftest import auth_headers, make_kos


def _kos(name, city, price, room_type="Standar", gender=GenderType.CAMPUR, **extra):
    return Kos(
        name=name, address=f"Jl. {name}", city=city, room_type=room_type,
        gender_type=gender, monthly_price=Decimal(price), total_rooms=5, available_rooms=1,
        **extra,
    )


LISTINGS = [
    _kos("Kos Melati", "Yogyakarta", "1500000", fasilitas_kamar="Kasur, AC"),
    _kos("Kos Mawar", "Bandung", "900000", gender=GenderType.PUTRI),
    _kos("Kos Kenanga", "Yogyakarta", "1200000", room_type="Eksklusif", description="Dekat kampus UGM"),
]


def test_no_filters_returns_everything():
    assert filter_kos(LISTINGS) == LISTINGS


def test_search_is_case_insensitive_over_text_and_facilities():
    assert [k.name for k in filter_kos(LISTINGS, search="mawar")] == ["Kos Mawar"]
    assert [k.name for k in filter_kos(LISTINGS, search="ugm")] == ["Kos Kenanga"]
    assert [k.name for k in filter_kos(LISTINGS, search="ac")] == ["Kos Melati"]


def test_exact_match_filters():
    assert [k.name for k in filter_kos(LISTINGS, city="Yogyakarta", room_type="Eksklusif")] == ["Kos Kenanga"]
    assert [k.name for k in filter_kos(LISTINGS, gender_type="putri")] == ["Kos Mawar"]


def test_price_bounds_are_inclusive():
    result = filter_kos(LISTINGS, min_price="900000", max_price="1200000")
    assert [k.name for k in result] == ["Kos Mawar", "Kos Kenanga"]


def test_unparsable_price_bounds_are_ignored():
    assert filter_kos(LISTINGS, min_price="murah", max_price="") == LISTINGS


def test_search_endpoint_reports_totals(client, db, pemilik, web_user):
    make_kos(db, pemilik, name="Kos Melati", city="Yogyakarta")
    make_kos(db, pemilik, name="Kos Mawar", city="Bandung", room_type="Standar")
    make_kos(db, pemilik, name="Kos Tutup", city="Solo", property_status=KosStatus.INACTIVE)

    response = client.get("/api/kos/search", params={"city": "Bandung"}, headers=auth_headers(web_user))
    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 2
    assert body["shown"] == 1
    assert body["data"][0]["name"] == "Kos Mawar"
    assert body["cities"] == ["Bandung", "Yogyakarta"]
    assert body["roomTypes"] == ["Kamar mandi dalam", "Standar"]


def test_search_only_filters_the_newest_hundred(client, db, pemilik, web_user):
    make_kos(db, pemilik, name="Kos Lama", city="Semarang", created_at=datetime(2020, 1, 1))
    newest = datetime(2026, 1, 1)
    for i in range(100):
        make_kos(db, pemilik, name=f"Kos {i}", created_at=newest + timedelta(minutes=i))

    response = client.get("/api/kos/search", params={"city": "Semarang"}, headers=auth_headers(web_user))
    body = response.json()
    assert response.status_code == 200
    assert body["total"] == 100
    assert body["shown"] == 0
    assert body["data"] == []
    assert "Semarang" not in body["cities"]


def test_mobile_listing_paginates_active_kos(client, db, pemilik, penyewa):
    for i in range(3):
        make_kos(db, pemilik, name=f"Kos {i}")
    make_kos(db, pemilik, name="Kos Tutup", property_status=KosStatus.INACTIVE)

    response = client.get("/api/mobile/kos", params={"limit": 2}, headers=auth_headers(penyewa))
    body = response.json()
    assert response.status_code == 200
    assert len(body["data"]) == 2
    assert body["pagination"] == {
        "total_records": 3,
        "total_pages": 2,
        "current_page": 1,
        "next_page": 2,
        "prev_page": None,
        "limit": 2,
    }

    response = client.get("/api/mobile/kos", params={"limit": 2, "page": 2}, headers=auth_headers(penyewa))
    body = response.json()
    assert len(body["data"]) == 1
    assert body["pagination"]["next_page"] is None
    assert body["pagination"]["prev_page"] == 1


def test_mobile_listing_offset_wins_over_page(client, db, pemilik, penyewa):
    for i in range(3):
        make_kos(db, pemilik, name=f"Kos {i}")
    response = client.get(
        "/api/mobile/kos", params={"limit": 1, "page": 1, "offset": 2}, headers=auth_headers(penyewa)
    )
    assert response.json()["pagination"]["current_page"] == 3


def test_mobile_listing_search_and_price(client, db, pemilik, penyewa):
    make_kos(db, pemilik, name="Kos Melati", monthly_price=Decimal("1500000"))
    make_kos(db, pemilik, name="Kos Mawar", address="Jl. Dago", monthly_price=Decimal("900000"))

    response = client.get("/api/mobile/kos", params={"search": "dago"}, headers=auth_headers(penyewa))
    assert [k["name"] for k in response.json()["data"]] == ["Kos Mawar"]

    response = client.get("/api/mobile/kos", params={"min_price": "1000000"}, headers=auth_headers(penyewa))
    assert [k["name"] for k in response.json()["data"]] == ["Kos Melati"]


def test_mobile_detail_counts_views(client, db, kos, penyewa):
    for _ in range(2):
        response = client.get(f"/api/mobile/kos/{kos.id}", headers=auth_headers(penyewa))
        assert response.status_code == 200
    assert response.json()["data"]["view_count"] == 2
    assert response.json()["data"]["room_type"] == "Kamar mandi dalam"
