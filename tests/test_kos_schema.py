import pytest
from pydantic import ValidationError

from models.kos import join_facilities, split_facilities
from schemas.kos import KosCreate, KosUpdate

BASE = {
    "name": "Kos Melati",
    "address": "Jl. Kaliurang KM 5",
    "city": "Yogyakarta",
    "roomType": "Kamar mandi dalam",
    "nomorPemilik": "081234567890",
    "monthlyPrice": 1500000,
    "totalRooms": 10,
    "availableRooms": 4,
}


def test_accepts_camel_case_form():
    kos = KosCreate(**BASE)
    assert kos.room_type == "Kamar mandi dalam"
    assert kos.total_rooms == 10


def test_accepts_snake_case_keys():
    kos = KosCreate(
        name="Kos Mawar", address="Jl. Mawar 1", city="Bandung", room_type="Standar",
        nomor_pemilik="6281234567890", monthly_price=900000, total_rooms=5, available_rooms=5,
    )
    assert kos.available_rooms == 5


def test_available_rooms_cannot_exceed_total():
    with pytest.raises(ValidationError) as exc:
        KosCreate(**{**BASE, "availableRooms": 11})
    assert "Kamar tersedia tidak boleh lebih dari total kamar." in str(exc.value)


@pytest.mark.parametrize("phone", ["081234567890", "+6281234567890", "62812345678", "0812 3456 7890"])
def test_valid_phone_numbers(phone):
    kos = KosCreate(**{**BASE, "nomorPemilik": phone})
    assert " " not in kos.nomor_pemilik


@pytest.mark.parametrize("phone", ["12345", "0712345678", "0801234567", "08123456789012345", "abc"])
def test_invalid_phone_numbers(phone):
    with pytest.raises(ValidationError) as exc:
        KosCreate(**{**BASE, "nomorPemilik": phone})
    assert "Nomor pemilik tidak valid" in str(exc.value)


def test_total_rooms_must_be_positive():
    with pytest.raises(ValidationError):
        KosCreate(**{**BASE, "totalRooms": 0, "availableRooms": 0})


def test_blank_required_text_is_rejected():
    with pytest.raises(ValidationError):
        KosCreate(**{**BASE, "name": "   "})


def test_update_allows_partial_fields():
    update = KosUpdate(monthlyPrice=2000000)
    assert update.model_dump(exclude_unset=True) == {"monthly_price": 2000000}


def test_facility_lists_are_joined_and_split():
    stored = join_facilities(["Kasur", " Lemari ", "", "AC"])
    assert stored == "Kasur, Lemari, AC"
    assert split_facilities(stored) == ["Kasur", "Lemari", "AC"]
    assert join_facilities([]) is None
    assert split_facilities(None) == []
