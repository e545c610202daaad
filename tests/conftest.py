import os

# Must be set before the app modules read them at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["MIDTRANS_SERVER_KEY"] = "SB-Mid-server-test"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from database import SessionLocal, engine
from main import app
from models import Base, Kos, KosStatus, RoleName, Sewa, Tagihan, User
from models.tagihan import TagihanStatus
from services.auth_service import create_token_pair, hash_password
from services.role_service import assign_role, seed_roles


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    seed_roles(session)
    session.commit()
    session.close()
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def client():
    # Unhandled errors are asserted as 500 responses instead of raised
    return TestClient(app, raise_server_exceptions=False)


def make_user(db, email, *roles, password="rahasia123", name=None):
    user = User(email=email, password=hash_password(password), name=name or email.split("@")[0])
    db.add(user)
    db.flush()
    for role in roles:
        assign_role(db, user.id, role)
    db.commit()
    return user


def auth_headers(user):
    return {"Authorization": f"Bearer {create_token_pair(user)['access_token']}"}


@pytest.fixture
def pemilik(db):
    return make_user(db, "pemilik@kosku.id", RoleName.PEMILIK.value)


@pytest.fixture
def penyewa(db):
    return make_user(db, "penyewa@kosku.id", RoleName.PENYEWA.value)


@pytest.fixture
def web_user(db):
    return make_user(db, "user@kosku.id", RoleName.USER.value)


@pytest.fixture
def admin(db):
    return make_user(db, "admin@kosku.id", RoleName.ADMIN.value)


def make_kos(db, owner, **overrides):
    values = dict(
        user_id=owner.id,
        name="Kos Melati",
        address="Jl. Kaliurang KM 5",
        city="Yogyakarta",
        room_type="Kamar mandi dalam",
        nomor_pemilik="081234567890",
        monthly_price=Decimal("1500000"),
        total_rooms=10,
        available_rooms=3,
        property_status=KosStatus.ACTIVE,
    )
    values.update(overrides)
    kos = Kos(**values)
    db.add(kos)
    db.commit()
    return kos


@pytest.fixture
def kos(db, pemilik):
    return make_kos(db, pemilik)


@pytest.fixture
def tagihan(db, kos, penyewa):
    sewa = Sewa(
        kos_id=kos.id,
        user_penyewa_id=penyewa.id,
        start_date=date(2026, 1, 15),
        monthly_price=Decimal("1500000"),
    )
    db.add(sewa)
    db.flush()
    bill = Tagihan(
        sewa_id=sewa.id,
        billing_month=1,
        billing_year=2026,
        amount=Decimal("1500000"),
        due_date=date(2026, 1, 1),
        status=TagihanStatus.UNPAID,
    )
    db.add(bill)
    db.commit()
    return bill
