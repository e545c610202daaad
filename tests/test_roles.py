from models import RoleName
from services.role_service import assign_role, get_user_roles, has_role
from tests.conftest import auth_headers, make_user


def test_assign_role_is_idempotent(db, web_user):
    assert assign_role(db, web_user.id, RoleName.PEMILIK.value) is True
    assert assign_role(db, web_user.id, RoleName.PEMILIK.value) is False
    db.commit()
    assert sorted(get_user_roles(db, web_user.id)) == ["pemilik", "user"]
    assert has_role(db, web_user.id, "pemilik")


def test_check_role(client, pemilik):
    response = client.get("/api/users/check-role", headers=auth_headers(pemilik))
    assert response.json() == {
        "success": True,
        "isAdmin": False,
        "isPemilik": True,
        "isUser": False,
        "authenticated": True,
    }


def test_assign_role_gives_user_role(client, db):
    bare = make_user(db, "baru@kosku.id")
    response = client.post("/api/users/assign-role", headers=auth_headers(bare))
    assert response.status_code == 200
    assert get_user_roles(db, bare.id) == ["user"]


def test_assign_owner_role(client, db, web_user):
    response = client.post("/api/users/assign-owner-role", headers=auth_headers(web_user))
    assert response.status_code == 200
    assert has_role(db, web_user.id, "pemilik")


def test_only_admin_assigns_admin(client, db, admin, web_user):
    response = client.post(
        "/api/users/assign-admin-role", json={"userId": web_user.id}, headers=auth_headers(web_user)
    )
    assert response.status_code == 403

    response = client.post(
        "/api/users/assign-admin-role", json={"userId": web_user.id}, headers=auth_headers(admin)
    )
    assert response.status_code == 200
    assert has_role(db, web_user.id, "admin")

    response = client.post(
        "/api/users/assign-admin-role", json={"userId": web_user.id}, headers=auth_headers(admin)
    )
    assert response.status_code == 200
    assert response.json()["message"] == "User sudah memiliki role admin"
