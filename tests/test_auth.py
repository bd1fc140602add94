from datetime import timedelta
from barangay_api.extensions import db
from barangay_api.models import OtpRequest, QrCode, Registration, RevokedToken
from barangay_api.models.enums import UserRole
from barangay_api.services import QrService, UserService
from barangay_api.utils.dates import utcnow


def login(client, email="admin@example.com", password="password"):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def test_login_returns_tokens(client, admin):
    res = login(client)

    assert res.status_code == 200
    data = res.get_json()["data"]
    assert data["access_token"]
    assert data["refresh_token"]
    assert data["user"]["email"] == "admin@example.com"


def test_login_with_wrong_password(client, admin):
    res = login(client, password="wrong")
    assert res.status_code == 401
    assert res.get_json() == {"success": False, "error": "Invalid email or password"}


def test_login_with_missing_fields(client):
    res = client.post("/api/auth/login", json={"email": "admin@example.com"})
    assert res.status_code == 400
    assert res.get_json()["missing_fields"] == ["password"]


def test_me_requires_a_token(client):
    res = client.get("/api/auth/me")
    assert res.status_code == 401
    assert res.get_json()["success"] is False


def test_logout_revokes_the_token(client, admin):
    tokens = login(client).get_json()["data"]
    headers = {"Authorization": f"Bearer {tokens['access_token']}"}

    assert client.get("/api/auth/me", headers=headers).status_code == 200
    res = client.post(
        "/api/auth/logout", json={"refreshToken": tokens["refresh_token"]}, headers=headers
    )
    assert res.status_code == 200
    assert res.get_json()["message"] == "Logged out successfully"

    res = client.get("/api/auth/me", headers=headers)
    assert res.status_code == 401
    assert res.get_json()["error"] == "Token Revoked"


def test_logout_also_revokes_the_refresh_token(client, admin):
    tokens = login(client).get_json()["data"]
    client.post(
        "/api/auth/logout",
        json={"refreshToken": tokens["refresh_token"]},
        headers={"Authorization": f"Bearer {tokens['access_token']}"},
    )

    res = client.post(
        "/api/auth/refresh", headers={"Authorization": f"Bearer {tokens['refresh_token']}"}
    )
    assert res.status_code == 401
    assert RevokedToken.query.count() == 2


def test_logout_with_an_access_token_needs_the_refresh_token(client, admin):
    tokens = login(client).get_json()["data"]
    headers = {"Authorization": f"Bearer {tokens['access_token']}"}

    res = client.post("/api/auth/logout", headers=headers)
    assert res.status_code == 400
    assert res.get_json()["missing_fields"] == ["refreshToken"]

    for bad in ("not-a-jwt", tokens["access_token"], 42):
        res = client.post("/api/auth/logout", json={"refreshToken": bad}, headers=headers)
        assert res.status_code == 400
        assert res.get_json()["error"] == "Invalid refresh token"

    assert RevokedToken.query.count() == 0
    assert client.get("/api/auth/me", headers=headers).status_code == 200


def test_logout_rejects_another_users_refresh_token(client, admin, make_user):
    make_user(UserRole.STAFF, email="staff@example.com")
    admin_tokens = login(client).get_json()["data"]
    staff_tokens = login(client, email="staff@example.com").get_json()["data"]

    res = client.post(
        "/api/auth/logout",
        json={"refreshToken": staff_tokens["refresh_token"]},
        headers={"Authorization": f"Bearer {admin_tokens['access_token']}"},
    )
    assert res.status_code == 400


def test_logout_with_the_refresh_token_itself(client, admin):
    refresh_token = login(client).get_json()["data"]["refresh_token"]
    headers = {"Authorization": f"Bearer {refresh_token}"}

    assert client.post("/api/auth/logout", headers=headers).status_code == 200
    assert client.post("/api/auth/refresh", headers=headers).status_code == 401


def test_refresh_issues_a_new_access_token(client, admin):
    refresh_token = login(client).get_json()["data"]["refresh_token"]

    res = client.post("/api/auth/refresh", headers={"Authorization": f"Bearer {refresh_token}"})
    assert res.status_code == 200
    access_token = res.get_json()["data"]["access_token"]

    res = client.get("/api/auth/me", headers={"Authorization": f"Bearer {access_token}"})
    assert res.get_json()["data"]["role"] == "SUPER_ADMIN"


def test_inactive_user_tokens_are_rejected(client, admin, auth_headers):
    headers = auth_headers(admin)
    admin.is_active = False
    db.session.commit()

    res = client.get("/api/auth/me", headers=headers)
    assert res.status_code == 401


def test_cleanup_removes_only_expired_revocations(app):
    db.session.add_all(
        [
            RevokedToken(jti="old", token_type="access", expires_at=utcnow() - timedelta(hours=1)),
            RevokedToken(jti="live", token_type="access", expires_at=utcnow() + timedelta(hours=1)),
        ]
    )
    db.session.commit()

    assert UserService.cleanup_expired_revocations() == 1
    assert [t.jti for t in RevokedToken.query.all()] == ["live"]


def test_dashboard_is_super_admin_only(client, registration, make_user, auth_headers, admin_headers):
    res = client.get("/api/admin/dashboard", headers=admin_headers)
    assert res.get_json()["data"] == {"totalEvents": 1, "totalRegistrations": 1}

    manager = make_user(UserRole.EVENT_MANAGER)
    res = client.get("/api/admin/dashboard", headers=auth_headers(manager))
    assert res.status_code == 403


def test_purge_deletes_credentials_but_keeps_registrations(client, registration, admin_headers):
    QrService.issue(registration.id)

    res = client.post("/api/admin/purge", json={}, headers=admin_headers)
    assert res.status_code == 400

    res = client.post("/api/admin/purge", json={"confirm": "YES"}, headers=admin_headers)
    assert res.status_code == 200
    assert res.get_json()["data"] == {"otpRequests": 1, "qrCodes": 1}

    assert OtpRequest.query.count() == 0
    assert QrCode.query.count() == 0
    assert Registration.query.count() == 1


def test_register_creates_a_staff_account(client, admin_headers, make_user, auth_headers):
    body = {
        "email": "clerk@example.com",
        "password": "secret123",
        "firstName": "Liza",
        "lastName": "Soberano",
    }
    res = client.post("/api/auth/register", json=body, headers=admin_headers)
    assert res.status_code == 201
    data = res.get_json()["data"]
    assert data["role"] == "STAFF"
    assert data["profile"]["first_name"] == "Liza"
    assert login(client, "clerk@example.com", "secret123").status_code == 200

    res = client.post("/api/auth/register", json=body, headers=admin_headers)
    assert res.status_code == 409

    staff_headers = auth_headers(make_user(UserRole.STAFF))
    res = client.post(
        "/api/auth/register", json={**body, "email": "x@example.com"}, headers=staff_headers
    )
    assert res.status_code == 403


def test_register_validation(client, admin_headers):
    res = client.post("/api/auth/register", json={"email": "a@example.com"}, headers=admin_headers)
    assert res.get_json()["missing_fields"] == ["password"]

    cases = [
        {"email": "no-at-sign", "password": "secret123"},
        {"email": "a@example.com", "password": "123"},
        {"email": "a@example.com", "password": "secret123", "role": "MAYOR"},
    ]
    for body in cases:
        res = client.post("/api/auth/register", json=body, headers=admin_headers)
        assert res.status_code == 400
