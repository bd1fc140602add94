import uuid
from datetime import timedelta
import pytest
from flask_jwt_extended import create_access_token
from barangay_api import create_app
from barangay_api.extensions import db as _db
from barangay_api.models import Event, User
from barangay_api.models.enums import UserRole
from barangay_api.repositories import RegistrationRepository
from barangay_api.services import OtpService, RegistrationService
from barangay_api.utils.dates import utcnow


@pytest.fixture
def app(tmp_path):
    app = create_app(
        {
            "TESTING": True,
            "APP_ENV": "testing",
            "SQLALCHEMY_DATABASE_URI": "sqlite://",
            "JWT_SECRET_KEY": "test-secret-key-with-enough-length-for-hs256",
            "UPLOAD_ROOT": str(tmp_path / "uploads"),
            "RATELIMIT_ENABLED": False,
            "SMS_API_KEY": None,
        }
    )
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make_user(role=UserRole.SUPER_ADMIN, email=None, password="password"):
        user = User(email=email or f"{role.value.lower()}-{uuid.uuid4().hex[:8]}@example.com", role=role)
        user.set_password(password)
        _db.session.add(user)
        _db.session.commit()
        return user

    return _make_user


@pytest.fixture
def auth_headers(app):
    def _auth_headers(user):
        token = create_access_token(identity=user.id, additional_claims={"role": user.role.value})
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture
def admin(make_user):
    return make_user(UserRole.SUPER_ADMIN, email="admin@example.com")


@pytest.fixture
def admin_headers(admin, auth_headers):
    return auth_headers(admin)


@pytest.fixture
def event(app):
    event = Event(
        title="Barangay Fun Run",
        location="Barangay Hall",
        start_date=utcnow() + timedelta(days=7),
    )
    _db.session.add(event)
    _db.session.commit()
    return event


@pytest.fixture
def registration(app, event):
    """A PENDING guest registration with a contact number on its profile."""
    result = RegistrationService.create_registration(
        {
            "eventId": event.id,
            "firstName": "Juan",
            "lastName": "Dela Cruz",
            "contact": "09171234567",
            "barangay": "San Isidro",
        }
    )
    return RegistrationRepository.find_by_id(result["registrationId"])


@pytest.fixture
def fresh_code(registration):
    """Issue a new OTP for the registration and return its plaintext."""
    return OtpService.issue(registration.id)
