from datetime import datetime
import logging
import pytz
from jwt.exceptions import PyJWTError
from flask_jwt_extended import create_access_token, create_refresh_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from barangay_api.repositories import (
    EventRepository,
    ProfileRepository,
    RevokedTokenRepository,
    UserRepository,
)
from barangay_api.exceptions import (
    AuthError,
    ConflictError,
    MissingFieldsError,
    NotFoundError,
    ValidationError,
)
from barangay_api.models import User
from barangay_api.models.enums import UserRole
from barangay_api.utils.dates import utcnow

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _parse_role(value, default=UserRole.STAFF) -> UserRole:
    if value is None:
        return default
    try:
        return UserRole[str(value).upper()]
    except KeyError:
        raise ValidationError(f"Invalid role: {value}")


def _check_email(email):
    if not isinstance(email, str) or "@" not in email:
        raise ValidationError("A valid email is required")


def _check_password(password):
    if not isinstance(password, str) or len(password) < 6:
        raise ValidationError("Password must be at least 6 characters")


class UserService:
    @staticmethod
    def _tokens_for(user: User):
        claims = {"role": user.role.value, "email": user.email}
        return {
            "access_token": create_access_token(identity=user.id, additional_claims=claims),
            "refresh_token": create_refresh_token(identity=user.id, additional_claims=claims),
        }

    @staticmethod
    def create_user(
        email, password, role: UserRole, first_name=None, last_name=None, contact=None
    ) -> User:
        if UserRepository.find_by_email(email):
            logger.warning(f"Attempt to create user with existing email: {email}")
            raise ConflictError("User already exists")

        user = User(email=email, role=role)
        user.set_password(password)
        created_user = UserRepository.create(user)

        if first_name or last_name:
            ProfileRepository.create(
                {
                    "user_id": created_user.id,
                    "first_name": first_name or "",
                    "last_name": last_name or "",
                    "contact": contact,
                    "email": email,
                }
            )

        logger.info(f"User created successfully: {email} ({role.value})")
        return created_user

    @staticmethod
    def register_account(data) -> User:
        """Staff-side account creation; the role defaults to STAFF."""
        missing = [field for field in ("email", "password") if not data.get(field)]
        if missing:
            raise MissingFieldsError(missing)
        _check_email(data["email"])
        _check_password(data["password"])

        return UserService.create_user(
            data["email"],
            data["password"],
            _parse_role(data.get("role")),
            first_name=data.get("firstName"),
            last_name=data.get("lastName"),
            contact=data.get("contact"),
        )

    @staticmethod
    def list_event_managers():
        return UserRepository.find_by_role(UserRole.EVENT_MANAGER)

    @staticmethod
    def create_event_manager(data) -> User:
        return UserService.register_account({**data, "role": UserRole.EVENT_MANAGER.value})

    @staticmethod
    def _get_event_manager(user_id) -> User:
        user = UserRepository.find_by_id(user_id)
        if not user or user.role != UserRole.EVENT_MANAGER:
            raise NotFoundError("Event Manager not found")
        return user

    @staticmethod
    def update_event_manager(user_id, data) -> User:
        user = UserService._get_event_manager(user_id)

        email = data.get("email")
        if email and email != user.email:
            _check_email(email)
            if UserRepository.find_by_email(email):
                raise ConflictError("User already exists")
            user.email = email
        if data.get("password"):
            _check_password(data["password"])
            user.set_password(data["password"])

        names = {"first_name": data.get("firstName"), "last_name": data.get("lastName")}
        if any(names.values()):
            if user.profile:
                for key, value in names.items():
                    if value:
                        setattr(user.profile, key, value)
            else:
                ProfileRepository.create(
                    {
                        "user_id": user.id,
                        "first_name": names["first_name"] or "",
                        "last_name": names["last_name"] or "",
                        "email": user.email,
                    }
                )

        UserRepository.save()
        logger.info(f"Event manager {user_id} updated")
        return user

    @staticmethod
    def deactivate_event_manager(user_id) -> User:
        """Disable the account and release its events; history keeps the user row."""
        user = UserService._get_event_manager(user_id)
        user.is_active = False
        UserRepository.save()
        released = EventRepository.unassign_manager(user.id)
        logger.info(f"Event manager {user_id} deactivated, {released} events unassigned")
        return user

    @staticmethod
    def sign_in(email, password):
        user = UserRepository.find_by_email(email)
        if not user or not user.is_active:
            logger.warning(f"Login attempt with unknown or inactive email: {email}")
            raise AuthError("Invalid email or password")

        if not user.check_password(password):
            logger.warning(f"Failed login attempt for user: {email}")
            raise AuthError("Invalid email or password")

        logger.info(f"User logged in successfully: {email}")
        return {**UserService._tokens_for(user), "user": user.to_dict()}

    @staticmethod
    def refresh(user: User):
        claims = {"role": user.role.value, "email": user.email}
        return {"access_token": create_access_token(identity=user.id, additional_claims=claims)}

    @staticmethod
    def _revoke_payload(jwt_payload: dict):
        jti = jwt_payload.get("jti")
        if not jti:
            raise ValidationError("Token has no identifier")
        if RevokedTokenRepository.is_revoked(jti):
            return

        expires_at = datetime.fromtimestamp(jwt_payload["exp"], tz=pytz.UTC)
        RevokedTokenRepository.add(jti, jwt_payload.get("type", "access"), expires_at)
        logger.info(f"Token {jti} revoked for user {jwt_payload.get('sub')}")

    @staticmethod
    def revoke(jwt_payload: dict, refresh_token=None):
        """Reject the presented token, and the session's refresh token, until natural expiry.

        Logging out with an access token requires the matching refresh token,
        otherwise the refresh token could keep minting access tokens.
        """
        refresh_payload = None
        if jwt_payload.get("type") != "refresh":
            if not refresh_token:
                raise MissingFieldsError(["refreshToken"])
            if not isinstance(refresh_token, str):
                raise ValidationError("Invalid refresh token")
            try:
                refresh_payload = decode_token(refresh_token, allow_expired=True)
            except (PyJWTError, JWTExtendedException):
                raise ValidationError("Invalid refresh token")
            if (
                refresh_payload.get("type") != "refresh"
                or refresh_payload.get("sub") != jwt_payload.get("sub")
            ):
                raise ValidationError("Invalid refresh token")

        UserService._revoke_payload(jwt_payload)
        if refresh_payload:
            UserService._revoke_payload(refresh_payload)
        return {"message": "Logged out successfully"}

    @staticmethod
    def cleanup_expired_revocations() -> int:
        num_deleted = RevokedTokenRepository.delete_expired(utcnow())
        logger.info(f"Cleaned up {num_deleted} expired token revocations")
        return num_deleted
