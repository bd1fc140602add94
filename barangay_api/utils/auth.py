from functools import wraps
from flask import current_app, request
from flask_jwt_extended import verify_jwt_in_request, get_current_user
from barangay_api.extensions import jwt
from barangay_api.exceptions import ForbiddenError
from barangay_api.models.enums import UserRole
from barangay_api.repositories import RevokedTokenRepository, UserRepository


@jwt.user_lookup_loader
def load_user(jwt_header, jwt_payload):
    return UserRepository.find_active_by_id(jwt_payload["sub"])


@jwt.token_in_blocklist_loader
def check_if_token_revoked(jwt_header, jwt_payload) -> bool:
    return RevokedTokenRepository.is_revoked(jwt_payload["jti"])


def roles_required(*roles: UserRole):
    """Require a valid access token whose user holds one of `roles`."""

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            user = get_current_user()
            if roles and user.role not in roles:
                current_app.logger.warning(
                    f"Unauthorized access attempt by {user.email} to {request.path} "
                    f"(role={user.role.value}, required={[r.value for r in roles]})"
                )
                raise ForbiddenError()
            return fn(*args, **kwargs)

        return wrapper

    return decorator


def ensure_event_access(user, event):
    """Event managers may only act on events assigned to them."""
    if user.role == UserRole.EVENT_MANAGER and event.manager_id != user.id:
        raise ForbiddenError("You are not assigned to this event")
