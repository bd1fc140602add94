from flask import Blueprint
from flask_jwt_extended import jwt_required, get_jwt, get_current_user
from barangay_api.exceptions import MissingFieldsError
from barangay_api.extensions import limiter
from barangay_api.models.enums import UserRole
from barangay_api.services import UserService
from barangay_api.utils.auth import roles_required
from barangay_api.utils.responses import json_body, success_response

user_bp = Blueprint("user", __name__)


@user_bp.route("/register", methods=["POST"])
@roles_required(UserRole.SUPER_ADMIN)
def register():
    user = UserService.register_account(json_body())
    return success_response(user.to_dict(), message="Account created", status_code=201)

@user_bp.route("/login", methods=["POST"])
@limiter.limit("10 per minute")
def sign_in():
    user_data = json_body()

    required_fields = ["email", "password"]
    missing_fields = [field for field in required_fields if not user_data.get(field)]
    if missing_fields:
        raise MissingFieldsError(missing_fields)

    result = UserService.sign_in(user_data["email"], user_data["password"])
    return success_response(result)


@user_bp.route("/refresh", methods=["POST"])
@jwt_required(refresh=True)
def refresh():
    return success_response(UserService.refresh(get_current_user()))


@user_bp.route("/logout", methods=["POST"])
@jwt_required(verify_type=False)
def logout():
    result = UserService.revoke(get_jwt(), json_body().get("refreshToken"))
    return success_response(message=result["message"])


@user_bp.route("/me", methods=["GET"])
@jwt_required()
def me():
    return success_response(get_current_user().to_dict())
