"""Single boundary translating errors into the JSON error envelope."""
from flask import current_app, jsonify, request
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException
from barangay_api.exceptions import AppError, MissingFieldsError
from barangay_api.extensions import db, jwt


def error_response(status_code, error, message=None, **extra):
    body = {"success": False, "error": error}
    if message:
        body["message"] = message
    body.update(extra)
    return jsonify(body), status_code


def handle_app_error(e: AppError):
    if e.status_code >= 500:
        current_app.logger.error(f"Error {request.method} {request.path}: {e.message}")
    else:
        current_app.logger.warning(
            f"{e.status_code} {request.method} {request.path}: {e.message}"
        )

    if isinstance(e, MissingFieldsError):
        return error_response(e.status_code, e.message, missing_fields=e.fields)
    return error_response(e.status_code, e.message)


def handle_integrity_error(e: IntegrityError):
    db.session.rollback()
    detail = str(e.orig).lower()
    current_app.logger.error(f"Integrity error {request.method} {request.path}: {detail}")

    if "unique" in detail or "duplicate" in detail:
        return error_response(
            409, "Duplicate Entry", "A record with this information already exists"
        )
    if "foreign key" in detail:
        return error_response(400, "Invalid Reference", "Referenced record does not exist")
    return error_response(400, "Invalid Data", "The request violates a database constraint")


def handle_http_exception(e: HTTPException):
    if e.code == 413:
        return error_response(
            413, "File Too Large", "File size exceeds the maximum allowed limit"
        )
    return error_response(e.code, e.name, e.description)


def handle_unexpected_error(e: Exception):
    db.session.rollback()
    current_app.logger.error(
        f"Unhandled exception on {request.method} {request.path}: {str(e)}", exc_info=True
    )
    if current_app.config.get("APP_ENV") == "production":
        message = "Something went wrong"
    else:
        message = str(e)
    return error_response(500, "Internal Server Error", message)


@jwt.unauthorized_loader
def missing_token_callback(reason):
    return error_response(401, "Access token required", reason)


@jwt.invalid_token_loader
def invalid_token_callback(reason):
    return error_response(401, "Invalid Token", "Please provide a valid token")


@jwt.expired_token_loader
def expired_token_callback(jwt_header, jwt_payload):
    return error_response(401, "Token Expired", "Your session has expired, please login again")


@jwt.revoked_token_loader
def revoked_token_callback(jwt_header, jwt_payload):
    return error_response(401, "Token Revoked", "This token has been logged out")


@jwt.user_lookup_error_loader
def user_lookup_error_callback(jwt_header, jwt_payload):
    return error_response(401, "Invalid token - user not found or inactive")


def register_error_handlers(app):
    app.register_error_handler(AppError, handle_app_error)
    app.register_error_handler(IntegrityError, handle_integrity_error)
    app.register_error_handler(HTTPException, handle_http_exception)
    app.register_error_handler(Exception, handle_unexpected_error)
