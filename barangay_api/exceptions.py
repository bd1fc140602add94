class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid request"


class MissingFieldsError(ValidationError):
    def __init__(self, fields):
        super().__init__("Missing required fields")
        self.fields = fields


class AuthError(AppError):
    status_code = 401
    default_message = "Authentication required"


class ForbiddenError(AppError):
    status_code = 403
    default_message = "Insufficient permissions"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class ConflictError(AppError):
    status_code = 409
    default_message = "A record with this information already exists"


class InternalError(AppError):
    pass


# OTP verification
class OtpNotFoundError(NotFoundError):
    default_message = "OTP record not found"


class OtpExpiredError(ValidationError):
    default_message = "OTP expired"


class OtpAlreadyUsedError(ValidationError):
    default_message = "OTP already used"


class OtpAttemptsExceededError(ValidationError):
    status_code = 429
    default_message = "Max OTP attempts exceeded"


class InvalidOtpError(ValidationError):
    default_message = "Invalid OTP"


# QR credentials
class QrNotRecognizedError(NotFoundError):
    default_message = "QR not recognized"


class QrExpiredError(ValidationError):
    default_message = "QR expired"


class RegistrationMissingError(NotFoundError):
    default_message = "Registration for QR not found"


# Approval workflow
class InvalidStatusError(ValidationError):
    default_message = "Invalid status"
