from datetime import timedelta
from typing import Dict, Any
from flask import current_app
from barangay_api.repositories import OtpRepository, RegistrationRepository
from barangay_api.exceptions import (
    ConflictError,
    NotFoundError,
    OtpNotFoundError,
    OtpExpiredError,
    OtpAlreadyUsedError,
    OtpAttemptsExceededError,
    InvalidOtpError,
    ValidationError,
)
from barangay_api.services.qr_service import QrService
from barangay_api.utils.dates import utcnow
from barangay_api.utils.otp import generate_code, hash_code, verify_code
from barangay_api.utils.sms import deliver_otp


class OtpService:
    @staticmethod
    def issue(registration_id: str) -> str:
        """Store a hashed, time-boxed code for the registration and return the plaintext."""
        code = generate_code()
        expires_at = utcnow() + timedelta(minutes=current_app.config["OTP_EXPIRY_MINUTES"])

        OtpRepository.create(
            {
                "registration_id": registration_id,
                "code_hash": hash_code(code),
                "expires_at": expires_at,
                "attempts": 0,
                "is_used": False,
            }
        )
        current_app.logger.info(
            f"OTP issued for registration {registration_id}, expires at {expires_at.isoformat()}"
        )
        return code

    @staticmethod
    def send(registration_id: str, resend: bool = False) -> Dict[str, Any]:
        """Issue a fresh code for an unverified registration and deliver it."""
        if not registration_id or not isinstance(registration_id, str):
            raise ValidationError("registrationId required")

        registration = RegistrationRepository.find_by_id(registration_id)
        if not registration:
            raise NotFoundError("Registration not found")

        if resend and not OtpRepository.find_latest_for_registration(registration_id):
            raise OtpNotFoundError()
        if OtpRepository.has_consumed_code(registration_id):
            raise ConflictError("Registration already verified")

        code = OtpService.issue(registration_id)
        deliver_otp(registration, code)

        return {
            "registrationId": registration_id,
            "expiresInMinutes": current_app.config["OTP_EXPIRY_MINUTES"],
        }

    @staticmethod
    def check(registration_id: str, code: str) -> None:
        """Validate `code` against the latest OtpRequest and consume it on success."""
        max_attempts = current_app.config["MAX_OTP_ATTEMPTS"]

        otp_request = OtpRepository.find_latest_for_registration(registration_id)
        if not otp_request:
            raise OtpNotFoundError()
        if otp_request.is_expired():
            raise OtpExpiredError()
        if otp_request.is_used:
            raise OtpAlreadyUsedError()
        if otp_request.attempts >= max_attempts:
            raise OtpAttemptsExceededError()

        if not OtpRepository.increment_attempts(otp_request.id, max_attempts):
            # Lost a race with another verification of the same request
            OtpRepository.reload(otp_request)
            if otp_request.is_used:
                raise OtpAlreadyUsedError()
            raise OtpAttemptsExceededError()

        if not verify_code(code, otp_request.code_hash):
            current_app.logger.warning(
                f"Invalid OTP submitted for registration {registration_id}"
            )
            raise InvalidOtpError()

        if not OtpRepository.mark_used(otp_request.id):
            raise OtpAlreadyUsedError()

        current_app.logger.info(f"OTP verified for registration {registration_id}")

    @staticmethod
    def verify(registration_id: str, code: str) -> Dict[str, Any]:
        """Verify the code, then mint the registrant's QR credential."""
        if not isinstance(registration_id, str) or not registration_id or not code:
            raise ValidationError("registrationId and code required")

        OtpService.check(registration_id, str(code))
        qr = QrService.issue(registration_id)

        return {
            "registrationId": registration_id,
            "qrId": qr["id"],
            "qrValue": qr["codeValue"],
            "qrImagePath": qr["imagePath"],
            "expiresAt": qr["expiresAt"],
        }
