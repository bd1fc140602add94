import json
import os
import time
import uuid
from datetime import timedelta
from typing import Dict, Any
from flask import current_app
from barangay_api.repositories import QrCodeRepository, RegistrationRepository
from barangay_api.exceptions import (
    NotFoundError,
    QrNotRecognizedError,
    QrExpiredError,
    RegistrationMissingError,
    ValidationError,
)
from barangay_api.utils.dates import utcnow, isoformat
from barangay_api.utils.qr import render_qr_png
from barangay_api.utils.uploads import upload_dir


class QrService:
    @staticmethod
    def build_payload(registration_id: str, code_value: str) -> str:
        return json.dumps(
            {
                "registrationId": registration_id,
                "codeValue": code_value,
                "issuedAt": int(time.time() * 1000),
            }
        )

    @staticmethod
    def extract_code_value(scanned_value: str) -> str:
        """Accept either the bare code value or the JSON payload printed in the image."""
        scanned_value = scanned_value.strip()
        if scanned_value.startswith("{"):
            try:
                payload = json.loads(scanned_value)
            except ValueError:
                return scanned_value
            if isinstance(payload, dict) and payload.get("codeValue"):
                return str(payload["codeValue"])
        return scanned_value

    @staticmethod
    def issue(registration_id: str) -> Dict[str, Any]:
        if not registration_id or not isinstance(registration_id, str):
            raise ValidationError("registrationId required")

        registration = RegistrationRepository.find_by_id(registration_id)
        if not registration:
            raise NotFoundError("Registration not found")

        code_value = str(uuid.uuid4())
        expires_at = utcnow() + timedelta(days=current_app.config["QR_EXPIRES_DAYS"])

        file_path = os.path.join(upload_dir("qr"), f"qr-{code_value}.png")
        render_qr_png(QrService.build_payload(registration_id, code_value), file_path)

        qr_code = QrCodeRepository.create(
            {
                "registration_id": registration_id,
                "code_value": code_value,
                "image_path": file_path,
                "expires_at": expires_at,
            }
        )
        current_app.logger.info(
            f"QR {qr_code.id} generated for registration {registration_id}: {file_path}"
        )

        return {
            "id": qr_code.id,
            "codeValue": code_value,
            "imagePath": file_path,
            "expiresAt": isoformat(expires_at),
        }

    @staticmethod
    def resolve(scanned_value: str) -> Dict[str, Any]:
        if not scanned_value:
            raise ValidationError("qrValue required")
        if not isinstance(scanned_value, str):
            raise ValidationError("qrValue must be a string")

        qr_code = QrCodeRepository.find_by_code_value(QrService.extract_code_value(scanned_value))
        if not qr_code:
            raise QrNotRecognizedError()
        if qr_code.is_expired():
            raise QrExpiredError()

        registration = RegistrationRepository.find_by_id(qr_code.registration_id)
        if not registration:
            current_app.logger.error(
                f"QR {qr_code.id} points at missing registration {qr_code.registration_id}"
            )
            raise RegistrationMissingError()

        return {
            "registration": registration.to_dict(),
            "profile": registration.profile.to_dict() if registration.profile else None,
            "qr": qr_code.to_dict(),
        }

    @staticmethod
    def image_path(qr_id: str) -> str:
        qr_code = QrCodeRepository.find_by_id(qr_id)
        if not qr_code:
            raise NotFoundError("QR not found")
        if not os.path.isfile(qr_code.image_path):
            raise NotFoundError("QR image not found")
        return qr_code.image_path
