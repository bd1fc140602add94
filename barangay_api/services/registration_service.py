import json
from typing import Dict, Any
from flask import current_app
from barangay_api.repositories import (
    AttendanceRepository,
    EventRepository,
    OtpRepository,
    ProfileRepository,
    QrCodeRepository,
    RegistrationRepository,
)
from barangay_api.exceptions import (
    ConflictError,
    InvalidStatusError,
    MissingFieldsError,
    NotFoundError,
    ValidationError,
)
from barangay_api.models.enums import RegistrationStatus
from barangay_api.services.custom_field_service import CustomFieldService
from barangay_api.services.otp_service import OtpService
from barangay_api.utils.auth import ensure_event_access
from barangay_api.utils.sms import deliver_otp
from barangay_api.utils.uploads import discard_upload, save_photo, validate_photo

DECISIONS = ("approved", "rejected")
GUEST_FIELDS = ("firstName", "lastName", "contact")


class RegistrationService:
    @staticmethod
    def _parse_custom_values(raw, event):
        if raw in (None, ""):
            raw = {}
        if isinstance(raw, str):
            try:
                raw = json.loads(raw)
            except ValueError:
                raise ValidationError("customValues must be a JSON object")
        if not isinstance(raw, dict):
            raise ValidationError("customValues must be a JSON object")

        values = CustomFieldService.validate_values(event, raw)
        return json.dumps(values) if values else None

    @staticmethod
    def _find_profile(data):
        profile_id = data.get("profileId")
        if not profile_id:
            return None
        if not isinstance(profile_id, str):
            raise ValidationError("profileId must be a string")

        profile = ProfileRepository.find_by_id(profile_id)
        if not profile:
            raise NotFoundError("Profile not found")
        return profile

    @staticmethod
    def _create_guest_profile(data):
        if not all(data.get(field) for field in GUEST_FIELDS):
            return None
        return ProfileRepository.create(
            {
                "first_name": data["firstName"],
                "last_name": data["lastName"],
                "contact": data["contact"],
                "email": data.get("email"),
                "barangay": data.get("barangay"),
            }
        )

    @staticmethod
    def create_registration(data, photo=None) -> Dict[str, Any]:
        if not data or not data.get("eventId"):
            raise MissingFieldsError(["eventId"])
        if not isinstance(data["eventId"], str):
            raise ValidationError("eventId must be a string")

        event = EventRepository.get_event(data["eventId"])
        if not event:
            raise NotFoundError(f"Event with ID {data['eventId']} not found")

        if event.capacity is not None:
            active = RegistrationRepository.count_active_for_event(event.id)
            if active >= event.capacity:
                current_app.logger.warning(
                    f"Registration blocked for event {event.id}: {active}/{event.capacity}"
                )
                raise ConflictError("Event is currently full")

        # Validate every input before anything is written
        custom_values = RegistrationService._parse_custom_values(data.get("customValues"), event)
        profile = RegistrationService._find_profile(data)
        if photo:
            validate_photo(photo)

        if profile is None:
            profile = RegistrationService._create_guest_profile(data)
        photo_path = save_photo(photo) if photo else None

        try:
            registration = RegistrationRepository.create(
                {
                    "event_id": event.id,
                    "profile_id": profile.id if profile else None,
                    "status": RegistrationStatus.PENDING,
                    "photo_path": photo_path,
                    "custom_values": custom_values,
                }
            )
        except Exception:
            discard_upload(photo_path)
            raise
        current_app.logger.info(
            f"Registration {registration.id} created for event {event.id}"
        )

        # Delivery happens only after the registration row is committed
        code = OtpService.issue(registration.id)
        deliver_otp(registration, code)

        return {"registrationId": registration.id}

    @staticmethod
    def get_registration(registration_id: str, user=None):
        registration = RegistrationRepository.find_by_id(registration_id)
        if not registration:
            raise NotFoundError("Registration not found")
        if user is not None:
            ensure_event_access(user, registration.event)
        return registration

    @staticmethod
    def _parse_status_filter(status):
        if not status or status.lower() == "all":
            return None
        try:
            return RegistrationStatus[status.upper()]
        except KeyError:
            raise InvalidStatusError(f"Invalid status filter: {status}")

    @staticmethod
    def _parse_page(page, limit):
        try:
            page, limit = int(page), int(limit)
        except (TypeError, ValueError):
            raise ValidationError("page and limit must be integers")
        if page < 1 or limit < 1 or limit > 100:
            raise ValidationError("page must be >= 1 and limit between 1 and 100")
        return page, limit

    @staticmethod
    def list_registrations(page=1, limit=50, status=None, event_id=None, user=None):
        page, limit = RegistrationService._parse_page(page, limit)
        status_filter = RegistrationService._parse_status_filter(status)

        if event_id:
            event = EventRepository.get_event(event_id)
            if not event:
                raise NotFoundError(f"Event with ID {event_id} not found")
            if user is not None:
                ensure_event_access(user, event)

        items, total = RegistrationRepository.paginate(
            event_id=event_id, status=status_filter, page=page, limit=limit
        )
        return {
            "data": [registration.to_dict() for registration in items],
            "pagination": {"page": page, "limit": limit, "total": total},
        }

    @staticmethod
    def decide(registration_id: str, status, user=None):
        """Move a PENDING registration to APPROVED or REJECTED."""
        if not isinstance(status, str) or status not in DECISIONS:
            raise InvalidStatusError()

        registration = RegistrationService.get_registration(registration_id, user)
        if registration.status != RegistrationStatus.PENDING:
            raise ConflictError(
                f"Registration is already {registration.status.value.lower()}"
            )

        # Only the first concurrent decision moves the row out of PENDING
        updated = RegistrationRepository.decide_pending(
            registration.id, RegistrationStatus[status.upper()]
        )
        RegistrationRepository.reload(registration)
        if not updated:
            raise ConflictError(
                f"Registration is already {registration.status.value.lower()}"
            )

        current_app.logger.info(f"Registration {registration_id} {status}")
        return registration

    @staticmethod
    def check_in(registration_id: str, user=None):
        registration = RegistrationService.get_registration(registration_id, user)
        if registration.status != RegistrationStatus.APPROVED:
            raise ValidationError("Only approved registrations can be checked in")
        if AttendanceRepository.find_by_registration(registration.id):
            raise ConflictError("Registration already checked in")

        attendance = AttendanceRepository.check_in(registration, user.id if user else None)
        current_app.logger.info(f"Registration {registration_id} checked in")
        return attendance

    @staticmethod
    def purge(confirm) -> Dict[str, int]:
        """Delete OTP and QR data; registrations, events and users are kept."""
        if confirm != "YES":
            raise ValidationError("Provide confirm=YES to purge")

        otp_deleted = OtpRepository.delete_all()
        qr_deleted = QrCodeRepository.delete_all()
        current_app.logger.warning(
            f"Purge completed: {otp_deleted} OTP requests, {qr_deleted} QR codes deleted"
        )
        return {"otpRequests": otp_deleted, "qrCodes": qr_deleted}
