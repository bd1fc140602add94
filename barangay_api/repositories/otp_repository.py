from typing import Optional
from barangay_api.extensions import db
from barangay_api.models import OtpRequest


class OtpRepository:
    @staticmethod
    def create(attrs) -> OtpRequest:
        otp_request = OtpRequest(**attrs)
        db.session.add(otp_request)
        db.session.commit()
        return otp_request

    @staticmethod
    def find_latest_for_registration(registration_id: str) -> Optional[OtpRequest]:
        return (
            OtpRequest.query.filter_by(registration_id=registration_id)
            .order_by(OtpRequest.created_at.desc())
            .first()
        )

    @staticmethod
    def has_consumed_code(registration_id: str) -> bool:
        return (
            OtpRequest.query.filter_by(registration_id=registration_id, is_used=True).first()
            is not None
        )

    @staticmethod
    def increment_attempts(otp_id: str, max_attempts: int) -> int:
        """Conditional increment; returns the number of rows updated (0 or 1).

        Runs as a single UPDATE so concurrent verifications cannot push the
        counter past `max_attempts` or bump a consumed request.
        """
        updated = (
            OtpRequest.query.filter(
                OtpRequest.id == otp_id,
                OtpRequest.attempts < max_attempts,
                OtpRequest.is_used.is_(False),
            ).update({OtpRequest.attempts: OtpRequest.attempts + 1}, synchronize_session=False)
        )
        db.session.commit()
        return updated

    @staticmethod
    def mark_used(otp_id: str) -> int:
        """Consume the request; returns 0 when another request already did."""
        updated = (
            OtpRequest.query.filter(
                OtpRequest.id == otp_id, OtpRequest.is_used.is_(False)
            ).update({OtpRequest.is_used: True}, synchronize_session=False)
        )
        db.session.commit()
        return updated

    @staticmethod
    def reload(otp_request: OtpRequest) -> OtpRequest:
        db.session.refresh(otp_request)
        return otp_request

    @staticmethod
    def delete_all() -> int:
        try:
            num_deleted = OtpRequest.query.delete()
            db.session.commit()
            return num_deleted
        except Exception:
            db.session.rollback()
            raise
