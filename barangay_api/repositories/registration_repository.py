from typing import List, Optional, Tuple
from barangay_api.extensions import db
from barangay_api.models import Registration
from barangay_api.models.enums import RegistrationStatus
from barangay_api.utils.dates import utcnow


class RegistrationRepository:
    @staticmethod
    def create(attrs) -> Registration:
        registration = Registration(**attrs)
        db.session.add(registration)
        db.session.commit()
        return registration

    @staticmethod
    def find_by_id(registration_id: str) -> Optional[Registration]:
        return db.session.get(Registration, registration_id)

    @staticmethod
    def count_active_for_event(event_id: str) -> int:
        """Count registrations for an event that still hold a spot."""
        return (
            Registration.query.filter(Registration.event_id == event_id)
            .filter(Registration.status != RegistrationStatus.REJECTED)
            .count()
        )

    @staticmethod
    def count_for_event(event_id: str) -> int:
        return Registration.query.filter(Registration.event_id == event_id).count()

    @staticmethod
    def paginate(
        event_id: str = None,
        status: RegistrationStatus = None,
        page: int = 1,
        limit: int = 50,
    ) -> Tuple[List[Registration], int]:
        query = Registration.query
        if event_id:
            query = query.filter(Registration.event_id == event_id)
        if status:
            query = query.filter(Registration.status == status)

        total = query.count()
        items = (
            query.order_by(Registration.created_at.desc())
            .limit(limit)
            .offset((page - 1) * limit)
            .all()
        )
        return items, total

    @staticmethod
    def decide_pending(registration_id: str, new_status: RegistrationStatus) -> int:
        """Move a PENDING registration to `new_status`; returns 0 when it was no longer PENDING."""
        updated = (
            Registration.query.filter(
                Registration.id == registration_id,
                Registration.status == RegistrationStatus.PENDING,
            ).update(
                {Registration.status: new_status, Registration.updated_at: utcnow()},
                synchronize_session=False,
            )
        )
        db.session.commit()
        return updated

    @staticmethod
    def count_all() -> int:
        return Registration.query.count()

    @staticmethod
    def reload(registration: Registration) -> Registration:
        db.session.refresh(registration)
        return registration
