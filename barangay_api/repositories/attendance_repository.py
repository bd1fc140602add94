from typing import Optional
from barangay_api.extensions import db
from barangay_api.models import Attendance, Registration
from barangay_api.utils.dates import utcnow


class AttendanceRepository:
    @staticmethod
    def find_by_registration(registration_id: str) -> Optional[Attendance]:
        return Attendance.query.filter_by(registration_id=registration_id).first()

    @staticmethod
    def check_in(registration: Registration, staff_user_id: str = None) -> Attendance:
        """Record attendance and touch the registration in one commit."""
        now = utcnow()
        attendance = Attendance(
            registration_id=registration.id,
            checked_in_by=staff_user_id,
            checked_in_at=now,
        )
        registration.updated_at = now
        db.session.add(attendance)
        db.session.commit()
        return attendance
