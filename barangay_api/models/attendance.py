import uuid
from barangay_api.extensions import db
from barangay_api.utils.dates import utcnow, isoformat


class Attendance(db.Model):
    __tablename__ = "attendances"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    registration_id = db.Column(
        db.String(36), db.ForeignKey("registrations.id"), nullable=False, unique=True
    )
    checked_in_by = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=True)
    checked_in_at = db.Column(db.TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    registration = db.relationship("Registration", back_populates="attendance")

    def to_dict(self):
        return {
            "id": self.id,
            "registration_id": self.registration_id,
            "checked_in_by": self.checked_in_by,
            "checked_in_at": isoformat(self.checked_in_at),
        }
