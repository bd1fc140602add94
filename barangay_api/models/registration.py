import json
import uuid
from barangay_api.extensions import db
from barangay_api.utils.dates import utcnow, isoformat
from .enums import RegistrationStatus


class Registration(db.Model):
    __tablename__ = "registrations"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = db.Column(db.String(36), db.ForeignKey("events.id"), nullable=False)
    profile_id = db.Column(db.String(36), db.ForeignKey("profiles.id"), nullable=True)
    status = db.Column(
        db.Enum(RegistrationStatus), nullable=False, default=RegistrationStatus.PENDING
    )
    photo_path = db.Column(db.String(512), nullable=True)
    # JSON-encoded mapping of custom field name to submitted value
    custom_values = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = db.Column(
        db.TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    event = db.relationship("Event", backref=db.backref("registrations", lazy="dynamic"))
    profile = db.relationship("Profile", backref=db.backref("registrations", lazy=True))
    attendance = db.relationship("Attendance", back_populates="registration", uselist=False)

    @property
    def custom_values_dict(self) -> dict:
        if not self.custom_values:
            return {}
        return json.loads(self.custom_values)

    def to_dict(self):
        return {
            "id": self.id,
            "event_id": self.event_id,
            "profile_id": self.profile_id,
            "status": self.status.value if self.status else None,
            "photo_path": self.photo_path,
            "custom_values": self.custom_values_dict,
            "first_name": self.profile.first_name if self.profile else None,
            "last_name": self.profile.last_name if self.profile else None,
            "barangay": self.profile.barangay if self.profile else None,
            "checked_in_at": (
                isoformat(self.attendance.checked_in_at) if self.attendance else None
            ),
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }

    def __repr__(self):
        return (
            f"Registration("
            f"id={self.id}, "
            f"event_id={self.event_id}, "
            f"profile_id={self.profile_id}, "
            f"status={self.status}"
            f")"
        )
