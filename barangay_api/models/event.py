import uuid
from barangay_api.extensions import db
from barangay_api.utils.dates import utcnow, isoformat
from .enums import RegistrationStatus


class Event(db.Model):
    __tablename__ = "events"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    location = db.Column(db.String(255), nullable=True)
    start_date = db.Column(db.TIMESTAMP(timezone=True), nullable=False)
    end_date = db.Column(db.TIMESTAMP(timezone=True), nullable=True)
    capacity = db.Column(db.Integer, nullable=True)
    manager_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=True)
    created_at = db.Column(db.TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = db.Column(
        db.TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    manager = db.relationship("User")
    custom_fields = db.relationship(
        "CustomField",
        back_populates="event",
        order_by="CustomField.sort_order",
        cascade="all, delete-orphan",
    )

    def to_dict(self):
        from .registration import Registration

        registration_count = (
            Registration.query.filter(Registration.event_id == self.id)
            .filter(Registration.status != RegistrationStatus.REJECTED)
            .count()
        )
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "location": self.location,
            "start_date": isoformat(self.start_date),
            "end_date": isoformat(self.end_date),
            "capacity": self.capacity,
            "manager_id": self.manager_id,
            "registration_count": registration_count,
            "custom_fields": [field.to_dict() for field in self.custom_fields],
        }
