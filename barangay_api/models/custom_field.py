import json
import uuid
from barangay_api.extensions import db
from barangay_api.utils.dates import utcnow, isoformat

FIELD_TYPES = ("text", "number", "select", "date")


class CustomField(db.Model):
    """An extra question an event asks its registrants."""

    __tablename__ = "custom_fields"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = db.Column(db.String(36), db.ForeignKey("events.id"), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    field_type = db.Column(db.String(20), nullable=False, default="text")
    required = db.Column(db.Boolean, nullable=False, default=False)
    # JSON-encoded list of allowed values for select fields
    options = db.Column(db.Text, nullable=True)
    sort_order = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    event = db.relationship("Event", back_populates="custom_fields")

    __table_args__ = (db.UniqueConstraint("event_id", "name", name="uq_custom_field_event_name"),)

    @property
    def options_list(self) -> list:
        return json.loads(self.options) if self.options else []

    def to_dict(self):
        return {
            "id": self.id,
            "event_id": self.event_id,
            "name": self.name,
            "type": self.field_type,
            "required": self.required,
            "options": self.options_list,
            "sort_order": self.sort_order,
            "created_at": isoformat(self.created_at),
        }
