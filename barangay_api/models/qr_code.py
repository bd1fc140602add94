import uuid
from barangay_api.extensions import db
from barangay_api.utils.dates import utcnow, ensure_utc, isoformat


class QrCode(db.Model):
    __tablename__ = "qr_codes"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    registration_id = db.Column(
        db.String(36), db.ForeignKey("registrations.id"), nullable=False, index=True
    )
    code_value = db.Column(db.String(64), unique=True, nullable=False)
    image_path = db.Column(db.String(512), nullable=False)
    expires_at = db.Column(db.TIMESTAMP(timezone=True), nullable=False)
    created_at = db.Column(db.TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    registration = db.relationship(
        "Registration", backref=db.backref("qr_codes", lazy="dynamic")
    )

    def is_expired(self, now=None) -> bool:
        return (now or utcnow()) > ensure_utc(self.expires_at)

    def to_dict(self):
        return {
            "id": self.id,
            "registration_id": self.registration_id,
            "code_value": self.code_value,
            "image_path": self.image_path,
            "expires_at": isoformat(self.expires_at),
            "created_at": isoformat(self.created_at),
        }
