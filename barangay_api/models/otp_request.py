import uuid
from barangay_api.extensions import db
from barangay_api.utils.dates import utcnow, ensure_utc, isoformat


class OtpRequest(db.Model):
    __tablename__ = "otp_requests"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    registration_id = db.Column(
        db.String(36), db.ForeignKey("registrations.id"), nullable=False, index=True
    )
    code_hash = db.Column(db.String(64), nullable=False)
    expires_at = db.Column(db.TIMESTAMP(timezone=True), nullable=False)
    attempts = db.Column(db.Integer, nullable=False, default=0)
    is_used = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    registration = db.relationship(
        "Registration", backref=db.backref("otp_requests", lazy="dynamic")
    )

    def is_expired(self, now=None) -> bool:
        return (now or utcnow()) > ensure_utc(self.expires_at)

    def to_dict(self):
        return {
            "id": self.id,
            "registration_id": self.registration_id,
            "expires_at": isoformat(self.expires_at),
            "attempts": self.attempts,
            "is_used": self.is_used,
            "created_at": isoformat(self.created_at),
        }
