from barangay_api.extensions import db
from barangay_api.utils.dates import utcnow


class RevokedToken(db.Model):
    __tablename__ = "revoked_tokens"

    id = db.Column(db.Integer, primary_key=True)
    jti = db.Column(db.String(64), unique=True, nullable=False, index=True)
    token_type = db.Column(db.String(16), nullable=False)
    # Natural expiry of the token; the row is useless afterwards
    expires_at = db.Column(db.TIMESTAMP(timezone=True), nullable=False)
    revoked_at = db.Column(db.TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    def __repr__(self):
        return f"<RevokedToken jti={self.jti} type={self.token_type}>"
