from barangay_api.extensions import db
from barangay_api.models import RevokedToken


class RevokedTokenRepository:
    @staticmethod
    def add(jti: str, token_type: str, expires_at) -> RevokedToken:
        revoked = RevokedToken(jti=jti, token_type=token_type, expires_at=expires_at)
        db.session.add(revoked)
        db.session.commit()
        return revoked

    @staticmethod
    def is_revoked(jti: str) -> bool:
        return db.session.query(RevokedToken.id).filter_by(jti=jti).scalar() is not None

    @staticmethod
    def delete_expired(now) -> int:
        try:
            num_deleted = RevokedToken.query.filter(RevokedToken.expires_at <= now).delete(
                synchronize_session=False
            )
            db.session.commit()
            return num_deleted
        except Exception:
            db.session.rollback()
            raise
