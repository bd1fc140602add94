from typing import Optional
from barangay_api.extensions import db
from barangay_api.models import QrCode


class QrCodeRepository:
    @staticmethod
    def create(attrs) -> QrCode:
        qr_code = QrCode(**attrs)
        db.session.add(qr_code)
        db.session.commit()
        return qr_code

    @staticmethod
    def find_by_id(qr_id: str) -> Optional[QrCode]:
        return db.session.get(QrCode, qr_id)

    @staticmethod
    def find_by_code_value(code_value: str) -> Optional[QrCode]:
        return QrCode.query.filter_by(code_value=code_value).first()

    @staticmethod
    def delete_all() -> int:
        try:
            num_deleted = QrCode.query.delete()
            db.session.commit()
            return num_deleted
        except Exception:
            db.session.rollback()
            raise
