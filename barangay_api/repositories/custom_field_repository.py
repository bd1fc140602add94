from typing import List, Optional
from barangay_api.extensions import db
from barangay_api.models import CustomField


class CustomFieldRepository:
    @staticmethod
    def list_for_event(event_id: str) -> List[CustomField]:
        return (
            CustomField.query.filter_by(event_id=event_id)
            .order_by(CustomField.sort_order, CustomField.created_at)
            .all()
        )

    @staticmethod
    def find_for_event(event_id: str, field_id: str) -> Optional[CustomField]:
        return CustomField.query.filter_by(id=field_id, event_id=event_id).first()

    @staticmethod
    def find_by_name(event_id: str, name: str) -> Optional[CustomField]:
        return CustomField.query.filter_by(event_id=event_id, name=name).first()

    @staticmethod
    def create(attrs) -> CustomField:
        field = CustomField(**attrs)
        db.session.add(field)
        db.session.commit()
        return field

    @staticmethod
    def update(field: CustomField, attrs: dict) -> CustomField:
        for key, value in attrs.items():
            setattr(field, key, value)
        db.session.commit()
        return field

    @staticmethod
    def delete(field: CustomField):
        db.session.delete(field)
        db.session.commit()
