from barangay_api.extensions import db
from barangay_api.models import Event


class EventRepository:
    @staticmethod
    def get_events():
        return Event.query.order_by(Event.start_date.desc())

    @staticmethod
    def get_event(event_id: str) -> Event:
        return db.session.get(Event, event_id)

    @staticmethod
    def create_event(attrs):
        event = Event(**attrs)
        db.session.add(event)
        db.session.commit()
        return event

    @staticmethod
    def update_event(event: Event, attrs: dict):
        for key, value in attrs.items():
            if hasattr(event, key):
                setattr(event, key, value)
        db.session.commit()
        return event

    @staticmethod
    def count_all() -> int:
        return Event.query.count()

    @staticmethod
    def delete_event(event: Event):
        db.session.delete(event)
        db.session.commit()

    @staticmethod
    def unassign_manager(user_id: str) -> int:
        updated = Event.query.filter(Event.manager_id == user_id).update(
            {Event.manager_id: None}, synchronize_session=False
        )
        db.session.commit()
        return updated
