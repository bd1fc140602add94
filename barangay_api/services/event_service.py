from datetime import datetime
from typing import List
from flask import current_app
from barangay_api.repositories import EventRepository, RegistrationRepository, UserRepository
from barangay_api.exceptions import (
    ConflictError,
    MissingFieldsError,
    NotFoundError,
    ValidationError,
)
from barangay_api.models import Event
from barangay_api.models.enums import UserRole
from barangay_api.utils.auth import ensure_event_access
from barangay_api.utils.dates import ensure_utc

# Request keys an update may change, mapped to columns
UPDATABLE_FIELDS = {
    "title": "title",
    "description": "description",
    "location": "location",
    "startDate": "start_date",
    "endDate": "end_date",
    "capacity": "capacity",
}


def _parse_datetime(value, field):
    try:
        return ensure_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
    except (AttributeError, ValueError):
        raise ValidationError(f"{field} must be an ISO 8601 datetime")


def _parse_capacity(capacity):
    # bool is an int subclass; True must not become a capacity of 1
    if capacity is not None and (
        isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1
    ):
        raise ValidationError("capacity must be a positive integer")
    return capacity


class EventService:
    @staticmethod
    def get_events() -> List[Event]:
        return EventRepository.get_events().all()

    @staticmethod
    def get_event(event_id: str) -> Event:
        event = EventRepository.get_event(event_id)
        if not event:
            raise NotFoundError(f"Event with ID {event_id} not found")
        return event

    @staticmethod
    def create_event(data) -> Event:
        required_fields = ["title", "startDate"]
        missing = [f for f in required_fields if not data.get(f)]
        if missing:
            raise MissingFieldsError(missing)

        capacity = _parse_capacity(data.get("capacity"))
        start_date = _parse_datetime(data["startDate"], "startDate")
        end_date = _parse_datetime(data["endDate"], "endDate") if data.get("endDate") else None
        if end_date and end_date < start_date:
            raise ValidationError("endDate must not be before startDate")

        manager_id = data.get("managerId")
        if manager_id:
            EventService._require_manager(manager_id)

        event = EventRepository.create_event(
            {
                "title": data["title"],
                "description": data.get("description"),
                "location": data.get("location"),
                "start_date": start_date,
                "end_date": end_date,
                "capacity": capacity,
                "manager_id": manager_id,
            }
        )
        current_app.logger.info(f"Event {event.id} created: {event.title}")
        return event

    @staticmethod
    def update_event(event_id: str, data, user=None) -> Event:
        """Partial update of an event's details; managers only touch their own events."""
        event = EventService.get_event(event_id)
        if user is not None:
            ensure_event_access(user, event)

        attrs = {}
        for key, column in UPDATABLE_FIELDS.items():
            if key in data:
                attrs[column] = data[key]

        if "title" in attrs and not attrs["title"]:
            raise ValidationError("title must not be empty")
        if "capacity" in attrs:
            capacity = _parse_capacity(attrs["capacity"])
            active = RegistrationRepository.count_active_for_event(event.id)
            if capacity is not None and capacity < active:
                raise ConflictError("capacity is below the current number of registrations")
        if "start_date" in attrs:
            attrs["start_date"] = _parse_datetime(attrs["start_date"], "startDate")
        if attrs.get("end_date"):
            attrs["end_date"] = _parse_datetime(attrs["end_date"], "endDate")

        start_date = attrs.get("start_date", ensure_utc(event.start_date))
        end_date = attrs.get("end_date", ensure_utc(event.end_date))
        if end_date and end_date < start_date:
            raise ValidationError("endDate must not be before startDate")

        if not attrs:
            return event

        EventRepository.update_event(event, attrs)
        current_app.logger.info(f"Event {event_id} updated: {', '.join(sorted(attrs))}")
        return event

    @staticmethod
    def delete_event(event_id: str):
        event = EventService.get_event(event_id)
        if RegistrationRepository.count_for_event(event.id):
            raise ConflictError("Event has registrations and cannot be deleted")

        EventRepository.delete_event(event)
        current_app.logger.info(f"Event {event_id} deleted")

    @staticmethod
    def _require_manager(user_id):
        manager = UserRepository.find_by_id(user_id)
        if not manager:
            raise NotFoundError("User not found")
        if manager.role != UserRole.EVENT_MANAGER or not manager.is_active:
            raise ValidationError("User is not an active event manager")
        return manager

    @staticmethod
    def assign_manager(event_id: str, user_id: str) -> Event:
        event = EventService.get_event(event_id)
        EventService._require_manager(user_id)
        EventRepository.update_event(event, {"manager_id": user_id})
        current_app.logger.info(f"User {user_id} assigned as manager of event {event_id}")
        return event
