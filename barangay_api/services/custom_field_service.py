import json
from datetime import date
from typing import Any, Dict, List
from flask import current_app
from barangay_api.repositories import CustomFieldRepository
from barangay_api.exceptions import (
    ConflictError,
    MissingFieldsError,
    NotFoundError,
    ValidationError,
)
from barangay_api.models import CustomField, Event
from barangay_api.models.custom_field import FIELD_TYPES
from barangay_api.services.event_service import EventService
from barangay_api.utils.auth import ensure_event_access


def _as_bool(value, field):
    if isinstance(value, bool):
        return value
    if value in ("true", "false"):
        return value == "true"
    raise ValidationError(f"{field} must be a boolean")


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class CustomFieldService:
    @staticmethod
    def list_fields(event_id: str) -> List[CustomField]:
        EventService.get_event(event_id)
        return CustomFieldRepository.list_for_event(event_id)

    @staticmethod
    def _field_attrs(data, current: CustomField = None) -> Dict[str, Any]:
        """Validate a create or partial update body into column values."""
        attrs = {}

        if "name" in data or current is None:
            name = data.get("name")
            if not isinstance(name, str) or not name.strip():
                raise ValidationError("name is required")
            attrs["name"] = name.strip()

        if "type" in data or current is None:
            field_type = data.get("type")
            if field_type not in FIELD_TYPES:
                raise ValidationError(f"type must be one of: {', '.join(FIELD_TYPES)}")
            attrs["field_type"] = field_type

        if "required" in data:
            attrs["required"] = _as_bool(data["required"], "required")

        if "sortOrder" in data:
            sort_order = data["sortOrder"]
            if not isinstance(sort_order, int) or isinstance(sort_order, bool):
                raise ValidationError("sortOrder must be an integer")
            attrs["sort_order"] = sort_order

        field_type = attrs.get("field_type", current.field_type if current else None)
        if field_type == "select":
            options = data.get("options", current.options_list if current else None)
            if (
                not isinstance(options, list)
                or not options
                or not all(isinstance(o, str) and o for o in options)
            ):
                raise ValidationError("select fields need a non-empty list of string options")
            attrs["options"] = json.dumps(options)
        else:
            attrs["options"] = None

        return attrs

    @staticmethod
    def create_field(event_id: str, data, user=None) -> CustomField:
        event = EventService.get_event(event_id)
        if user is not None:
            ensure_event_access(user, event)

        attrs = CustomFieldService._field_attrs(data)
        if CustomFieldRepository.find_by_name(event.id, attrs["name"]):
            raise ConflictError(f"Event already has a field named {attrs['name']}")

        field = CustomFieldRepository.create({"event_id": event.id, **attrs})
        current_app.logger.info(f"Custom field {field.name} added to event {event.id}")
        return field

    @staticmethod
    def _get_field(event_id: str, field_id: str, user=None) -> CustomField:
        event = EventService.get_event(event_id)
        if user is not None:
            ensure_event_access(user, event)
        field = CustomFieldRepository.find_for_event(event_id, field_id)
        if not field:
            raise NotFoundError("Custom field not found")
        return field

    @staticmethod
    def update_field(event_id: str, field_id: str, data, user=None) -> CustomField:
        field = CustomFieldService._get_field(event_id, field_id, user)
        attrs = CustomFieldService._field_attrs(data, current=field)

        name = attrs.get("name")
        if name and name != field.name and CustomFieldRepository.find_by_name(event_id, name):
            raise ConflictError(f"Event already has a field named {name}")

        return CustomFieldRepository.update(field, attrs)

    @staticmethod
    def delete_field(event_id: str, field_id: str, user=None):
        field = CustomFieldService._get_field(event_id, field_id, user)
        CustomFieldRepository.delete(field)
        current_app.logger.info(f"Custom field {field_id} removed from event {event_id}")

    @staticmethod
    def validate_values(event: Event, values: Dict[str, Any]) -> Dict[str, Any]:
        """Check submitted custom values against the event's field definitions.

        Required fields must carry a non-blank value, and typed fields must
        parse as their type. Keys the event does not define are kept as sent.
        """
        missing = []
        for field in event.custom_fields:
            value = values.get(field.name)
            if _is_blank(value):
                if field.required:
                    missing.append(field.name)
                continue

            if field.field_type == "number":
                if isinstance(value, bool):
                    raise ValidationError(f"{field.name} must be a number")
                try:
                    float(value)
                except (TypeError, ValueError):
                    raise ValidationError(f"{field.name} must be a number")
            elif field.field_type == "date":
                try:
                    date.fromisoformat(str(value)[:10])
                except ValueError:
                    raise ValidationError(f"{field.name} must be a date (YYYY-MM-DD)")
            elif field.field_type == "select":
                if value not in field.options_list:
                    raise ValidationError(
                        f"{field.name} must be one of: {', '.join(field.options_list)}"
                    )
            elif not isinstance(value, str):
                raise ValidationError(f"{field.name} must be text")

        if missing:
            raise MissingFieldsError(missing)
        return values
