from enum import Enum


class RegistrationStatus(Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class UserRole(Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    EVENT_MANAGER = "EVENT_MANAGER"
    STAFF = "STAFF"
    RESIDENT = "RESIDENT"
