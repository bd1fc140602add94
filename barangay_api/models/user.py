import uuid
from werkzeug.security import generate_password_hash, check_password_hash
from barangay_api.extensions import db
from barangay_api.utils.dates import utcnow, isoformat
from .enums import UserRole


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.Enum(UserRole), nullable=False, default=UserRole.RESIDENT)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = db.Column(
        db.TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    profile = db.relationship("Profile", back_populates="user", uselist=False)

    def set_password(self, password: str):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    def has_role(self, *roles: UserRole) -> bool:
        return self.role in roles

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "role": self.role.value if self.role else None,
            "is_active": self.is_active,
            "profile": self.profile.to_dict() if self.profile else None,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }

    def __repr__(self):
        return f"User(id={self.id}, email='{self.email}', role={self.role})"
