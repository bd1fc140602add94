"""
Script to create or update demo staff accounts and a sample event.
"""

from datetime import timedelta
from barangay_api import create_app
from barangay_api.models import Event, User
from barangay_api.models.enums import UserRole
from barangay_api.extensions import db
from barangay_api.utils.dates import utcnow

DEMO_ACCOUNTS = [
    ("admin@example.com", UserRole.SUPER_ADMIN),
    ("manager@example.com", UserRole.EVENT_MANAGER),
    ("staff@example.com", UserRole.STAFF),
]


def main():
    """Create or update demo accounts with correct credentials."""
    app = create_app()
    with app.app_context():
        users = {}
        for email, role in DEMO_ACCOUNTS:
            user = User.query.filter_by(email=email).first()
            if user:
                user.set_password("password")
                user.role = role
                db.session.commit()
                print(f"Updated {role.value} password")
            else:
                user = User(email=email, role=role)
                user.set_password("password")
                db.session.add(user)
                db.session.commit()
                print(f"Created {role.value} user with ID: {user.id}")
            users[role] = user

        event = Event.query.filter_by(title="Barangay Fun Run").first()
        if not event:
            start = utcnow() + timedelta(days=14)
            event = Event(
                title="Barangay Fun Run",
                description="Community 5K run",
                location="Barangay Hall",
                start_date=start,
                end_date=start + timedelta(hours=4),
                capacity=200,
                manager_id=users[UserRole.EVENT_MANAGER].id,
            )
            db.session.add(event)
            db.session.commit()
            print(f"Created demo event with ID: {event.id}")

        print("Demo accounts setup complete!")


if __name__ == "__main__":
    main()
