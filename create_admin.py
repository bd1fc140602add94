import os
from barangay_api import create_app
from barangay_api.models import User
from barangay_api.models.enums import UserRole
from barangay_api.extensions import db
from barangay_api.services import UserService


def create_admin_user(update=False):
    email = os.getenv("ADMIN_EMAIL", "admin@example.com")
    password = os.getenv("ADMIN_PASSWORD", "admin123")

    app = create_app()
    with app.app_context():
        # Check if admin already exists
        admin = User.query.filter_by(email=email).first()
        if not admin:
            UserService.create_user(email, password, UserRole.SUPER_ADMIN)
            print("Super admin created successfully!")
        elif update:
            admin.set_password(password)
            admin.role = UserRole.SUPER_ADMIN
            admin.is_active = True
            db.session.commit()
            print("Super admin updated successfully!")
        else:
            print("Super admin already exists!")


if __name__ == '__main__':
    create_admin_user(update=True)
