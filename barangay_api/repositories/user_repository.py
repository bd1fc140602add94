from barangay_api.extensions import db
from barangay_api.models import User


class UserRepository:
    @staticmethod
    def create(user):
        db.session.add(user)
        db.session.commit()
        return user

    @staticmethod
    def find_by_email(email):
        return User.query.filter_by(email=email).first()

    @staticmethod
    def find_by_id(user_id: str):
        return db.session.get(User, user_id)

    @staticmethod
    def find_active_by_id(user_id: str):
        return User.query.filter_by(id=user_id, is_active=True).first()

    @staticmethod
    def find_by_role(role):
        return User.query.filter_by(role=role).order_by(User.created_at.desc()).all()

    @staticmethod
    def save():
        db.session.commit()
