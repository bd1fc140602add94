from barangay_api.extensions import db
from barangay_api.models import Profile


class ProfileRepository:
    @staticmethod
    def find_by_id(profile_id: str):
        return db.session.get(Profile, profile_id)

    @staticmethod
    def create(attrs) -> Profile:
        profile = Profile(**attrs)
        db.session.add(profile)
        db.session.commit()
        return profile
