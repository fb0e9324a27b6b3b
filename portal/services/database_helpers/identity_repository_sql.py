# /portal/services/database_helpers/identity_repository_sql.py

"""
Raw SQLAlchemy queries for credentials, profiles and school classes.
"""

from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portal.db.models.content_models import Announcement, Exam, Meeting, ScheduleItem
from portal.db.models.forum_models import ForumPost
from portal.db.models.identity_models import AuthUser, Profile, SchoolClass
from portal.db.models.poll_models import Poll

# Tables whose rows are scoped by a class label and follow a class rename.
CLASS_SCOPED_MODELS = (Profile, Announcement, Exam, Meeting, ScheduleItem, Poll, ForumPost)


class IdentityRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def _commit(self):
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    # --- Credential Methods ---

    def get_auth_user_by_id(self, user_id: str) -> Optional[AuthUser]:
        return self.db.query(AuthUser).filter(AuthUser.id == user_id).first()

    def get_auth_user_by_email(self, email: str) -> Optional[AuthUser]:
        return self.db.query(AuthUser).filter(AuthUser.email == email.lower()).first()

    def add_auth_user(self, record: Dict) -> AuthUser:
        new_user = AuthUser(**record)
        self.db.add(new_user)
        self._commit()
        self.db.refresh(new_user)
        return new_user

    def add_user_with_profile(self, user_record: Dict, profile_record: Dict) -> Profile:
        """Creates the credential and its profile in a single transaction."""
        new_user = AuthUser(**user_record)
        new_profile = Profile(id=new_user.id, **profile_record)
        self.db.add(new_user)
        self.db.add(new_profile)
        self._commit()
        self.db.refresh(new_profile)
        return new_profile

    def update_password(self, user_id: str, hashed_password: str) -> bool:
        user = self.get_auth_user_by_id(user_id)
        if not user:
            return False
        user.hashed_password = hashed_password
        self._commit()
        return True

    def delete_auth_user(self, user_id: str) -> bool:
        """Deletes a credential; the profile goes with it through the cascade."""
        user = self.get_auth_user_by_id(user_id)
        if not user:
            return False
        self.db.delete(user)
        self._commit()
        return True

    # --- Profile Methods ---

    def get_profile_by_id(self, user_id: str) -> Optional[Profile]:
        return self.db.query(Profile).filter(Profile.id == user_id).first()

    def get_all_profiles(self) -> List[Profile]:
        return self.db.query(Profile).order_by(Profile.full_name.asc()).all()

    def update_profile(self, user_id: str, data: Dict) -> Optional[Profile]:
        profile = self.get_profile_by_id(user_id)
        if profile:
            for key, value in data.items():
                setattr(profile, key, value)
            self._commit()
            self.db.refresh(profile)
        return profile

    # --- School Class Methods ---

    def get_all_classes(self) -> List[SchoolClass]:
        return self.db.query(SchoolClass).order_by(SchoolClass.name.asc()).all()

    def get_class_by_id(self, class_id: str) -> Optional[SchoolClass]:
        return self.db.query(SchoolClass).filter(SchoolClass.id == class_id).first()

    def get_class_by_name(self, name: str) -> Optional[SchoolClass]:
        return self.db.query(SchoolClass).filter(SchoolClass.name == name).first()

    def add_class(self, record: Dict) -> SchoolClass:
        new_class = SchoolClass(**record)
        self.db.add(new_class)
        self._commit()
        self.db.refresh(new_class)
        return new_class

    def rename_class(self, class_id: str, data: Dict) -> Optional[SchoolClass]:
        """
        Renames a class and moves every profile and class-scoped row from the
        old label to the new one, all in a single commit.
        """
        db_class = self.get_class_by_id(class_id)
        if db_class is None:
            return None
        old_name, new_name = db_class.name, data["name"]
        for key, value in data.items():
            setattr(db_class, key, value)
        if new_name != old_name:
            for model in CLASS_SCOPED_MODELS:
                self.db.query(model).filter(model.class_label == old_name).update(
                    {model.class_label: new_name}, synchronize_session=False
                )
        self._commit()
        self.db.refresh(db_class)
        return db_class

    def delete_class(self, class_id: str) -> bool:
        db_class = self.get_class_by_id(class_id)
        if db_class:
            self.db.delete(db_class)
            self._commit()
            return True
        return False

    def get_profiles_for_roster(self) -> List[Dict]:
        """Profiles as plain dictionaries, for the pandas-based roster summaries."""
        return [{c.name: getattr(obj, c.name) for c in obj.__table__.columns} for obj in self.get_all_profiles()]
