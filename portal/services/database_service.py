# /portal/services/database_service.py

from typing import Dict, Generator, List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

# --- Core Database Setup ---
from portal.db.database import get_db
from portal.db.models.content_models import Announcement, Exam, Meeting, ScheduleItem
from portal.models.identity_model import Identity

# --- Repository Imports ---
from .database_helpers.identity_repository_sql import IdentityRepositorySQL
from .database_helpers.content_repository_sql import ContentRepositorySQL
from .database_helpers.poll_repository_sql import PollRepositorySQL
from .database_helpers.forum_repository_sql import ForumRepositorySQL
from .database_helpers.audit_repository_sql import AuditRepositorySQL


class DatabaseService:
    def __init__(self, db_session: Session):
        """Wires every SQL repository to the request's session."""
        self.identity_repo = IdentityRepositorySQL(db_session)
        self.content_repo = ContentRepositorySQL(db_session)
        self.poll_repo = PollRepositorySQL(db_session)
        self.forum_repo = ForumRepositorySQL(db_session)
        self.audit_repo = AuditRepositorySQL(db_session)

    # --- CREDENTIAL & PROFILE METHODS (DELEGATED) ---
    def get_auth_user_by_id(self, user_id: str): return self.identity_repo.get_auth_user_by_id(user_id)
    def get_auth_user_by_email(self, email: str): return self.identity_repo.get_auth_user_by_email(email)
    def add_auth_user(self, record: Dict): return self.identity_repo.add_auth_user(record)
    def add_user_with_profile(self, user_record: Dict, profile_record: Dict): return self.identity_repo.add_user_with_profile(user_record, profile_record)
    def update_password(self, user_id: str, hashed_password: str) -> bool: return self.identity_repo.update_password(user_id, hashed_password)
    def delete_auth_user(self, user_id: str) -> bool: return self.identity_repo.delete_auth_user(user_id)
    def get_profile_by_id(self, user_id: str): return self.identity_repo.get_profile_by_id(user_id)
    def get_all_profiles(self) -> List: return self.identity_repo.get_all_profiles()
    def get_profiles_for_roster(self) -> List[Dict]: return self.identity_repo.get_profiles_for_roster()
    def update_profile(self, user_id: str, data: Dict): return self.identity_repo.update_profile(user_id, data)

    # --- SCHOOL CLASS METHODS (DELEGATED) ---
    def get_all_classes(self) -> List: return self.identity_repo.get_all_classes()
    def get_class_by_id(self, class_id: str): return self.identity_repo.get_class_by_id(class_id)
    def get_class_by_name(self, name: str): return self.identity_repo.get_class_by_name(name)
    def add_class(self, record: Dict): return self.identity_repo.add_class(record)
    def rename_class(self, class_id: str, data: Dict): return self.identity_repo.rename_class(class_id, data)
    def delete_class(self, class_id: str) -> bool: return self.identity_repo.delete_class(class_id)

    # --- ANNOUNCEMENT METHODS (DELEGATED) ---
    def list_announcements(self, identity: Identity) -> List: return self.content_repo.list_visible(Announcement, identity, Announcement.date.desc())
    def get_announcement(self, announcement_id: str): return self.content_repo.get_by_id(Announcement, announcement_id)
    def add_announcement(self, record: Dict): return self.content_repo.add(Announcement, record)
    def update_announcement(self, announcement_id: str, identity: Identity, data: Dict): return self.content_repo.update_scoped(Announcement, announcement_id, identity, data, author_may_modify=True)
    def delete_announcement(self, announcement_id: str, identity: Identity) -> bool: return self.content_repo.delete_scoped(Announcement, announcement_id, identity, author_may_modify=True)

    # --- EXAM METHODS (DELEGATED) ---
    def list_exams(self, identity: Identity) -> List: return self.content_repo.list_visible(Exam, identity, Exam.date.asc())
    def get_exam(self, exam_id: str): return self.content_repo.get_by_id(Exam, exam_id)
    def add_exam(self, record: Dict): return self.content_repo.add(Exam, record)
    def update_exam(self, exam_id: str, identity: Identity, data: Dict): return self.content_repo.update_scoped(Exam, exam_id, identity, data)
    def delete_exam(self, exam_id: str, identity: Identity) -> bool: return self.content_repo.delete_scoped(Exam, exam_id, identity)

    # --- MEETING METHODS (DELEGATED) ---
    def list_meetings(self, identity: Identity) -> List: return self.content_repo.list_visible(Meeting, identity, Meeting.date.asc())
    def get_meeting(self, meeting_id: str): return self.content_repo.get_by_id(Meeting, meeting_id)
    def add_meeting(self, record: Dict): return self.content_repo.add(Meeting, record)
    def update_meeting(self, meeting_id: str, identity: Identity, data: Dict): return self.content_repo.update_scoped(Meeting, meeting_id, identity, data)
    def delete_meeting(self, meeting_id: str, identity: Identity) -> bool: return self.content_repo.delete_scoped(Meeting, meeting_id, identity)

    # --- SCHEDULE METHODS (DELEGATED) ---
    def list_schedules(self, identity: Identity) -> List: return self.content_repo.list_visible(ScheduleItem, identity, ScheduleItem.uploaded_at.desc())
    def get_schedule(self, schedule_id: str): return self.content_repo.get_by_id(ScheduleItem, schedule_id)
    def add_schedule(self, record: Dict): return self.content_repo.add(ScheduleItem, record)
    def update_schedule(self, schedule_id: str, identity: Identity, data: Dict): return self.content_repo.update_scoped(ScheduleItem, schedule_id, identity, data)
    def delete_schedule(self, schedule_id: str, identity: Identity) -> bool: return self.content_repo.delete_scoped(ScheduleItem, schedule_id, identity)
    def get_latest_schedule_version(self, title: str, class_label: str) -> int: return self.content_repo.get_latest_schedule_version(title, class_label)
    def add_schedule_version(self, record: Dict): return self.content_repo.add_schedule_version(record)

    # --- POLL METHODS (DELEGATED) ---
    def list_polls(self, identity: Identity) -> List: return self.poll_repo.list_visible_polls(identity)
    def get_visible_poll(self, poll_id: str, identity: Identity): return self.poll_repo.get_visible_poll(poll_id, identity)
    def get_poll(self, poll_id: str): return self.poll_repo.get_poll_by_id(poll_id)
    def add_poll(self, poll_record: Dict, option_texts: List[str]): return self.poll_repo.add_poll(poll_record, option_texts)
    def update_poll(self, poll_id: str, identity: Identity, data: Dict): return self.poll_repo.update_poll(poll_id, identity, data)
    def delete_poll(self, poll_id: str, identity: Identity) -> bool: return self.poll_repo.delete_poll(poll_id, identity)
    def get_vote_counts(self, poll_ids: List[str]) -> Dict[str, int]: return self.poll_repo.get_vote_counts(poll_ids)
    def get_user_votes(self, user_id: str, poll_ids: List[str]) -> Dict[str, str]: return self.poll_repo.get_user_votes(user_id, poll_ids)
    def cast_vote(self, poll_id: str, option_id: str, user_id: str): self.poll_repo.cast_vote(poll_id, option_id, user_id)

    # --- FORUM METHODS (DELEGATED) ---
    def list_forum_posts(self, identity: Identity) -> List: return self.forum_repo.list_visible_posts(identity)
    def get_visible_forum_post(self, post_id: str, identity: Identity): return self.forum_repo.get_visible_post(post_id, identity)
    def get_forum_post(self, post_id: str): return self.forum_repo.get_post_by_id(post_id)
    def get_forum_reply_counts(self, post_ids: List[str]) -> Dict[str, int]: return self.forum_repo.get_reply_counts(post_ids)
    def increment_forum_views(self, post_id: str): self.forum_repo.increment_views(post_id)
    def add_forum_post(self, record: Dict): return self.forum_repo.add_post(record)
    def add_forum_reply(self, record: Dict): return self.forum_repo.add_reply(record)
    def delete_forum_post(self, post_id: str, identity: Identity) -> bool: return self.forum_repo.delete_post(post_id, identity)

    # --- AUDIT & STATISTICS METHODS (DELEGATED) ---
    def add_audit_log(self, record: Dict): return self.audit_repo.add_log(record)
    def get_recent_audit_logs(self, limit: int = 100) -> List: return self.audit_repo.get_recent_logs(limit)
    def count_announcements(self) -> int: return self.content_repo.count(Announcement)
    def count_exams(self) -> int: return self.content_repo.count(Exam)
    def count_schedules(self) -> int: return self.content_repo.count(ScheduleItem)


# --- DEPENDENCY PROVIDER ---
def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """FastAPI dependency that provides a DatabaseService bound to the request's session."""
    yield DatabaseService(db_session=db)
