# /tests/test_database_service.py

import datetime

import pytest
from sqlalchemy.exc import IntegrityError

from portal.models.identity_model import Role
from portal.services.database_helpers.content_repository_sql import ContentRepositorySQL
from tests.conftest import make_identity


def _exam(exam_id: str, class_label: str, days_ahead: int = 3) -> dict:
    return {
        "id": exam_id,
        "subject": f"Subject {exam_id}",
        "class_label": class_label,
        "date": datetime.datetime(2030, 1, 1) + datetime.timedelta(days=days_ahead),
        "duration": "2h",
        "room": "A1",
        "author_id": "usr_author",
    }


def test_add_and_get_class(db_service):
    db_service.add_class({"id": "cls_test_123", "name": "Licence 3", "contact_email": "licence.3@janghub.sn"})
    retrieved_class = db_service.get_class_by_id("cls_test_123")
    assert retrieved_class is not None
    assert retrieved_class.name == "Licence 3"
    assert db_service.get_class_by_name("Licence 3").id == "cls_test_123"


def test_get_non_existent_class(db_service):
    assert db_service.get_class_by_id("cls_no_exist") is None


def test_get_all_classes_sorted_by_name(db_service):
    db_service.add_class({"id": "cls_2", "name": "Master 1", "contact_email": "m1@janghub.sn"})
    db_service.add_class({"id": "cls_1", "name": "Licence 1", "contact_email": "l1@janghub.sn"})
    assert [c.name for c in db_service.get_all_classes()] == ["Licence 1", "Master 1"]


def test_user_with_profile_is_created_and_deleted_together(db_service):
    db_service.add_user_with_profile(
        {"id": "usr_1", "email": "awa@test.sn", "hashed_password": "x"},
        {"full_name": "Awa Diop", "email": "awa@test.sn", "role": "STUDENT", "class_label": "L2"},
    )
    assert db_service.get_auth_user_by_email("AWA@test.sn").id == "usr_1"
    assert db_service.get_profile_by_id("usr_1").full_name == "Awa Diop"

    assert db_service.delete_auth_user("usr_1") is True
    assert db_service.get_profile_by_id("usr_1") is None


def test_store_lists_only_the_callers_class(db_service):
    db_service.add_exam(_exam("exam_l2", "L2"))
    db_service.add_exam(_exam("exam_l3", "L3"))

    student = make_identity(Role.STUDENT, "L2")
    admin = make_identity(Role.ADMIN, "ADMINISTRATION")
    assert [e.id for e in db_service.list_exams(student)] == ["exam_l2"]
    assert {e.id for e in db_service.list_exams(admin)} == {"exam_l2", "exam_l3"}


def test_exams_are_listed_soonest_first(db_service):
    db_service.add_exam(_exam("exam_late", "L2", days_ahead=5))
    db_service.add_exam(_exam("exam_soon", "L2", days_ahead=1))
    student = make_identity(Role.STUDENT, "L2")
    assert [e.id for e in db_service.list_exams(student)] == ["exam_soon", "exam_late"]


def test_scoped_delete_refuses_another_class(db_service):
    """Even without the service-level check, the store will not touch another class's rows."""
    db_service.add_exam(_exam("exam_b", "B"))
    responsible_a = make_identity(Role.RESPONSIBLE, "A")

    assert db_service.delete_exam("exam_b", responsible_a) is False
    assert db_service.get_exam("exam_b") is not None


def test_scoped_update_refuses_students(db_service):
    db_service.add_exam(_exam("exam_1", "L2"))
    student = make_identity(Role.STUDENT, "L2")
    assert db_service.update_exam("exam_1", student, {"room": "B2"}) is None
    assert db_service.get_exam("exam_1").room == "A1"


def test_author_may_delete_own_announcement_through_the_store(db_service):
    db_service.add_announcement({
        "id": "ann_1", "author_id": "usr_me", "author_name": "Me", "class_label": "L2", "content": "Hello",
    })
    author = make_identity(Role.STUDENT, "L2", user_id="usr_me")
    assert db_service.delete_announcement("ann_1", author) is True


def test_latest_schedule_version_is_per_title_and_class(db_service):
    assert db_service.get_latest_schedule_version("EDT", "L2") == 0
    for version, class_label in [(1, "L2"), (2, "L2"), (1, "L3")]:
        db_service.add_schedule({
            "id": f"sch_{class_label}_{version}", "title": "EDT", "class_label": class_label,
            "semester": "Semestre 2", "file_ref": "x", "url": "http://x", "version": version,
            "author_id": "usr_r",
        })
    assert db_service.get_latest_schedule_version("EDT", "L2") == 2
    assert db_service.get_latest_schedule_version("EDT", "L3") == 1
    assert db_service.count_schedules() == 3


def _schedule_record(schedule_id: str, title: str = "EDT", class_label: str = "L2") -> dict:
    return {
        "id": schedule_id, "title": title, "class_label": class_label, "semester": "Semestre 2",
        "file_ref": f"{class_label}/{schedule_id}.xlsx", "url": "http://x", "author_id": "usr_r",
    }


def test_duplicate_schedule_version_is_rejected(db_service):
    db_service.add_schedule({**_schedule_record("sch_a"), "version": 1})
    with pytest.raises(IntegrityError):
        db_service.add_schedule({**_schedule_record("sch_b"), "version": 1})
    assert db_service.count_schedules() == 1


def test_schedule_version_retried_after_concurrent_insert(db_service, monkeypatch):
    db_service.add_schedule_version(_schedule_record("sch_a"))

    real_latest = ContentRepositorySQL.get_latest_schedule_version
    calls = []

    def stale_then_fresh(self, title, class_label):
        calls.append(title)
        # The first read misses the row another request already committed.
        return 0 if len(calls) == 1 else real_latest(self, title, class_label)

    monkeypatch.setattr(ContentRepositorySQL, "get_latest_schedule_version", stale_then_fresh)
    second = db_service.add_schedule_version(_schedule_record("sch_b"))

    assert second.version == 2
    assert len(calls) == 2
    assert db_service.count_schedules() == 2


def test_rename_class_moves_profiles_and_content(db_service):
    db_service.add_class({"id": "cls_1", "name": "L2", "contact_email": "l2@janghub.sn"})
    db_service.add_user_with_profile(
        {"id": "usr_s", "email": "s@test.sn", "hashed_password": "x"},
        {"full_name": "Student", "email": "s@test.sn", "role": "STUDENT", "class_label": "L2"},
    )
    db_service.add_exam(_exam("exam_l2", "L2"))
    db_service.add_exam(_exam("exam_l3", "L3"))
    db_service.add_schedule_version(_schedule_record("sch_a"))

    renamed = db_service.rename_class("cls_1", {"name": "Licence 2", "contact_email": "licence.2@janghub.sn"})

    assert renamed.name == "Licence 2"
    assert db_service.get_profile_by_id("usr_s").class_label == "Licence 2"
    assert db_service.get_exam("exam_l2").class_label == "Licence 2"
    assert db_service.get_exam("exam_l3").class_label == "L3"
    assert db_service.get_schedule("sch_a").class_label == "Licence 2"
    assert db_service.rename_class("cls_missing", {"name": "X", "contact_email": "x@janghub.sn"}) is None


def test_forum_views_increment_atomically(db_service):
    db_service.add_forum_post({
        "id": "post_1", "author_id": "usr_a", "author_name": "A", "class_label": "L2",
        "title": "Question", "content": "Body",
    })
    db_service.increment_forum_views("post_1")
    db_service.increment_forum_views("post_1")
    assert db_service.get_forum_post("post_1").views == 2


def test_audit_logs_newest_first(db_service):
    for index in range(3):
        db_service.add_audit_log({
            "id": f"log_{index}", "actor_id": "usr_a", "actor_name": "A", "actor_role": "ADMIN",
            "action": f"ACTION_{index}", "target_class": "L2", "details": "",
        })
    assert [log.action for log in db_service.get_recent_audit_logs(2)] == ["ACTION_2", "ACTION_1"]
