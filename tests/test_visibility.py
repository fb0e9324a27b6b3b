# /tests/test_visibility.py

import pytest

from portal.models.identity_model import Role
from portal.services import visibility
from portal.services.visibility import ContentKind
from tests.conftest import make_identity


@pytest.fixture
def mixed_records():
    """Records of two classes, in a deliberate non-sorted order."""
    return [
        {"id": "a1", "class_label": "L2", "author_id": "usr_x"},
        {"id": "a2", "class_label": "L3", "author_id": "usr_y"},
        {"id": "a3", "class_label": "L2", "author_id": "usr_y"},
    ]


# --- filter_visible ---

def test_admin_with_all_filter_sees_every_class(mixed_records):
    admin = make_identity(Role.ADMIN, "ADMINISTRATION")
    result = visibility.filter_visible(admin, mixed_records, "ALL")
    assert [r["id"] for r in result] == ["a1", "a2", "a3"]


def test_admin_without_filter_sees_every_class(mixed_records):
    admin = make_identity(Role.ADMIN, "ADMINISTRATION")
    assert len(visibility.filter_visible(admin, mixed_records)) == 3


def test_admin_with_class_filter_sees_only_that_class(mixed_records):
    admin = make_identity(Role.ADMIN, "ADMINISTRATION")
    result = visibility.filter_visible(admin, mixed_records, "L3")
    assert [r["id"] for r in result] == ["a2"]


def test_responsible_sees_only_own_class_in_order(mixed_records):
    responsible = make_identity(Role.RESPONSIBLE, "L2")
    result = visibility.filter_visible(responsible, mixed_records)
    assert [r["id"] for r in result] == ["a1", "a3"]


def test_class_filter_is_ignored_for_non_admins(mixed_records):
    student = make_identity(Role.STUDENT, "L2")
    result = visibility.filter_visible(student, mixed_records, "L3")
    assert [r["id"] for r in result] == ["a1", "a3"]


def test_filter_works_on_objects_too():
    class Row:
        def __init__(self, class_label):
            self.class_label = class_label

    student = make_identity(Role.STUDENT, "L3")
    rows = [Row("L2"), Row("L3")]
    assert visibility.filter_visible(student, rows) == [rows[1]]


# --- can_create ---

@pytest.mark.parametrize("kind, allowed", [
    (ContentKind.ANNOUNCEMENT, {Role.ADMIN, Role.RESPONSIBLE}),
    (ContentKind.EXAM, {Role.RESPONSIBLE}),
    (ContentKind.MEETING, {Role.RESPONSIBLE}),
    (ContentKind.POLL, {Role.RESPONSIBLE}),
    (ContentKind.SCHEDULE, {Role.RESPONSIBLE}),
    (ContentKind.FORUM_POST, {Role.ADMIN, Role.RESPONSIBLE, Role.STUDENT}),
])
def test_creation_rights(kind, allowed):
    for role in Role:
        identity = make_identity(role, "L2")
        assert visibility.can_create(identity, kind) is (role in allowed)


def test_assert_can_create_raises_permission_error():
    student = make_identity(Role.STUDENT, "L2")
    with pytest.raises(PermissionError):
        visibility.assert_can_create(student, ContentKind.EXAM)


# --- can_modify ---

def test_responsible_cannot_modify_another_class():
    responsible = make_identity(Role.RESPONSIBLE, "A")
    record = {"class_label": "B", "author_id": "someone"}
    assert not visibility.can_modify(responsible, ContentKind.EXAM, record)
    with pytest.raises(PermissionError):
        visibility.assert_can_modify(responsible, ContentKind.EXAM, record)


def test_responsible_can_modify_own_class():
    responsible = make_identity(Role.RESPONSIBLE, "A")
    assert visibility.can_modify(responsible, ContentKind.MEETING, {"class_label": "A", "author_id": "x"})


def test_admin_can_modify_anything():
    admin = make_identity(Role.ADMIN, "ADMINISTRATION")
    for kind in ContentKind:
        assert visibility.can_modify(admin, kind, {"class_label": "Z", "author_id": "x"})


def test_author_may_modify_own_announcement_and_forum_post_only():
    student = make_identity(Role.STUDENT, "A", user_id="usr_me")
    own = {"class_label": "A", "author_id": "usr_me"}
    assert visibility.can_modify(student, ContentKind.ANNOUNCEMENT, own)
    assert visibility.can_modify(student, ContentKind.FORUM_POST, own)
    assert not visibility.can_modify(student, ContentKind.POLL, own)


def test_student_cannot_modify_others_records():
    student = make_identity(Role.STUDENT, "A", user_id="usr_me")
    assert not visibility.can_modify(student, ContentKind.ANNOUNCEMENT, {"class_label": "A", "author_id": "usr_other"})


def test_available_classes_sorted_distinct_non_empty():
    first = [{"class_label": "L3"}, {"class_label": "L2"}]
    second = [{"class_label": "L2"}, {"class_label": ""}, {"class_label": None}]
    assert visibility.available_classes(first, second) == ["L2", "L3"]
