# /tests/test_admin_api.py

import io

import pandas as pd
import pytest

from portal.models.identity_model import Role
from portal.services.class_helpers.crud import build_contact_email


@pytest.fixture
def admin(create_account):
    return create_account(Role.ADMIN, "ADMINISTRATION", full_name="Admin Principal")


def test_non_admins_are_refused(client, create_account):
    _, responsible = create_account(Role.RESPONSIBLE, "L2")
    assert client.get("/api/admin/users", headers=responsible).status_code == 403
    assert client.get("/api/classes", headers=responsible).status_code == 403


# --- Users ---

def test_create_user_with_default_password(client, admin):
    _, headers = admin
    response = client.post(
        "/api/admin/users",
        json={"email": "Moussa@Test.sn", "fullName": "Moussa Ndiaye", "role": "RESPONSIBLE", "classLabel": "L3"},
        headers=headers,
    )
    assert response.status_code == 201
    body = response.json()
    assert body["email"] == "moussa@test.sn"
    assert body["classLabel"] == "L3"
    assert body["avatarUrl"].startswith("https://ui-avatars.com/api/?name=Moussa+Ndiaye")

    login = client.post("/api/auth/token", data={"username": "moussa@test.sn", "password": "passer25"})
    assert login.status_code == 200


def test_admin_accounts_belong_to_administration(client, admin):
    _, headers = admin
    created = client.post(
        "/api/admin/users", json={"email": "boss@test.sn", "fullName": "Second Admin", "role": "ADMIN"}, headers=headers
    )
    assert created.json()["classLabel"] == "ADMINISTRATION"

    refused = client.post(
        "/api/admin/users",
        json={"email": "bad@test.sn", "fullName": "Bad Admin", "role": "ADMIN", "classLabel": "L2"},
        headers=headers,
    )
    assert refused.status_code == 400

    student_in_admin_class = client.post(
        "/api/admin/users",
        json={"email": "stu@test.sn", "fullName": "Student", "role": "STUDENT", "classLabel": "ADMINISTRATION"},
        headers=headers,
    )
    assert student_in_admin_class.status_code == 400


def test_duplicate_email_is_rejected(client, admin):
    _, headers = admin
    payload = {"email": "twice@test.sn", "fullName": "Twice"}
    assert client.post("/api/admin/users", json=payload, headers=headers).status_code == 201
    assert client.post("/api/admin/users", json=payload, headers=headers).status_code == 400


def test_update_user_role_moves_class(client, admin, create_account):
    _, headers = admin
    user_id, _ = create_account(Role.STUDENT, "L2")

    promoted = client.put(f"/api/admin/users/{user_id}", json={"role": "RESPONSIBLE"}, headers=headers).json()
    assert promoted["role"] == "RESPONSIBLE"
    assert promoted["classLabel"] == "L2"

    made_admin = client.put(f"/api/admin/users/{user_id}", json={"role": "ADMIN"}, headers=headers).json()
    assert made_admin["classLabel"] == "ADMINISTRATION"

    demoted = client.put(f"/api/admin/users/{user_id}", json={"role": "STUDENT"}, headers=headers).json()
    assert demoted["classLabel"] == "Licence 2 - Info"


def test_update_user_with_unknown_stored_role(client, admin, create_account, db_service):
    _, headers = admin
    user_id, _ = create_account(Role.STUDENT, "L2")
    db_service.update_profile(user_id, {"role": "TEACHER"})

    response = client.put(f"/api/admin/users/{user_id}", json={"fullName": "Awa Diop"}, headers=headers)
    assert response.status_code == 200
    assert response.json()["role"] == "STUDENT"
    assert response.json()["classLabel"] == "L2"


def test_delete_user(client, admin, create_account):
    admin_id, headers = admin
    user_id, _ = create_account(Role.STUDENT, "L2")

    assert client.delete(f"/api/admin/users/{user_id}", headers=headers).status_code == 204
    assert client.delete(f"/api/admin/users/{user_id}", headers=headers).status_code == 404
    assert client.delete(f"/api/admin/users/{admin_id}", headers=headers).status_code == 400


def test_deleted_user_token_stops_working(client, admin, create_account):
    _, headers = admin
    user_id, user_headers = create_account(Role.STUDENT, "L2")
    client.delete(f"/api/admin/users/{user_id}", headers=headers)
    assert client.get("/api/auth/me", headers=user_headers).status_code == 401


# --- Classes ---

def test_contact_email_generation():
    assert build_contact_email("Licence 2 - Info") == "licence.2...info@janghub.sn"


def test_classes_with_counts_and_delegate(client, admin, create_account):
    _, headers = admin
    created = client.post("/api/classes", json={"name": "L2"}, headers=headers)
    assert created.status_code == 201
    assert created.json()["contactEmail"] == "l2@janghub.sn"

    create_account(Role.STUDENT, "L2")
    create_account(Role.STUDENT, "L2")
    create_account(Role.RESPONSIBLE, "L2", full_name="Délégué L2")

    classes = client.get("/api/classes", headers=headers).json()
    assert classes == [
        {
            "id": created.json()["id"],
            "name": "L2",
            "contactEmail": "l2@janghub.sn",
            "studentCount": 2,
            "delegateName": "Délégué L2",
            "createdAt": classes[0]["createdAt"],
        }
    ]


def test_class_names_are_unique(client, admin):
    _, headers = admin
    assert client.post("/api/classes", json={"name": "M1"}, headers=headers).status_code == 201
    assert client.post("/api/classes", json={"name": "M1"}, headers=headers).status_code == 400


def test_class_rename_and_delete(client, admin):
    _, headers = admin
    created = client.post("/api/classes", json={"name": "M1"}, headers=headers).json()

    renamed = client.put(f"/api/classes/{created['id']}", json={"name": "Master 1"}, headers=headers).json()
    assert renamed["contactEmail"] == "master.1@janghub.sn"

    assert client.delete(f"/api/classes/{created['id']}", headers=headers).status_code == 204
    assert client.delete(f"/api/classes/{created['id']}", headers=headers).status_code == 404


def test_class_rename_carries_roster_and_content(client, admin, create_account):
    _, headers = admin
    created = client.post("/api/classes", json={"name": "L2"}, headers=headers).json()
    create_account(Role.STUDENT, "L2", full_name="Awa Diop")
    _, responsible = create_account(Role.RESPONSIBLE, "L2", full_name="Délégué L2")
    client.post("/api/exams", json={"subject": "BD", "date": "2030-01-10T08:00:00Z"}, headers=responsible)

    renamed = client.put(f"/api/classes/{created['id']}", json={"name": "Licence 2"}, headers=headers).json()
    assert renamed["studentCount"] == 1
    assert renamed["delegateName"] == "Délégué L2"

    export = client.get(f"/api/classes/{created['id']}/export", headers=headers)
    roster = pd.read_csv(io.StringIO(export.text))
    assert roster["Class Name"].unique().tolist() == ["Licence 2"]

    exams = client.get("/api/exams", headers=responsible).json()
    assert [exam["classLabel"] for exam in exams] == ["Licence 2"]


def test_class_without_responsible_shows_unassigned_delegate(client, admin):
    _, headers = admin
    created = client.post("/api/classes", json={"name": "M2"}, headers=headers).json()
    assert created["delegateName"] == "Non assigné"


def test_roster_export_csv(client, admin, create_account):
    _, headers = admin
    created = client.post("/api/classes", json={"name": "L2"}, headers=headers).json()
    create_account(Role.STUDENT, "L2", full_name="Awa Diop")
    create_account(Role.STUDENT, "L3", full_name="Not Listed")

    response = client.get(f"/api/classes/{created['id']}/export", headers=headers)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    roster = pd.read_csv(io.StringIO(response.text))
    assert list(roster.columns) == ["Full Name", "Email", "Role", "Class Name"]
    assert roster["Full Name"].tolist() == ["Awa Diop"]


# --- Stats & journal ---

def test_stats_and_audit_log(client, admin, create_account):
    _, admin_headers = admin
    _, responsible = create_account(Role.RESPONSIBLE, "L2", full_name="Délégué L2")
    client.post("/api/announcements", json={"content": "Bonjour"}, headers=responsible)
    client.post("/api/exams", json={"subject": "BD", "date": "2030-01-10T08:00:00Z"}, headers=responsible)

    stats = client.get("/api/admin/stats", headers=admin_headers).json()
    assert stats == {"users": 2, "classes": 0, "announcements": 1, "exams": 1, "files": 0}

    logs = client.get("/api/admin/logs", headers=admin_headers).json()
    assert [entry["action"] for entry in logs] == ["CREATE_EXAM", "CREATE_ANNOUNCEMENT"]
    assert logs[0]["actorName"] == "Délégué L2"
    assert logs[0]["actorRole"] == "RESPONSIBLE"
    assert logs[0]["targetClass"] == "L2"
