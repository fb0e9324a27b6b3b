# /tests/test_poll_service.py

import pytest

from portal.core.exceptions import RecordNotFoundError
from portal.models.identity_model import Role
from portal.models.poll_model import PollCreate, PollUpdate
from portal.services import poll_service
from tests.conftest import make_identity


@pytest.fixture
def responsible():
    return make_identity(Role.RESPONSIBLE, "L2", user_id="usr_resp")


@pytest.fixture
def poll(db_service, responsible):
    data = PollCreate(question="  Sortie de fin d'année ?  ", options=["Dakar", " Saint-Louis ", "Thiès"])
    return poll_service.create_poll(data, responsible, db_service)


def _votes(poll):
    return {option.text: option.votes for option in poll.options}


def test_create_poll_strips_and_keeps_option_order(poll, responsible):
    assert poll.question == "Sortie de fin d'année ?"
    assert [o.text for o in poll.options] == ["Dakar", "Saint-Louis", "Thiès"]
    assert poll.class_label == "L2"
    assert poll.active is True
    assert poll.total_votes == 0


def test_poll_needs_two_non_blank_options():
    with pytest.raises(ValueError):
        PollCreate(question="Q?", options=["Only one"])
    with pytest.raises(ValueError):
        PollCreate(question="Q?", options=["A", "   "])


def test_students_cannot_create_polls(db_service):
    student = make_identity(Role.STUDENT, "L2")
    with pytest.raises(PermissionError):
        poll_service.create_poll(PollCreate(question="Q?", options=["A", "B"]), student, db_service)


def test_vote_counts_and_total_stay_consistent(db_service, poll):
    voters = [make_identity(Role.STUDENT, "L2") for _ in range(3)]
    dakar, saint_louis, _ = poll.options

    poll_service.vote(poll.id, dakar.id, voters[0], db_service)
    poll_service.vote(poll.id, dakar.id, voters[1], db_service)
    result = poll_service.vote(poll.id, saint_louis.id, voters[2], db_service)

    assert _votes(result) == {"Dakar": 2, "Saint-Louis": 1, "Thiès": 0}
    assert result.total_votes == sum(o.votes for o in result.options) == 3
    assert result.user_vote_option_id == saint_louis.id


def test_revote_moves_the_ballot(db_service, poll):
    voter = make_identity(Role.STUDENT, "L2")
    dakar, saint_louis, _ = poll.options

    poll_service.vote(poll.id, dakar.id, voter, db_service)
    result = poll_service.vote(poll.id, saint_louis.id, voter, db_service)

    assert _votes(result) == {"Dakar": 0, "Saint-Louis": 1, "Thiès": 0}
    assert result.total_votes == 1


def test_voting_same_option_twice_is_a_no_op(db_service, poll):
    voter = make_identity(Role.STUDENT, "L2")
    dakar = poll.options[0]

    poll_service.vote(poll.id, dakar.id, voter, db_service)
    result = poll_service.vote(poll.id, dakar.id, voter, db_service)

    assert _votes(result)["Dakar"] == 1
    assert result.total_votes == 1


def test_cannot_vote_on_closed_poll(db_service, poll, responsible):
    poll_service.update_poll(poll.id, PollUpdate(active=False), responsible, db_service)
    with pytest.raises(ValueError, match="closed"):
        poll_service.vote(poll.id, poll.options[0].id, make_identity(Role.STUDENT, "L2"), db_service)


def test_cannot_vote_with_foreign_option(db_service, poll, responsible):
    other = poll_service.create_poll(PollCreate(question="Autre ?", options=["Oui", "Non"]), responsible, db_service)
    with pytest.raises(ValueError):
        poll_service.vote(poll.id, other.options[0].id, make_identity(Role.STUDENT, "L2"), db_service)


def test_cannot_vote_on_another_class_poll(db_service, poll):
    outsider = make_identity(Role.STUDENT, "L3")
    with pytest.raises(RecordNotFoundError):
        poll_service.vote(poll.id, poll.options[0].id, outsider, db_service)


def test_list_polls_shows_own_ballot_per_identity(db_service, poll):
    voter = make_identity(Role.STUDENT, "L2")
    bystander = make_identity(Role.STUDENT, "L2")
    poll_service.vote(poll.id, poll.options[2].id, voter, db_service)

    assert poll_service.list_polls(voter, db_service)[0].user_vote_option_id == poll.options[2].id
    assert poll_service.list_polls(bystander, db_service)[0].user_vote_option_id is None
    assert poll_service.list_polls(make_identity(Role.STUDENT, "L3"), db_service) == []


def test_update_only_changes_question_and_state(db_service, poll, responsible):
    updated = poll_service.update_poll(poll.id, PollUpdate(question="Nouvelle question ?"), responsible, db_service)
    assert updated.question == "Nouvelle question ?"
    assert [o.text for o in updated.options] == ["Dakar", "Saint-Louis", "Thiès"]

    with pytest.raises(ValueError):
        PollUpdate(options=["X", "Y"])


def test_other_class_responsible_cannot_delete(db_service, poll):
    intruder = make_identity(Role.RESPONSIBLE, "L3")
    with pytest.raises(PermissionError):
        poll_service.delete_poll(poll.id, intruder, db_service)


def test_delete_cascades_votes(db_service, poll, responsible):
    voter = make_identity(Role.STUDENT, "L2")
    poll_service.vote(poll.id, poll.options[0].id, voter, db_service)

    assert poll_service.delete_poll(poll.id, responsible, db_service) is True
    assert db_service.get_poll(poll.id) is None
    assert db_service.get_vote_counts([poll.id]) == {}
    assert poll_service.delete_poll(poll.id, responsible, db_service) is False
