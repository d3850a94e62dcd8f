from datetime import date

import pytest

from core.errors import NotFoundError, PermissionDenied, ValidationFailure
from models.enums import SubmissionStatus
from models.user_vocabulary import UserVocabulary
from services.submission_services import SubmissionService, clean_sentences
from tests.conftest import actor_for, auth_headers


@pytest.fixture
def assigned_word(db, learner, make_word):
    word = make_word(word="candid")
    db.add(UserVocabulary(user_id=learner.id, vocabulary_id=word.id, assigned_date=date.today()))
    db.commit()
    return word


def test_clean_sentences_trims_and_drops_blanks():
    assert clean_sentences(["  One. ", "", "   ", "Two."]) == ["One.", "Two."]


@pytest.mark.parametrize("sentences", [[], ["", "  "], ["a", "b", "c", "d"]])
def test_clean_sentences_rejects_bad_input(sentences):
    with pytest.raises(ValidationFailure):
        clean_sentences(sentences)


def test_submit_creates_pending_submission(db, learner, assigned_word):
    entity = SubmissionService(db).submit(
        actor=actor_for(learner),
        vocabulary_id=assigned_word.id,
        sentences=["He was candid about it.", " "],
    )

    assert entity.status == SubmissionStatus.PENDING
    assert entity.sentences == ["He was candid about it."]
    assert entity.submitted_at is not None
    assert entity.reviewed_at is None and entity.reviewed_by is None


def test_submit_for_missing_word(db, learner):
    with pytest.raises(NotFoundError):
        SubmissionService(db).submit(actor=actor_for(learner), vocabulary_id=404, sentences=["x"])


def test_admins_do_not_submit(db, admin, assigned_word):
    with pytest.raises(PermissionDenied):
        SubmissionService(db).submit(actor=actor_for(admin), vocabulary_id=assigned_word.id, sentences=["x"])


def test_review_moves_pending_to_terminal_once(db, admin, learner, assigned_word):
    svc = SubmissionService(db)
    entity = svc.submit(actor=actor_for(learner), vocabulary_id=assigned_word.id, sentences=["Be candid."])

    reviewed = svc.review(
        actor=actor_for(admin),
        submission_id=entity.id,
        decision=SubmissionStatus.APPROVED,
        feedback="  Nice.  ",
    )

    assert reviewed.status == SubmissionStatus.APPROVED
    assert reviewed.feedback == "Nice."
    assert reviewed.reviewed_by == admin.id
    assert reviewed.reviewed_at is not None

    with pytest.raises(ValidationFailure):
        svc.review(actor=actor_for(admin), submission_id=entity.id, decision=SubmissionStatus.REJECTED)


def test_override_replaces_an_earlier_review(db, admin, learner, assigned_word):
    svc = SubmissionService(db)
    entity = svc.submit(actor=actor_for(learner), vocabulary_id=assigned_word.id, sentences=["Be candid."])
    svc.review(actor=actor_for(admin), submission_id=entity.id, decision=SubmissionStatus.APPROVED, feedback="ok")

    reviewed = svc.review(
        actor=actor_for(admin),
        submission_id=entity.id,
        decision=SubmissionStatus.REJECTED,
        feedback="Second look: wrong sense.",
        override=True,
    )

    assert reviewed.status == SubmissionStatus.REJECTED
    assert reviewed.feedback == "Second look: wrong sense."


@pytest.mark.parametrize("decision", ["pending", "maybe"])
def test_review_decision_must_be_terminal(db, admin, learner, assigned_word, decision):
    svc = SubmissionService(db)
    entity = svc.submit(actor=actor_for(learner), vocabulary_id=assigned_word.id, sentences=["Be candid."])

    with pytest.raises(ValidationFailure):
        svc.review(actor=actor_for(admin), submission_id=entity.id, decision=decision)


def test_review_requires_admin_and_existing_submission(db, admin, learner, assigned_word):
    svc = SubmissionService(db)
    entity = svc.submit(actor=actor_for(learner), vocabulary_id=assigned_word.id, sentences=["Be candid."])

    with pytest.raises(PermissionDenied):
        svc.review(actor=actor_for(learner), submission_id=entity.id, decision=SubmissionStatus.APPROVED)
    with pytest.raises(NotFoundError):
        svc.review(actor=actor_for(admin), submission_id=9999, decision=SubmissionStatus.APPROVED)


def test_list_all_filters_by_status(db, admin, learner, assigned_word):
    svc = SubmissionService(db)
    first = svc.submit(actor=actor_for(learner), vocabulary_id=assigned_word.id, sentences=["One candid."])
    second = svc.submit(actor=actor_for(learner), vocabulary_id=assigned_word.id, sentences=["Two candid."])
    svc.review(actor=actor_for(admin), submission_id=first.id, decision=SubmissionStatus.REJECTED)

    pending = svc.list_all(actor=actor_for(admin), status=SubmissionStatus.PENDING)
    everything = svc.list_all(actor=actor_for(admin))

    assert [s.id for s in pending] == [second.id]
    assert [s.id for s in everything] == [second.id, first.id]


def test_submission_routes(client, admin, learner, assigned_word):
    created = client.post(
        "/submissions",
        json={"vocabulary_id": assigned_word.id, "sentences": ["I am candid."]},
        headers=auth_headers(learner),
    )
    assert created.status_code == 201
    body = created.json()
    assert body["status"] == "pending"
    assert body["word"] == "candid"
    assert body["username"] == "learner"

    reviewed = client.post(
        f"/admin/submissions/{body['id']}/review",
        json={"decision": "approved", "feedback": "Good"},
        headers=auth_headers(admin),
    )
    assert reviewed.status_code == 200
    assert reviewed.json()["status"] == "approved"

    again = client.post(
        f"/admin/submissions/{body['id']}/review",
        json={"decision": "rejected"},
        headers=auth_headers(admin),
    )
    assert again.status_code == 400
    assert again.json() == {"success": False, "error": "Submission was already approved"}

    mine = client.get("/submissions", headers=auth_headers(learner))
    assert [s["status"] for s in mine.json()] == ["approved"]


def test_blank_sentences_are_rejected_over_http(client, learner, assigned_word):
    r = client.post(
        "/submissions",
        json={"vocabulary_id": assigned_word.id, "sentences": ["   "]},
        headers=auth_headers(learner),
    )

    assert r.status_code == 400
    assert r.json()["success"] is False
