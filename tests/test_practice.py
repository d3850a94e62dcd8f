from datetime import date, timedelta

import pytest

from core.errors import NotFoundError
from models.user_vocabulary import UserVocabulary
from services.practice_services import BLANK, PracticeService, blank_out
from tests.conftest import actor_for, auth_headers


def _assign(db, user, word, days_ago=0):
    row = UserVocabulary(
        user_id=user.id,
        vocabulary_id=word.id,
        assigned_date=date.today() - timedelta(days=days_ago),
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def test_blank_out_ignores_case():
    assert blank_out("Serendipity led to serendipity.", "serendipity") == f"{BLANK} led to {BLANK}."


def test_list_by_day_groups_most_recent_first(db, learner, make_word):
    today_a, today_b, old = make_word(), make_word(), make_word()
    _assign(db, learner, old, days_ago=2)
    _assign(db, learner, today_a)
    _assign(db, learner, today_b)

    days = PracticeService(db).list_by_day(actor=actor_for(learner))

    assert [d["date"] for d in days] == [date.today(), date.today() - timedelta(days=2)]
    assert [row.vocabulary.word for row in days[0]["words"]] == [today_a.word, today_b.word]
    assert [row.vocabulary.word for row in days[1]["words"]] == [old.word]


def test_set_learned_only_on_own_assignments(db, learner, make_user, make_word):
    word = make_word()
    mine = _assign(db, learner, word)
    other = make_user()
    svc = PracticeService(db)

    assert svc.set_learned(actor=actor_for(learner), assignment_id=mine.id, learned=True).is_learned is True
    with pytest.raises(NotFoundError):
        svc.set_learned(actor=actor_for(other), assignment_id=mine.id, learned=True)


def test_fill_in_blank_uses_first_example(db, learner, make_word):
    word = make_word(word="ephemeral", examples=["Fame is Ephemeral.", "Second one."])
    row = _assign(db, learner, word)

    assert PracticeService(db).fill_in_blank(actor=actor_for(learner), assignment_id=row.id) == f"Fame is {BLANK}."


def test_fill_in_blank_without_examples(db, learner, make_word):
    row = _assign(db, learner, make_word(examples=[]))

    assert PracticeService(db).fill_in_blank(actor=actor_for(learner), assignment_id=row.id) == ""


def test_check_answer_is_case_insensitive_and_stamps_practice(db, learner, make_word):
    row = _assign(db, learner, make_word(word="Meticulous"))
    svc = PracticeService(db)

    result = svc.check_answer(actor=actor_for(learner), assignment_id=row.id, answer="  meticulous ")

    assert result == {"correct": True, "word": "Meticulous"}
    db.refresh(row)
    assert row.last_practiced is not None
    assert svc.check_answer(actor=actor_for(learner), assignment_id=row.id, answer="careful")["correct"] is False


def test_learner_routes(client, db, learner, admin, make_word):
    row = _assign(db, learner, make_word(word="pragmatic", examples=["A pragmatic plan."]))
    headers = auth_headers(learner)

    days = client.get("/learner/vocabulary", headers=headers).json()
    assert days[0]["date"] == date.today().isoformat()
    assert days[0]["words"][0]["vocabulary"]["word"] == "pragmatic"

    blank = client.get(f"/learner/practice/{row.id}/blank", headers=headers).json()
    assert blank == {"assignment_id": row.id, "sentence": f"A {BLANK} plan."}

    checked = client.post(f"/learner/practice/{row.id}/check", json={"answer": "Pragmatic"}, headers=headers)
    assert checked.json() == {"correct": True, "word": "pragmatic"}

    learned = client.patch(f"/learner/vocabulary/{row.id}/learned", json={"learned": True}, headers=headers)
    assert learned.json()["is_learned"] is True

    assert client.get("/learner/vocabulary", headers=auth_headers(admin)).status_code == 403
