from datetime import date

from sqlalchemy import func, select

from models.user import User
from models.user_vocabulary import UserVocabulary
from tests.conftest import PASSWORD, auth_headers


def test_admin_creates_learner(client, admin):
    r = client.post(
        "/admin/users",
        json={"username": "newbie", "password": "secret1", "name": "New Person", "email": "", "words_per_day": 3},
        headers=auth_headers(admin),
    )

    assert r.status_code == 201
    body = r.json()
    assert body["role"] == "user"
    assert body["email"] is None
    assert body["words_per_day"] == 3

    login = client.post("/auth/login", json={"username": "newbie", "password": "secret1"})
    assert login.status_code == 200


def test_duplicate_username(client, admin, learner):
    r = client.post(
        "/admin/users",
        json={"username": "learner", "password": "secret1", "name": "Again"},
        headers=auth_headers(admin),
    )

    assert r.status_code == 400
    assert r.json() == {"success": False, "error": "Username already taken"}


def test_update_without_password_keeps_it(client, db, admin, learner):
    r = client.put(
        f"/admin/users/{learner.id}",
        json={"username": "learner", "name": "Renamed", "words_per_day": 8, "password": ""},
        headers=auth_headers(admin),
    )

    assert r.status_code == 200
    assert r.json()["name"] == "Renamed"
    assert r.json()["words_per_day"] == 8
    assert client.post("/auth/login", json={"username": "learner", "password": PASSWORD}).status_code == 200


def test_update_with_password_changes_it(client, admin, learner):
    client.put(
        f"/admin/users/{learner.id}",
        json={"username": "learner", "name": "Learner", "password": "brand-new"},
        headers=auth_headers(admin),
    )

    assert client.post("/auth/login", json={"username": "learner", "password": PASSWORD}).status_code == 401
    assert client.post("/auth/login", json={"username": "learner", "password": "brand-new"}).status_code == 200


def test_admins_cannot_be_deleted(client, admin):
    r = client.delete(f"/admin/users/{admin.id}", headers=auth_headers(admin))

    assert r.status_code == 400
    assert r.json() == {"success": False, "error": "Admin accounts cannot be deleted"}


def test_deleting_a_learner_removes_their_assignments(client, db, admin, learner, make_word):
    word = make_word()
    learner_id = learner.id
    db.add(UserVocabulary(user_id=learner_id, vocabulary_id=word.id, assigned_date=date.today()))
    db.commit()

    assert client.delete(f"/admin/users/{learner_id}", headers=auth_headers(admin)).status_code == 204

    db.expire_all()
    assert db.execute(select(func.count(User.id)).where(User.id == learner_id)).scalar_one() == 0
    assert db.execute(
        select(func.count(UserVocabulary.id)).where(UserVocabulary.user_id == learner_id)
    ).scalar_one() == 0


def test_list_users_by_role(client, admin, learner):
    r = client.get("/admin/users", params={"role": "user"}, headers=auth_headers(admin))

    assert [u["username"] for u in r.json()] == ["learner"]


def test_assign_word_to_one_user(client, admin, learner, make_word):
    word = make_word()

    r = client.post(
        "/admin/assignments",
        json={"user_ids": [learner.id], "vocabulary_id": word.id},
        headers=auth_headers(admin),
    )

    assert r.status_code == 201
    assert r.json() == {"vocabulary_id": word.id, "count": 1}


def test_assign_word_to_several_users(client, db, admin, learner, make_user, make_word):
    word = make_word()
    other = make_user()
    user_ids = [learner.id, other.id]

    r = client.post(
        "/admin/assignments",
        json={"user_ids": user_ids, "vocabulary_id": word.id},
        headers=auth_headers(admin),
    )

    assert r.json() == {"vocabulary_id": word.id, "count": 2}
    assigned = db.execute(
        select(UserVocabulary.user_id).where(UserVocabulary.vocabulary_id == word.id)
    ).scalars()
    assert sorted(assigned) == sorted(user_ids)


def test_assign_word_needs_users(client, admin, make_word):
    word = make_word()

    r = client.post("/admin/assignments", json={"user_ids": [], "vocabulary_id": word.id}, headers=auth_headers(admin))

    assert r.status_code == 422
