import pytest
from passlib.hash import argon2

from core.actor import ROLE_HOME, Actor, home_for
from core.errors import PermissionDenied
from core.config import settings
from models.enums import Role
from repositories.refresh_token_repo import RefreshTokenRepository
from routers.auth import _decode_token
from tests.conftest import PASSWORD, auth_headers

ACCESS_COOKIE = settings.JWT_ACCESS_COOKIE_NAME
REFRESH_COOKIE = settings.JWT_REFRESH_COOKIE_NAME


def _login(client, username):
    return client.post("/auth/login", json={"username": username, "password": PASSWORD})


def test_every_role_has_a_landing_page():
    assert set(ROLE_HOME) == set(Role)
    assert home_for(Role.ADMIN) == "/admin"
    assert home_for(Role.USER) == "/user"


def test_actor_require():
    actor = Actor(id=1, role=Role.USER, words_per_day=5)

    assert actor.require(Role.USER) is actor
    with pytest.raises(PermissionDenied):
        actor.require(Role.ADMIN)


def test_learner_login_sets_cookies_and_refills(client, db, learner, make_word):
    for _ in range(3):
        make_word()

    r = _login(client, "learner")

    assert r.status_code == 200
    body = r.json()
    assert body["role"] == "user"
    assert body["home"] == "/user"
    assert body["assigned_today"] == 3
    assert ACCESS_COOKIE in r.cookies and REFRESH_COOKIE in r.cookies
    db.refresh(learner)
    assert learner.last_login is not None


def test_admin_login_lands_on_admin_home(client, admin, make_word):
    make_word()

    body = _login(client, "admin").json()

    assert body["home"] == "/admin"
    assert body["assigned_today"] == 0


@pytest.mark.parametrize("username,password", [("learner", "wrong-password"), ("nobody", PASSWORD)])
def test_bad_credentials(client, learner, username, password):
    r = client.post("/auth/login", json={"username": username, "password": password})

    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid username or password"


def test_me_with_login_cookie(client, learner):
    _login(client, "learner")

    r = client.get("/auth/me")

    assert r.status_code == 200
    assert r.json()["username"] == "learner"


def test_me_without_token(client):
    assert client.get("/auth/me").status_code == 401


def test_refresh_rotates_the_refresh_token(client, db, learner):
    _login(client, "learner")
    old_jti = _decode_token(client.cookies.get(REFRESH_COOKIE)).jti

    r = client.post("/auth/refresh")

    assert r.status_code == 200
    new_jti = _decode_token(client.cookies.get(REFRESH_COOKIE)).jti
    assert new_jti != old_jti
    repo = RefreshTokenRepository(db)
    assert repo.is_usable(old_jti) is False
    assert repo.is_usable(new_jti) is True


def test_logout_revokes_refresh_token(client, db, learner):
    _login(client, "learner")
    jti = _decode_token(client.cookies.get(REFRESH_COOKIE)).jti

    r = client.post("/auth/logout")

    assert r.status_code == 200
    assert RefreshTokenRepository(db).is_usable(jti) is False


def test_dashboard_redirects_by_role(client, admin, learner):
    assert client.get("/dashboard", headers=auth_headers(admin)).json() == {"role": "admin", "redirect": "/admin"}
    assert client.get("/dashboard", headers=auth_headers(learner)).json() == {"role": "user", "redirect": "/user"}


def test_login_upgrades_weak_password_hash(client, db, learner):
    learner.password_hash = argon2.using(memory_cost=1024).hash(PASSWORD)
    db.commit()
    weak = learner.password_hash

    assert _login(client, "learner").status_code == 200

    db.refresh(learner)
    assert learner.password_hash != weak
    assert _login(client, "learner").status_code == 200


def test_malformed_stored_hash_is_a_failed_login(client, db, learner):
    learner.password_hash = "not-a-hash"
    db.commit()

    assert _login(client, "learner").status_code == 401
