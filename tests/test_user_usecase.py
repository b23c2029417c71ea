import pytest
from sqlalchemy import exc as sa_exc

from app.application.user.usecase import UserUsecase, hash_password
from app.common.codes import ApiCode
from app.common.errors import ConflictError, NotFoundError
from app.domain import models, schemas


@pytest.fixture
def uc():
    return UserUsecase()


def _req(username="dave", email="dave@example.com", **kw):
    return schemas.CreateUserRequest(username=username, password="secret123", email=email, **kw)


def test_hash_password_is_salted():
    first = hash_password("secret123")
    second = hash_password("secret123")

    assert first != second
    assert first.startswith("pbkdf2_sha256$")
    assert "secret123" not in first


def test_create_stores_hash_not_plain_password(uc, db_session):
    created = uc.create_user(db_session, req=_req())

    row = db_session.get(models.User, created.id)
    assert row.password_hash != "secret123"
    assert row.password_hash.startswith("pbkdf2_sha256$")
    assert row.is_active is True


def test_create_duplicate_username_raises(uc, db_session):
    uc.create_user(db_session, req=_req())

    with pytest.raises(ConflictError) as ei:
        uc.create_user(db_session, req=_req(email="other@example.com"))

    assert ei.value.code is ApiCode.USERNAME_EXISTS


def test_create_duplicate_email_raises(uc, db_session):
    uc.create_user(db_session, req=_req())

    with pytest.raises(ConflictError) as ei:
        uc.create_user(db_session, req=_req(username="other"))

    assert ei.value.code is ApiCode.EMAIL_EXISTS


def test_get_missing_user_raises(uc, db_session):
    with pytest.raises(NotFoundError) as ei:
        uc.get_user(db_session, user_id=42)

    assert ei.value.code is ApiCode.USER_NOT_FOUND
    assert "42" in ei.value.message


def test_update_to_own_email_is_allowed(uc, db_session):
    created = uc.create_user(db_session, req=_req())

    updated = uc.update_user(
        db_session,
        user_id=created.id,
        req=schemas.UpdateUserRequest(email="dave@example.com", full_name="Dave"),
    )

    assert updated.full_name == "Dave"
    assert updated.updated_at >= created.updated_at


def test_delete_then_get_raises(uc, db_session):
    created = uc.create_user(db_session, req=_req())
    uc.delete_user(db_session, user_id=created.id)

    with pytest.raises(NotFoundError):
        uc.get_user(db_session, user_id=created.id)


def test_batch_relies_on_unique_constraint(uc, db_session):
    with pytest.raises(sa_exc.IntegrityError):
        uc.create_users_in_batch(
            db_session,
            reqs=[_req(username="same", email="s1@example.com"), _req(username="same", email="s2@example.com")],
        )


def test_find_with_conditions_newest_first(uc, db_session):
    for i in range(3):
        uc.create_user(db_session, req=_req(username=f"cond_{i}", email=f"cond{i}@example.com"))

    found = uc.find_users_with_conditions(db_session, username="cond")
    limited = uc.find_users_with_conditions(db_session, username="cond", limit=2)

    assert [u.username for u in found] == ["cond_2", "cond_1", "cond_0"]
    assert [u.username for u in limited] == ["cond_2", "cond_1"]


def test_find_by_ids_empty(uc, db_session):
    assert uc.find_users_by_ids(db_session, ids=[]) == []


def test_statistics_percentage(uc, db_session):
    ids = [uc.create_user(db_session, req=_req(username=f"s_{i}", email=f"s{i}@example.com")).id for i in range(3)]
    uc.update_user_status(db_session, user_id=ids[0], is_active=False)

    stats = uc.get_user_statistics(db_session)

    assert (stats.total_users, stats.active_users, stats.inactive_users) == (3, 2, 1)
    assert stats.active_percentage == pytest.approx(66.666, rel=1e-3)
