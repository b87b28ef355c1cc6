from datetime import datetime

import pytest
from sqlalchemy import DateTime
from sqlmodel import select

from app.backend.core.errors import AuthenticationFailure, Conflict, NotFound
from app.backend.core.tokens import TokenService
from app.backend.models.task import TaskItem
from app.backend.models.user import User
from app.backend.services import auth_service, task_service

from conftest import FrozenClock


@pytest.fixture
def clock():
    return FrozenClock(datetime(2025, 3, 1, 8, 30, 0))


@pytest.fixture
def alice(db):
    return auth_service.register(db, username="alice", password="Secret123", rounds=4)


@pytest.fixture
def bob(db):
    return auth_service.register(db, username="bob", password="Secret123", rounds=4)


def test_create_then_get_round_trip(db, alice, clock):
    created = task_service.create_task(db, alice.id, title="Buy milk", clock=clock)

    task = task_service.get_task(db, alice.id, created.id)

    assert task.title == "Buy milk"
    assert task.is_completed is False
    assert task.description is None
    assert task.due_date is None
    assert task.created_at == task.updated_at == clock.now
    assert task.user_id == alice.id


def test_update_refreshes_updated_at_only(db, alice, clock):
    created = task_service.create_task(db, alice.id, title="Draft", description="v1", clock=clock)
    clock.advance(minutes=10)

    updated = task_service.update_task(
        db,
        alice.id,
        created.id,
        title="Final",
        description=None,
        due_date=datetime(2025, 4, 1),
        is_completed=True,
        clock=clock,
    )

    assert updated.title == "Final"
    assert updated.description is None
    assert updated.due_date == datetime(2025, 4, 1)
    assert updated.is_completed is True
    assert updated.created_at == datetime(2025, 3, 1, 8, 30, 0)
    assert updated.updated_at == clock.now
    assert updated.updated_at > updated.created_at


def test_list_is_scoped_and_newest_first(db, alice, bob, clock):
    first = task_service.create_task(db, alice.id, title="first", clock=clock)
    clock.advance(seconds=1)
    second = task_service.create_task(db, alice.id, title="second", clock=clock)
    task_service.create_task(db, bob.id, title="bob's", clock=clock)

    assert [t.id for t in task_service.list_tasks(db, alice.id)] == [second.id, first.id]
    assert [t.title for t in task_service.list_tasks(db, bob.id)] == ["bob's"]


def test_list_breaks_timestamp_ties_by_id(db, alice, clock):
    ids = [task_service.create_task(db, alice.id, title=str(i), clock=clock).id for i in range(3)]

    assert [t.id for t in task_service.list_tasks(db, alice.id)] == list(reversed(ids))


def test_foreign_task_is_not_found_for_every_operation(db, alice, bob):
    task = task_service.create_task(db, alice.id, title="private")

    with pytest.raises(NotFound):
        task_service.get_task(db, bob.id, task.id)
    with pytest.raises(NotFound):
        task_service.update_task(db, bob.id, task.id, title="mine now", is_completed=True)
    with pytest.raises(NotFound):
        task_service.delete_task(db, bob.id, task.id)

    assert task_service.list_tasks(db, bob.id) == []
    unchanged = task_service.get_task(db, alice.id, task.id)
    assert unchanged.title == "private"
    assert unchanged.is_completed is False


def test_delete_twice(db, alice):
    task = task_service.create_task(db, alice.id, title="once")

    task_service.delete_task(db, alice.id, task.id)

    with pytest.raises(NotFound) as excinfo:
        task_service.delete_task(db, alice.id, task.id)
    assert excinfo.value.message == f"Task with ID {task.id} not found."


def test_deleting_user_cascades_to_tasks(db, alice, bob):
    task_service.create_task(db, alice.id, title="a1")
    task_service.create_task(db, alice.id, title="a2")
    task_service.create_task(db, bob.id, title="b1")

    db.delete(alice)
    db.commit()

    remaining = db.exec(select(TaskItem)).all()
    assert [t.title for t in remaining] == ["b1"]


def test_register_conflict_keeps_single_row(db, alice):
    with pytest.raises(Conflict):
        auth_service.register(db, username="alice", password="Another1", rounds=4)

    rows = db.exec(select(User).where(User.username == "alice")).all()
    assert len(rows) == 1


def test_login_issues_token_for_registered_id(db, alice, settings):
    tokens = TokenService(settings)

    result = auth_service.login(db, tokens, username="alice", password="Secret123")

    assert result.username == "alice"
    claims = tokens.validate(result.token)
    assert claims is not None
    assert claims.user_id == alice.id
    assert claims.expires_at == result.expires_at


@pytest.mark.parametrize(("username", "password"), [("alice", "wrong-pass"), ("nobody", "Secret123")])
def test_login_failures_share_one_message(db, alice, settings, username, password):
    with pytest.raises(AuthenticationFailure) as excinfo:
        auth_service.login(db, TokenService(settings), username=username, password=password)

    assert excinfo.value.message == auth_service.INVALID_CREDENTIALS


def test_timestamp_columns_store_naive_utc():
    columns = [
        User.__table__.c.created_at,
        TaskItem.__table__.c.created_at,
        TaskItem.__table__.c.updated_at,
        TaskItem.__table__.c.due_date,
    ]

    for column in columns:
        assert type(column.type) is DateTime
        assert column.type.timezone is False


def test_naive_utc_timestamps_survive_a_write(db, alice, clock):
    task = task_service.create_task(
        db, alice.id, title="dated", due_date=datetime(2025, 6, 1, 12, 0), clock=clock
    )

    db.expire_all()
    stored = task_service.get_task(db, alice.id, task.id)

    assert stored.due_date == datetime(2025, 6, 1, 12, 0)
    assert stored.created_at == clock.now
    assert alice.created_at.tzinfo is None
