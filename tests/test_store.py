from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import OperationalError

from errors import NotFound, StorageFailure
from models import Post, db
from store import PostStore


def add_post(owner_id, title, minutes_ago):
    post = Post(
        title=title,
        body="body",
        user_id=owner_id,
        created_at=datetime.utcnow() - timedelta(minutes=minutes_ago),
    )
    db.session.add(post)
    db.session.commit()
    return post


def test_add_and_load(ctx, users):
    store = PostStore()
    post = store.add("Hello", "World", owner_id=users["alice"])
    assert post.id is not None
    assert store.load(post.id).user_id == users["alice"]
    assert post.created_at is not None and post.updated_at is not None


def test_load_missing_raises_not_found(ctx):
    with pytest.raises(NotFound):
        PostStore().load(404)
    assert PostStore().get(404) is None


def test_for_owner_is_newest_first_and_scoped(ctx, users):
    old = add_post(users["alice"], "old", 30)
    new = add_post(users["alice"], "new", 1)
    add_post(users["bob"], "bob's", 5)

    posts = PostStore().for_owner(users["alice"])
    assert [p.id for p in posts] == [new.id, old.id]


def test_ties_on_created_at_fall_back_to_id(ctx, users):
    stamp = datetime(2024, 1, 1, 12, 0, 0)
    first = Post(title="a", body="b", user_id=users["alice"], created_at=stamp)
    second = Post(title="c", body="d", user_id=users["alice"], created_at=stamp)
    db.session.add_all([first, second])
    db.session.commit()

    assert [p.id for p in PostStore().for_owner(users["alice"])] == [second.id, first.id]


def test_all_with_owners_joins_users(ctx, users):
    add_post(users["alice"], "alice", 10)
    add_post(users["bob"], "bob", 1)

    rows = PostStore().all_with_owners()
    assert [(post.title, owner.name) for post, owner in rows] == [
        ("bob", "Bob"),
        ("alice", "Alice"),
    ]


def test_remove(ctx, users):
    store = PostStore()
    post = store.add("Bye", "soon", owner_id=users["alice"])
    post_id = post.id
    store.remove(post)
    assert store.get(post_id) is None


class BrokenSession:
    def __init__(self):
        self.rolled_back = False

    def add(self, obj):
        pass

    def commit(self):
        raise OperationalError("INSERT INTO posts", {}, Exception("disk I/O error"))

    def execute(self, statement):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    def rollback(self):
        self.rolled_back = True


def test_write_errors_become_storage_failure(ctx):
    session = BrokenSession()
    with pytest.raises(StorageFailure) as exc:
        PostStore(session).add("t", "b", owner_id=1)
    assert session.rolled_back
    assert isinstance(exc.value.__cause__, OperationalError)


def test_read_errors_become_storage_failure(ctx):
    session = BrokenSession()
    with pytest.raises(StorageFailure):
        PostStore(session).for_owner(1)
    assert session.rolled_back
