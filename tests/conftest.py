"""Pytest configuration and fixtures."""
import pytest
from flask_login import AnonymousUserMixin

from app import create_app
from auth import create_user
from config import TestConfig
from models import User, db
from posts import PostService
from store import PostStore
from validation import make_clean_check


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def users(app):
    """Alice gets id 1 and Bob id 2."""
    with app.app_context():
        alice = create_user("Alice", "alice@example.com", "alice-password")
        bob = create_user("Bob", "bob@example.com", "bob-password")
        return {"alice": alice.id, "bob": bob.id}


def login(app, email, password):
    client = app.test_client()
    resp = client.post("/login", json={"email": email, "password": password})
    assert resp.status_code == 303
    return client


@pytest.fixture
def alice_client(app, users):
    return login(app, "alice@example.com", "alice-password")


@pytest.fixture
def bob_client(app, users):
    return login(app, "bob@example.com", "bob-password")


@pytest.fixture
def anon_client(app):
    return app.test_client()


@pytest.fixture
def ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def service(ctx):
    return PostService(PostStore(), make_clean_check(TestConfig.DISALLOWED_TERMS))


@pytest.fixture
def alice(ctx, users):
    return db.session.get(User, users["alice"])


@pytest.fixture
def bob(ctx, users):
    return db.session.get(User, users["bob"])


@pytest.fixture
def anonymous():
    return AnonymousUserMixin()
