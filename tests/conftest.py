"""Test fixtures.

The app reads its configuration from the environment at import time, so
the database and cookie settings are overridden before food_diary is
imported.

Requests must not run inside a long-lived app context: Flask-Login keeps
the loaded user on ``g``, which would then leak between requests. Seeding
fixtures therefore push their own context and hand back plain ids.
"""

import os
from datetime import datetime

os.environ["DATABASE_URI"] = "sqlite://"
os.environ["SESSION_COOKIE_SECURE"] = "0"
os.environ["BCRYPT_LOG_ROUNDS"] = "4"
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest  # noqa: E402

from food_diary import app as flask_app, bcrypt, db  # noqa: E402
from food_diary.services import MealService, UserService  # noqa: E402

EMAIL = "alice@example.com"
PASSWORD = "correct horse"


@pytest.fixture
def app():
    flask_app.config.update(TESTING=True)
    with flask_app.app_context():
        db.create_all()
    yield flask_app
    with flask_app.app_context():
        db.drop_all()


@pytest.fixture
def ctx(app):
    """An app context for calling the storage layer directly."""
    with app.app_context():
        yield


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make_user(email=EMAIL, password=PASSWORD):
        with app.app_context():
            hashed = bcrypt.generate_password_hash(password).decode("utf-8")
            return UserService.create_user(email, hashed).id

    return _make_user


@pytest.fixture
def user_id(make_user):
    return make_user()


@pytest.fixture
def make_meal(app):
    def _make_meal(user_id, name="Porridge", meal_type="breakfast",
                   consumed_at=None):
        with app.app_context():
            return MealService.add_meal(
                name, user_id, meal_type, consumed_at or datetime.now()
            ).id

    return _make_meal


@pytest.fixture
def logged_in_client(client, user_id):
    response = client.post("/login", data={"email": EMAIL, "password": PASSWORD})
    assert response.status_code == 303
    return client
