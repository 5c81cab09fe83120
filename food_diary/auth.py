# food_diary/auth.py
from functools import wraps

from flask import abort
from flask_login import current_user

from food_diary import login_manager
from food_diary.exceptions import AuthenticationError
from food_diary.services import UserService


@login_manager.user_loader
def load_user(user_id):
    try:
        return UserService.get_user(int(user_id))
    except (TypeError, ValueError):
        return None


def get_user_id() -> int:
    """
    Returns the id of the user held in the session cookie.

    Raises:
        AuthenticationError: no user in the session, or the stored id
            does not resolve to a user
    """
    if not current_user.is_authenticated:
        raise AuthenticationError("Could not get user id from session")
    user_id = current_user.id
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        raise AuthenticationError("Unexpected user id in session")
    return user_id


def api_login_required(func):
    """Like login_required, but answers 401 instead of redirecting."""

    @wraps(func)
    def decorated_view(*args, **kwargs):
        try:
            user_id = get_user_id()
        except AuthenticationError:
            abort(401)
        return func(user_id, *args, **kwargs)

    return decorated_view
