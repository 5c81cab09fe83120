# food_diary/services.py
from datetime import date, datetime, time
from typing import List, Optional, Union

from sqlalchemy.exc import IntegrityError

from food_diary import db
from food_diary.exceptions import (
    EmailAlreadyExistsError,
    MealNotFoundError,
    UserNotFoundError,
)
from food_diary.models import Meal, MealType, User
from food_diary.utils import canonical_email


class UserService:
    """Users: registration and lookup by email"""

    @staticmethod
    def create_user(email: str, password_hash: str) -> User:
        """
        Inserts a user. The email is stored in canonical form; the UNIQUE
        constraint on Users.email rejects a second registration.

        Raises:
            EmailAlreadyExistsError: the email is already registered
        """
        user = User(email=canonical_email(email), password_hash=password_hash)
        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError as e:
            db.session.rollback()
            raise EmailAlreadyExistsError(user.email) from e
        return user

    @staticmethod
    def get_user_by_email(email: str) -> User:
        user = db.session.execute(
            db.select(User).filter_by(email=canonical_email(email))
        ).scalar_one_or_none()
        if user is None:
            raise UserNotFoundError(email)
        return user

    @staticmethod
    def get_user(user_id: int) -> Optional[User]:
        return db.session.get(User, user_id)


class MealService:
    """Meals: logging, daily and history queries, deletion"""

    @staticmethod
    def add_meal(
        name: str,
        user_id: int,
        meal_type: Union[MealType, str],
        consumed_at: Optional[datetime] = None,
    ) -> Meal:
        """Inserts a meal; consumed_at defaults to the current local time."""
        meal = Meal(
            name=name,
            user_id=user_id,
            meal_type=meal_type,
            date_consumed=consumed_at or datetime.now(),
        )
        db.session.add(meal)
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        return meal

    @staticmethod
    def get_all_meals() -> List[Meal]:
        return db.session.execute(
            db.select(Meal).order_by(Meal.date_consumed, Meal.id)
        ).scalars().all()

    @staticmethod
    def get_meals_by_user(user_id: int) -> List[Meal]:
        return db.session.execute(
            db.select(Meal)
            .filter_by(user_id=user_id)
            .order_by(Meal.date_consumed.desc(), Meal.id.desc())
        ).scalars().all()

    @staticmethod
    def get_meals_by_user_and_date(user_id: int, day: date) -> List[Meal]:
        """
        Meals of a user consumed on the given calendar day. A datetime
        argument is truncated to its date.
        """
        if isinstance(day, datetime):
            day = day.date()
        start = datetime.combine(day, time.min)
        # Closed upper bound: day + 1 overflows on date.max
        end = datetime.combine(day, time.max)
        return db.session.execute(
            db.select(Meal)
            .filter(
                Meal.user_id == user_id,
                Meal.date_consumed >= start,
                Meal.date_consumed <= end,
            )
            .order_by(Meal.date_consumed, Meal.id)
        ).scalars().all()

    @staticmethod
    def delete_meal(meal_id: int, user_id: Optional[int] = None) -> None:
        """
        Deletes a meal by id. With user_id, only a meal owned by that user
        is deleted.

        Raises:
            MealNotFoundError: no matching meal
        """
        stmt = db.delete(Meal).where(Meal.id == meal_id)
        if user_id is not None:
            stmt = stmt.where(Meal.user_id == user_id)
        try:
            result = db.session.execute(stmt)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        if result.rowcount == 0:
            raise MealNotFoundError(meal_id)
