# food_diary/models.py
import enum
from datetime import datetime

from flask_login import UserMixin
from sqlalchemy.orm import validates

from food_diary import db


class MealType(str, enum.Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACKS = "snacks"


MEAL_TYPES = [meal_type.value for meal_type in MealType]


class User(UserMixin, db.Model):
    __tablename__ = "Users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(254), unique=True, nullable=False)
    password_hash = db.Column("password", db.String(120), nullable=False)
    meals = db.relationship("Meal", backref="user", lazy=True)

    def __repr__(self):
        return f"<User {self.id} {self.email}>"


class Meal(db.Model):
    __tablename__ = "Meals"
    __table_args__ = (
        db.CheckConstraint(
            "meal_type IN ('breakfast', 'lunch', 'dinner', 'snacks')",
            name="ck_meals_meal_type",
        ),
        db.Index("ix_meals_user_date", "user_id", "date_consumed"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("Users.id"), nullable=False)
    name = db.Column(db.String(200), nullable=False)
    meal_type = db.Column(db.String(20), nullable=False)
    date_consumed = db.Column(db.DateTime, nullable=False, default=datetime.now)

    @validates("meal_type")
    def _validate_meal_type(self, key, value):
        # Accept both MealType members and their string values
        return MealType(value).value

    def __repr__(self):
        return f"<Meal {self.id} {self.meal_type}: {self.name}>"
