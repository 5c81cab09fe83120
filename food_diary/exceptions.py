# food_diary/exceptions.py


class FoodDiaryError(Exception):
    """Base class for errors raised by the storage and session layers."""


class AuthenticationError(FoodDiaryError):
    """No usable user id in the session."""


class UserNotFoundError(FoodDiaryError):
    pass


class EmailAlreadyExistsError(FoodDiaryError):
    def __init__(self, email):
        super().__init__(f"Email already exists: {email}")
        self.email = email


class MealNotFoundError(FoodDiaryError):
    def __init__(self, meal_id):
        super().__init__(f"Meal {meal_id} not found")
        self.meal_id = meal_id
