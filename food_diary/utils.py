# food_diary/utils.py
import re
from datetime import date, datetime
from typing import Optional

from food_diary.models import MealType

DATE_FORMAT = "%Y-%m-%d"

# strptime alone accepts unpadded fields such as 2024-3-1
_DATE_REGEX = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def canonical_email(email: str) -> str:
    """
    Canonical form of an email address: surrounding whitespace removed
    and lower-cased (casefold) so lookups are case-insensitive.
    Example: "  Me@Example.COM " -> "me@example.com"
    """
    if not isinstance(email, str):
        return str(email)
    return email.strip().casefold()


def validate_credentials(email: str, password: str) -> tuple[bool, str]:
    """
    Validates the register form: both fields required, and the email
    must at least look like one (a single "@" with text on both sides).
    """
    email = canonical_email(email or "")
    if not email or not password:
        return False, "Email and password are required"
    local, sep, domain = email.partition("@")
    if not sep or not local or not domain or "@" in domain:
        return False, "Enter a valid email address"
    return True, ""


def parse_date(value: str) -> date:
    """Parses a YYYY-MM-DD query parameter; raises ValueError otherwise."""
    if not isinstance(value, str) or not _DATE_REGEX.fullmatch(value):
        raise ValueError(f"Invalid date {value!r}, expected YYYY-MM-DD")
    return datetime.strptime(value, DATE_FORMAT).date()


def pick_meal_from_form(form) -> tuple[Optional[str], Optional[MealType]]:
    """
    Returns (name, meal_type) for the first non-empty meal field in
    breakfast, lunch, dinner, snacks order, or (None, None) when the
    form carries none.
    """
    for meal_type in MealType:
        name = (form.get(meal_type.value) or "").strip()
        if name:
            return name, meal_type
    return None, None
