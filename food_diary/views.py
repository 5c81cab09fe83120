# food_diary/views.py
from datetime import date

from flask import (
    Blueprint,
    abort,
    current_app,
    make_response,
    redirect,
    render_template,
    request,
    url_for,
)
from flask_login import (
    current_user,
    login_required,
    login_user,
    logout_user,
)

from food_diary import bcrypt
from food_diary.auth import api_login_required, get_user_id
from food_diary.exceptions import (
    EmailAlreadyExistsError,
    MealNotFoundError,
    UserNotFoundError,
)
from food_diary.models import MealType
from food_diary.services import MealService, UserService
from food_diary.utils import (
    DATE_FORMAT,
    parse_date,
    pick_meal_from_form,
    validate_credentials,
)

views = Blueprint("views", __name__)

INVALID_LOGIN = "Invalid email or password"


def _title(view):
    return f"{current_app.config['SITE_TITLE']} | {view}"


def _hx_redirect(location):
    """htmx follows HX-Redirect; plain clients get a 303 instead."""
    if request.headers.get("HX-Request"):
        response = make_response("", 200)
        response.headers["HX-Redirect"] = location
        return response
    return redirect(location, code=303)


def _group_by_type(meals):
    grouped = {meal_type.value: [] for meal_type in MealType}
    for meal in meals:
        grouped[meal.meal_type].append(meal)
    return grouped


@views.route("/")
def index():
    return redirect(url_for("views.today"), code=303)


@views.route("/register", methods=["GET", "POST"])
def register():
    if current_user.is_authenticated:
        return redirect(url_for("views.today"))
    if request.method == "POST":
        email = request.form.get("email", "")
        password = request.form.get("password", "")

        ok, error_message = validate_credentials(email, password)
        if not ok:
            return render_template(
                "views/register.html",
                title=_title("Register"),
                error_message=error_message,
                email=email,
            ), 400

        hashed_password = (
            bcrypt.generate_password_hash(password).decode("utf-8")
        )
        try:
            user = UserService.create_user(email, hashed_password)
        except EmailAlreadyExistsError as e:
            current_app.logger.info("registration rejected: %s", e)
            return render_template(
                "views/register.html",
                title=_title("Register"),
                error_message="Email already exists",
                email=email,
            ), 409

        login_user(user)
        current_app.logger.info("registered user %s", user.id)
        return redirect(url_for("views.today"), code=303)

    return render_template("views/register.html", title=_title("Register"))


@views.route("/login", methods=["GET", "POST"])
def login():
    if current_user.is_authenticated:
        return redirect(url_for("views.today"))
    if request.method == "POST":
        email = request.form.get("email", "")
        password = request.form.get("password", "")
        try:
            user = UserService.get_user_by_email(email)
        except UserNotFoundError:
            user = None

        if user and password and bcrypt.check_password_hash(
            user.password_hash, password
        ):
            login_user(user)
            current_app.logger.info("login success for user %s", user.id)
            return redirect(url_for("views.today"), code=303)

        current_app.logger.warning("failed login attempt for %r", email)
        return render_template(
            "views/login.html",
            title=_title("Login"),
            error_message=INVALID_LOGIN,
            email=email,
        ), 401

    return render_template("views/login.html", title=_title("Login"))


@views.route("/logout", methods=["POST"])
def logout():
    logout_user()
    return _hx_redirect(url_for("views.login"))


@views.route("/today")
@login_required
def today():
    day = date.today()
    meals = MealService.get_meals_by_user_and_date(get_user_id(), day)
    return render_template(
        "views/today.html",
        title=_title("Today"),
        meals_by_type=_group_by_type(meals),
        today=day,
    )


@views.route("/history")
@login_required
def history():
    date_str = request.args.get("date", "")
    selected_date = None
    if date_str:
        try:
            selected_date = parse_date(date_str)
        except ValueError:
            abort(400, description="Invalid date format, expected YYYY-MM-DD")
        meals = MealService.get_meals_by_user_and_date(
            get_user_id(), selected_date
        )
    else:
        meals = MealService.get_meals_by_user(get_user_id())

    return render_template(
        "views/history.html",
        title=_title("History"),
        meals=meals,
        selected_date=(
            selected_date.strftime(DATE_FORMAT) if selected_date else ""
        ),
    )


@views.route("/api/meals", methods=["POST"])
@api_login_required
def add_meal(user_id):
    name, meal_type = pick_meal_from_form(request.form)
    if not name:
        abort(400, description="Received an empty form submission")

    meal = MealService.add_meal(name, user_id, meal_type)
    current_app.logger.info("added %r for user %s", meal, user_id)
    return redirect(url_for("views.today"), code=303)


@views.route("/api/meals/<int:meal_id>", methods=["DELETE"])
@api_login_required
def delete_meal(user_id, meal_id):
    try:
        MealService.delete_meal(meal_id, user_id)
    except MealNotFoundError:
        abort(404)
    current_app.logger.info("deleted meal %s for user %s", meal_id, user_id)
    response = make_response("", 200)
    response.headers["HX-Redirect"] = url_for("views.today")
    return response
