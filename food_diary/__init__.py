# food_diary/__init__.py
from flask import Flask, render_template
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_bcrypt import Bcrypt
import os
from werkzeug.middleware.proxy_fix import ProxyFix

from food_diary.schema import upgrade_db

app = Flask(__name__)
app.config["SECRET_KEY"] = os.environ.get("SECRET_KEY", "dev-secret-key")
app.config["SITE_TITLE"] = os.environ.get("SITE_TITLE", "Food Diary")

# Database URI
_db_uri = os.environ.get("DATABASE_URI", "sqlite:///meals.db")
app.config["SQLALCHEMY_DATABASE_URI"] = _db_uri
app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
app.config["SESSION_COOKIE_SECURE"] = os.environ.get(
    "SESSION_COOKIE_SECURE",
    "1",
) in ("1", "true", "yes")
app.config["SESSION_COOKIE_HTTPONLY"] = True
app.config["SESSION_COOKIE_SAMESITE"] = os.environ.get(
    "SESSION_COOKIE_SAMESITE",
    "Lax",
)
app.config["REMEMBER_COOKIE_SECURE"] = app.config["SESSION_COOKIE_SECURE"]
app.config["BCRYPT_LOG_ROUNDS"] = int(os.environ.get("BCRYPT_LOG_ROUNDS", 12))
app.config["MAX_CONTENT_LENGTH"] = int(
    os.environ.get("MAX_CONTENT_LENGTH", 1024 * 1024)
)

app.logger.setLevel(os.environ.get("LOG_LEVEL", "INFO").upper())

if _db_uri.startswith("postgresql"):
    engine_opts = dict(app.config.get("SQLALCHEMY_ENGINE_OPTIONS", {}))
    engine_opts.setdefault("pool_pre_ping", True)
    app.config["SQLALCHEMY_ENGINE_OPTIONS"] = engine_opts

db = SQLAlchemy(app)
bcrypt = Bcrypt(app)
login_manager = LoginManager(app)
login_manager.login_view = "views.login"
login_manager.login_message = None

from food_diary.auth import load_user  # noqa: E402,F401
from food_diary.views import views  # noqa: E402

app.register_blueprint(views)

# Trust proxy headers (for correct scheme/host when behind reverse proxy)
app.wsgi_app = ProxyFix(
    app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1
)


@app.cli.command("init-db")
def init_db_command():
    """Apply the Alembic migrations up to head."""
    upgrade_db(app.config["SQLALCHEMY_DATABASE_URI"])
    app.logger.info("database migrated to head")


@app.teardown_request
def _teardown_request(exception):  # noqa: ANN001
    """Rollback on exception and remove the session at request end."""
    try:
        if exception is not None:
            db.session.rollback()
    finally:
        db.session.remove()


@app.get("/health")
def health():
    """Return health status for container orchestrator."""
    try:
        db.session.execute(db.select(1))
        return {"status": "ok"}, 200
    except Exception:  # noqa: BLE001
        app.logger.exception("health check failed")
        return {"status": "degraded"}, 500


# ----- Error handlers -----
def _render_error(code, headline, description):
    return (
        render_template(
            "errors/error.html",
            code=code,
            title=f"{app.config['SITE_TITLE']} | {headline}",
            headline=headline,
            description=description,
        ),
        code,
    )


@app.errorhandler(400)
def handle_400(error):
    return _render_error(400, "Bad request", error.description)


@app.errorhandler(401)
def handle_401(error):  # noqa: ARG001
    return _render_error(
        401,
        "Unauthorized",
        "You need to log in to do that.",
    )


@app.errorhandler(404)
def handle_404(error):  # noqa: ARG001
    return _render_error(
        404,
        "Not found",
        "There is nothing here. The meal may already have been deleted.",
    )


@app.errorhandler(500)
def handle_500(error):  # noqa: ARG001
    return _render_error(
        500,
        "Internal server error",
        "Something went wrong on our side. Try again later.",
    )
