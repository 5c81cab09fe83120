"""WSGI application: ``gunicorn food_diary.wsgi:application``.

With INIT_DB set, the schema is migrated to head before serving. A failed
migration aborts startup.
"""
import os

from food_diary import app
from food_diary.schema import upgrade_db

if os.environ.get("INIT_DB", "false").lower() in ("1", "true", "yes"):
    upgrade_db(app.config["SQLALCHEMY_DATABASE_URI"])
    app.logger.info("database migrated to head")

application = app
