# food_diary/schema.py
from pathlib import Path

from alembic import command
from alembic.config import Config

# alembic.ini and migrations/ live next to the package (editable install)
PROJECT_ROOT = Path(__file__).resolve().parents[1]


def alembic_config(database_uri: str) -> Config:
    cfg = Config(str(PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "migrations"))
    # ConfigParser interpolation: escape percent-encoded credentials
    cfg.set_main_option("sqlalchemy.url", database_uri.replace("%", "%%"))
    return cfg


def upgrade_db(database_uri: str, revision: str = "head") -> None:
    """Applies Alembic migrations up to revision (idempotent)."""
    command.upgrade(alembic_config(database_uri), revision)
