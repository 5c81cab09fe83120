"""initial schema

Revision ID: 0001
Revises:
Create Date: 2023-11-04
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "Users",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("email", sa.String(length=254), nullable=False),
        sa.Column("password", sa.String(length=120), nullable=False),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    op.create_table(
        "Meals",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("meal_type", sa.String(length=20), nullable=False),
        sa.Column("date_consumed", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["Users.id"], ondelete=None),
        sa.CheckConstraint(
            "meal_type IN ('breakfast', 'lunch', 'dinner', 'snacks')",
            name="ck_meals_meal_type",
        ),
    )


def downgrade() -> None:
    op.drop_table("Meals")
    op.drop_table("Users")
