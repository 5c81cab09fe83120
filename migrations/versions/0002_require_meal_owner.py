"""make Meals.user_id required

Revision ID: 0002_require_meal_owner
Revises: 0001
Create Date: 2023-11-12 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0002_require_meal_owner'
down_revision = '0001'
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Meals logged before accounts existed have no owner and cannot be shown.
    op.execute('DELETE FROM "Meals" WHERE user_id IS NULL')

    # SQLite cannot ALTER COLUMN; batch mode recreates the table there.
    with op.batch_alter_table('Meals') as batch_op:
        batch_op.alter_column(
            'user_id',
            existing_type=sa.Integer(),
            nullable=False,
        )
        batch_op.create_index('ix_meals_user_date', ['user_id', 'date_consumed'])


def downgrade() -> None:
    with op.batch_alter_table('Meals') as batch_op:
        batch_op.drop_index('ix_meals_user_date')
        batch_op.alter_column(
            'user_id',
            existing_type=sa.Integer(),
            nullable=True,
        )
