"""create key_value table for scoreboard state

Revision ID: 3c7a9e21b0f4
Revises:
Create Date: 2025-09-14 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c7a9e21b0f4'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    if 'key_value' not in insp.get_table_names():
        op.create_table(
            'key_value',
            sa.Column('key', sa.String(length=128), nullable=False),
            sa.Column('value', sa.Text(), nullable=False),
            sa.PrimaryKeyConstraint('key'),
        )


def downgrade():
    op.drop_table('key_value')
