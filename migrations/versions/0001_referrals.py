"""Create referrals table

Revision ID: 0001_referrals
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_referrals'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'referrals',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('referrer_name', sa.String(length=255), nullable=False),
        sa.Column('referrer_email', sa.String(length=255), nullable=False),
        sa.Column('referee_name', sa.String(length=255), nullable=False),
        sa.Column('referee_email', sa.String(length=255), nullable=False),
        sa.Column('course', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    # Statistics read the newest referrals first
    op.create_index('ix_referrals_created_at', 'referrals', ['created_at'], unique=False)


def downgrade():
    op.drop_index('ix_referrals_created_at', table_name='referrals')
    op.drop_table('referrals')
