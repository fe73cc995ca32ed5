"""create users, wods and scores

Revision ID: 8f3a1c2d9b10
Revises:
Create Date: 2026-10-19 09:41:12.518204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8f3a1c2d9b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=24), nullable=False),
        sa.Column('line_user_id', sa.String(), nullable=False),
        sa.Column('username', sa.String(length=30), nullable=False),
        sa.Column('display_name', sa.String(length=100), nullable=False),
        sa.Column('profile_picture', sa.String(), nullable=False),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('personal_info', sa.JSON(), nullable=False),
        sa.Column('benchmark_scores', sa.JSON(), nullable=False),
        sa.Column('personal_records', sa.JSON(), nullable=False),
        sa.Column('following', sa.JSON(), nullable=False),
        sa.Column('followers', sa.JSON(), nullable=False),
        sa.Column('preferences', sa.JSON(), nullable=False),
        sa.Column('total_workouts', sa.Integer(), nullable=False),
        sa.Column('current_streak', sa.Integer(), nullable=False),
        sa.Column('longest_streak', sa.Integer(), nullable=False),
        sa.Column('last_workout_date', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_line_user_id'), 'users', ['line_user_id'], unique=True)
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)

    op.create_table(
        'wods',
        sa.Column('id', sa.String(length=24), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('classification', sa.JSON(), nullable=False),
        sa.Column('structure', sa.JSON(), nullable=False),
        sa.Column('created_by', sa.String(length=24), nullable=False),
        sa.Column('is_public', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['created_by'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_wods_created_by_created_at', 'wods', ['created_by', 'created_at'])
    op.create_index('ix_wods_is_public_created_at', 'wods', ['is_public', 'created_at'])

    op.create_table(
        'scores',
        sa.Column('id', sa.String(length=24), nullable=False),
        sa.Column('user_id', sa.String(length=24), nullable=False),
        sa.Column('wod_id', sa.String(length=24), nullable=True),
        sa.Column('wod_name', sa.String(length=100), nullable=False),
        sa.Column('scoring_type', sa.String(length=20), nullable=False),
        sa.Column('score', sa.String(length=100), nullable=False),
        sa.Column('score_value', sa.Float(), nullable=False),
        sa.Column('rxd', sa.Boolean(), nullable=False),
        sa.Column('scaled', sa.Boolean(), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('notes', sa.Text(), nullable=False),
        sa.Column('feeling_rating', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['wod_id'], ['wods.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_scores_user_id'), 'scores', ['user_id'])
    op.create_index(op.f('ix_scores_wod_id'), 'scores', ['wod_id'])
    op.create_index(op.f('ix_scores_date'), 'scores', ['date'])
    op.create_index('ix_scores_user_wod_date', 'scores', ['user_id', 'wod_id', 'date'])
    op.create_index('ix_scores_wod_score_value', 'scores', ['wod_id', 'score_value'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_scores_wod_score_value', table_name='scores')
    op.drop_index('ix_scores_user_wod_date', table_name='scores')
    op.drop_index(op.f('ix_scores_date'), table_name='scores')
    op.drop_index(op.f('ix_scores_wod_id'), table_name='scores')
    op.drop_index(op.f('ix_scores_user_id'), table_name='scores')
    op.drop_table('scores')

    op.drop_index('ix_wods_is_public_created_at', table_name='wods')
    op.drop_index('ix_wods_created_by_created_at', table_name='wods')
    op.drop_table('wods')

    op.drop_index(op.f('ix_users_username'), table_name='users')
    op.drop_index(op.f('ix_users_line_user_id'), table_name='users')
    op.drop_table('users')
