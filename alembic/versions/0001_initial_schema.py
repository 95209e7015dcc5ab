"""initial schema: users, preferences, tutorial catalog, progress, bookmarks

Revision ID: 0001
Revises:
Create Date: 2026-10-19 12:00:00.000000
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('phone', sa.String(30), nullable=True),
        sa.Column('birth_year', sa.Integer(), nullable=True),
        sa.Column('profile_photo', sa.Text(), nullable=True),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'user_preferences',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('preferences', sa.JSON().with_variant(postgresql.JSONB(), 'postgresql'), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        *_timestamps(),
    )
    op.create_index('ix_user_preferences_id', 'user_preferences', ['id'])
    op.create_index('ix_user_preferences_user_id', 'user_preferences', ['user_id'], unique=True)

    op.create_table(
        'tutorials',
        sa.Column('id', sa.String(50), primary_key=True),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category', sa.String(50), nullable=False),
        sa.Column('platform', sa.String(50), nullable=False),
        sa.Column('difficulty', sa.String(20), nullable=False),
        sa.Column('estimated_minutes', sa.Integer(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_tutorials_category', 'tutorials', ['category'])
    op.create_index('ix_tutorials_platform', 'tutorials', ['platform'])
    op.create_index('ix_tutorials_difficulty', 'tutorials', ['difficulty'])

    op.create_table(
        'tutorial_steps',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('tutorial_id', sa.String(50), sa.ForeignKey('tutorials.id', ondelete='CASCADE'), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('instruction', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('image_url', sa.String(500), nullable=True),
        sa.Column('video_url', sa.String(500), nullable=True),
        sa.Column('tips', sa.JSON(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('tutorial_id', 'position', name='uq_tutorial_step_position'),
    )
    op.create_index('ix_tutorial_steps_id', 'tutorial_steps', ['id'])
    op.create_index('ix_tutorial_steps_tutorial_id', 'tutorial_steps', ['tutorial_id'])

    op.create_table(
        'tutorial_progress',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('tutorial_id', sa.String(50), sa.ForeignKey('tutorials.id', ondelete='CASCADE'), nullable=False),
        sa.Column('current_step', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.UniqueConstraint('user_id', 'tutorial_id', name='uq_progress_user_tutorial'),
    )
    op.create_index('ix_tutorial_progress_id', 'tutorial_progress', ['id'])
    op.create_index('ix_tutorial_progress_user_id', 'tutorial_progress', ['user_id'])
    op.create_index('ix_tutorial_progress_tutorial_id', 'tutorial_progress', ['tutorial_id'])

    op.create_table(
        'bookmarks',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('tutorial_id', sa.String(50), sa.ForeignKey('tutorials.id', ondelete='CASCADE'), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('user_id', 'tutorial_id', name='uq_bookmark_user_tutorial'),
    )
    op.create_index('ix_bookmarks_id', 'bookmarks', ['id'])
    op.create_index('ix_bookmarks_user_id', 'bookmarks', ['user_id'])
    op.create_index('ix_bookmarks_tutorial_id', 'bookmarks', ['tutorial_id'])


def downgrade() -> None:
    op.drop_table('bookmarks')
    op.drop_table('tutorial_progress')
    op.drop_table('tutorial_steps')
    op.drop_table('tutorials')
    op.drop_table('user_preferences')
    op.drop_table('users')
