"""initial_schema

Revision ID: 1f3c9a7b2d10
Revises:
Create Date: 2026-10-19 09:12:44.201533
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '1f3c9a7b2d10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

video_visibility = postgresql.ENUM('private', 'public', name='video_visibility', create_type=False)
reaction_type = postgresql.ENUM('like', 'dislike', name='reaction_type', create_type=False)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    bind = op.get_bind()
    video_visibility.create(bind, checkfirst=True)
    reaction_type.create(bind, checkfirst=True)

    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('clerk_id', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('image_url', sa.Text(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_clerk_id', 'users', ['clerk_id'], unique=True)

    op.create_table(
        'categories',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_categories_name', 'categories', ['name'], unique=True)

    op.create_table(
        'videos',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('category_id', sa.Uuid(), nullable=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('visibility', video_visibility, nullable=False),
        sa.Column('thumbnail_url', sa.Text(), nullable=True),
        sa.Column('thumbnail_key', sa.Text(), nullable=True),
        sa.Column('preview_url', sa.Text(), nullable=True),
        sa.Column('preview_key', sa.Text(), nullable=True),
        sa.Column('mux_status', sa.String(length=50), nullable=True),
        sa.Column('mux_asset_id', sa.String(length=255), nullable=True),
        sa.Column('mux_upload_id', sa.String(length=255), nullable=True),
        sa.Column('mux_playback_id', sa.String(length=255), nullable=True),
        sa.Column('mux_track_id', sa.String(length=255), nullable=True),
        sa.Column('mux_track_status', sa.String(length=50), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['category_id'], ['categories.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('mux_asset_id'),
        sa.UniqueConstraint('mux_upload_id'),
        sa.UniqueConstraint('mux_playback_id'),
        sa.UniqueConstraint('mux_track_id'),
    )
    op.create_index('ix_videos_user_id', 'videos', ['user_id'])
    # Keyset pagination: ORDER BY updated_at DESC, id DESC
    op.create_index('ix_video_visibility_updated', 'videos', ['visibility', 'updated_at', 'id'])
    op.create_index('ix_video_user_updated', 'videos', ['user_id', 'updated_at', 'id'])

    op.create_table(
        'video_views',
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('video_id', sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['video_id'], ['videos.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('user_id', 'video_id'),
    )
    op.create_index('ix_video_views_video_id', 'video_views', ['video_id'])

    op.create_table(
        'video_reactions',
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('video_id', sa.Uuid(), nullable=False),
        sa.Column('type', reaction_type, nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['video_id'], ['videos.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('user_id', 'video_id'),
    )
    op.create_index('ix_video_reactions_video_id', 'video_reactions', ['video_id'])

    op.create_table(
        'subscriptions',
        sa.Column('viewer_id', sa.Uuid(), nullable=False),
        sa.Column('creator_id', sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['viewer_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['creator_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('viewer_id', 'creator_id'),
        sa.CheckConstraint('viewer_id <> creator_id', name='ck_subscription_not_self'),
    )
    op.create_index('ix_subscriptions_creator_id', 'subscriptions', ['creator_id'])

    op.create_table(
        'comments',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('video_id', sa.Uuid(), nullable=False),
        sa.Column('value', sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['video_id'], ['videos.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_comments_user_id', 'comments', ['user_id'])
    op.create_index('ix_comment_video_updated', 'comments', ['video_id', 'updated_at', 'id'])

    op.create_table(
        'comment_reactions',
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('comment_id', sa.Uuid(), nullable=False),
        sa.Column('type', reaction_type, nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['comment_id'], ['comments.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('user_id', 'comment_id'),
    )
    op.create_index('ix_comment_reactions_comment_id', 'comment_reactions', ['comment_id'])


def downgrade() -> None:
    op.drop_table('comment_reactions')
    op.drop_table('comments')
    op.drop_table('subscriptions')
    op.drop_table('video_reactions')
    op.drop_table('video_views')
    op.drop_table('videos')
    op.drop_table('categories')
    op.drop_table('users')

    bind = op.get_bind()
    reaction_type.drop(bind, checkfirst=True)
    video_visibility.drop(bind, checkfirst=True)
