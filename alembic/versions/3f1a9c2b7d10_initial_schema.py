"""initial schema

Revision ID: 3f1a9c2b7d10
Revises:
Create Date: 2026-10-18 10:12:05.118402

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3f1a9c2b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, videos, subscriptions, tweets, comments and likes."""

    # ── users ──────────────────────────────────────────────────────────
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('username', sa.String(64), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('full_name', sa.String(255), nullable=True),
        sa.Column('avatar', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True,
                  server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_users')),
        sa.UniqueConstraint('username', name=op.f('uq_users_username')),
        sa.UniqueConstraint('email', name=op.f('uq_users_email')),
    )

    # ── videos ─────────────────────────────────────────────────────────
    op.create_table(
        'videos',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('owner_id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('video_file', sa.Text(), nullable=False),
        sa.Column('video_file_public_id', sa.String(255), nullable=True),
        sa.Column('thumbnail', sa.Text(), nullable=False),
        sa.Column('thumbnail_public_id', sa.String(255), nullable=True),
        sa.Column('duration', sa.Float(), nullable=False),
        sa.Column('views', sa.BigInteger(), nullable=False),
        sa.Column('is_published', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_videos')),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'],
                                name=op.f('fk_videos_owner_id_users'),
                                ondelete='CASCADE'),
        sa.CheckConstraint('views >= 0', name=op.f('ck_videos_views_non_negative')),
    )
    op.create_index('idx_videos_owner_id', 'videos', ['owner_id'])
    op.create_index('idx_videos_created_at', 'videos', ['created_at'])

    # ── subscriptions ──────────────────────────────────────────────────
    op.create_table(
        'subscriptions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('subscriber_id', sa.Uuid(), nullable=False),
        sa.Column('channel_id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True,
                  server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_subscriptions')),
        sa.ForeignKeyConstraint(['subscriber_id'], ['users.id'],
                                name=op.f('fk_subscriptions_subscriber_id_users'),
                                ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['channel_id'], ['users.id'],
                                name=op.f('fk_subscriptions_channel_id_users'),
                                ondelete='CASCADE'),
        sa.UniqueConstraint('subscriber_id', 'channel_id',
                            name='uq_subscriptions_subscriber_channel'),
    )
    op.create_index('idx_subscriptions_channel_id', 'subscriptions', ['channel_id'])

    # ── tweets ─────────────────────────────────────────────────────────
    op.create_table(
        'tweets',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('owner_id', sa.Uuid(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_tweets')),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'],
                                name=op.f('fk_tweets_owner_id_users'),
                                ondelete='CASCADE'),
    )
    op.create_index('idx_tweets_owner_id', 'tweets', ['owner_id'])

    # ── comments ───────────────────────────────────────────────────────
    op.create_table(
        'comments',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('owner_id', sa.Uuid(), nullable=False),
        sa.Column('video_id', sa.Uuid(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True,
                  server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_comments')),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'],
                                name=op.f('fk_comments_owner_id_users'),
                                ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['video_id'], ['videos.id'],
                                name=op.f('fk_comments_video_id_videos'),
                                ondelete='CASCADE'),
    )
    op.create_index('idx_comments_owner_id', 'comments', ['owner_id'])
    op.create_index('idx_comments_video_id', 'comments', ['video_id'])

    # ── likes ──────────────────────────────────────────────────────────
    op.create_table(
        'likes',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('liked_by_id', sa.Uuid(), nullable=False),
        sa.Column('video_id', sa.Uuid(), nullable=True),
        sa.Column('tweet_id', sa.Uuid(), nullable=True),
        sa.Column('comment_id', sa.Uuid(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True,
                  server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_likes')),
        sa.ForeignKeyConstraint(['liked_by_id'], ['users.id'],
                                name=op.f('fk_likes_liked_by_id_users'),
                                ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['video_id'], ['videos.id'],
                                name=op.f('fk_likes_video_id_videos'),
                                ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tweet_id'], ['tweets.id'],
                                name=op.f('fk_likes_tweet_id_tweets'),
                                ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['comment_id'], ['comments.id'],
                                name=op.f('fk_likes_comment_id_comments'),
                                ondelete='CASCADE'),
        sa.CheckConstraint(
            '(CASE WHEN video_id IS NULL THEN 0 ELSE 1 END)'
            ' + (CASE WHEN tweet_id IS NULL THEN 0 ELSE 1 END)'
            ' + (CASE WHEN comment_id IS NULL THEN 0 ELSE 1 END) = 1',
            name=op.f('ck_likes_exactly_one_target'),
        ),
    )
    op.create_index('idx_likes_video_id', 'likes', ['video_id'])
    op.create_index('idx_likes_tweet_id', 'likes', ['tweet_id'])
    op.create_index('idx_likes_comment_id', 'likes', ['comment_id'])


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    op.drop_table('likes')
    op.drop_table('comments')
    op.drop_table('tweets')
    op.drop_table('subscriptions')
    op.drop_table('videos')
    op.drop_table('users')
