"""content schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create communities table
    op.create_table(
        'communities',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('user_id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_communities_name', 'communities', ['name'], unique=True)
    op.create_index('ix_communities_user_id', 'communities', ['user_id'])

    # Create posts table
    op.create_table(
        'posts',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('community_id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('title', sa.String(100), nullable=False),
        sa.Column('category', sa.String(50), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('media_url', sa.String(500), nullable=True),
        sa.Column('user_id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['community_id'], ['communities.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_posts_community_id', 'posts', ['community_id'])
    op.create_index('ix_posts_title', 'posts', ['title'])
    op.create_index('ix_posts_user_id', 'posts', ['user_id'])
    op.create_index('ix_posts_created_at', 'posts', ['created_at'])

    # Create comments table
    op.create_table(
        'comments',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('post_id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('parent_id', sa.Uuid(as_uuid=True), nullable=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('user_id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['post_id'], ['posts.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['parent_id'], ['comments.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_comments_post_id', 'comments', ['post_id'])
    op.create_index('ix_comments_parent_id', 'comments', ['parent_id'])
    op.create_index('ix_comments_user_id', 'comments', ['user_id'])
    op.create_index('ix_comments_created_at', 'comments', ['created_at'])

    # Create likes table
    op.create_table(
        'likes',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('user_id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('post_id', sa.Uuid(as_uuid=True), nullable=True),
        sa.Column('comment_id', sa.Uuid(as_uuid=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['post_id'], ['posts.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['comment_id'], ['comments.id'], ondelete='CASCADE'),
        sa.CheckConstraint('(post_id IS NULL) <> (comment_id IS NULL)', name='ck_likes_single_target'),
        sa.UniqueConstraint('user_id', 'post_id', name='uq_likes_user_post'),
        sa.UniqueConstraint('user_id', 'comment_id', name='uq_likes_user_comment'),
    )
    op.create_index('ix_likes_user_id', 'likes', ['user_id'])
    op.create_index('ix_likes_post_id', 'likes', ['post_id'])
    op.create_index('ix_likes_comment_id', 'likes', ['comment_id'])

    # Create events table
    op.create_table(
        'events',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('community_id', sa.Uuid(as_uuid=True), nullable=True),
        sa.Column('title', sa.String(150), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('location', sa.String(255), nullable=True),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('user_id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['community_id'], ['communities.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_events_community_id', 'events', ['community_id'])
    op.create_index('ix_events_title', 'events', ['title'])
    op.create_index('ix_events_start_time', 'events', ['start_time'])
    op.create_index('ix_events_user_id', 'events', ['user_id'])


def downgrade() -> None:
    op.drop_table('events')
    op.drop_table('likes')
    op.drop_table('comments')
    op.drop_table('posts')
    op.drop_table('communities')
