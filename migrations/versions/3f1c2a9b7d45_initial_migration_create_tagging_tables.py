"""Initial migration: create tagging tables

Revision ID: 3f1c2a9b7d45
Revises: 
Create Date: 2026-10-18 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9b7d45'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Create tag_groups table
    op.create_table(
        'tag_groups',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=125), nullable=False),
        sa.Column('slug', sa.String(length=125), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug')
    )

    # Create tags table
    op.create_table(
        'tags',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=125), nullable=False),
        sa.Column('slug', sa.String(length=125), nullable=False),
        sa.Column('count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('suggest', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('tag_group_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.CheckConstraint('count >= 0', name='ck_tags_count_non_negative'),
        sa.ForeignKeyConstraint(['tag_group_id'], ['tag_groups.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug')
    )

    # Create tag_translations table
    op.create_table(
        'tag_translations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('tag_id', sa.Integer(), nullable=False),
        sa.Column('locale', sa.String(length=10), nullable=False),
        sa.Column('name', sa.String(length=125), nullable=False),
        sa.Column('slug', sa.String(length=125), nullable=False),
        sa.ForeignKeyConstraint(['tag_id'], ['tags.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('tag_id', 'locale', name='uq_tag_translations_tag_locale')
    )
    op.create_index('ix_tag_translations_locale', 'tag_translations', ['locale'])
    op.create_index('ix_tag_translations_slug', 'tag_translations', ['slug'])

    # Create tagged join table (polymorphic: taggable_type + taggable_id)
    op.create_table(
        'tagged',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('taggable_type', sa.String(length=125), nullable=False),
        sa.Column('taggable_id', sa.Integer(), nullable=False),
        sa.Column('tag_id', sa.Integer(), nullable=False),
        sa.Column('tag_slug', sa.String(length=125), nullable=False),
        sa.Column('sorting', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.ForeignKeyConstraint(['tag_id'], ['tags.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('taggable_type', 'taggable_id', 'tag_id', name='uq_tagged_entity_tag')
    )
    op.create_index('ix_tagged_taggable_id', 'tagged', ['taggable_id'])
    op.create_index('ix_tagged_type_slug', 'tagged', ['taggable_type', 'tag_slug'])

    # Create posts table
    op.create_table(
        'posts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=300), nullable=False),
        sa.Column('body', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('id')
    )

    # Create notes table
    op.create_table(
        'notes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=300), nullable=False),
        sa.Column('body', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('id')
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('notes')
    op.drop_table('posts')
    op.drop_index('ix_tagged_type_slug', table_name='tagged')
    op.drop_index('ix_tagged_taggable_id', table_name='tagged')
    op.drop_table('tagged')
    op.drop_index('ix_tag_translations_slug', table_name='tag_translations')
    op.drop_index('ix_tag_translations_locale', table_name='tag_translations')
    op.drop_table('tag_translations')
    op.drop_table('tags')
    op.drop_table('tag_groups')
