"""create categories and kb_articles

Revision ID: b3f1c2a9d4e7
Revises:
Create Date: 2026-10-19 10:12:44.318204

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'b3f1c2a9d4e7'
down_revision = None
branch_labels = None
depends_on = None

DIFFICULTY = sa.Enum('easy', 'medium', 'hard', name='kb_difficulty')
STATUS = sa.Enum('draft', 'published', name='kb_status')

def upgrade():
    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('slug', sa.String(length=80), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('icon', sa.String(length=32), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_categories')),
    )
    op.create_index(op.f('ix_categories_id'), 'categories', ['id'], unique=False)
    op.create_index(op.f('ix_categories_slug'), 'categories', ['slug'], unique=True)

    op.create_table(
        'kb_articles',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('slug', sa.String(length=160), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('category_id', sa.Integer(), nullable=False),
        sa.Column('difficulty', DIFFICULTY, nullable=False),
        sa.Column('time_estimate_min', sa.Integer(), nullable=False),
        sa.Column('tools_json', sa.JSON(), nullable=False),
        sa.Column('steps_json', sa.JSON(), nullable=False),
        sa.Column('status', STATUS, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.CheckConstraint('time_estimate_min > 0', name=op.f('ck_kb_articles_time_estimate_positive')),
        sa.ForeignKeyConstraint(
            ['category_id'], ['categories.id'],
            name=op.f('fk_kb_articles_category_id_categories'),
            ondelete='RESTRICT',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_kb_articles')),
    )
    op.create_index(op.f('ix_kb_articles_id'), 'kb_articles', ['id'], unique=False)
    op.create_index(op.f('ix_kb_articles_slug'), 'kb_articles', ['slug'], unique=True)
    op.create_index(op.f('ix_kb_articles_category_id'), 'kb_articles', ['category_id'], unique=False)
    op.create_index(op.f('ix_kb_articles_status'), 'kb_articles', ['status'], unique=False)
    op.create_index(op.f('ix_kb_articles_created_at'), 'kb_articles', ['created_at'], unique=False)

def downgrade():
    op.drop_index(op.f('ix_kb_articles_created_at'), table_name='kb_articles')
    op.drop_index(op.f('ix_kb_articles_status'), table_name='kb_articles')
    op.drop_index(op.f('ix_kb_articles_category_id'), table_name='kb_articles')
    op.drop_index(op.f('ix_kb_articles_slug'), table_name='kb_articles')
    op.drop_index(op.f('ix_kb_articles_id'), table_name='kb_articles')
    op.drop_table('kb_articles')
    op.drop_index(op.f('ix_categories_slug'), table_name='categories')
    op.drop_index(op.f('ix_categories_id'), table_name='categories')
    op.drop_table('categories')
    # Postgres keeps enum types around after the table is gone
    bind = op.get_bind()
    STATUS.drop(bind, checkfirst=True)
    DIFFICULTY.drop(bind, checkfirst=True)
