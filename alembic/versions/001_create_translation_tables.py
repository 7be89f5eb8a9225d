"""create_translation_tables

Revision ID: 001_translation_tables
Revises:
Create Date: 2026-10-19

Locales, per-locale user access, source strings and their translations.
translations.current is TRUE or NULL so the unique constraint on
(translatable_id, locale_id, current) allows a single current row.
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001_translation_tables'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'locales',
        sa.Column('id', sa.String(12), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('plural_count', sa.Integer, nullable=False, server_default='2'),
        sa.Column('plural_formula', sa.String(400), nullable=False, server_default='(n != 1)'),
        sa.Column('is_source', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('is_approved', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint('plural_count BETWEEN 1 AND 6', name='ck_locale_plural_count'),
    )

    op.create_table(
        'locale_access',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer, nullable=False),
        sa.Column('locale_id', sa.String(12), nullable=False),
        sa.Column('level', sa.Integer, nullable=False, server_default='1'),
        sa.ForeignKeyConstraint(['locale_id'], ['locales.id'], ),
        sa.UniqueConstraint('user_id', 'locale_id', name='uq_locale_access_user_locale'),
    )
    op.create_index('ix_locale_access_user_id', 'locale_access', ['user_id'])

    op.create_table(
        'translatables',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('hash', sa.String(32), nullable=False, unique=True),
        sa.Column('context', sa.Text, nullable=False, server_default=''),
        sa.Column('text', sa.Text, nullable=False),
        sa.Column('plural', sa.Text, nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        'translations',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('translatable_id', sa.Integer, nullable=False),
        sa.Column('locale_id', sa.String(12), nullable=False),
        sa.Column('current', sa.Boolean, nullable=True),
        sa.Column('current_since', sa.DateTime(timezone=True), nullable=True),
        sa.Column('reviewed', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('need_review', sa.Boolean, nullable=False, server_default=sa.false()),
        *(sa.Column(f'text{i}', sa.Text, nullable=False, server_default='') for i in range(6)),
        sa.Column('created_on', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('created_by', sa.Integer, nullable=False),
        sa.ForeignKeyConstraint(['translatable_id'], ['translatables.id'], ),
        sa.ForeignKeyConstraint(['locale_id'], ['locales.id'], ),
        sa.UniqueConstraint('translatable_id', 'locale_id', 'current', name='uq_translation_current'),
    )
    op.create_index(
        'idx_translations_translatable_locale',
        'translations',
        ['translatable_id', 'locale_id'],
        unique=False
    )


def downgrade():
    op.drop_index('idx_translations_translatable_locale', table_name='translations')
    op.drop_table('translations')
    op.drop_table('translatables')
    op.drop_index('ix_locale_access_user_id', table_name='locale_access')
    op.drop_table('locale_access')
    op.drop_table('locales')
