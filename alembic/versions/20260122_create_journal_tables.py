"""create users, entries and photos

Revision ID: 20260122_create_journal_tables
Revises:
Create Date: 2026-01-22 10:18:07

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '20260122_create_journal_tables'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('username', sa.String(), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp())
    )

    op.create_table(
        'entries',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer, sa.ForeignKey('users.id', ondelete='CASCADE', onupdate='CASCADE'), nullable=False),
        sa.Column('date', sa.String(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('time', sa.String(), nullable=True),
        sa.Column('text', sa.Text(), nullable=True),
        sa.Column('color', sa.String(), nullable=False, server_default='blue'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp()),
        sa.Column('updated_at', sa.DateTime(), nullable=False)
    )
    op.create_index('ix_entries_user_id', 'entries', ['user_id'])
    op.create_index('ix_entries_date', 'entries', ['date'])

    op.create_table(
        'photos',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('entry_id', sa.Integer, sa.ForeignKey('entries.id', ondelete='CASCADE', onupdate='CASCADE'), nullable=False),
        sa.Column('path', sa.String(), nullable=False),
        sa.Column('position', sa.Integer, nullable=False, server_default='0')
    )
    op.create_index('ix_photos_entry_id', 'photos', ['entry_id'])


def downgrade():
    op.drop_index('ix_photos_entry_id', table_name='photos')
    op.drop_table('photos')
    op.drop_index('ix_entries_date', table_name='entries')
    op.drop_index('ix_entries_user_id', table_name='entries')
    op.drop_table('entries')
    op.drop_table('users')
