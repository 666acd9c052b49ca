"""Create users and attendanceHistory tables.

Revision ID: 001_initial
Revises:
Create Date: 2026-10-18

users carries the dense display order and the attendance checkbox;
attendanceHistory carries one row per (date, group, day) session.
Caller fields outside the fixed columns go to the `attributes` JSON map.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.Text(), nullable=True),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.Column('checked', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('attributes', sa.JSON(), nullable=False, server_default='{}'),
    )
    op.create_index('ix_users_order', 'users', ['order'])

    op.create_table(
        'attendanceHistory',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('date', sa.String(32), nullable=False),
        sa.Column('group', sa.String(100), nullable=False),
        sa.Column('day', sa.String(32), nullable=False),
        sa.Column('attributes', sa.JSON(), nullable=False, server_default='{}'),
    )
    op.create_index(
        'ix_attendance_history_triple', 'attendanceHistory',
        ['date', 'group', 'day'],
    )


def downgrade() -> None:
    op.drop_index('ix_attendance_history_triple', table_name='attendanceHistory')
    op.drop_table('attendanceHistory')
    op.drop_index('ix_users_order', table_name='users')
    op.drop_table('users')
