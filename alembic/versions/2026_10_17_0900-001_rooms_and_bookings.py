"""rooms and room bookings

Revision ID: 001
Revises:
Create Date: 2026-10-17 09:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create rooms table
    op.create_table(
        'rooms',
        sa.Column('uid', sa.String(length=100), nullable=False),
        sa.Column('identifier', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('screen_size', sa.Integer(), nullable=False),
        sa.Column('screen_type', sa.String(length=10), nullable=False),
        sa.Column('seat_rows', JSONB(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('uid'),
        sa.CheckConstraint('identifier BETWEEN 1 AND 100', name='ck_rooms_identifier_range'),
    )
    op.create_index(op.f('ix_rooms_identifier'), 'rooms', ['identifier'], unique=True)

    # Create room_bookings table
    op.create_table(
        'room_bookings',
        sa.Column('booking_uid', sa.String(length=100), nullable=False),
        sa.Column('room_uid', sa.String(length=100), nullable=False),
        sa.Column('screening_uid', sa.String(length=100), nullable=True),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['room_uid'], ['rooms.uid'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('booking_uid'),
        sa.CheckConstraint('end_time > start_time', name='ck_room_bookings_time_sequence'),
    )
    op.create_index(op.f('ix_room_bookings_room_uid'), 'room_bookings', ['room_uid'], unique=False)
    op.create_index(op.f('ix_room_bookings_screening_uid'), 'room_bookings', ['screening_uid'], unique=False)
    op.create_index(op.f('ix_room_bookings_start_time'), 'room_bookings', ['start_time'], unique=False)


def downgrade() -> None:
    op.drop_table('room_bookings')
    op.drop_table('rooms')
