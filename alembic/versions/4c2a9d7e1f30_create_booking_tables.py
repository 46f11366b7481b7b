"""create booking tables

Revision ID: 4c2a9d7e1f30
Revises:
Create Date: 2026-10-17 10:12:44.318201

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '4c2a9d7e1f30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    # 1. Referenced tables (owned by the account and catalog services)
    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(100), nullable=True),
        sa.Column('phone', sa.String(20), nullable=False),
        sa.Column('country_code', sa.String(5), nullable=False, server_default='+91'),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False)
    )
    op.create_index('ix_users_phone', 'users', ['phone'], unique=True)

    op.create_table(
        'vehicles',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(50), nullable=False),
        sa.Column('license_plate', sa.String(20), nullable=False),
        sa.Column('make', sa.String(50), nullable=True),
        sa.Column('vehicle_model', sa.String(50), nullable=True),
        sa.Column('year', sa.Integer(), nullable=True),
        sa.Column('color', sa.String(30), nullable=True),
        sa.Column('vehicle_type', sa.String(20), nullable=True),
        sa.Column('image', sa.String(), nullable=True),
        sa.Column('is_default', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'))
    )
    op.create_index('ix_vehicles_user_id', 'vehicles', ['user_id'])
    op.create_index('ix_vehicles_user_active', 'vehicles', ['user_id', 'is_active'])
    op.create_index(
        'uq_vehicles_user_default', 'vehicles', ['user_id'],
        unique=True, postgresql_where=sa.text('is_default')
    )

    op.create_table(
        'services',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False, unique=True),
        sa.Column('slug', sa.String(120), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('short_description', sa.String(150), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('category', sa.String(20), nullable=False, server_default='basic'),
        sa.Column('features', sa.JSON(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True, server_default=sa.true()),
        sa.Column('sort_order', sa.Integer(), nullable=True, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'))
    )
    op.create_index('ix_services_is_active', 'services', ['is_active'])

    # 2. Bookings
    op.create_table(
        'bookings',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('booking_number', sa.String(12), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('vehicle_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('vehicles.id'), nullable=False),
        sa.Column('service_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('services.id'), nullable=False),
        sa.Column('scheduled_date', sa.Date(), nullable=False),
        sa.Column('scheduled_time', sa.String(5), nullable=False),
        sa.Column('time_slot_start', sa.String(5), nullable=False),
        sa.Column('time_slot_end', sa.String(5), nullable=False),
        sa.Column('location', sa.JSON(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('subtotal', sa.Numeric(10, 2), nullable=False),
        sa.Column('service_fee', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('tax', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('total', sa.Numeric(10, 2), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('cancellation_reason', sa.Text(), nullable=True),
        sa.Column('cancelled_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'))
    )
    op.create_index('ix_bookings_booking_number', 'bookings', ['booking_number'], unique=True)
    op.create_index('ix_bookings_user_id', 'bookings', ['user_id'])
    op.create_index('ix_bookings_scheduled_date', 'bookings', ['scheduled_date'])
    op.create_index('ix_bookings_status', 'bookings', ['status'])
    op.create_index('ix_bookings_slot_status', 'bookings', ['scheduled_date', 'scheduled_time', 'status'])
    op.create_index('ix_bookings_user_status_date', 'bookings', ['user_id', 'status', 'scheduled_date'])

    # 3. Staffing
    op.create_table(
        'staff_config',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('total_staff', sa.Integer(), nullable=False, server_default='3'),
        sa.Column('service_duration_minutes', sa.Integer(), nullable=False, server_default='60'),
        sa.Column('operating_start_time', sa.String(5), nullable=False, server_default='08:00'),
        sa.Column('operating_end_time', sa.String(5), nullable=False, server_default='22:00'),
        sa.Column('booking_window_days', sa.Integer(), nullable=False, server_default='7'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'))
    )

    op.create_table(
        'staff_unavailability',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('type', sa.String(20), nullable=False, server_default='full_day'),
        sa.Column('time_slots', sa.JSON(), nullable=True),
        sa.Column('unavailable_count', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('reason', sa.String(200), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'))
    )
    op.create_index('ix_staff_unavailability_date', 'staff_unavailability', ['date'])
    op.create_index('ix_staff_unavailability_date_type', 'staff_unavailability', ['date', 'type'])

    # 4. Admin feed
    op.create_table(
        'admin_notifications',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('type', sa.String(30), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('data', sa.JSON(), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'))
    )
    op.create_index('ix_admin_notifications_read_created', 'admin_notifications', ['is_read', 'created_at'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_admin_notifications_read_created', table_name='admin_notifications')
    op.drop_table('admin_notifications')

    op.drop_index('ix_staff_unavailability_date_type', table_name='staff_unavailability')
    op.drop_index('ix_staff_unavailability_date', table_name='staff_unavailability')
    op.drop_table('staff_unavailability')
    op.drop_table('staff_config')

    op.drop_index('ix_bookings_user_status_date', table_name='bookings')
    op.drop_index('ix_bookings_slot_status', table_name='bookings')
    op.drop_index('ix_bookings_status', table_name='bookings')
    op.drop_index('ix_bookings_scheduled_date', table_name='bookings')
    op.drop_index('ix_bookings_user_id', table_name='bookings')
    op.drop_index('ix_bookings_booking_number', table_name='bookings')
    op.drop_table('bookings')

    op.drop_index('ix_services_is_active', table_name='services')
    op.drop_table('services')

    op.drop_index('uq_vehicles_user_default', table_name='vehicles')
    op.drop_index('ix_vehicles_user_active', table_name='vehicles')
    op.drop_index('ix_vehicles_user_id', table_name='vehicles')
    op.drop_table('vehicles')

    op.drop_index('ix_users_phone', table_name='users')
    op.drop_table('users')
