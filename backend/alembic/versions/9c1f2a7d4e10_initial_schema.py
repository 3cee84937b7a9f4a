"""initial schema

Revision ID: 9c1f2a7d4e10
Revises:
Create Date: 2026-10-12 18:20:41.503112

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '9c1f2a7d4e10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    # 1. Businesses
    op.create_table(
        'businesses',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('owner_id', sa.Text, nullable=False, unique=True),
        sa.Column('name', sa.Text, nullable=False),
        sa.Column('slug', sa.Text, nullable=False, unique=True),
        sa.Column('email', sa.Text, nullable=True),
        sa.Column('phone', sa.Text, nullable=True),
        sa.Column('address', sa.Text, nullable=True),
        sa.Column('slot_interval_minutes', sa.Integer, nullable=False, server_default=sa.text('30')),
        sa.Column('deposit_enabled', sa.Boolean, nullable=False, server_default=sa.text('0')),
        sa.Column('deposit_type', sa.Text, nullable=False, server_default=sa.text("'fixed'")),
        sa.Column('deposit_value', sa.Numeric(10, 2), nullable=False, server_default=sa.text('0')),
        sa.Column('deposit_bank', sa.Text, nullable=True),
        sa.Column('deposit_account_name', sa.Text, nullable=True),
        sa.Column('deposit_transfer_alias', sa.Text, nullable=True),
        sa.Column('accepts_bookings', sa.Boolean, nullable=False, server_default=sa.text('1')),
        sa.Column('created_at', sa.DateTime, server_default=sa.func.now()),
    )

    # 2. Services
    op.create_table(
        'services',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('business_id', sa.Integer, sa.ForeignKey('businesses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.Text, nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False, server_default=sa.text('0')),
        sa.Column('duration', sa.Integer, nullable=False),
        sa.Column('is_active', sa.Boolean, nullable=False, server_default=sa.text('1')),
        sa.Column('created_at', sa.DateTime, server_default=sa.func.now()),
    )
    op.create_index('ix_services_business_id', 'services', ['business_id'])

    # 3. Weekly schedule windows + per-weekday guard rows
    op.create_table(
        'schedules',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('business_id', sa.Integer, sa.ForeignKey('businesses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('weekday', sa.Text, nullable=False),
        sa.Column('start_time', sa.Time, nullable=False),
        sa.Column('end_time', sa.Time, nullable=False),
        sa.Column('capacity_per_slot', sa.Integer, nullable=False, server_default=sa.text('1')),
    )
    op.create_index('ix_schedules_business_weekday', 'schedules', ['business_id', 'weekday'])

    op.create_table(
        'schedule_guards',
        sa.Column('business_id', sa.Integer, sa.ForeignKey('businesses.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('weekday', sa.Text, primary_key=True),
        sa.Column('version', sa.Integer, nullable=False, server_default=sa.text('0')),
    )

    # 4. Exception dates
    op.create_table(
        'exception_dates',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('business_id', sa.Integer, sa.ForeignKey('businesses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('date', sa.Date, nullable=False),
        sa.Column('reason', sa.Text, nullable=True),
        sa.Column('created_at', sa.DateTime, server_default=sa.func.now()),
        sa.UniqueConstraint('business_id', 'date', name='uq_exception_business_date'),
    )

    # 5. Bookings
    op.create_table(
        'bookings',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('business_id', sa.Integer, sa.ForeignKey('businesses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('service_id', sa.Integer, sa.ForeignKey('services.id'), nullable=False),
        sa.Column('service_name', sa.Text, nullable=False),
        sa.Column('service_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('date', sa.Date, nullable=False),
        sa.Column('slot_start', sa.Time, nullable=False),
        sa.Column('seat', sa.Integer, nullable=True),
        sa.Column('customer_name', sa.Text, nullable=False),
        sa.Column('customer_email', sa.Text, nullable=False),
        sa.Column('customer_phone', sa.Text, nullable=False),
        sa.Column('status', sa.Text, nullable=False, server_default=sa.text("'pending'")),
        sa.Column('deposit_paid', sa.Boolean, nullable=False, server_default=sa.text('0')),
        sa.Column('deposit_amount', sa.Numeric(10, 2), nullable=False, server_default=sa.text('0')),
        sa.Column('deposit_receipt_ref', sa.Text, nullable=True),
        sa.Column('payment_reference', sa.Text, nullable=True, unique=True),
        sa.Column('created_at', sa.DateTime, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime, server_default=sa.func.now()),
        sa.UniqueConstraint('business_id', 'date', 'slot_start', 'seat', name='uq_booking_seat'),
    )
    op.create_index('ix_bookings_business_date', 'bookings', ['business_id', 'date'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_bookings_business_date', table_name='bookings')
    op.drop_table('bookings')
    op.drop_table('exception_dates')
    op.drop_table('schedule_guards')
    op.drop_index('ix_schedules_business_weekday', table_name='schedules')
    op.drop_table('schedules')
    op.drop_index('ix_services_business_id', table_name='services')
    op.drop_table('services')
    op.drop_table('businesses')
