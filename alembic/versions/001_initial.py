"""Initial migration

Revision ID: 001
Revises: 
Create Date: 2024-01-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create customers table
    op.create_table(
        'customers',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), unique=True, nullable=False),
        sa.Column('phone', sa.String(20)),
        sa.Column('loyalty_points', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('tier', sa.String(20), nullable=False, server_default='Bronze'),
        sa.Column('member_since', sa.String(4)),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )

    # Create orders table
    op.create_table(
        'orders',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('order_number', sa.String(40), unique=True, nullable=False),
        sa.Column('customer_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('customers.id'), nullable=False),
        sa.Column('items_json', postgresql.JSON(), nullable=False),
        sa.Column('total_cents', sa.Integer(), nullable=False),
        sa.Column('points_earned', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('status', sa.String(50), nullable=False, server_default='Confirmed'),
        sa.Column('payment_method', sa.String(20), nullable=False, server_default='stripe'),
        sa.Column('payment_reference', sa.String(255), nullable=False),
        sa.Column('payment_status', sa.String(20), nullable=False, server_default='Paid'),
        sa.Column('delivery_address_json', postgresql.JSON()),
        sa.Column('delivery_notes', sa.Text()),
        sa.Column('has_feedback', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('feedback_submitted_at', sa.DateTime()),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )
    op.create_index('ix_orders_order_number', 'orders', ['order_number'])

    # Create reservations table
    op.create_table(
        'reservations',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('confirmation_code', sa.String(32), unique=True, nullable=False),
        sa.Column('customer_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('customers.id')),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255)),
        sa.Column('phone', sa.String(20)),
        sa.Column('reservation_date', sa.Date(), nullable=False),
        sa.Column('reservation_time', sa.String(5), nullable=False),
        sa.Column('guests', sa.Integer(), nullable=False),
        sa.Column('notes', sa.Text()),
        sa.Column('status', sa.String(20), nullable=False, server_default='Pending'),
        sa.Column('table_number', sa.String(20)),
        sa.Column('payment_status', sa.String(20)),
        sa.Column('expires_at', sa.DateTime()),
        sa.Column('confirmation_sent', sa.DateTime()),
        sa.Column('cancelled_at', sa.DateTime()),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )
    op.create_index('ix_reservations_confirmation_code', 'reservations', ['confirmation_code'])
    op.create_index('ix_reservations_email', 'reservations', ['email'])
    op.create_index('ix_reservations_slot', 'reservations', ['reservation_date', 'reservation_time'])

    # Create reservation_slots table (per-slot guest counter)
    op.create_table(
        'reservation_slots',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('slot_date', sa.Date(), nullable=False),
        sa.Column('slot_time', sa.String(5), nullable=False),
        sa.Column('booked_guests', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
        sa.UniqueConstraint('slot_date', 'slot_time', name='uq_reservation_slot'),
    )

    # Create promos table
    op.create_table(
        'promos',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('code', sa.String(50), unique=True, nullable=False),
        sa.Column('discount_percent', sa.Integer(), nullable=False),
        sa.Column('expiry_date', sa.DateTime(), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )

    # Create restaurant_settings table
    op.create_table(
        'restaurant_settings',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('max_table_capacity', sa.Integer(), nullable=False, server_default='50'),
        sa.Column('deposit_amount_cents', sa.Integer(), nullable=False, server_default='2500'),
        sa.Column('reservation_duration_minutes', sa.Integer(), nullable=False, server_default='120'),
        sa.Column('cancellation_hours', sa.Integer(), nullable=False, server_default='2'),
        sa.Column('pending_hold_hours', sa.Integer(), nullable=False, server_default='24'),
        sa.Column('operating_hours_open', sa.String(5), nullable=False, server_default='11:00'),
        sa.Column('operating_hours_close', sa.String(5), nullable=False, server_default='22:00'),
        sa.Column('rest_days_open', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('show_promo_section', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('updated_by', sa.String(255)),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )

    # Create activity_logs table
    op.create_table(
        'activity_logs',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('actor_email', sa.String(255), nullable=False),
        sa.Column('action', sa.String(100), nullable=False),
        sa.Column('details', sa.Text()),
        sa.Column('resource_type', sa.String(50)),
        sa.Column('resource_id', sa.String(64)),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
    )
    op.create_index('ix_activity_logs_created_at', 'activity_logs', ['created_at'])


def downgrade() -> None:
    op.drop_table('activity_logs')
    op.drop_table('restaurant_settings')
    op.drop_table('promos')
    op.drop_table('reservation_slots')
    op.drop_table('reservations')
    op.drop_table('orders')
    op.drop_table('customers')
