"""initial_rental_schema

Revision ID: 5d1e0a7c3b21
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '5d1e0a7c3b21'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_ITEM_STATUS = ('Available', 'Rented', 'Maintenance', 'Lost', 'Retired')
_ITEM_HOLD = ('Maintenance', 'Retired')
_BASKET_STATUS = ('Active', 'Returned', 'Lost')
_SOURCE = ('Center', 'Customer Own')
_ASSIGNMENT_STATUS = ('Pending', 'Checked Out', 'Returned', 'Lost')


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'customers',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=64), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_customers_id'), 'customers', ['id'], unique=False)

    op.create_table(
        'bookings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('customer_id', sa.Integer(), nullable=False),
        sa.Column('booking_date', sa.Date(), nullable=False),
        sa.Column('notes', sa.String(length=2000), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['customer_id'], ['customers.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_bookings_id'), 'bookings', ['id'], unique=False)
    op.create_index(op.f('ix_bookings_customer_id'), 'bookings', ['customer_id'], unique=False)

    op.create_table(
        'equipment',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('category', sa.String(length=128), nullable=True),
        sa.Column('description', sa.String(length=2000), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_equipment_id'), 'equipment', ['id'], unique=False)

    op.create_table(
        'equipment_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('equipment_id', sa.Integer(), nullable=False),
        sa.Column('serial_no', sa.String(length=128), nullable=True),
        sa.Column('inventory_code', sa.String(length=64), nullable=True),
        sa.Column('size', sa.String(length=32), nullable=True),
        sa.Column('brand', sa.String(length=128), nullable=True),
        sa.Column('color', sa.String(length=64), nullable=True),
        sa.Column('status', sa.Enum(*_ITEM_STATUS, name='itemstatus'), nullable=False),
        sa.Column('hold_status', sa.Enum(*_ITEM_HOLD, name='itemhold'), nullable=True),
        sa.Column('lock_version', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['equipment_id'], ['equipment.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_equipment_items_id'), 'equipment_items', ['id'], unique=False)
    op.create_index(op.f('ix_equipment_items_equipment_id'), 'equipment_items', ['equipment_id'], unique=False)
    op.create_index(op.f('ix_equipment_items_inventory_code'), 'equipment_items', ['inventory_code'], unique=True)
    op.create_index(op.f('ix_equipment_items_status'), 'equipment_items', ['status'], unique=False)

    op.create_table(
        'equipment_baskets',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('customer_id', sa.Integer(), nullable=False),
        sa.Column('booking_id', sa.Integer(), nullable=True),
        sa.Column('basket_no', sa.String(length=32), nullable=False),
        sa.Column('center_bucket_no', sa.String(length=255), nullable=True),
        sa.Column('checkout_date', sa.Date(), nullable=False),
        sa.Column('expected_return_date', sa.Date(), nullable=True),
        sa.Column('actual_return_date', sa.Date(), nullable=True),
        sa.Column('status', sa.Enum(*_BASKET_STATUS, name='basketstatus'), nullable=False),
        sa.Column('notes', sa.String(length=2000), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['customer_id'], ['customers.id']),
        sa.ForeignKeyConstraint(['booking_id'], ['bookings.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_equipment_baskets_id'), 'equipment_baskets', ['id'], unique=False)
    op.create_index(op.f('ix_equipment_baskets_customer_id'), 'equipment_baskets', ['customer_id'], unique=False)
    op.create_index(op.f('ix_equipment_baskets_basket_no'), 'equipment_baskets', ['basket_no'], unique=True)
    op.create_index(op.f('ix_equipment_baskets_status'), 'equipment_baskets', ['status'], unique=False)

    op.create_table(
        'booking_equipment',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('booking_id', sa.Integer(), nullable=True),
        sa.Column('basket_id', sa.Integer(), nullable=True),
        sa.Column('equipment_item_id', sa.Integer(), nullable=True),
        sa.Column('equipment_source', sa.Enum(*_SOURCE, name='equipmentsource'), nullable=False),
        sa.Column('price', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('checkout_date', sa.Date(), nullable=True),
        sa.Column('return_date', sa.Date(), nullable=True),
        sa.Column('actual_return_date', sa.Date(), nullable=True),
        sa.Column('customer_equipment_type', sa.String(length=255), nullable=True),
        sa.Column('customer_equipment_brand', sa.String(length=255), nullable=True),
        sa.Column('customer_equipment_model', sa.String(length=255), nullable=True),
        sa.Column('customer_equipment_serial', sa.String(length=255), nullable=True),
        sa.Column('customer_equipment_notes', sa.String(length=2000), nullable=True),
        sa.Column('assignment_status', sa.Enum(*_ASSIGNMENT_STATUS, name='assignmentstatus'), nullable=False),
        sa.Column('damage_reported', sa.Boolean(), nullable=False),
        sa.Column('damage_description', sa.String(length=2000), nullable=True),
        sa.Column('damage_cost', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('charge_customer', sa.Boolean(), nullable=False),
        sa.Column('damage_charge_amount', sa.Numeric(precision=12, scale=2), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['booking_id'], ['bookings.id']),
        sa.ForeignKeyConstraint(['basket_id'], ['equipment_baskets.id']),
        sa.ForeignKeyConstraint(['equipment_item_id'], ['equipment_items.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_booking_equipment_id'), 'booking_equipment', ['id'], unique=False)
    op.create_index(op.f('ix_booking_equipment_booking_id'), 'booking_equipment', ['booking_id'], unique=False)
    op.create_index(op.f('ix_booking_equipment_basket_id'), 'booking_equipment', ['basket_id'], unique=False)
    op.create_index(
        op.f('ix_booking_equipment_assignment_status'), 'booking_equipment', ['assignment_status'], unique=False
    )
    op.create_index(
        'ix_booking_equipment_availability',
        'booking_equipment',
        ['equipment_item_id', 'checkout_date', 'return_date'],
        unique=False,
    )


def downgrade() -> None:
    op.drop_table('booking_equipment')
    op.drop_table('equipment_baskets')
    op.drop_table('equipment_items')
    op.drop_table('equipment')
    op.drop_table('bookings')
    op.drop_table('customers')
    # Enum typy (PostgreSQL), pro SQLite no-op
    for name in ('assignmentstatus', 'equipmentsource', 'basketstatus', 'itemhold', 'itemstatus'):
        sa.Enum(name=name).drop(op.get_bind(), checkfirst=True)
