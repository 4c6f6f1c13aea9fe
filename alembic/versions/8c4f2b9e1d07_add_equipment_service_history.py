"""add equipment service history

Revision ID: 8c4f2b9e1d07
Revises: 5d1e0a7c3b21
Create Date: 2026-10-20 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

revision = '8c4f2b9e1d07'
down_revision = '5d1e0a7c3b21'
branch_labels = None
depends_on = None


def upgrade() -> None:
    with op.batch_alter_table('equipment_items') as batch_op:
        batch_op.add_column(sa.Column('purchase_date', sa.Date(), nullable=True))
        batch_op.add_column(sa.Column('requires_service', sa.Boolean(), nullable=False, server_default=sa.false()))
        batch_op.add_column(sa.Column('service_interval_days', sa.Integer(), nullable=True))
        batch_op.add_column(sa.Column('last_service_date', sa.Date(), nullable=True))
        batch_op.add_column(sa.Column('next_service_date', sa.Date(), nullable=True))
        batch_op.create_index('ix_equipment_items_next_service_date', ['next_service_date'], unique=False)

    op.create_table(
        'equipment_service_history',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('equipment_item_id', sa.Integer(), nullable=False),
        sa.Column('service_date', sa.Date(), nullable=False),
        sa.Column('service_type', sa.String(length=255), nullable=True),
        sa.Column('technician', sa.String(length=255), nullable=True),
        sa.Column('service_provider', sa.String(length=255), nullable=True),
        sa.Column('cost', sa.Numeric(10, 2), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('parts_replaced', sa.Text(), nullable=True),
        sa.Column('warranty_info', sa.Text(), nullable=True),
        sa.Column('next_service_due_date', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['equipment_item_id'], ['equipment_items.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_equipment_service_history_id', 'equipment_service_history', ['id'], unique=False)
    op.create_index(
        'ix_equipment_service_history_equipment_item_id', 'equipment_service_history', ['equipment_item_id'],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index('ix_equipment_service_history_equipment_item_id', table_name='equipment_service_history')
    op.drop_index('ix_equipment_service_history_id', table_name='equipment_service_history')
    op.drop_table('equipment_service_history')
    with op.batch_alter_table('equipment_items') as batch_op:
        batch_op.drop_index('ix_equipment_items_next_service_date')
        batch_op.drop_column('next_service_date')
        batch_op.drop_column('last_service_date')
        batch_op.drop_column('service_interval_days')
        batch_op.drop_column('requires_service')
        batch_op.drop_column('purchase_date')
