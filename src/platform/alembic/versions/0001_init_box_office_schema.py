"""init_box_office_schema

Revision ID: 0001
Revises:
Create Date: 2025-12-06

Schema:
- event: Events with venue name/address
- performance: Showings with inventory counters (CHECK 0 <= available <= capacity)
- payment: Payments backing orders and tickets
- ticket_order: One payment -> N tickets (payment_id unique)
- ticket: Tickets; partial unique index keeps one non-cancelled ticket per seat
- inventory_adjustment: Audit ledger of available_tickets changes
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            'updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    ]


def _customer_columns() -> list[sa.Column]:
    return [
        sa.Column('customer_first_name', sa.String(length=100), nullable=False),
        sa.Column('customer_last_name', sa.String(length=100), nullable=False),
        sa.Column('customer_email', sa.String(length=255), nullable=False),
    ]


def upgrade() -> None:
    """Create all tables with final schema."""

    op.create_table(
        'event',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('venue_name', sa.String(length=255), nullable=False),
        sa.Column('venue_address', sa.String(length=500), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'performance',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('event_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.String(length=5), nullable=False),
        sa.Column('end_time', sa.String(length=5), nullable=False),
        sa.Column('total_capacity', sa.Integer(), nullable=False),
        sa.Column('available_tickets', sa.Integer(), nullable=False),
        sa.Column('is_sold_out', sa.Boolean(), nullable=False),
        sa.Column('ticket_types', sa.JSON(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_cancelled', sa.Boolean(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('total_capacity >= 0', name='ck_performance_capacity_non_negative'),
        sa.CheckConstraint(
            'available_tickets >= 0 AND available_tickets <= total_capacity',
            name='ck_performance_available_within_capacity',
        ),
        sa.ForeignKeyConstraint(['event_id'], ['event.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_performance_event_id', 'performance', ['event_id'])
    op.create_index('ix_performance_is_sold_out', 'performance', ['is_sold_out'])

    op.create_table(
        'payment',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('customer_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Float(), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('method', sa.String(length=20), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('transaction_reference', sa.String(length=100), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('amount > 0', name='ck_payment_amount_positive'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_payment_customer_id', 'payment', ['customer_id'])

    op.create_table(
        'ticket_order',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('customer_id', sa.Integer(), nullable=False),
        sa.Column('event_id', sa.Integer(), nullable=False),
        sa.Column('performance_id', sa.Integer(), nullable=False),
        sa.Column('payment_id', sa.Integer(), nullable=False),
        sa.Column('total_amount', sa.Float(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        *_customer_columns(),
        *_timestamps(),
        sa.ForeignKeyConstraint(['event_id'], ['event.id']),
        sa.ForeignKeyConstraint(['performance_id'], ['performance.id']),
        sa.ForeignKeyConstraint(['payment_id'], ['payment.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('payment_id'),
    )
    op.create_index('ix_ticket_order_customer_id', 'ticket_order', ['customer_id'])
    op.create_index('ix_ticket_order_performance_id', 'ticket_order', ['performance_id'])

    op.create_table(
        'ticket',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('ticket_number', sa.String(length=32), nullable=False),
        sa.Column('event_id', sa.Integer(), nullable=False),
        sa.Column('performance_id', sa.Integer(), nullable=False),
        sa.Column('order_id', sa.Integer(), nullable=True),
        sa.Column('payment_id', sa.Integer(), nullable=True),
        sa.Column('customer_id', sa.Integer(), nullable=False),
        *_customer_columns(),
        sa.Column('performance_date', sa.Date(), nullable=False),
        sa.Column('performance_start_time', sa.String(length=5), nullable=False),
        sa.Column('performance_end_time', sa.String(length=5), nullable=False),
        sa.Column('seat_section', sa.String(length=50), nullable=True),
        sa.Column('seat_row', sa.String(length=20), nullable=True),
        sa.Column('seat_number', sa.String(length=20), nullable=True),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('category', sa.String(length=20), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('payment_status', sa.String(length=20), nullable=False),
        sa.Column('payment_method', sa.String(length=20), nullable=False),
        sa.Column('barcode_data', sa.String(length=255), nullable=False),
        sa.Column('qr_code_data', sa.Text(), nullable=False),
        sa.Column(
            'purchase_date',
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(['event_id'], ['event.id']),
        sa.ForeignKeyConstraint(['performance_id'], ['performance.id']),
        sa.ForeignKeyConstraint(['order_id'], ['ticket_order.id']),
        sa.ForeignKeyConstraint(['payment_id'], ['payment.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('uq_ticket_ticket_number', 'ticket', ['ticket_number'], unique=True)
    op.create_index('ix_ticket_performance_id', 'ticket', ['performance_id'])
    op.create_index('ix_ticket_order_id', 'ticket', ['order_id'])
    op.create_index('ix_ticket_customer_id', 'ticket', ['customer_id'])
    op.create_index('ix_ticket_performance_status', 'ticket', ['performance_id', 'status'])
    # Cancelled tickets release their seat; every other status holds it
    op.create_index(
        'uq_ticket_active_seat',
        'ticket',
        ['performance_id', 'seat_section', 'seat_row', 'seat_number'],
        unique=True,
        postgresql_where=sa.text("status <> 'cancelled'"),
        sqlite_where=sa.text("status <> 'cancelled'"),
    )

    op.create_table(
        'inventory_adjustment',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('performance_id', sa.Integer(), nullable=False),
        sa.Column('kind', sa.String(length=30), nullable=False),
        sa.Column('delta', sa.Integer(), nullable=False),
        sa.Column('available_after', sa.Integer(), nullable=False),
        sa.Column('actor_id', sa.Integer(), nullable=True),
        sa.Column('reason', sa.String(length=500), nullable=False),
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.ForeignKeyConstraint(['performance_id'], ['performance.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_inventory_adjustment_performance_id', 'inventory_adjustment', ['performance_id']
    )


def downgrade() -> None:
    op.drop_table('inventory_adjustment')
    op.drop_table('ticket')
    op.drop_table('ticket_order')
    op.drop_table('payment')
    op.drop_table('performance')
    op.drop_table('event')
