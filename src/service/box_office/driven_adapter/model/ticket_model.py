from datetime import date, datetime
from typing import Optional

from sqlalchemy import (
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.db_setting import Base


SEAT_UNIQUE_INDEX_NAME = 'uq_ticket_active_seat'
TICKET_NUMBER_UNIQUE_NAME = 'uq_ticket_ticket_number'

# Cancelled tickets give their seat back; every other status keeps holding it
_SEAT_HELD_CLAUSE = text("status <> 'cancelled'")


class TicketModel(Base):
    __tablename__ = 'ticket'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ticket_number: Mapped[str] = mapped_column(String(32), nullable=False)
    event_id: Mapped[int] = mapped_column(Integer, ForeignKey('event.id'), nullable=False)
    performance_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('performance.id'), nullable=False, index=True
    )
    order_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey('ticket_order.id'), nullable=True, index=True
    )
    payment_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey('payment.id'), nullable=True
    )
    customer_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    customer_first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    customer_last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    customer_email: Mapped[str] = mapped_column(String(255), nullable=False)

    # Point-in-time copy of the performance schedule
    performance_date: Mapped[date] = mapped_column(Date, nullable=False)
    performance_start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    performance_end_time: Mapped[str] = mapped_column(String(5), nullable=False)

    seat_section: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    seat_row: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    seat_number: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    price: Mapped[float] = mapped_column(Float, nullable=False)
    category: Mapped[str] = mapped_column(String(20), nullable=False, default='standard')
    status: Mapped[str] = mapped_column(String(20), nullable=False, default='reserved')
    payment_status: Mapped[str] = mapped_column(String(20), nullable=False, default='pending')
    payment_method: Mapped[str] = mapped_column(String(20), nullable=False)
    barcode_data: Mapped[str] = mapped_column(String(255), nullable=False)
    qr_code_data: Mapped[str] = mapped_column(Text, nullable=False)
    purchase_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    __table_args__ = (
        Index(TICKET_NUMBER_UNIQUE_NAME, 'ticket_number', unique=True),
        Index(
            SEAT_UNIQUE_INDEX_NAME,
            'performance_id',
            'seat_section',
            'seat_row',
            'seat_number',
            unique=True,
            postgresql_where=_SEAT_HELD_CLAUSE,
            sqlite_where=_SEAT_HELD_CLAUSE,
        ),
        Index('ix_ticket_performance_status', 'performance_id', 'status'),
    )
