from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.db_setting import Base


class InventoryAdjustmentModel(Base):
    """Append-only audit ledger of available_tickets changes"""

    __tablename__ = 'inventory_adjustment'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    performance_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('performance.id'), nullable=False, index=True
    )
    kind: Mapped[str] = mapped_column(String(30), nullable=False)
    delta: Mapped[int] = mapped_column(Integer, nullable=False)
    available_after: Mapped[int] = mapped_column(Integer, nullable=False)
    actor_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    reason: Mapped[str] = mapped_column(String(500), nullable=False, default='')
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
