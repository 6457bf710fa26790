from datetime import datetime
from typing import Optional

import attrs

from src.service.box_office.domain.enum.inventory_adjustment_kind import InventoryAdjustmentKind


@attrs.define
class InventoryAdjustment:
    """One audited change of a performance's available_tickets"""

    performance_id: int
    kind: InventoryAdjustmentKind
    delta: int
    available_after: int
    actor_id: Optional[int] = None
    reason: str = ''
    id: Optional[int] = None
    created_at: Optional[datetime] = None
