from collections import Counter
from typing import Dict, List, Optional

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.metrics.box_office_metrics import metrics
from src.service.box_office.domain.entity.ticket_entity import TicketTransition
from src.service.box_office.domain.enum.inventory_adjustment_kind import InventoryAdjustmentKind


async def restore_inventory(
    *,
    uow: AbstractUnitOfWork,
    transitions: List[TicketTransition],
    kind: InventoryAdjustmentKind,
    actor_id: Optional[int] = None,
) -> Dict[int, int]:
    """
    Give released units back, one increment per affected performance.

    Must run inside the caller's `async with uow` so the status writes and the
    increments commit together. Returns performance_id -> available_tickets.
    """
    released: Counter[int] = Counter()
    for transition in transitions:
        if transition.inventory_delta > 0:
            released[transition.ticket.performance_id] += transition.inventory_delta

    remaining: Dict[int, int] = {}
    # Fixed order so concurrent cancellations lock performances the same way
    for performance_id in sorted(released):
        available = await uow.performance_repo.increment_available(
            performance_id=performance_id,
            quantity=released[performance_id],
            kind=kind,
            actor_id=actor_id,
        )
        metrics.record_inventory_change(
            performance_id=performance_id, kind=kind, available=available
        )
        remaining[performance_id] = available
    return remaining
