from enum import StrEnum


class InventoryAdjustmentKind(StrEnum):
    PURCHASE = 'purchase'
    RESERVATION = 'reservation'
    CANCELLATION = 'cancellation'
    REFUND = 'refund'
    REACTIVATION = 'reactivation'
    MANUAL_OVERRIDE = 'manual_override'

    @property
    def is_workflow(self) -> bool:
        return self is not InventoryAdjustmentKind.MANUAL_OVERRIDE
