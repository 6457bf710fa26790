from enum import StrEnum
from typing import Any


class TicketStatus(StrEnum):
    RESERVED = 'reserved'
    PURCHASED = 'purchased'
    USED = 'used'
    CANCELLED = 'cancelled'
    REFUNDED = 'refunded'

    @classmethod
    def _missing_(cls, value: Any) -> 'TicketStatus | None':
        normalized = str(value).strip().lower()
        normalized = TICKET_STATUS_ALIASES.get(normalized, normalized)
        return cls._value2member_map_.get(normalized)  # type: ignore[return-value]

    @property
    def occupies_inventory(self) -> bool:
        return self in OCCUPYING_TICKET_STATUSES

    @property
    def is_terminal(self) -> bool:
        return self in (TicketStatus.USED, TicketStatus.CANCELLED, TicketStatus.REFUNDED)


class TicketPaymentStatus(StrEnum):
    PENDING = 'pending'
    COMPLETED = 'completed'
    FAILED = 'failed'
    REFUNDED = 'refunded'
    CANCELLED = 'cancelled'

    @classmethod
    def _missing_(cls, value: Any) -> 'TicketPaymentStatus | None':
        normalized = str(value).strip().lower()
        normalized = TICKET_PAYMENT_STATUS_ALIASES.get(normalized, normalized)
        return cls._value2member_map_.get(normalized)  # type: ignore[return-value]


class TicketCategory(StrEnum):
    PREMIUM = 'premium'
    STANDARD = 'standard'
    ECONOMY = 'economy'


# Values accepted at the API boundary that older clients still send
TICKET_STATUS_ALIASES: dict[str, str] = {
    'active': 'purchased',
    'checked-in': 'used',
    'checked_in': 'used',
}

TICKET_PAYMENT_STATUS_ALIASES: dict[str, str] = {
    'paid': 'completed',
}

OCCUPYING_TICKET_STATUSES = frozenset(
    {TicketStatus.RESERVED, TicketStatus.PURCHASED, TicketStatus.USED}
)
