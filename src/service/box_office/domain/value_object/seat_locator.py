from typing import Optional

import attrs

from src.service.box_office.domain.enum.ticket_status import TicketCategory


@attrs.frozen
class SeatLocator:
    """Physical seat of a performance; tickets without one are general admission"""

    section: str
    row: str
    seat: str

    @property
    def label(self) -> str:
        return f'{self.section} - Row {self.row}, Seat {self.seat}'


@attrs.frozen
class SeatSelection:
    price: float
    category: TicketCategory = TicketCategory.STANDARD
    locator: Optional[SeatLocator] = None

    @property
    def label(self) -> str:
        return self.locator.label if self.locator else 'General Admission'
