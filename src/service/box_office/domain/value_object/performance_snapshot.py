from datetime import date

import attrs


@attrs.frozen
class PerformanceSnapshot:
    """
    Date and time of a performance as they were when the ticket was issued.

    Not refreshed when the performance is rescheduled; the live values are on
    the Performance itself.
    """

    date: date
    start_time: str
    end_time: str
