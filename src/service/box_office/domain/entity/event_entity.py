from datetime import datetime
from typing import Optional

import attrs


@attrs.define
class Event:
    title: str
    venue_name: str
    venue_address: str = ''
    description: str = ''
    is_active: bool = True
    id: Optional[int] = None
    created_at: Optional[datetime] = None
