from enum import Enum

import attrs


class UserRole(str, Enum):
    CUSTOMER = 'customer'
    STAFF = 'staff'
    MANAGER = 'manager'
    ADMIN = 'admin'


STAFF_ROLES = frozenset({UserRole.STAFF, UserRole.MANAGER, UserRole.ADMIN})
SUPERVISOR_ROLES = frozenset({UserRole.MANAGER, UserRole.ADMIN})


@attrs.define
class UserEntity:
    """Caller identity taken from the auth token; users are managed elsewhere"""

    id: int
    role: UserRole = UserRole.CUSTOMER
    email: str = ''
    name: str = ''

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES

    @property
    def is_supervisor(self) -> bool:
        return self.role in SUPERVISOR_ROLES

    def can_access(self, owner_id: int) -> bool:
        return self.is_staff or self.id == owner_id
