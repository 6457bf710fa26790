import attrs

from src.platform.exception.exceptions import DomainError


@attrs.frozen
class TicketType:
    name: str
    price: float
    available_count: int
    description: str = ''

    def validate(self) -> None:
        if not self.name:
            raise DomainError('Ticket type name is required')
        if self.price < 0:
            raise DomainError(f'Ticket type {self.name} price must not be negative')
        if self.available_count < 0:
            raise DomainError(f'Ticket type {self.name} available count must not be negative')

    def to_dict(self) -> dict:
        return attrs.asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'TicketType':
        return cls(
            name=data['name'],
            price=data['price'],
            available_count=data['available_count'],
            description=data.get('description', ''),
        )
