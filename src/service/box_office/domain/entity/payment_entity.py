from datetime import datetime
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError, InvalidStateError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.domain.enum.payment_status import PaymentMethod, PaymentStatus


@attrs.define
class Payment:
    customer_id: int
    amount: float
    method: PaymentMethod
    currency: str = 'USD'
    status: PaymentStatus = PaymentStatus.PROCESSING
    transaction_reference: str = ''
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls, *, customer_id: int, amount: float, method: PaymentMethod, currency: str = 'USD'
    ) -> 'Payment':
        if amount <= 0:
            raise DomainError('Payment amount must be greater than zero')
        if len(currency) != 3 or not currency.isalpha():
            raise DomainError('Currency must be a three-letter code')
        return cls(
            customer_id=customer_id,
            amount=amount,
            method=method,
            currency=currency.upper(),
            status=PaymentStatus.PROCESSING,
        )

    def ensure_usable_for_purchase(self) -> None:
        if self.status != PaymentStatus.COMPLETED:
            raise InvalidStateError(f'Payment is {self.status}, tickets need a completed payment')

    @Logger.io
    def complete(self, *, transaction_reference: str) -> 'Payment':
        if self.status not in (PaymentStatus.PENDING, PaymentStatus.PROCESSING):
            raise InvalidStateError(f'Cannot complete a {self.status} payment')
        return attrs.evolve(
            self, status=PaymentStatus.COMPLETED, transaction_reference=transaction_reference
        )

    @Logger.io
    def fail(self) -> 'Payment':
        if self.status not in (PaymentStatus.PENDING, PaymentStatus.PROCESSING):
            raise InvalidStateError(f'Cannot fail a {self.status} payment')
        return attrs.evolve(self, status=PaymentStatus.FAILED)

    @Logger.io
    def refund(self) -> 'Payment':
        if self.status != PaymentStatus.COMPLETED:
            raise InvalidStateError('Only completed payments can be refunded')
        return attrs.evolve(self, status=PaymentStatus.REFUNDED)
