"""
Payment lifecycle: processing -> completed | failed, completed -> refunded

There is no external gateway; `complete` stands in for the gateway callback
and records a generated transaction reference.
"""

import secrets
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.transaction_retry import retry_on_conflict
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.domain.entity.payment_entity import Payment
from src.service.box_office.domain.entity.user_entity import UserEntity


def generate_transaction_reference() -> str:
    return f'PAY_MOCK_{secrets.token_hex(4).upper()}'


class UpdatePaymentStatusUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    async def _load(self, *, payment_id: int, requester: UserEntity) -> Payment:
        payment = await self.uow.payment_repo.get_by_id(payment_id=payment_id)
        if not payment:
            raise NotFoundError('Payment not found')
        if not requester.can_access(payment.customer_id):
            raise ForbiddenError('Only the payer or box office staff can change this payment')
        return payment

    @Logger.io
    @retry_on_conflict
    async def complete(
        self,
        *,
        payment_id: int,
        requester: UserEntity,
        transaction_reference: Optional[str] = None,
    ) -> Payment:
        async with self.uow:
            payment = await self._load(payment_id=payment_id, requester=requester)
            updated = await self.uow.payment_repo.update(
                payment=payment.complete(
                    transaction_reference=transaction_reference
                    or generate_transaction_reference()
                )
            )
            await self.uow.commit()
        return updated

    @Logger.io
    @retry_on_conflict
    async def fail(self, *, payment_id: int, requester: UserEntity) -> Payment:
        async with self.uow:
            payment = await self._load(payment_id=payment_id, requester=requester)
            updated = await self.uow.payment_repo.update(payment=payment.fail())
            await self.uow.commit()
        return updated

    @Logger.io
    @retry_on_conflict
    async def refund(self, *, payment_id: int, requester: UserEntity) -> Payment:
        async with self.uow:
            payment = await self._load(payment_id=payment_id, requester=requester)
            updated = await self.uow.payment_repo.update(payment=payment.refund())
            await self.uow.commit()
        return updated
