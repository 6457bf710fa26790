from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.domain.entity.payment_entity import Payment
from src.service.box_office.domain.entity.user_entity import UserEntity


class GetPaymentUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def get_payment(self, *, payment_id: int, requester: UserEntity) -> Payment:
        async with self.uow:
            payment = await self.uow.payment_repo.get_by_id(payment_id=payment_id)
        if not payment:
            raise NotFoundError('Payment not found')
        if not requester.can_access(payment.customer_id):
            raise ForbiddenError('You can only view your own payments')
        return payment
