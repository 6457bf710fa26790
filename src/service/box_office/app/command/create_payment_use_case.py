from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.box_office.domain.entity.payment_entity import Payment
from src.service.box_office.domain.enum.payment_status import PaymentMethod


class CreatePaymentUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def create_payment(
        self, *, customer_id: int, amount: float, method: PaymentMethod, currency: str = 'USD'
    ) -> Payment:
        payment = Payment.create(
            customer_id=customer_id, amount=amount, method=method, currency=currency
        )
        async with self.uow:
            created = await self.uow.payment_repo.create(payment=payment)
            await self.uow.commit()
        return created
