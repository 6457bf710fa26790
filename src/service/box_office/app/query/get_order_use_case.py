from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.domain.entity.order_entity import Order
from src.service.box_office.domain.entity.user_entity import UserEntity


class GetOrderUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def get_order(self, *, order_id: int, requester: UserEntity) -> Order:
        async with self.uow:
            order = await self.uow.order_repo.get_by_id(order_id=order_id)
            if not order:
                raise NotFoundError('Order not found')
            if not requester.can_access(order.customer_id):
                raise ForbiddenError('You can only view your own orders')
            order.tickets = await self.uow.ticket_repo.list_by_order(order_id=order_id)
        return order
