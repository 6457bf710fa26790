from typing import Optional

from sqlalchemy import exists, func, select, update as sql_update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.interface.i_order_repo import IOrderRepo
from src.service.box_office.domain.entity.order_entity import Order
from src.service.box_office.domain.enum.order_status import OrderStatus
from src.service.box_office.domain.value_object.customer_details import CustomerDetails
from src.service.box_office.driven_adapter.model.order_model import OrderModel


class OrderRepoImpl(IOrderRepo):
    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _to_entity(db_order: OrderModel) -> Order:
        return Order(
            id=db_order.id,
            customer_id=db_order.customer_id,
            event_id=db_order.event_id,
            performance_id=db_order.performance_id,
            payment_id=db_order.payment_id,
            total_amount=db_order.total_amount,
            status=OrderStatus(db_order.status),
            customer=CustomerDetails(
                first_name=db_order.customer_first_name,
                last_name=db_order.customer_last_name,
                email=db_order.customer_email,
            ),
            created_at=db_order.created_at,
            updated_at=db_order.updated_at,
        )

    @Logger.io
    async def create(self, *, order: Order) -> Order:
        db_order = OrderModel(
            customer_id=order.customer_id,
            event_id=order.event_id,
            performance_id=order.performance_id,
            payment_id=order.payment_id,
            total_amount=order.total_amount,
            status=order.status.value,
            customer_first_name=order.customer.first_name,
            customer_last_name=order.customer.last_name,
            customer_email=order.customer.email,
        )
        self.session.add(db_order)
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise ConflictError('Payment has already been used for an order') from e
        await self.session.refresh(db_order)
        return self._to_entity(db_order)

    @Logger.io
    async def get_by_id(self, *, order_id: int) -> Optional[Order]:
        result = await self.session.execute(select(OrderModel).where(OrderModel.id == order_id))
        db_order = result.scalar_one_or_none()
        return self._to_entity(db_order) if db_order else None

    @Logger.io
    async def exists_for_payment(self, *, payment_id: int) -> bool:
        result = await self.session.execute(
            select(exists().where(OrderModel.payment_id == payment_id))
        )
        return bool(result.scalar())

    @Logger.io
    async def update_status(self, *, order: Order) -> Order:
        result = await self.session.execute(
            sql_update(OrderModel)
            .where(OrderModel.id == order.id)
            .values(status=order.status.value, updated_at=func.now())
            .returning(OrderModel)
            .execution_options(synchronize_session=False, populate_existing=True)
        )
        db_order = result.scalar_one_or_none()
        if not db_order:
            raise NotFoundError('Order not found')
        updated = self._to_entity(db_order)
        updated.tickets = order.tickets
        return updated
