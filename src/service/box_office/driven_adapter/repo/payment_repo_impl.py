from typing import Optional

from sqlalchemy import func, select, update as sql_update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.interface.i_payment_repo import IPaymentRepo
from src.service.box_office.domain.entity.payment_entity import Payment
from src.service.box_office.domain.enum.payment_status import PaymentMethod, PaymentStatus
from src.service.box_office.driven_adapter.model.payment_model import PaymentModel


class PaymentRepoImpl(IPaymentRepo):
    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _to_entity(db_payment: PaymentModel) -> Payment:
        return Payment(
            id=db_payment.id,
            customer_id=db_payment.customer_id,
            amount=db_payment.amount,
            currency=db_payment.currency,
            method=PaymentMethod(db_payment.method),
            status=PaymentStatus(db_payment.status),
            transaction_reference=db_payment.transaction_reference,
            created_at=db_payment.created_at,
            updated_at=db_payment.updated_at,
        )

    @Logger.io
    async def create(self, *, payment: Payment) -> Payment:
        db_payment = PaymentModel(
            customer_id=payment.customer_id,
            amount=payment.amount,
            currency=payment.currency,
            method=payment.method.value,
            status=payment.status.value,
            transaction_reference=payment.transaction_reference,
        )
        self.session.add(db_payment)
        await self.session.flush()
        await self.session.refresh(db_payment)
        return self._to_entity(db_payment)

    @Logger.io
    async def get_by_id(self, *, payment_id: int) -> Optional[Payment]:
        result = await self.session.execute(
            select(PaymentModel).where(PaymentModel.id == payment_id)
        )
        db_payment = result.scalar_one_or_none()
        return self._to_entity(db_payment) if db_payment else None

    @Logger.io
    async def update(self, *, payment: Payment) -> Payment:
        result = await self.session.execute(
            sql_update(PaymentModel)
            .where(PaymentModel.id == payment.id)
            .values(
                status=payment.status.value,
                transaction_reference=payment.transaction_reference,
                updated_at=func.now(),
            )
            .returning(PaymentModel)
            .execution_options(synchronize_session=False, populate_existing=True)
        )
        db_payment = result.scalar_one_or_none()
        if not db_payment:
            raise NotFoundError('Payment not found')
        return self._to_entity(db_payment)
