from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.command.create_payment_use_case import CreatePaymentUseCase
from src.service.box_office.app.command.update_payment_status_use_case import (
    UpdatePaymentStatusUseCase,
)
from src.service.box_office.app.query.get_payment_use_case import GetPaymentUseCase
from src.service.box_office.domain.entity.user_entity import UserEntity
from src.service.box_office.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    require_supervisor,
)
from src.service.box_office.driving_adapter.schema.payment_schema import (
    PaymentCompleteRequest,
    PaymentCreateRequest,
    PaymentResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_payment(
    request: PaymentCreateRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CreatePaymentUseCase = Depends(CreatePaymentUseCase.depends),
) -> PaymentResponse:
    payment = await use_case.create_payment(
        customer_id=current_user.id,
        amount=request.amount,
        method=request.method,
        currency=request.currency,
    )
    return PaymentResponse.from_entity(payment)


@router.get('/{payment_id}')
@Logger.io
async def get_payment(
    payment_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetPaymentUseCase = Depends(GetPaymentUseCase.depends),
) -> PaymentResponse:
    payment = await use_case.get_payment(payment_id=payment_id, requester=current_user)
    return PaymentResponse.from_entity(payment)


@router.post('/{payment_id}/complete')
@Logger.io
async def complete_payment(
    payment_id: int,
    request: PaymentCompleteRequest | None = None,
    current_user: UserEntity = Depends(get_current_user),
    use_case: UpdatePaymentStatusUseCase = Depends(UpdatePaymentStatusUseCase.depends),
) -> PaymentResponse:
    """Mock gateway confirmation; a transaction reference is generated when none is given"""
    with tracer.start_as_current_span('controller.complete_payment') as span:
        span.set_attribute('payment_id', payment_id)
        payment = await use_case.complete(
            payment_id=payment_id,
            requester=current_user,
            transaction_reference=request.transaction_reference if request else None,
        )
        return PaymentResponse.from_entity(payment)


@router.post('/{payment_id}/fail')
@Logger.io
async def fail_payment(
    payment_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: UpdatePaymentStatusUseCase = Depends(UpdatePaymentStatusUseCase.depends),
) -> PaymentResponse:
    payment = await use_case.fail(payment_id=payment_id, requester=current_user)
    return PaymentResponse.from_entity(payment)


@router.post('/{payment_id}/refund')
@Logger.io
async def refund_payment(
    payment_id: int,
    current_user: UserEntity = Depends(require_supervisor),
    use_case: UpdatePaymentStatusUseCase = Depends(UpdatePaymentStatusUseCase.depends),
) -> PaymentResponse:
    payment = await use_case.refund(payment_id=payment_id, requester=current_user)
    return PaymentResponse.from_entity(payment)
