from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.command.create_order_use_case import CreateOrderUseCase
from src.service.box_office.app.command.update_order_status_use_case import (
    UpdateOrderStatusUseCase,
)
from src.service.box_office.app.query.get_order_use_case import GetOrderUseCase
from src.service.box_office.domain.entity.user_entity import UserEntity
from src.service.box_office.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    require_supervisor,
)
from src.service.box_office.driving_adapter.schema.order_schema import (
    OrderCreateRequest,
    OrderResponse,
    OrderStatusUpdateRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_order(
    request: OrderCreateRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CreateOrderUseCase = Depends(CreateOrderUseCase.depends),
) -> OrderResponse:
    with tracer.start_as_current_span('controller.create_order') as span:
        span.set_attribute('payment_id', request.payment_id)
        span.set_attribute('event_id', request.event_id)
        span.set_attribute('performance_id', request.performance_id)
        span.set_attribute('quantity', len(request.seats))
        span.set_attribute('customer_id', current_user.id)

        order = await use_case.create_order(
            customer_id=current_user.id,
            payment_id=request.payment_id,
            event_id=request.event_id,
            performance_id=request.performance_id,
            selections=[seat.to_value() for seat in request.seats],
            customer=request.customer.to_value(),
        )

        span.set_attribute('order.id', order.id or 0)
        return OrderResponse.from_entity(order)


@router.get('/{order_id}')
@Logger.io
async def get_order(
    order_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetOrderUseCase = Depends(GetOrderUseCase.depends),
) -> OrderResponse:
    order = await use_case.get_order(order_id=order_id, requester=current_user)
    return OrderResponse.from_entity(order)


@router.patch('/{order_id}/status')
@Logger.io
async def update_order_status(
    order_id: int,
    request: OrderStatusUpdateRequest,
    current_user: UserEntity = Depends(require_supervisor),
    use_case: UpdateOrderStatusUseCase = Depends(UpdateOrderStatusUseCase.depends),
) -> OrderResponse:
    with tracer.start_as_current_span('controller.update_order_status') as span:
        span.set_attribute('order_id', order_id)
        span.set_attribute('status', request.status.value)

        order = await use_case.update_status(
            order_id=order_id, new_status=request.status, actor_id=current_user.id
        )
        return OrderResponse.from_entity(order)
