from typing import List

from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.command.create_performance_use_case import (
    CreatePerformanceUseCase,
)
from src.service.box_office.app.command.delete_performance_use_case import (
    DeletePerformanceUseCase,
)
from src.service.box_office.app.command.override_available_tickets_use_case import (
    OverrideAvailableTicketsUseCase,
)
from src.service.box_office.app.command.update_performance_use_case import (
    UpdatePerformanceUseCase,
)
from src.service.box_office.app.query.get_performance_use_case import GetPerformanceUseCase
from src.service.box_office.domain.entity.user_entity import UserEntity
from src.service.box_office.driving_adapter.http_controller.auth.role_auth import (
    require_admin,
    require_staff,
    require_supervisor,
)
from src.service.box_office.driving_adapter.schema.performance_schema import (
    AvailableTicketsOverrideRequest,
    InventoryAdjustmentResponse,
    PerformanceCreateRequest,
    PerformanceDeleteResponse,
    PerformanceResponse,
    PerformanceUpdateRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_performance(
    request: PerformanceCreateRequest,
    current_user: UserEntity = Depends(require_staff),
    use_case: CreatePerformanceUseCase = Depends(CreatePerformanceUseCase.depends),
) -> PerformanceResponse:
    performance = await use_case.create_performance(
        event_id=request.event_id,
        date=request.date,
        start_time=request.start_time,
        end_time=request.end_time,
        ticket_types=[ticket_type.to_value() for ticket_type in request.ticket_types],
        notes=request.notes,
    )
    return PerformanceResponse.from_entity(performance)


@router.get('/{performance_id}')
@Logger.io
async def get_performance(
    performance_id: int,
    use_case: GetPerformanceUseCase = Depends(GetPerformanceUseCase.depends),
) -> PerformanceResponse:
    performance = await use_case.get_performance(performance_id=performance_id)
    return PerformanceResponse.from_entity(performance)


@router.patch('/{performance_id}')
@Logger.io
async def update_performance(
    performance_id: int,
    request: PerformanceUpdateRequest,
    current_user: UserEntity = Depends(require_staff),
    use_case: UpdatePerformanceUseCase = Depends(UpdatePerformanceUseCase.depends),
) -> PerformanceResponse:
    performance = await use_case.update_performance(
        performance_id=performance_id,
        date=request.date,
        start_time=request.start_time,
        end_time=request.end_time,
        ticket_types=(
            [ticket_type.to_value() for ticket_type in request.ticket_types]
            if request.ticket_types is not None
            else None
        ),
        notes=request.notes,
        is_active=request.is_active,
        is_cancelled=request.is_cancelled,
    )
    return PerformanceResponse.from_entity(performance)


@router.delete('/{performance_id}')
@Logger.io
async def delete_performance(
    performance_id: int,
    current_user: UserEntity = Depends(require_supervisor),
    use_case: DeletePerformanceUseCase = Depends(DeletePerformanceUseCase.depends),
) -> PerformanceDeleteResponse:
    removal = await use_case.delete_performance(performance_id=performance_id)
    return PerformanceDeleteResponse(
        id=performance_id,
        deleted=removal.deleted,
        is_active=removal.performance.is_active,
        message=(
            'Performance deleted'
            if removal.deleted
            else 'Performance has tickets and was deactivated instead'
        ),
    )


@router.put('/{performance_id}/available_tickets')
@Logger.io
async def override_available_tickets(
    performance_id: int,
    request: AvailableTicketsOverrideRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: OverrideAvailableTicketsUseCase = Depends(OverrideAvailableTicketsUseCase.depends),
) -> PerformanceResponse:
    with tracer.start_as_current_span('controller.override_available_tickets') as span:
        span.set_attribute('performance_id', performance_id)
        span.set_attribute('available_tickets', request.available_tickets)
        span.set_attribute('actor_id', current_user.id)

        performance = await use_case.override(
            performance_id=performance_id,
            value=request.available_tickets,
            actor_id=current_user.id,
            reason=request.reason,
        )
        return PerformanceResponse.from_entity(performance)


@router.get('/{performance_id}/adjustments')
@Logger.io
async def list_inventory_adjustments(
    performance_id: int,
    current_user: UserEntity = Depends(require_staff),
    use_case: GetPerformanceUseCase = Depends(GetPerformanceUseCase.depends),
) -> List[InventoryAdjustmentResponse]:
    adjustments = await use_case.list_adjustments(performance_id=performance_id)
    return [InventoryAdjustmentResponse.from_entity(adjustment) for adjustment in adjustments]
