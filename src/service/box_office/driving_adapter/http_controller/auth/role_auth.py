from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Cookie, Depends
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError
from src.service.box_office.domain.entity.user_entity import UserEntity, UserRole
from src.service.box_office.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


tracer = trace.get_tracer(__name__)


class RoleAuthStrategy:
    @staticmethod
    def is_staff(user: UserEntity) -> bool:
        return user.is_staff

    @staticmethod
    def is_supervisor(user: UserEntity) -> bool:
        return user.is_supervisor

    @staticmethod
    def is_admin(user: UserEntity) -> bool:
        return user.role == UserRole.ADMIN

    @staticmethod
    def ensure_owner_or_staff(user: UserEntity, owner_id: int) -> None:
        if not user.can_access(owner_id):
            raise ForbiddenError('You can only access your own records')


@inject
async def get_current_user(
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
    token: Optional[str] = Cookie(None, alias=settings.AUTH_COOKIE_NAME),
) -> UserEntity:
    return jwt_auth.get_current_user_info_from_jwt(token)


async def require_staff(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
    with tracer.start_as_current_span(
        'auth.require_staff',
        attributes={'user.id': current_user.id, 'user.role': current_user.role.value},
    ):
        if not RoleAuthStrategy.is_staff(current_user):
            raise ForbiddenError('Only box office staff can perform this action')
        return current_user


async def require_supervisor(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
    if not RoleAuthStrategy.is_supervisor(current_user):
        raise ForbiddenError('Only managers and admins can perform this action')
    return current_user


async def require_admin(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
    if not RoleAuthStrategy.is_admin(current_user):
        raise ForbiddenError('Only admins can perform this action')
    return current_user
