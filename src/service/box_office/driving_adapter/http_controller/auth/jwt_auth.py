"""
Stateless cookie authentication

Users live in another system; the token carries everything the box office
needs about the caller, so no database lookup happens per request.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

import jwt

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import AuthenticationError
from src.service.box_office.domain.entity.user_entity import UserEntity, UserRole


class JwtAuth:
    def __init__(self) -> None:
        self.secret = settings.SECRET_KEY.get_secret_value()
        self.algorithm = settings.ALGORITHM
        self.token_expire_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES

    def create_jwt_token(self, user_entity: UserEntity) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            'sub': str(user_entity.id),
            'exp': now + timedelta(minutes=self.token_expire_minutes),
            'iat': now,
            'user_id': user_entity.id,
            'email': user_entity.email,
            'name': user_entity.name,
            'role': user_entity.role.value,
        }

        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError as e:
            raise AuthenticationError('Invalid token') from e

    def get_current_user_info_from_jwt(self, token: Optional[str]) -> UserEntity:
        if not token:
            raise AuthenticationError('Not authenticated')

        payload = self.decode_jwt_token(token)

        user_id = payload.get('user_id')
        role = payload.get('role')
        if not user_id or not role:
            raise AuthenticationError('Invalid token')

        try:
            user_role = UserRole(role)
        except ValueError as e:
            raise AuthenticationError(f'Unknown role {role!r}') from e

        # Rebuild UserEntity from JWT payload (no DB query)
        return UserEntity(
            id=user_id,
            role=user_role,
            email=payload.get('email', ''),
            name=payload.get('name', ''),
        )
