import jwt
import pytest

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import AuthenticationError
from src.service.box_office.domain.entity.user_entity import UserRole
from src.service.box_office.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from test.service.box_office.helpers import MANAGER_USER


class TestJwtAuth:
    def test_round_trip_keeps_identity_and_role(self):
        auth = JwtAuth()

        user = auth.get_current_user_info_from_jwt(auth.create_jwt_token(MANAGER_USER))

        assert user.id == MANAGER_USER.id
        assert user.role == UserRole.MANAGER
        assert user.is_supervisor

    def test_missing_token(self):
        with pytest.raises(AuthenticationError):
            JwtAuth().get_current_user_info_from_jwt(None)

    def test_token_signed_with_another_key(self):
        token = jwt.encode({'user_id': 1, 'role': 'admin'}, 'not-the-key', algorithm='HS256')

        with pytest.raises(AuthenticationError):
            JwtAuth().get_current_user_info_from_jwt(token)

    def test_unknown_role(self):
        token = jwt.encode(
            {'user_id': 1, 'role': 'director'},
            settings.SECRET_KEY.get_secret_value(),
            algorithm=settings.ALGORITHM,
        )

        with pytest.raises(AuthenticationError):
            JwtAuth().get_current_user_info_from_jwt(token)
