"""
Daily Diet Backend: User Service Unit Tests
=============================================

What:  Registration and session resolution in UserService, on mock sessions.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from dailydiet.exceptions import DatabaseError, UnauthorizedError
from dailydiet.models.user import User
from dailydiet.services.user_service import UserService


class TestRegisterUser:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_register_binds_session(self, mock_db_session):
        user = await self.service.register_user(
            mock_db_session, name="Ana", email="ana@example.com", session_id="tok-1"
        )

        assert user.name == "Ana"
        assert user.email == "ana@example.com"
        assert user.session_id == "tok-1"
        mock_db_session.add.assert_called_once_with(user)
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_register_flush_failure(self, mock_db_session):
        mock_db_session.flush = AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("down"))
        )

        with pytest.raises(DatabaseError):
            await self.service.register_user(
                mock_db_session, name="Ana", email="ana@example.com", session_id="tok"
            )


class TestGetUserBySession:

    def setup_method(self):
        self.service = UserService()

    def _returning(self, mock_db_session, user):
        mock_result = MagicMock()
        mock_result.scalars.return_value.first.return_value = user
        mock_db_session.execute.return_value = mock_result

    @pytest.mark.asyncio
    async def test_known_session(self, mock_db_session):
        user = User(name="Ana", email="ana@example.com", session_id="tok")
        self._returning(mock_db_session, user)

        assert await self.service.get_user_by_session(mock_db_session, "tok") is user

    @pytest.mark.asyncio
    async def test_unknown_session_is_unauthorized(self, mock_db_session):
        self._returning(mock_db_session, None)

        with pytest.raises(UnauthorizedError):
            await self.service.get_user_by_session(mock_db_session, "stale")

    @pytest.mark.asyncio
    async def test_find_returns_none_for_unknown(self, mock_db_session):
        self._returning(mock_db_session, None)

        assert await self.service.find_user_by_session(mock_db_session, "stale") is None

    @pytest.mark.asyncio
    async def test_lookup_database_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("down"))
        )

        with pytest.raises(DatabaseError):
            await self.service.get_user_by_session(mock_db_session, "tok")
