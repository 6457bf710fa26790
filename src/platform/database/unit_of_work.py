"""
Unit of Work - one database transaction shared by the box office repositories

Usage in a use case:
    async with uow:
        await uow.performance_repo.decrement_available(...)
        await uow.ticket_repo.create_many(...)
        await uow.commit()

Leaving the block without commit rolls back. Lock timeouts, deadlocks and
serialization failures raised inside the block come out as
ConflictRetryableError so the caller can retry with a fresh transaction.
"""

from __future__ import annotations

import abc
from types import TracebackType
from typing import TYPE_CHECKING, Callable, Optional

from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.db_setting import get_session_maker
from src.platform.exception.exceptions import ConflictRetryableError
from src.platform.logging.loguru_io import Logger


if TYPE_CHECKING:
    from src.service.box_office.app.interface.i_event_repo import IEventRepo
    from src.service.box_office.app.interface.i_order_repo import IOrderRepo
    from src.service.box_office.app.interface.i_payment_repo import IPaymentRepo
    from src.service.box_office.app.interface.i_performance_repo import IPerformanceRepo
    from src.service.box_office.app.interface.i_ticket_repo import ITicketRepo


# serialization_failure, deadlock_detected, lock_not_available
RETRYABLE_SQLSTATES = frozenset({'40001', '40P01', '55P03'})


def is_retryable_db_error(exc: BaseException) -> bool:
    if isinstance(exc, OperationalError):
        return True
    if isinstance(exc, DBAPIError):
        orig = exc.orig
        sqlstate = getattr(orig, 'sqlstate', None) or getattr(orig, 'pgcode', None)
        return sqlstate in RETRYABLE_SQLSTATES
    return False


class AbstractUnitOfWork(abc.ABC):
    event_repo: IEventRepo
    payment_repo: IPaymentRepo
    performance_repo: IPerformanceRepo
    ticket_repo: ITicketRepo
    order_repo: IOrderRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.rollback()
        if exc is not None and is_retryable_db_error(exc):
            Logger.base.warning(f'⚠️ [UOW] Transaction aborted by concurrent update: {exc}')
            raise ConflictRetryableError(
                'The request conflicted with a concurrent update, please retry'
            ) from exc

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """Opens a fresh session per `async with` block, so one instance can be retried"""

    def __init__(self, session_factory: Callable[[], AsyncSession] | None = None) -> None:
        self.session_factory = session_factory or get_session_maker()
        self.session: AsyncSession | None = None

    async def __aenter__(self) -> AbstractUnitOfWork:
        from src.service.box_office.driven_adapter.repo.event_repo_impl import EventRepoImpl
        from src.service.box_office.driven_adapter.repo.order_repo_impl import OrderRepoImpl
        from src.service.box_office.driven_adapter.repo.payment_repo_impl import PaymentRepoImpl
        from src.service.box_office.driven_adapter.repo.performance_repo_impl import (
            PerformanceRepoImpl,
        )
        from src.service.box_office.driven_adapter.repo.ticket_repo_impl import TicketRepoImpl

        session = self.session_factory()
        self.session = session
        self.event_repo = EventRepoImpl(session)
        self.payment_repo = PaymentRepoImpl(session)
        self.performance_repo = PerformanceRepoImpl(session)
        self.ticket_repo = TicketRepoImpl(session)
        self.order_repo = OrderRepoImpl(session)
        return await super().__aenter__()

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        try:
            await super().__aexit__(exc_type, exc, tb)
        finally:
            if self.session is not None:
                await self.session.close()
                self.session = None

    async def _commit(self) -> None:
        assert self.session is not None, 'commit() called outside of `async with uow`'
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()

