"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.box_office.app.service.ticket_delivery_queue import TicketDeliveryQueue
from src.service.box_office.driven_adapter.notification.mock_email_sender import MockEmailSender
from src.service.box_office.driven_adapter.notification.smtp_email_sender import SmtpEmailSender
from src.service.box_office.driven_adapter.notification.ticket_pdf_renderer import (
    ReportlabTicketPdfRenderer,
)
from src.service.box_office.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (AsyncEngineManager keeps one engine per event loop)
    database = providers.Singleton(Database)

    # One transaction per use case execution; a new session per `async with`
    unit_of_work = providers.Factory(
        SqlAlchemyUnitOfWork, session_factory=database.provided.session_maker
    )

    # Auth service
    jwt_auth = providers.Singleton(JwtAuth)

    # Post-commit delivery
    email_sender = providers.Selector(
        config_service.provided.EMAIL_BACKEND,
        mock=providers.Singleton(MockEmailSender),
        smtp=providers.Singleton(SmtpEmailSender, config=config_service),
    )
    pdf_renderer = providers.Singleton(
        ReportlabTicketPdfRenderer, box_office_name=config_service.provided.BOX_OFFICE_NAME
    )
    ticket_delivery_queue = providers.Singleton(
        TicketDeliveryQueue,
        email_sender=email_sender,
        pdf_renderer=pdf_renderer,
        box_office_name=config_service.provided.BOX_OFFICE_NAME,
        max_buffer_size=config_service.provided.DELIVERY_QUEUE_SIZE,
        max_attempts=config_service.provided.DELIVERY_MAX_ATTEMPTS,
        retry_delay=config_service.provided.DELIVERY_RETRY_DELAY,
    )


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
