"""Dependency injection container for the BigQuery REST client."""

from dependency_injector import containers, providers

from bigquery_rest.clients.job import JobApi
from bigquery_rest.clients.session import create_session
from bigquery_rest.config import Config


class Container(containers.DeclarativeContainer):
    """Application DI container."""

    config = providers.Singleton(Config)

    session = providers.Singleton(
        create_session,
        credentials_path=config.provided.GOOGLE_APPLICATION_CREDENTIALS,
        anonymous=config.provided.use_emulator,
    )

    job_api = providers.Factory(
        JobApi,
        session=session,
        base_url=config.provided.base_url,
    )


container = Container()
