"""Clients for the BigQuery REST endpoints."""

from bigquery_rest.clients.job import JobApi
from bigquery_rest.clients.session import create_session

__all__ = ["JobApi", "create_session"]
