"""BigQuery REST client - typed job API and result set reader."""

from bigquery_rest.clients.job import JobApi
from bigquery_rest.config import Config
from bigquery_rest.container import container
from bigquery_rest.errors import (
    InvalidCursorError,
    OutOfRangeError,
    ResultSetError,
    TypeConversionError,
    UnknownColumnError,
)
from bigquery_rest.model import QueryRequest, QueryResponse
from bigquery_rest.result_set import Record, ResultSet

__version__ = "0.1.0"
__all__ = [
    "Config",
    "InvalidCursorError",
    "JobApi",
    "OutOfRangeError",
    "QueryRequest",
    "QueryResponse",
    "Record",
    "ResultSet",
    "ResultSetError",
    "TypeConversionError",
    "UnknownColumnError",
    "container",
]
