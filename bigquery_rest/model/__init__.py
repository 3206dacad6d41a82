"""Wire models for the BigQuery v2 REST API."""

from bigquery_rest.model.job import (
    ErrorProto,
    Job,
    JobCancelResponse,
    JobList,
    JobListItem,
    JobReference,
    JobStatus,
)
from bigquery_rest.model.query import (
    DatasetReference,
    GetQueryResultsParameters,
    GetQueryResultsResponse,
    QueryRequest,
    QueryResponse,
)
from bigquery_rest.model.table import TableCell, TableFieldSchema, TableRow, TableSchema

__all__ = [
    "DatasetReference",
    "ErrorProto",
    "GetQueryResultsParameters",
    "GetQueryResultsResponse",
    "Job",
    "JobCancelResponse",
    "JobList",
    "JobListItem",
    "JobReference",
    "JobStatus",
    "QueryRequest",
    "QueryResponse",
    "TableCell",
    "TableFieldSchema",
    "TableRow",
    "TableSchema",
]
