"""Query request and response payloads."""

from typing import Any, Dict, List, Optional

from google.cloud.bigquery import SchemaField
from pydantic import Field

from bigquery_rest.model.base import ApiModel
from bigquery_rest.model.job import ErrorProto, JobReference
from bigquery_rest.model.table import TableRow, TableSchema


class DatasetReference(ApiModel):
    project_id: str
    dataset_id: str


class QueryRequest(ApiModel):
    """Body of jobs.query.

    Standard SQL is the default; the REST API itself defaults to legacy SQL,
    so ``use_legacy_sql`` is always sent.
    """

    kind: str = "bigquery#queryRequest"
    query: str
    max_results: Optional[int] = None
    default_dataset: Optional[DatasetReference] = None
    timeout_ms: Optional[int] = None
    dry_run: Optional[bool] = None
    use_query_cache: Optional[bool] = None
    use_legacy_sql: bool = False
    parameter_mode: Optional[str] = None
    query_parameters: Optional[List[Dict[str, Any]]] = None
    location: Optional[str] = None
    labels: Optional[Dict[str, str]] = None
    maximum_bytes_billed: Optional[str] = None
    request_id: Optional[str] = None


class GetQueryResultsParameters(ApiModel):
    """Query string parameters of jobs.getQueryResults."""

    max_results: Optional[int] = None
    page_token: Optional[str] = None
    start_index: Optional[int] = None
    timeout_ms: Optional[int] = None
    location: Optional[str] = None

    def to_query_params(self) -> Dict[str, str]:
        return {key: str(value) for key, value in self.to_api_repr().items()}


class _QueryResultsPayload(ApiModel):
    kind: Optional[str] = None
    table_schema: Optional[TableSchema] = Field(default=None, alias="schema")
    job_reference: Optional[JobReference] = None
    total_rows: Optional[int] = None
    page_token: Optional[str] = None
    rows: Optional[List[TableRow]] = None
    total_bytes_processed: Optional[int] = None
    job_complete: Optional[bool] = None
    errors: Optional[List[ErrorProto]] = None
    cache_hit: Optional[bool] = None
    num_dml_affected_rows: Optional[int] = None

    def schema_fields(self) -> List[SchemaField]:
        if self.table_schema is None:
            return []
        return self.table_schema.to_schema_fields()

    def row_values(self) -> List[List[Any]]:
        """Raw cell values of every row, in row order."""
        return [row.cell_values() for row in self.rows or []]


class QueryResponse(_QueryResultsPayload):
    """Response of jobs.query."""


class GetQueryResultsResponse(_QueryResultsPayload):
    """Response of jobs.getQueryResults."""

    etag: Optional[str] = None

    def to_query_response(self) -> QueryResponse:
        """Re-shape as a ``QueryResponse`` so it can back a ResultSet."""
        return QueryResponse.model_validate(self.model_dump(exclude={"etag"}))
