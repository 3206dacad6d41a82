"""Job resources returned by the jobs endpoints."""

from typing import Any, Dict, List, Optional

from pydantic import Field

from bigquery_rest.model.base import ApiModel


class ErrorProto(ApiModel):
    """Error details attached to a job or query response."""

    reason: Optional[str] = None
    location: Optional[str] = None
    debug_info: Optional[str] = None
    message: Optional[str] = None


class JobReference(ApiModel):
    """Identifies a job within a project."""

    project_id: str
    job_id: Optional[str] = None
    location: Optional[str] = None


class JobStatus(ApiModel):
    """Running state of a job and any errors it hit."""

    state: Optional[str] = None
    error_result: Optional[ErrorProto] = None
    errors: Optional[List[ErrorProto]] = None

    @property
    def is_done(self) -> bool:
        return self.state == "DONE"


class Job(ApiModel):
    """A BigQuery job.

    ``configuration`` and ``statistics`` are kept as raw mappings; their
    shape depends on the job type and is not interpreted here.
    """

    kind: Optional[str] = None
    etag: Optional[str] = None
    id: Optional[str] = None
    self_link: Optional[str] = None
    user_email: Optional[str] = None
    job_reference: Optional[JobReference] = None
    configuration: Optional[Dict[str, Any]] = None
    status: Optional[JobStatus] = None
    statistics: Optional[Dict[str, Any]] = None

    @classmethod
    def for_query(cls, query: str, use_legacy_sql: bool = False) -> "Job":
        """Build a query job ready for ``JobApi.insert``."""
        return cls(
            configuration={
                "query": {"query": query, "useLegacySql": use_legacy_sql},
            }
        )


class JobListItem(ApiModel):
    """Summary of a job as returned by jobs.list."""

    id: Optional[str] = None
    kind: Optional[str] = None
    job_reference: Optional[JobReference] = None
    state: Optional[str] = None
    error_result: Optional[ErrorProto] = None
    user_email: Optional[str] = None
    status: Optional[JobStatus] = None
    configuration: Optional[Dict[str, Any]] = None
    statistics: Optional[Dict[str, Any]] = None


class JobList(ApiModel):
    """One page of jobs, most recently created first."""

    kind: Optional[str] = None
    etag: Optional[str] = None
    next_page_token: Optional[str] = None
    jobs: List[JobListItem] = Field(default_factory=list)


class JobCancelResponse(ApiModel):
    """Response of jobs.cancel; the job is usually still running."""

    kind: Optional[str] = None
    job: Optional[Job] = None
