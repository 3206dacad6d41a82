"""Job API: query, insert, list, get, get query results and cancel."""

import logging
from typing import Any, Dict, Iterator, Optional
from urllib.parse import quote

from requests import Session

from bigquery_rest.clients.session import process_response
from bigquery_rest.config import DEFAULT_BASE_URL
from bigquery_rest.model.job import Job, JobCancelResponse, JobList
from bigquery_rest.model.query import (
    GetQueryResultsParameters,
    GetQueryResultsResponse,
    QueryRequest,
    QueryResponse,
)
from bigquery_rest.result_set import ResultSet

logger = logging.getLogger(__name__)


def urlencode(segment: str) -> str:
    """Percent-encode one path segment, slashes included."""
    return quote(segment, safe="")


class JobApi:
    """Handler for the jobs and queries endpoints.

    Every method sends exactly one request; nothing is retried.
    """

    def __init__(self, session: Session, base_url: str = DEFAULT_BASE_URL) -> None:
        """Initialize the job API.

        Args:
            session: Session that attaches credentials, usually an
                ``AuthorizedSession``
            base_url: Root of the BigQuery v2 REST API
        """
        self.session = session
        self.base_url = base_url.rstrip("/")

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        body: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        logger.debug("%s %s params=%s", method, path, params)
        response = self.session.request(
            method,
            f"{self.base_url}{path}",
            params=params,
            json=body,
        )
        return process_response(response)

    def query(self, project_id: str, query_request: QueryRequest) -> ResultSet:
        """Run a SQL query and return its first page of results.

        If the query does not finish within the request's timeout the result
        set has no rows and ``job_complete`` is False.

        Args:
            project_id: Project ID of the query request
            query_request: Query to run

        Returns:
            ResultSet over the first page
        """
        payload = self._request(
            "POST",
            f"/projects/{urlencode(project_id)}/queries",
            body=query_request.to_api_repr(),
        )
        return ResultSet(QueryResponse.model_validate(payload))

    def insert(self, project_id: str, job: Job) -> Job:
        """Start a new asynchronous job.

        Args:
            project_id: Project billed for the job
            job: Job resource to create

        Returns:
            The created job
        """
        payload = self._request(
            "POST",
            f"/projects/{urlencode(project_id)}/jobs",
            body=job.to_api_repr(),
        )
        return Job.model_validate(payload)

    def list(self, project_id: str) -> JobList:
        """List jobs started in the project, most recent first."""
        payload = self._request("GET", f"/projects/{urlencode(project_id)}/jobs")
        return JobList.model_validate(payload)

    def get_query_results(
        self,
        project_id: str,
        job_id: str,
        parameters: Optional[GetQueryResultsParameters] = None,
    ) -> GetQueryResultsResponse:
        """Fetch one page of results of a query job.

        Args:
            project_id: Project ID of the query job
            job_id: Job ID of the query job
            parameters: Paging, timeout and location parameters

        Returns:
            Response for the requested page
        """
        parameters = parameters or GetQueryResultsParameters()
        payload = self._request(
            "GET",
            f"/projects/{urlencode(project_id)}/queries/{urlencode(job_id)}",
            params=parameters.to_query_params(),
        )
        return GetQueryResultsResponse.model_validate(payload)

    def get_job(self, project_id: str, job_id: str, location: Optional[str] = None) -> Job:
        """Return information about a job.

        Args:
            project_id: Project ID of the job
            job_id: Job ID
            location: Location of the job; required outside US and EU

        Returns:
            The job resource
        """
        payload = self._request(
            "GET",
            f"/projects/{urlencode(project_id)}/jobs/{urlencode(job_id)}",
            params=_location_params(location),
        )
        return Job.model_validate(payload)

    def cancel_job(
        self, project_id: str, job_id: str, location: Optional[str] = None
    ) -> JobCancelResponse:
        """Request cancellation of a job.

        Returns immediately; poll ``get_job`` to see whether the cancel
        completed. Cancelled jobs may still incur costs.
        """
        payload = self._request(
            "POST",
            f"/projects/{urlencode(project_id)}/jobs/{urlencode(job_id)}/cancel",
            params=_location_params(location),
        )
        return JobCancelResponse.model_validate(payload)

    def iter_result_pages(
        self, project_id: str, query_request: QueryRequest
    ) -> Iterator[ResultSet]:
        """Run a query and yield one ResultSet per page of results.

        Pages after the first are fetched with ``get_query_results`` using
        the continuation token of the previous page.

        Args:
            project_id: Project ID of the query request
            query_request: Query to run; ``max_results`` sets the page size

        Yields:
            ResultSet for each page, in order
        """
        result_set = self.query(project_id, query_request)
        logger.info(
            "Fetched first page: %s rows, more pages: %s",
            result_set.row_count(),
            bool(result_set.page_token),
        )
        yield result_set

        while result_set.page_token:
            job_reference = result_set.job_reference
            if job_reference is None or not job_reference.job_id:
                raise ValueError("Paginated query response has no job reference")

            parameters = GetQueryResultsParameters(
                page_token=result_set.page_token,
                max_results=query_request.max_results,
                location=job_reference.location,
            )
            response = self.get_query_results(
                job_reference.project_id, job_reference.job_id, parameters
            )
            result_set = ResultSet(response.to_query_response())
            logger.info(
                "Fetched page: %s rows, more pages: %s",
                result_set.row_count(),
                bool(result_set.page_token),
            )
            yield result_set


def _location_params(location: Optional[str]) -> Optional[Dict[str, str]]:
    if location is None:
        return None
    return {"location": location}
