import json
from unittest import mock

import pytest
import requests
from google.api_core import exceptions

from bigquery_rest.clients.job import JobApi
from bigquery_rest.model import GetQueryResultsParameters, Job, QueryRequest

BASE_URL = "https://bigquery.googleapis.com/bigquery/v2"


def make_response(method, url, status_code=200, body=None):
    response = requests.Response()
    response.status_code = status_code
    response._content = json.dumps(body if body is not None else {}).encode("utf-8")
    response.encoding = "utf-8"
    response.headers["Content-Type"] = "application/json"
    response.request = requests.Request(method, url).prepare()
    return response


def make_api(*responses):
    session = mock.Mock(spec=requests.Session)
    session.request.side_effect = list(responses)
    return JobApi(session, BASE_URL), session


def query_page(rows, page_token=None, total_rows=None):
    body = {
        "kind": "bigquery#queryResponse",
        "schema": {"fields": [{"name": "c", "type": "INTEGER"}]},
        "jobReference": {"projectId": "proj", "jobId": "job_1", "location": "EU"},
        "rows": [{"f": [{"v": value}]} for value in rows],
        "jobComplete": True,
    }
    if page_token:
        body["pageToken"] = page_token
    if total_rows is not None:
        body["totalRows"] = str(total_rows)
    return body


def test_query_posts_request_and_returns_result_set():
    url = f"{BASE_URL}/projects/proj/queries"
    api, session = make_api(make_response("POST", url, body=query_page(["3"])))

    rs = api.query("proj", QueryRequest(query="SELECT COUNT(*) AS c FROM t"))

    session.request.assert_called_once_with(
        "POST",
        url,
        params=None,
        json={
            "kind": "bigquery#queryRequest",
            "query": "SELECT COUNT(*) AS c FROM t",
            "useLegacySql": False,
        },
    )
    assert rs.advance()
    assert rs.get_i64_by_name("c") == 3
    assert not rs.advance()


def test_path_segments_are_url_encoded():
    url = f"{BASE_URL}/projects/my%2Fproj/jobs/job%20one"
    api, session = make_api(make_response("GET", url, body={"id": "x"}))

    api.get_job("my/proj", "job one")

    assert session.request.call_args[0][1] == url


def test_get_job_passes_location():
    url = f"{BASE_URL}/projects/proj/jobs/job_1"
    api, session = make_api(
        make_response("GET", url, body={"status": {"state": "DONE"}}),
        make_response("GET", url, body={"status": {"state": "RUNNING"}}),
    )

    job = api.get_job("proj", "job_1", location="asia-northeast1")
    assert job.status.state == "DONE"
    session.request.assert_called_with("GET", url, params={"location": "asia-northeast1"}, json=None)

    api.get_job("proj", "job_1")
    session.request.assert_called_with("GET", url, params=None, json=None)


def test_cancel_job():
    url = f"{BASE_URL}/projects/proj/jobs/job_1/cancel"
    api, session = make_api(
        make_response("POST", url, body={"kind": "bigquery#jobCancelResponse", "job": {"id": "proj:job_1"}})
    )

    response = api.cancel_job("proj", "job_1", location="EU")

    session.request.assert_called_once_with("POST", url, params={"location": "EU"}, json=None)
    assert response.job.id == "proj:job_1"


def test_insert_and_list():
    jobs_url = f"{BASE_URL}/projects/proj/jobs"
    api, session = make_api(
        make_response("POST", jobs_url, body={"jobReference": {"projectId": "proj", "jobId": "j"}}),
        make_response("GET", jobs_url, body={"jobs": [{"id": "proj:j", "state": "DONE"}]}),
    )

    created = api.insert("proj", Job.for_query("SELECT 1"))
    assert created.job_reference.job_id == "j"
    assert session.request.call_args_list[0] == mock.call(
        "POST",
        jobs_url,
        params=None,
        json={"configuration": {"query": {"query": "SELECT 1", "useLegacySql": False}}},
    )

    job_list = api.list("proj")
    assert [item.id for item in job_list.jobs] == ["proj:j"]


def test_get_query_results_sends_parameters():
    url = f"{BASE_URL}/projects/proj/queries/job_1"
    api, session = make_api(make_response("GET", url, body=query_page(["1", "2"], total_rows=2)))

    response = api.get_query_results(
        "proj", "job_1", GetQueryResultsParameters(start_index=5, timeout_ms=1000)
    )

    session.request.assert_called_once_with(
        "GET", url, params={"startIndex": "5", "timeoutMs": "1000"}, json=None
    )
    assert response.total_rows == 2
    assert len(response.rows) == 2


@pytest.mark.parametrize(
    "status_code, exception_class",
    [
        (400, exceptions.BadRequest),
        (403, exceptions.Forbidden),
        (404, exceptions.NotFound),
        (500, exceptions.InternalServerError),
    ],
)
def test_http_errors_map_to_api_core_exceptions(status_code, exception_class):
    url = f"{BASE_URL}/projects/proj/jobs/missing"
    body = {"error": {"code": status_code, "message": "Not found: Job proj:missing", "errors": []}}
    api, _ = make_api(make_response("GET", url, status_code=status_code, body=body))

    with pytest.raises(exception_class) as exc_info:
        api.get_job("proj", "missing")
    assert "Not found: Job proj:missing" in str(exc_info.value)


def test_iter_result_pages_follows_continuation_tokens():
    query_url = f"{BASE_URL}/projects/proj/queries"
    results_url = f"{BASE_URL}/projects/proj/queries/job_1"
    api, session = make_api(
        make_response("POST", query_url, body=query_page(["1", "2"], page_token="t1", total_rows=5)),
        make_response("GET", results_url, body=query_page(["3", "4"], page_token="t2", total_rows=5)),
        make_response("GET", results_url, body=query_page(["5"], total_rows=5)),
    )

    pages = list(api.iter_result_pages("proj", QueryRequest(query="SELECT c", max_results=2)))

    assert [page.row_count() for page in pages] == [2, 2, 1]
    assert [row.get_i64_by_name("c") for page in pages for row in page] == [1, 2, 3, 4, 5]
    assert session.request.call_args_list[1] == mock.call(
        "GET",
        results_url,
        params={"maxResults": "2", "pageToken": "t1", "location": "EU"},
        json=None,
    )
    assert session.request.call_args_list[2][1]["params"]["pageToken"] == "t2"


def test_iter_result_pages_is_lazy():
    query_url = f"{BASE_URL}/projects/proj/queries"
    api, session = make_api(
        make_response("POST", query_url, body=query_page(["1"], page_token="t1")),
    )

    pages = api.iter_result_pages("proj", QueryRequest(query="SELECT c"))
    first = next(pages)

    assert first.row_count() == 1
    assert session.request.call_count == 1
