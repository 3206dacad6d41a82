"""Render result pages as CSV for display."""

from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from bigquery_rest.result_set import ResultSet

MAX_ROWS_TO_DISPLAY = 1000


def result_pages_to_csv(
    pages: Iterable[ResultSet], max_rows: int = MAX_ROWS_TO_DISPLAY
) -> str:
    """Read result pages into a CSV string.

    Stops fetching pages once ``max_rows`` rows have been read.

    Args:
        pages: Result sets in page order, e.g. from ``JobApi.iter_result_pages``
        max_rows: Maximum number of rows to include

    Returns:
        CSV formatted string with a header row, or a message if there are no
        rows or the job has not finished yet
    """
    rows: List[Dict[str, Any]] = []
    columns: Optional[List[str]] = None
    total_rows: Optional[int] = None
    truncated = False
    running_job_id: Optional[str] = None

    for page in pages:
        if columns is None:
            # duplicate names collapse to the first field, as in to_dict()
            columns = list(dict.fromkeys(page.column_names()))
            total_rows = page.total_rows
            if not page.job_complete:
                job_reference = page.job_reference
                running_job_id = job_reference.job_id if job_reference else None

        for row in page:
            if len(rows) >= max_rows:
                truncated = True
                break
            rows.append(row.to_dict())

        if truncated:
            break

    if not rows:
        if running_job_id is not None:
            return f"Query job {running_job_id} is still running; no results yet."
        return "No results returned."

    df = pd.DataFrame(rows, columns=columns)
    csv_str = df.to_csv(index=False)

    if truncated:
        csv_str += f"\n[Note: Results truncated to {max_rows} rows. Total rows: {total_rows}]"

    return csv_str
