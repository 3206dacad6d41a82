"""CLI interface for running queries."""

import logging
import sys

from google.api_core.exceptions import GoogleAPICallError
from pydantic import ValidationError
from requests import RequestException

from bigquery_rest.container import container
from bigquery_rest.errors import ResultSetError
from bigquery_rest.interface.formatting import result_pages_to_csv
from bigquery_rest.model.query import QueryRequest


def main() -> None:
    """Run queries typed at an interactive prompt."""
    try:
        config = container.config()
        config.validate()
    except ValueError as e:
        print(f"Configuration error: {e}")
        print("\nPlease set up your .env file with required configuration:")
        print("  - GCP_PROJECT_ID")
        print("  - GOOGLE_APPLICATION_CREDENTIALS (optional)")
        print("  - BIGQUERY_EMULATOR_HOST (optional)")
        print("  - BIGQUERY_LOCATION (optional)")
        print("  - BIGQUERY_MAX_RESULTS (optional)")
        sys.exit(1)

    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    job_api = container.job_api()

    print(f"Connected to BigQuery project {config.GCP_PROJECT_ID}.")
    print("Type a SQL query on one line to run it.")
    print("Type 'exit' or 'quit' to end the session.\n")

    while True:
        try:
            sql = input("> ").strip()

            if sql.lower() in ["exit", "quit"]:
                print("Goodbye!")
                break

            if not sql:
                continue

            request = QueryRequest(
                query=sql,
                max_results=config.BIGQUERY_MAX_RESULTS,
                location=config.BIGQUERY_LOCATION,
            )
            pages = job_api.iter_result_pages(config.GCP_PROJECT_ID, request)
            print(f"\n{result_pages_to_csv(pages)}")

        except (KeyboardInterrupt, EOFError):
            print("\n\nGoodbye!")
            break
        except GoogleAPICallError as e:
            print(f"\nQuery failed ({e.code}): {e.message}\n")
        except (ResultSetError, ValidationError, RequestException, ValueError) as e:
            print(f"\nError: {e}\n")


if __name__ == "__main__":
    main()
