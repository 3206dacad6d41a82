"""Configuration management for the BigQuery REST client."""

import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_BASE_URL = "https://bigquery.googleapis.com/bigquery/v2"


class Config:
    """Application configuration."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        self.GCP_PROJECT_ID: Optional[str] = os.getenv("GCP_PROJECT_ID")
        self.GOOGLE_APPLICATION_CREDENTIALS: Optional[str] = os.getenv(
            "GOOGLE_APPLICATION_CREDENTIALS"
        )
        self.BIGQUERY_EMULATOR_HOST: Optional[str] = os.getenv("BIGQUERY_EMULATOR_HOST")
        self.BIGQUERY_LOCATION: Optional[str] = os.getenv("BIGQUERY_LOCATION")

        max_results_str = os.getenv("BIGQUERY_MAX_RESULTS", "").strip()
        self.BIGQUERY_MAX_RESULTS: Optional[int] = (
            int(max_results_str) if max_results_str else None
        )
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def use_emulator(self) -> bool:
        """Whether requests go to a local emulator."""
        return bool(self.BIGQUERY_EMULATOR_HOST)

    @property
    def base_url(self) -> str:
        """Root URL of the BigQuery v2 REST API."""
        if self.BIGQUERY_EMULATOR_HOST:
            return f"http://{self.BIGQUERY_EMULATOR_HOST}/bigquery/v2"
        return DEFAULT_BASE_URL

    def validate(self) -> None:
        """Validate required configuration."""
        if not self.GCP_PROJECT_ID:
            raise ValueError("GCP_PROJECT_ID environment variable is required")

        if self.BIGQUERY_MAX_RESULTS is not None and self.BIGQUERY_MAX_RESULTS <= 0:
            raise ValueError("BIGQUERY_MAX_RESULTS must be a positive integer")
