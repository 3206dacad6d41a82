"""Base class for BigQuery REST payloads."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Pydantic model that reads and writes the API's camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_api_repr(self) -> Dict[str, Any]:
        """Serialize to the JSON body the API expects, omitting unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)
