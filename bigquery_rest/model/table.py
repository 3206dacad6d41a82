"""Schema and row payloads shared by query responses."""

from typing import Any, List, Optional

from google.cloud.bigquery import SchemaField
from pydantic import Field

from bigquery_rest.model.base import ApiModel


class TableFieldSchema(ApiModel):
    """One field descriptor of a table or query schema."""

    name: str
    type: str
    mode: Optional[str] = None
    description: Optional[str] = None
    fields: Optional[List["TableFieldSchema"]] = None

    @classmethod
    def integer(cls, name: str) -> "TableFieldSchema":
        return cls(name=name, type="INTEGER")

    @classmethod
    def float64(cls, name: str) -> "TableFieldSchema":
        return cls(name=name, type="FLOAT")

    @classmethod
    def boolean(cls, name: str) -> "TableFieldSchema":
        return cls(name=name, type="BOOLEAN")

    @classmethod
    def string(cls, name: str) -> "TableFieldSchema":
        return cls(name=name, type="STRING")

    @classmethod
    def timestamp(cls, name: str) -> "TableFieldSchema":
        return cls(name=name, type="TIMESTAMP")

    @classmethod
    def record(cls, name: str, fields: List["TableFieldSchema"]) -> "TableFieldSchema":
        return cls(name=name, type="RECORD", fields=fields)

    def repeated(self) -> "TableFieldSchema":
        """Return a copy of this field with REPEATED mode."""
        return self.model_copy(update={"mode": "REPEATED"})


class TableSchema(ApiModel):
    """Ordered list of field descriptors."""

    fields: List[TableFieldSchema] = Field(default_factory=list)

    def to_schema_fields(self) -> List[SchemaField]:
        """Convert to ``google.cloud.bigquery`` field descriptors.

        Returns:
            SchemaField instances in schema order, nested fields included
        """
        return [SchemaField.from_api_repr(field.to_api_repr()) for field in self.fields]


class TableCell(ApiModel):
    """A single cell; ``v`` is a string, null, nested row or list of cells."""

    v: Any = None


class TableRow(ApiModel):
    """A single row in a result set, consisting of one or more cells."""

    f: Optional[List[TableCell]] = None

    def cell_values(self) -> List[Any]:
        return [cell.v for cell in self.f or []]
