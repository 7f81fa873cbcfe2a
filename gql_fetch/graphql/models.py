"""
GraphQL models and data structures.

This module defines the data models used on the wire: the request body, the
response envelope and the per-call retry bookkeeping.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OperationKind(str, Enum):
    """GraphQL operation kinds supported by the client."""

    QUERY = "query"
    MUTATION = "mutation"


@dataclass
class WireRequest:
    """GraphQL request body sent to the endpoint."""

    query: str
    variables: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: Dict[str, Any] = {"query": self.query}

        if self.variables:
            result["variables"] = self.variables

        return result

    def to_json(self) -> str:
        """Serialize to JSON text."""
        return json.dumps(self.to_dict(), allow_nan=False)


class ErrorLocation(BaseModel):
    """Position of a GraphQL error in the operation document."""

    model_config = ConfigDict(extra="ignore")

    line: int
    column: int


class GraphQLError(BaseModel):
    """A single entry of the ``errors`` array of a GraphQL response."""

    model_config = ConfigDict(extra="ignore")

    message: str
    locations: List[ErrorLocation] = Field(default_factory=list)

    @field_validator("locations", mode="before")
    @classmethod
    def _null_locations(cls, value: Any) -> Any:
        """Treat an explicit null locations array as empty."""
        return [] if value is None else value


class ResponseEnvelope(BaseModel):
    """Top-level ``{data, errors}`` shape of a GraphQL HTTP response."""

    model_config = ConfigDict(extra="ignore")

    data: Optional[Any] = Field(default=None, description="Raw response data")
    errors: List[GraphQLError] = Field(default_factory=list, description="Server-reported errors")

    @field_validator("errors", mode="before")
    @classmethod
    def _null_errors(cls, value: Any) -> Any:
        """Treat an explicit null errors array as empty."""
        return [] if value is None else value

    @property
    def has_errors(self) -> bool:
        """Check if the envelope carries errors."""
        return len(self.errors) > 0


@dataclass
class RetryState:
    """Retry bookkeeping owned by a single dispatch."""

    attempts_remaining: int
    timeout_budget_seconds: int
    deadline: Optional[float] = None
