"""
Schema descriptors for GraphQL operations.

A descriptor is an explicit description of the expected response shape:
field names, GraphQL types, nullability and nested selections. The query
builder renders it into an operation string and the binder validates response
data against it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

# Built-in GraphQL scalars; any other type name without a selection is treated
# as a custom scalar or enum.
BUILTIN_SCALARS = ("Int", "Float", "String", "ID", "Boolean")


@dataclass
class Variable:
    """Variable value with an explicit GraphQL type (e.g. ``ID!``)."""

    graphql_type: str
    value: Any


@dataclass
class Field:
    """
    A single selected field.

    Attributes:
        name: Schema field name
        graphql_type: Named GraphQL type of the field (without list/non-null markers)
        nullable: Whether null is an acceptable value
        is_list: Whether the field is a list of ``graphql_type``
        selection: Nested selection for object fields
        arguments: Field arguments; strings starting with ``$`` reference variables
        alias: Response key alias
    """

    name: str
    graphql_type: str = "String"
    nullable: bool = True
    is_list: bool = False
    selection: Optional["Selection"] = None
    arguments: Dict[str, Any] = field(default_factory=dict)
    alias: Optional[str] = None

    @property
    def response_key(self) -> str:
        """Key under which the field appears in response data."""
        return self.alias or self.name

    @property
    def is_object(self) -> bool:
        return self.selection is not None


class Selection:
    """Ordered set of fields selected on an object type."""

    def __init__(self, *fields: Field) -> None:
        self.fields: List[Field] = []
        self._by_key: Dict[str, Field] = {}
        for item in fields:
            self.add(item)

    def add(self, item: Field) -> "Selection":
        """
        Add a field to the selection.

        Raises:
            ValueError: If another field already uses the same response key
        """
        key = item.response_key
        if key in self._by_key:
            raise ValueError(f"Duplicate field {key!r} in selection")
        self.fields.append(item)
        self._by_key[key] = item
        return self

    def get(self, key: str) -> Optional[Field]:
        return self._by_key.get(key)

    def __iter__(self) -> Iterator[Field]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)


class OperationDescriptor:
    """
    Typed description of an operation's response, populated in place by the binder.

    Examples:
        ```python
        viewer = OperationDescriptor(Selection(
            Field("viewer", "User", nullable=False, selection=Selection(
                Field("login", "String", nullable=False),
            )),
        ))
        await client.query(viewer)
        print(viewer["viewer"]["login"])
        ```
    """

    def __init__(self, selection: Selection) -> None:
        self.selection = selection
        self.data: Optional[Dict[str, Any]] = None

    @property
    def is_bound(self) -> bool:
        """Whether response data has been bound to the descriptor."""
        return self.data is not None

    def __getitem__(self, key: str) -> Any:
        if self.data is None:
            raise KeyError(key)
        return self.data[key]

    def get(self, key: str, default: Any = None) -> Any:
        if self.data is None:
            return default
        return self.data.get(key, default)


def variable_values(variables: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Unwrap typed variables into the raw values sent on the wire."""
    if not variables:
        return {}
    return {
        name: value.value if isinstance(value, Variable) else value
        for name, value in variables.items()
    }
