"""
GraphQL operation builder.

This module renders schema descriptors into compact GraphQL operation strings,
for example ``query($login:String!){user(login:$login){name}}``.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Optional

from ..exceptions import QueryBuildError
from .models import OperationKind
from .schema import Field, OperationDescriptor, Selection, Variable


def build_operation_string(
    kind: OperationKind,
    descriptor: OperationDescriptor,
    variables: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Build the operation string for a descriptor.

    Args:
        kind: Operation kind (query or mutation)
        descriptor: Response shape to select
        variables: Operation variables; their GraphQL types are declared in
            the operation header

    Returns:
        GraphQL operation string

    Raises:
        QueryBuildError: If the descriptor or a variable cannot be rendered
    """
    try:
        builder = _BUILDERS[OperationKind(kind)]
    except (KeyError, ValueError):
        raise QueryBuildError(f"Unsupported operation kind: {kind!r}")
    return builder(descriptor, variables or {})


def construct_query(descriptor: OperationDescriptor, variables: Dict[str, Any]) -> str:
    """Build a query; the ``query`` keyword is only emitted with variables."""
    body = render_selection(descriptor.selection)
    if not variables:
        return body
    return f"query({query_arguments(variables)}){body}"


def construct_mutation(descriptor: OperationDescriptor, variables: Dict[str, Any]) -> str:
    """Build a mutation."""
    body = render_selection(descriptor.selection)
    if not variables:
        return f"mutation{body}"
    return f"mutation({query_arguments(variables)}){body}"


_BUILDERS: Dict[OperationKind, Callable[[OperationDescriptor, Dict[str, Any]], str]] = {
    OperationKind.QUERY: construct_query,
    OperationKind.MUTATION: construct_mutation,
}


def query_arguments(variables: Dict[str, Any]) -> str:
    """
    Render variable definitions, sorted by name.

    Example: ``{"b": 1, "a": "x"}`` renders as ``$a:String!$b:Int!``.
    """
    parts = []
    for name in sorted(variables):
        parts.append(f"${name}:{graphql_type_of(name, variables[name])}")
    return "".join(parts)


def graphql_type_of(name: str, value: Any) -> str:
    """Infer the GraphQL type of a variable value."""
    if isinstance(value, Variable):
        if not value.graphql_type:
            raise QueryBuildError(f"Variable ${name} has an empty GraphQL type")
        return value.graphql_type
    # bool before int: bool is a subclass of int
    if isinstance(value, bool):
        return "Boolean!"
    if isinstance(value, int):
        return "Int!"
    if isinstance(value, float):
        return "Float!"
    if isinstance(value, str):
        return "String!"
    if isinstance(value, (list, tuple)):
        if not value:
            raise QueryBuildError(
                f"Cannot infer the type of empty list variable ${name}; wrap it in Variable"
            )
        item_types = {graphql_type_of(name, item) for item in value}
        if len(item_types) != 1:
            raise QueryBuildError(f"List variable ${name} mixes types: {sorted(item_types)}")
        return f"[{item_types.pop()}]!"
    raise QueryBuildError(
        f"Cannot infer GraphQL type of variable ${name} ({type(value).__name__}); wrap it in Variable"
    )


def render_selection(selection: Selection) -> str:
    """Render a selection set in compact form."""
    if not len(selection):
        raise QueryBuildError("Selection must contain at least one field")
    return "{" + ",".join(render_field(item) for item in selection) + "}"


def render_field(item: Field) -> str:
    """Render a single field with alias, arguments and nested selection."""
    if not item.name:
        raise QueryBuildError("Field name must not be empty")

    result = ""
    if item.alias:
        result += f"{item.alias}:"
    result += item.name

    if item.arguments:
        args_str = ",".join(
            f"{key}:{format_value(value)}" for key, value in item.arguments.items()
        )
        result += f"({args_str})"

    if item.selection is not None:
        result += render_selection(item.selection)

    return result


def format_value(value: Any) -> str:
    """Format an argument literal; strings starting with ``$`` are variable references."""
    if isinstance(value, str):
        if value.startswith("$"):
            return value
        return json.dumps(value)
    elif isinstance(value, bool):
        return "true" if value else "false"
    elif isinstance(value, (int, float)):
        return str(value)
    elif isinstance(value, (list, tuple)):
        return "[" + ",".join(format_value(item) for item in value) + "]"
    elif isinstance(value, dict):
        return "{" + ",".join(f"{key}:{format_value(val)}" for key, val in value.items()) + "}"
    elif value is None:
        return "null"
    raise QueryBuildError(f"Unsupported argument value of type {type(value).__name__}")
