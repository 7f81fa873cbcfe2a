"""
Response binder.

Validates raw response data against an operation descriptor and stores the
result on the descriptor. The descriptor is only touched once the whole
payload has been validated.
"""

from __future__ import annotations

from typing import Any, Dict, List

from ..exceptions import BindError
from .schema import Field, OperationDescriptor, Selection


def bind(raw: Any, descriptor: OperationDescriptor) -> None:
    """
    Bind raw response data to a descriptor.

    Args:
        raw: Decoded ``data`` value of the response envelope
        descriptor: Descriptor to populate

    Raises:
        BindError: If the data does not match the descriptor's selection
    """
    descriptor.data = _bind_object(raw, descriptor.selection, "data")


def _bind_object(raw: Any, selection: Selection, path: str) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raise BindError(f"expected object at {path}, got {_json_type(raw)}", path=path)

    for key in raw:
        if selection.get(key) is None:
            raise BindError(f"unexpected field {key!r} at {path}", path=f"{path}.{key}")

    result: Dict[str, Any] = {}
    for item in selection:
        key = item.response_key
        child_path = f"{path}.{key}"
        if key not in raw:
            if not item.nullable:
                raise BindError(f"missing non-null field at {child_path}", path=child_path)
            result[key] = None
            continue
        result[key] = _bind_field(raw[key], item, child_path)
    return result


def _bind_field(raw: Any, item: Field, path: str) -> Any:
    if raw is None:
        if not item.nullable:
            raise BindError(f"null value for non-null field at {path}", path=path)
        return None

    if item.is_list:
        if not isinstance(raw, list):
            raise BindError(f"expected list at {path}, got {_json_type(raw)}", path=path)
        items: List[Any] = []
        for index, element in enumerate(raw):
            # list elements may be null; element nullability is not modelled
            if element is None:
                items.append(None)
            else:
                items.append(_bind_value(element, item, f"{path}[{index}]"))
        return items

    return _bind_value(raw, item, path)


def _bind_value(raw: Any, item: Field, path: str) -> Any:
    if item.selection is not None:
        return _bind_object(raw, item.selection, path)
    return _bind_scalar(raw, item.graphql_type, path)


def _bind_scalar(raw: Any, graphql_type: str, path: str) -> Any:
    if isinstance(raw, (dict, list)):
        raise BindError(
            f"expected scalar {graphql_type} at {path}, got {_json_type(raw)}", path=path
        )

    if graphql_type == "Boolean":
        if not isinstance(raw, bool):
            raise _scalar_error(raw, graphql_type, path)
    elif graphql_type == "Int":
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise _scalar_error(raw, graphql_type, path)
    elif graphql_type == "Float":
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise _scalar_error(raw, graphql_type, path)
        return float(raw)
    elif graphql_type == "String":
        if not isinstance(raw, str):
            raise _scalar_error(raw, graphql_type, path)
    elif graphql_type == "ID":
        if isinstance(raw, bool) or not isinstance(raw, (str, int)):
            raise _scalar_error(raw, graphql_type, path)
        return str(raw)

    # custom scalars and enums pass through unchanged
    return raw


def _scalar_error(raw: Any, graphql_type: str, path: str) -> BindError:
    return BindError(
        f"cannot bind {_json_type(raw)} {raw!r} to {graphql_type} at {path}", path=path
    )


def _json_type(raw: Any) -> str:
    if raw is None:
        return "null"
    if isinstance(raw, bool):
        return "boolean"
    if isinstance(raw, (int, float)):
        return "number"
    if isinstance(raw, str):
        return "string"
    if isinstance(raw, list):
        return "array"
    if isinstance(raw, dict):
        return "object"
    return type(raw).__name__
