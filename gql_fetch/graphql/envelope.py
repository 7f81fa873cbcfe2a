"""Decoding of the GraphQL response envelope."""

from __future__ import annotations

from typing import Optional, Union

from pydantic import ValidationError

from ..exceptions import DecodeError
from .models import ResponseEnvelope


def decode_envelope(body: Union[bytes, str], url: Optional[str] = None) -> ResponseEnvelope:
    """
    Decode an HTTP 200 response body into a ResponseEnvelope.

    ``extensions`` and any other unknown top-level keys are discarded.

    Args:
        body: Raw response body
        url: Endpoint the body came from, for error reporting

    Returns:
        ResponseEnvelope with raw data and errors

    Raises:
        DecodeError: If the body is not JSON or not shaped like an envelope
    """
    try:
        return ResponseEnvelope.model_validate_json(body)
    except ValidationError as e:
        raise DecodeError(
            f"Invalid GraphQL response: {e.error_count()} error(s), first: {e.errors()[0]['msg']}",
            url=url,
            validation_errors=e.errors(),
        )
