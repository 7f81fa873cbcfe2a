"""
Custom logging filters for gql_fetch.

This module provides a filter masking credentials that may end up in log
messages, such as bearer tokens and Authorization headers.
"""

import logging
import re
from typing import List, Pattern, Tuple


class SensitiveDataFilter(logging.Filter):
    """Filter to mask sensitive data in log messages."""

    def __init__(self) -> None:
        """Initialize sensitive data filter."""
        super().__init__()

        self.rules: List[Tuple[Pattern[str], str]] = [
            # API keys and tokens
            (
                re.compile(
                    r'(api[_-]?key|token|secret)(["\s]*[:=]["\s]*)([a-zA-Z0-9_+/=-]{8,})',
                    re.IGNORECASE,
                ),
                r"\1\2***MASKED***",
            ),
            # Bearer tokens
            (re.compile(r"(bearer\s+)([a-zA-Z0-9_.+/=-]{8,})", re.IGNORECASE), r"\1***MASKED***"),
            # Authorization headers with other schemes
            (
                re.compile(r'(authorization["\']?\s*[:=]\s*["\']?)(?!["\'\s]*bearer)([^"\',}\n]+)', re.IGNORECASE),
                r"\1***MASKED***",
            ),
            # URLs with credentials
            (re.compile(r"(https?://[^:/\s]+):([^@/\s]+)@", re.IGNORECASE), r"\1:***MASKED***@"),
        ]

    def mask(self, message: str) -> str:
        """Apply all masking rules to a message."""
        for pattern, replacement in self.rules:
            message = pattern.sub(replacement, message)
        return message

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter log record to mask sensitive data."""
        message = record.getMessage()
        masked = self.mask(message)
        if masked != message:
            record.msg = masked
            record.args = ()
        return True
