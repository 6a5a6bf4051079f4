"""Shared utility functions and models for the My Money application.

This package provides convenience re-exports so that consumers can import
directly from ``mymoney.utils`` (e.g. ``from mymoney.utils import utc_now``)
while full absolute imports remain supported.
"""

from mymoney.utils.audit import AuditEvent, log_audit_event
from mymoney.utils.general import convert_to_json_safe, ensure_utc, utc_now

__all__ = [
    "AuditEvent",
    "convert_to_json_safe",
    "ensure_utc",
    "log_audit_event",
    "utc_now",
]
