"""Utility Functions"""

from ccms_core_lib.utils.resilience import (
    create_read_retry,
    call_with_retry,
)

__all__ = [
    "create_read_retry",
    "call_with_retry",
]
