"""Error telemetry

Best-effort error reports to the backend and the render boundary that
produces them.
"""

from .reporting import ErrorReport, ErrorReporter
from .boundary import FailurePanel, RenderBoundary

__all__ = [
    "ErrorReport",
    "ErrorReporter",
    "FailurePanel",
    "RenderBoundary",
]
