"""Record listing package

Search and pagination over fetched record snapshots.
"""

from .listing import (
    Page,
    filter_records,
    paginate,
    search,
)

__all__ = [
    "Page",
    "filter_records",
    "paginate",
    "search",
]
