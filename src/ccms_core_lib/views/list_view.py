"""Searchable, paged list bound to one backend path."""

import logging
from typing import Awaitable, Callable, Generic, List, Optional, Sequence, TypeVar

from ccms_core_lib.auth import AccessPolicy, PublicAccessPolicy
from ccms_core_lib.config import get_settings
from ccms_core_lib.core import Page, search
from ccms_core_lib.errors import REQUEST_ERRORS, is_unauthorized_error
from ccms_core_lib.views.notifications import Notifier

logger = logging.getLogger(__name__)

T = TypeVar("T")


def surface_failure(
    error: BaseException,
    notifier: Notifier,
    access_policy: AccessPolicy,
    failure_message: str,
) -> None:
    """Show a failed request to the user.

    401/403 responses go through the access policy, everything else becomes
    an error notification carrying ``failure_message``.
    """
    if is_unauthorized_error(error):
        access_policy.handle_unauthorized(error, notifier, failure_message)
    else:
        notifier.error(failure_message)


class ListView(Generic[T]):
    """Records fetched from ``path`` with local search and pagination.

    Usage:
        cases = ListView("/api/cases", client.list_cases, notifier=notifier)
        await cases.load()
        cases.set_query("phish")
        cases.current_page().summary()  # 'Showing 1 to 5 of 12 results'
    """

    def __init__(
        self,
        path: str,
        loader: Callable[[], Awaitable[Sequence[T]]],
        *,
        notifier: Notifier,
        access_policy: Optional[AccessPolicy] = None,
        page_size: Optional[int] = None,
        fields: Optional[Sequence[str]] = None,
        failure_message: str = "Failed to load data",
    ):
        self.path = path
        self._loader = loader
        self.notifier = notifier
        self.access_policy = access_policy or PublicAccessPolicy()
        self.page_size = page_size or get_settings().page_size
        self.fields = fields
        self.failure_message = failure_message

        self.records: List[T] = []
        self.query = ""
        self.page = 1
        self.is_loading = False
        self.loaded = False
        self.error: Optional[BaseException] = None

    async def load(self) -> List[T]:
        """Fetch records; on failure keep the previous records and notify.

        Raises:
            Anything other than a failed request or malformed reply (left to
            the render boundary)
        """
        self.is_loading = True
        try:
            records = await self._loader()
        except REQUEST_ERRORS as e:
            logger.error(f"Failed to load {self.path}: {e}")
            self.error = e
            surface_failure(e, self.notifier, self.access_policy, self.failure_message)
        else:
            self.records = list(records)
            self.error = None
            self.loaded = True
        finally:
            self.is_loading = False

        self.page = min(self.page, self.total_pages) or 1
        return self.records

    def set_query(self, query: str) -> None:
        """Change the search text and go back to the first page."""
        self.query = query
        self.page = 1

    def current_page(self) -> Page[T]:
        return search(self.records, self.query, self.page, self.page_size, self.fields)

    @property
    def total_pages(self) -> int:
        return self.current_page().total_pages

    def go_to(self, page: int) -> Page[T]:
        """Move to ``page``, clamped to the valid pages."""
        self.page = max(1, min(page, self.total_pages or 1))
        return self.current_page()

    def next_page(self) -> Page[T]:
        return self.go_to(self.page + 1)

    def previous_page(self) -> Page[T]:
        return self.go_to(self.page - 1)
