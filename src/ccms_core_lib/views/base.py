"""Shared plumbing of the dashboard page containers."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, ClassVar, Optional, Sequence, TypeVar

from ccms_core_lib.auth import AccessPolicy, PublicAccessPolicy
from ccms_core_lib.clients import CaseManagementClient
from ccms_core_lib.config import ClientSettings, get_settings
from ccms_core_lib.errors import REQUEST_ERRORS
from ccms_core_lib.i18n import LanguagePreference, get_language_preference
from ccms_core_lib.telemetry import ErrorReporter
from ccms_core_lib.views.list_view import ListView, surface_failure
from ccms_core_lib.views.notifications import Notifier

logger = logging.getLogger(__name__)

R = TypeVar("R")


class PageContainer(ABC):
    """Base class for page containers.

    A page owns its list views and forms, talks to the backend through one
    CaseManagementClient and reports every outcome through its Notifier.
    Unauthorized responses are handed to the shared AccessPolicy.
    """

    title_key: ClassVar[str] = "appName"

    def __init__(
        self,
        client: CaseManagementClient,
        *,
        notifier: Optional[Notifier] = None,
        access_policy: Optional[AccessPolicy] = None,
        preference: Optional[LanguagePreference] = None,
        reporter: Optional[ErrorReporter] = None,
        settings: Optional[ClientSettings] = None,
    ):
        self.client = client
        self.preference = preference or get_language_preference()
        self.notifier = notifier or Notifier(self.preference.t)
        self.access_policy = access_policy or PublicAccessPolicy()
        self.reporter = reporter
        self.settings = settings or get_settings()

    @property
    def title(self) -> str:
        return self.t(self.title_key)

    def t(self, key: str) -> str:
        return self.preference.t(key)

    def list_view(
        self,
        path: str,
        loader: Callable[[], Awaitable[Sequence[Any]]],
        fields: Optional[Sequence[str]] = None,
    ) -> ListView:
        return ListView(
            path,
            loader,
            notifier=self.notifier,
            access_policy=self.access_policy,
            page_size=self.settings.page_size,
            fields=fields,
            failure_message=self.t("loadFailed"),
        )

    def surface_failure(self, error: BaseException, failure_key: str) -> None:
        surface_failure(error, self.notifier, self.access_policy, self.t(failure_key))

    @abstractmethod
    async def load(self) -> None:
        """Fetch everything the page shows."""
        pass

    async def mutate(
        self,
        action: Callable[[], Awaitable[R]],
        success_key: str,
        failure_key: str,
        reload: Optional[ListView] = None,
    ) -> Optional[R]:
        """Run a backend write and notify about its outcome.

        Returns:
            The action's result, or None if the request failed
        """
        try:
            result = await action()
        except REQUEST_ERRORS as e:
            logger.error(f"{self.__class__.__name__} request failed: {e}")
            self.surface_failure(e, failure_key)
            if self.reporter is not None:
                await self.reporter.report(e, component=self.__class__.__name__)
            return None

        self.notifier.success(self.t(success_key))
        if reload is not None:
            await reload.load()
        return result
