"""Shared handling of unauthorized responses.

Every view routes 401/403 failures through one AccessPolicy instead of
carrying its own redirect branch.

- PublicAccessPolicy: the dashboard is open to everyone; an unauthorized
  response is an ordinary failure and is shown as such.
- LoginRedirectPolicy: a login flow exists; the user is told the session
  ended and the host's redirect hook runs shortly after.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Optional

from ccms_core_lib.i18n import t

if TYPE_CHECKING:
    from ccms_core_lib.views.notifications import Notifier

logger = logging.getLogger(__name__)

# Delay between the "logged out" notice and the redirect
REDIRECT_DELAY_SECONDS = 0.5


class AccessPolicy(ABC):
    """Decides what an unauthorized backend response means for the user"""

    @property
    @abstractmethod
    def requires_login(self) -> bool:
        pass

    @abstractmethod
    def handle_unauthorized(
        self, error: BaseException, notifier: "Notifier", failure_message: str
    ) -> None:
        """Surface an unauthorized failure.

        Args:
            error: The 401/403 error
            notifier: Where user-visible notices go
            failure_message: What the view would show for any other failure
        """
        pass


class PublicAccessPolicy(AccessPolicy):
    """No login exists; unauthorized responses are plain failures."""

    @property
    def requires_login(self) -> bool:
        return False

    def handle_unauthorized(
        self, error: BaseException, notifier: "Notifier", failure_message: str
    ) -> None:
        logger.warning(f"Unauthorized response under public access: {error}")
        notifier.error(failure_message)


class LoginRedirectPolicy(AccessPolicy):
    """Announce the ended session, then send the user to the login flow."""

    def __init__(self, redirect: Callable[[], None], lang: Optional[str] = None):
        self.redirect = redirect
        self.lang = lang

    @property
    def requires_login(self) -> bool:
        return True

    def handle_unauthorized(
        self, error: BaseException, notifier: "Notifier", failure_message: str
    ) -> None:
        lang = self.lang or "en"
        notifier.error(t("unauthorized", lang), title=t("unauthorizedTitle", lang))
        logger.info("Session rejected by backend, redirecting to login")
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.redirect()
            return
        loop.call_later(REDIRECT_DELAY_SECONDS, self.redirect)
