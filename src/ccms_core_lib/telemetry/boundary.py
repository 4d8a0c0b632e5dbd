"""Render boundary.

Wraps the render step of a page so an uncaught exception shows a failure
panel instead of tearing down the application. The panel offers "Try Again"
(render once more) and "Reload Page" (the host's reload hook).
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Union

from ccms_core_lib.config import get_settings
from ccms_core_lib.i18n import DEFAULT_LANGUAGE, t
from ccms_core_lib.telemetry.reporting import ErrorReporter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FailurePanel:
    """What the user sees after a render failure."""

    title: str
    message: str
    retry_label: str
    reload_label: str
    details: Optional[str] = None


class RenderBoundary:
    """Catches render failures and falls back to a FailurePanel.

    Usage:
        boundary = RenderBoundary(page.render, reporter=reporter,
                                  on_reload=app.restart)
        view = await boundary.render()
    """

    def __init__(
        self,
        render: Callable[[], Awaitable[Any]],
        *,
        reporter: Optional[ErrorReporter] = None,
        on_reload: Optional[Callable[[], None]] = None,
        component: Optional[str] = None,
        fallback: Any = None,
        lang: str = DEFAULT_LANGUAGE,
    ):
        """Initialize boundary.

        Args:
            render: Async callable producing the rendered view
            reporter: Telemetry sink for caught errors
            on_reload: Host hook behind "Reload Page"
            component: Name reported as the component stack
            fallback: Shown instead of the default FailurePanel when given
            lang: Language of the default panel
        """
        self._render = render
        self.reporter = reporter
        self.on_reload = on_reload
        self.component = component or getattr(render, "__qualname__", None)
        self.fallback = fallback
        self.lang = lang
        self.error: Optional[BaseException] = None

    @property
    def has_error(self) -> bool:
        return self.error is not None

    async def render(self) -> Union[Any, FailurePanel]:
        """Render, or return the fallback if rendering raised."""
        if self.error is not None:
            return self._fallback()
        try:
            return await self._render()
        except Exception as e:
            logger.error(f"Render boundary caught an error in {self.component}: {e}")
            self.error = e
            if self.reporter is not None:
                await self.reporter.report(e, component=self.component)
            return self._fallback()

    async def retry(self) -> Union[Any, FailurePanel]:
        """Clear the caught error and render again."""
        self.error = None
        return await self.render()

    def reload(self) -> None:
        if self.on_reload is None:
            logger.warning("Reload requested but no reload hook is configured")
            return
        self.on_reload()

    def _fallback(self) -> Union[Any, FailurePanel]:
        if self.fallback is not None:
            return self.fallback
        details = None
        if self.error is not None and not get_settings().is_production:
            details = f"{self.error.__class__.__name__}: {self.error}"
        return FailurePanel(
            title=t("somethingWentWrong", self.lang),
            message=t("unexpectedError", self.lang),
            retry_label=t("tryAgain", self.lang),
            reload_label=t("reloadPage", self.lang),
            details=details,
        )
