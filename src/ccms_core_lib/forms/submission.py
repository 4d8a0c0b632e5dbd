"""Form submission pipeline.

Drives one form from input to backend call:

    IDLE ──submit()──> SUBMITTING ──ok──> SUCCESS ──(after delay)──> IDLE
                           │
                           └──failed──> ERROR ──dismiss_error()/submit()──> IDLE

- Validation failures never leave IDLE; they only populate ``field_errors``.
- SUCCESS resets the input values to their defaults; the confirmation clears
  itself after ``success_display_seconds`` without user action.
- ERROR keeps the values the user typed and holds the error message until it
  is dismissed or another submission is attempted.
- A second ``submit()`` while one is in flight raises
  ``DuplicateSubmissionError`` instead of sending another request.
"""

import asyncio
import logging
from enum import Enum
from typing import (
    TYPE_CHECKING,
    Any,
    Awaitable,
    Callable,
    Dict,
    Generic,
    List,
    Mapping,
    Optional,
    Type,
)

from ccms_core_lib.config import get_settings
from ccms_core_lib.errors import DuplicateSubmissionError
from ccms_core_lib.forms.schema import S, validate_form

if TYPE_CHECKING:
    from ccms_core_lib.telemetry import ErrorReporter

logger = logging.getLogger(__name__)


class SubmissionStatus(str, Enum):
    """Mutually exclusive pipeline states; SUCCESS and ERROR are settled."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


Listener = Callable[["FormSubmission"], None]


class FormSubmission(Generic[S]):
    """Validation and submission state for one form.

    Usage:
        form = FormSubmission(CaseForm, client.create_case)
        form.update(title="Phishing SMS", description="Victim received ...",
                    type="phishing")
        created = await form.submit()
    """

    def __init__(
        self,
        schema: Type[S],
        submit: Callable[[S], Awaitable[Any]],
        *,
        defaults: Optional[Mapping[str, Any]] = None,
        success_display_seconds: Optional[float] = None,
        error_reporter: Optional["ErrorReporter"] = None,
        name: Optional[str] = None,
    ):
        """Initialize pipeline.

        Args:
            schema: FormSchema subclass holding the constraints
            submit: Async callable receiving the validated schema instance
            defaults: Overrides for the schema's ``form_defaults``
            success_display_seconds: Success confirmation lifetime
                (default: settings, 3 seconds)
            error_reporter: Optional telemetry sink for failed submissions
            name: Form name used in logs and error reports
        """
        self.schema = schema
        self._submit = submit
        self._defaults: Dict[str, Any] = dict(schema.form_defaults)
        if defaults:
            self._defaults.update(defaults)
        if success_display_seconds is None:
            success_display_seconds = get_settings().success_display_seconds
        self.success_display_seconds = success_display_seconds
        self.error_reporter = error_reporter
        self.name = name or schema.__name__

        self.values: Dict[str, Any] = dict(self._defaults)
        self.field_errors: Dict[str, List[str]] = {}
        self.status = SubmissionStatus.IDLE
        self.error: Optional[str] = None
        self.result: Any = None

        self._success_timer: Optional[asyncio.TimerHandle] = None
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def is_submitting(self) -> bool:
        """True while the submit callable is running; bind to the submit control"""
        return self.status == SubmissionStatus.SUBMITTING

    @property
    def succeeded(self) -> bool:
        return self.status == SubmissionStatus.SUCCESS

    @property
    def failed(self) -> bool:
        return self.status == SubmissionStatus.ERROR

    @property
    def defaults(self) -> Dict[str, Any]:
        return dict(self._defaults)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(form)`` after every state change.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def set_value(self, name: str, value: Any) -> None:
        """Set one input value and clear that field's validation messages."""
        self.values[name] = value
        self.field_errors.pop(name, None)
        self._notify()

    def update(self, **values: Any) -> None:
        for name, value in values.items():
            self.values[name] = value
            self.field_errors.pop(name, None)
        self._notify()

    def reset(self) -> None:
        """Restore default values and drop validation messages."""
        self.values = dict(self._defaults)
        self.field_errors = {}
        self._notify()

    def dismiss_error(self) -> None:
        """Hide the submission error banner."""
        if self.status == SubmissionStatus.ERROR:
            self.status = SubmissionStatus.IDLE
            self.error = None
            self._notify()

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    async def submit(self) -> Any:
        """Validate the current values and send them.

        Returns:
            The submit callable's result, or None when validation or the
            submission failed (see ``field_errors`` / ``error``)

        Raises:
            DuplicateSubmissionError: If a submission is already in flight
        """
        if self.status == SubmissionStatus.SUBMITTING:
            raise DuplicateSubmissionError(
                f"{self.name} submission already in progress"
            )

        self._cancel_success_timer()
        self.status = SubmissionStatus.IDLE
        self.error = None

        validation = validate_form(self.schema, self.values)
        if not validation.is_valid:
            self.field_errors = validation.errors
            logger.info(
                f"{self.name} validation failed: {sorted(validation.errors)}"
            )
            self._notify()
            return None

        self.field_errors = {}
        self.status = SubmissionStatus.SUBMITTING
        self._notify()

        try:
            result = await self._submit(validation.data)
        except Exception as e:
            logger.error(f"{self.name} submission failed: {e}")
            self.status = SubmissionStatus.ERROR
            self.error = str(e) or e.__class__.__name__
            self._notify()
            if self.error_reporter is not None:
                await self.error_reporter.report(e, component=self.name)
            return None
        else:
            self.result = result
            self.values = dict(self._defaults)
            self.status = SubmissionStatus.SUCCESS
            self._schedule_success_clear()
        finally:
            if self.status == SubmissionStatus.SUBMITTING:
                # Cancelled while awaiting the submit callable
                self.status = SubmissionStatus.IDLE
                self._notify()

        logger.info(f"{self.name} submitted successfully")
        self._notify()
        return self.result

    def _schedule_success_clear(self) -> None:
        loop = asyncio.get_running_loop()
        self._success_timer = loop.call_later(
            self.success_display_seconds, self._clear_success
        )

    def _cancel_success_timer(self) -> None:
        if self._success_timer is not None:
            self._success_timer.cancel()
            self._success_timer = None

    def _clear_success(self) -> None:
        self._success_timer = None
        if self.status == SubmissionStatus.SUCCESS:
            self.status = SubmissionStatus.IDLE
            self._notify()
