import asyncio

import pytest

from ccms_core_lib.errors import DuplicateSubmissionError
from ccms_core_lib.forms import CaseForm, FormSubmission, SubmissionStatus


VALID = {
    "title": "Ransomware at clinic",
    "description": "Patient records encrypted, ransom note on every PC",
    "type": "ransomware",
}


class Recorder:
    def __init__(self, result=None, error=None, delay=0.0):
        self.result = result
        self.error = error
        self.delay = delay
        self.calls = []

    async def __call__(self, form):
        self.calls.append(form)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.result


class FakeReporter:
    def __init__(self):
        self.reports = []

    async def report(self, exc, component=None):
        self.reports.append((exc, component))
        return True


@pytest.mark.asyncio
async def test_validation_failure_sends_nothing():
    submit = Recorder(result="created")
    form = FormSubmission(CaseForm, submit, success_display_seconds=0.01)
    form.update(title="", description="short", type="phishing")

    result = await form.submit()

    assert result is None
    assert submit.calls == []
    assert form.status == SubmissionStatus.IDLE
    assert form.field_errors == {
        "title": ["Title is required"],
        "description": ["Description must be at least 10 characters"],
    }


@pytest.mark.asyncio
async def test_editing_a_field_clears_its_errors():
    form = FormSubmission(CaseForm, Recorder(), success_display_seconds=0.01)
    await form.submit()
    assert "title" in form.field_errors

    form.set_value("title", "Fixed")
    assert "title" not in form.field_errors
    assert "description" in form.field_errors


@pytest.mark.asyncio
async def test_success_resets_values_and_clears_after_delay():
    submit = Recorder(result={"id": 9})
    form = FormSubmission(CaseForm, submit, success_display_seconds=0.05)
    form.update(**VALID)

    result = await form.submit()

    assert result == {"id": 9}
    assert form.status == SubmissionStatus.SUCCESS
    assert form.succeeded
    assert form.values == CaseForm.form_defaults
    assert isinstance(submit.calls[0], CaseForm)

    await asyncio.sleep(0.1)
    assert form.status == SubmissionStatus.IDLE


@pytest.mark.asyncio
async def test_failure_keeps_values_and_reports():
    reporter = FakeReporter()
    error = RuntimeError("Backend unavailable")
    form = FormSubmission(
        CaseForm,
        Recorder(error=error),
        success_display_seconds=0.01,
        error_reporter=reporter,
        name="case_form",
    )
    form.update(**VALID)

    result = await form.submit()

    assert result is None
    assert form.status == SubmissionStatus.ERROR
    assert form.failed
    assert form.error == "Backend unavailable"
    assert form.values["title"] == VALID["title"]
    assert not form.is_submitting
    assert reporter.reports == [(error, "case_form")]

    form.dismiss_error()
    assert form.status == SubmissionStatus.IDLE
    assert form.error is None


@pytest.mark.asyncio
async def test_duplicate_submission_is_rejected():
    submit = Recorder(result="ok", delay=0.05)
    form = FormSubmission(CaseForm, submit, success_display_seconds=0.01)
    form.update(**VALID)

    first = asyncio.ensure_future(form.submit())
    await asyncio.sleep(0)
    assert form.is_submitting

    with pytest.raises(DuplicateSubmissionError):
        await form.submit()

    assert await first == "ok"
    assert len(submit.calls) == 1


@pytest.mark.asyncio
async def test_cancelled_submission_leaves_submitting_state():
    form = FormSubmission(CaseForm, Recorder(delay=1.0), success_display_seconds=0.01)
    form.update(**VALID)

    task = asyncio.ensure_future(form.submit())
    await asyncio.sleep(0)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert form.status == SubmissionStatus.IDLE


@pytest.mark.asyncio
async def test_subscribers_see_every_transition():
    seen = []
    form = FormSubmission(CaseForm, Recorder(result=1), success_display_seconds=0.01)
    unsubscribe = form.subscribe(lambda f: seen.append(f.status))
    form.update(**VALID)

    await form.submit()
    unsubscribe()
    form.reset()

    assert SubmissionStatus.SUBMITTING in seen
    assert seen[-1] == SubmissionStatus.SUCCESS


def test_defaults_can_be_overridden():
    form = FormSubmission(
        CaseForm, Recorder(), defaults={"priority": "high"}, success_display_seconds=1
    )
    assert form.values["priority"] == "high"
    assert form.values["title"] == ""


@pytest.mark.asyncio
async def test_resubmitting_clears_previous_error_and_resends_values():
    submit = Recorder(error=RuntimeError("Backend unavailable"))
    form = FormSubmission(CaseForm, submit, success_display_seconds=0.01)
    form.update(**VALID)

    assert await form.submit() is None
    assert form.error == "Backend unavailable"

    seen = []
    form.subscribe(lambda f: seen.append((f.status, f.error)))
    submit.error = None
    submit.result = "created"

    assert await form.submit() == "created"

    assert seen[0] == (SubmissionStatus.SUBMITTING, None)
    assert form.error is None
    assert len(submit.calls) == 2
    assert submit.calls[1].title == VALID["title"]
    assert submit.calls[1].description == VALID["description"]
