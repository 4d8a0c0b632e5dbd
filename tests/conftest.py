from typing import Any, Callable, Dict, List, Tuple, Union

import httpx
import pytest

from ccms_core_lib.clients import CaseManagementClient
from ccms_core_lib.config import reset_settings
from ccms_core_lib.i18n import (
    InMemoryPreferenceStorage,
    LanguagePreference,
    reset_language_preference,
)

CCMS_ENV_VARS = (
    "CCMS_API_BASE_URL",
    "CCMS_API_TIMEOUT",
    "CCMS_API_MAX_RETRIES",
    "CCMS_ENV",
    "CCMS_PAGE_SIZE",
    "CCMS_SUCCESS_DISPLAY_SECONDS",
    "CCMS_PREFERENCES_PATH",
)

Route = Union[Tuple[int, Any], Callable[[httpx.Request], httpx.Response]]


class FakeBackend:
    """In-process stand-in for the CCMS REST backend."""

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Route] = {}
        self.requests: List[httpx.Request] = []

    def on(self, method: str, path: str, body: Any = None, status: int = 200) -> None:
        self.routes[(method, path)] = (status, body)

    def on_call(
        self, method: str, path: str, handler: Callable[[httpx.Request], httpx.Response]
    ) -> None:
        self.routes[(method, path)] = handler

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "Not found"})
        if callable(route):
            return route(request)
        status, body = route
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    def count(self, method: str, path: str) -> int:
        return sum(
            1
            for request in self.requests
            if request.method == method and request.url.path == path
        )

    def client(self, **kwargs: Any) -> CaseManagementClient:
        http = httpx.AsyncClient(transport=httpx.MockTransport(self.handle))
        kwargs.setdefault("retry_wait", 0)
        return CaseManagementClient("http://ccms.test", client=http, **kwargs)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    for name in CCMS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("CCMS_PREFERENCES_PATH", str(tmp_path / "preferences.json"))
    reset_settings()
    reset_language_preference()
    yield
    reset_settings()
    reset_language_preference()


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def preference():
    return LanguagePreference(InMemoryPreferenceStorage())


def case_json(case_id: int = 1, **overrides: Any) -> Dict[str, Any]:
    data = {
        "id": case_id,
        "caseNumber": f"CC-2024-{case_id:03d}",
        "title": f"Case {case_id}",
        "description": "Victim reported a suspicious transaction",
        "type": "financial_fraud",
        "priority": "medium",
        "status": "open",
        "createdAt": "2024-01-05T10:00:00Z",
        "updatedAt": "2024-01-05T10:00:00Z",
    }
    data.update(overrides)
    return data


def complaint_json(complaint_id: int = 1, **overrides: Any) -> Dict[str, Any]:
    data = {
        "id": complaint_id,
        "complaintNumber": f"CMP-{complaint_id:04d}",
        "victimName": "Asha Patil",
        "incidentType": "upi_fraud",
        "description": "Money debited after scanning a QR code",
        "status": "submitted",
    }
    data.update(overrides)
    return data
