import json

import httpx
import pytest

from ccms_core_lib.auth import RequestContext
from ccms_core_lib.clients import CaseManagementClient, QueryCache, http_external_services
from ccms_core_lib.config import ClientSettings
from ccms_core_lib.errors import is_unauthorized_error
from ccms_core_lib.forms import EvidenceUploadForm, UploadFile
from ccms_core_lib.models import (
    CaseStatus,
    ComplaintStatus,
    FieldType,
    FormFieldDraft,
    FormType,
)

from conftest import case_json, complaint_json


@pytest.mark.asyncio
async def test_list_cases_is_served_from_cache(backend):
    backend.on("GET", "/api/cases", [case_json(1), case_json(2, status="in_progress")])
    client = backend.client()

    first = await client.list_cases()
    second = await client.list_cases()

    assert [c.case_number for c in first] == ["CC-2024-001", "CC-2024-002"]
    assert second[1].status == CaseStatus.IN_PROGRESS
    assert backend.count("GET", "/api/cases") == 1


@pytest.mark.asyncio
async def test_create_case_invalidates_case_list(backend):
    backend.on("GET", "/api/cases", [case_json(1)])
    backend.on("POST", "/api/cases", case_json(2, title="Fake job offer"))
    client = backend.client()

    await client.list_cases()
    created = await client.create_case(
        {
            "title": "Fake job offer",
            "description": "Registration fee collected for a fake job",
            "type": "job_fraud",
        }
    )
    await client.list_cases()

    assert created.id == 2
    assert backend.count("GET", "/api/cases") == 2

    post = next(r for r in backend.requests if r.method == "POST")
    body = json.loads(post.content)
    assert body["title"] == "Fake job offer"
    assert body["status"] == "open"
    assert body["priority"] == "medium"
    assert "createdAt" in body


@pytest.mark.asyncio
async def test_failed_write_keeps_cache(backend):
    backend.on("GET", "/api/cases", [case_json(1)])
    backend.on("POST", "/api/cases", {"message": "Invalid"}, status=400)
    client = backend.client()

    await client.list_cases()
    with pytest.raises(httpx.HTTPStatusError):
        await client.create_case(
            {"title": "x", "description": "long enough text", "type": "hacking"}
        )
    await client.list_cases()

    assert backend.count("GET", "/api/cases") == 1


@pytest.mark.asyncio
async def test_unauthorized_response_is_classified(backend):
    backend.on("GET", "/api/complaints", {"message": "Unauthorized"}, status=401)
    client = backend.client()

    with pytest.raises(httpx.HTTPStatusError) as excinfo:
        await client.list_complaints()

    assert is_unauthorized_error(excinfo.value)
    assert not is_unauthorized_error(RuntimeError("401"))


@pytest.mark.asyncio
async def test_reads_retry_transport_errors(backend):
    calls = {"n": 0}

    def flaky(request):
        calls["n"] += 1
        if calls["n"] < 3:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200, json=[case_json(1)])

    backend.on_call("GET", "/api/cases", flaky)
    client = backend.client(max_retries=3)

    cases = await client.list_cases()

    assert len(cases) == 1
    assert calls["n"] == 3


@pytest.mark.asyncio
async def test_reads_give_up_after_max_retries(backend):
    def down(request):
        raise httpx.ConnectError("connection refused", request=request)

    backend.on_call("GET", "/api/threats", down)
    client = backend.client(max_retries=2)

    with pytest.raises(httpx.ConnectError):
        await client.list_threats()
    assert backend.count("GET", "/api/threats") == 2


@pytest.mark.asyncio
async def test_status_errors_are_not_retried(backend):
    backend.on("GET", "/api/cases", {"message": "boom"}, status=500)
    client = backend.client(max_retries=3)

    with pytest.raises(httpx.HTTPStatusError):
        await client.list_cases()
    assert backend.count("GET", "/api/cases") == 1


@pytest.mark.asyncio
async def test_upload_evidence_sends_multipart(backend):
    backend.on("GET", "/api/cases/4/evidence", [])
    backend.on(
        "POST",
        "/api/evidence",
        {"id": 11, "caseId": 4, "title": "Chat screenshot", "type": "image",
         "fileSize": 4, "hash": "ab" * 32},
    )
    client = backend.client()
    await client.list_case_evidence(4)

    form = EvidenceUploadForm(case_id=4, title="Chat screenshot", type="image")
    evidence = await client.upload_evidence(form, UploadFile("chat.png", b"\x89PNG"))

    assert evidence.id == 11
    upload = next(r for r in backend.requests if r.method == "POST")
    assert upload.headers["content-type"].startswith("multipart/form-data")
    body = upload.content
    assert b'name="caseId"' in body
    assert b'filename="chat.png"' in body
    assert client.cache.get("/api/cases/4/evidence") is None


@pytest.mark.asyncio
async def test_update_complaint_sends_status_only(backend):
    backend.on("PUT", "/api/complaints/5", complaint_json(5, status="under_review"))
    client = backend.client()

    updated = await client.update_complaint(5, ComplaintStatus.UNDER_REVIEW)

    assert updated.status == ComplaintStatus.UNDER_REVIEW
    put = backend.requests[-1]
    assert json.loads(put.content) == {"status": "under_review"}


@pytest.mark.asyncio
async def test_dashboard_metrics_default_to_zero(backend):
    backend.on("GET", "/api/dashboard/metrics", {"activeCases": 4})
    metrics = await backend.client().get_dashboard_metrics()
    assert metrics.active_cases == 4
    assert metrics.resolved_today == 0


@pytest.mark.asyncio
async def test_form_fields_come_back_in_display_order(backend):
    backend.on(
        "GET",
        "/api/config/forms/case_form",
        [
            {"id": 2, "formType": "case_form", "fieldName": "title",
             "fieldLabel": "Title", "displayOrder": 2},
            {"id": 1, "formType": "case_form", "fieldName": "type",
             "fieldLabel": "Type", "fieldType": "select", "displayOrder": 1},
        ],
    )
    fields = await backend.client().get_form_fields(FormType.CASE_FORM)
    assert [f.field_name for f in fields] == ["type", "title"]
    assert fields[0].field_type == FieldType.SELECT


@pytest.mark.asyncio
async def test_form_field_writes_invalidate_configuration(backend):
    field = {"id": 3, "formType": "case_form", "fieldName": "district",
             "fieldLabel": "District"}
    backend.on("GET", "/api/config/forms/case_form", [])
    backend.on("POST", "/api/config/forms/fields", field)
    backend.on("PATCH", "/api/config/forms/fields/3", dict(field, isRequired=True))
    backend.on("DELETE", "/api/config/forms/fields/3", None, status=204)
    client = backend.client()

    await client.get_form_fields("case_form")
    await client.add_form_field(
        "case_form", FormFieldDraft(field_name="district", field_label="District")
    )
    await client.get_form_fields("case_form")
    assert backend.count("GET", "/api/config/forms/case_form") == 2

    added = json.loads(backend.requests[1].content)
    assert added["formType"] == "case_form"
    assert added["fieldName"] == "district"

    await client.update_form_field(3, FormFieldDraft(is_required=True))
    patch = next(r for r in backend.requests if r.method == "PATCH")
    assert json.loads(patch.content) == {"isRequired": True}

    assert await client.delete_form_field(3) is True


@pytest.mark.asyncio
async def test_update_security_setting(backend):
    backend.on(
        "PATCH",
        "/api/security/settings/session_timeout",
        {"key": "session_timeout", "value": "30", "category": "session"},
    )
    setting = await backend.client().update_security_setting("session_timeout", "30")
    assert setting.value == "30"
    assert json.loads(backend.requests[-1].content) == {"value": "30"}


@pytest.mark.asyncio
async def test_request_context_headers(backend):
    backend.on("GET", "/api/security/roles", [])
    context = RequestContext(
        user_id="u-1", user_roles=["INSPECTOR"], correlation_id="corr-1"
    )
    await backend.client(context=context).list_roles()

    headers = backend.requests[-1].headers
    assert headers["X-User-ID"] == "u-1"
    assert json.loads(headers["X-User-Roles"]) == ["INSPECTOR"]
    assert headers["X-Correlation-ID"] == "corr-1"


@pytest.mark.asyncio
async def test_shared_cache_between_clients(backend):
    cache = QueryCache()
    backend.on("GET", "/api/complaints", [complaint_json(1)])

    await backend.client(cache=cache).list_complaints()
    await backend.client(cache=cache).list_complaints()

    assert backend.count("GET", "/api/complaints") == 1


def test_client_from_settings():
    settings = ClientSettings(api_base_url="http://ccms.local:5000/", timeout=5, max_retries=1)
    client = CaseManagementClient.from_settings(settings)
    assert client.base_url == "http://ccms.local:5000"
    assert client.timeout == 5


@pytest.mark.asyncio
async def test_http_external_services_post_to_backend_routes(backend):
    backend.on("POST", "/api/security/quantum/verify", {"verified": True})
    backend.on("POST", "/api/ml/analyze-sentiment", ["negative"])
    services = http_external_services(backend.client())

    verified = await services.verify_quantum(7)
    sentiment = await services.analyze_sentiment("they threatened me")

    assert verified.payload == {"verified": True}
    assert json.loads(backend.requests[0].content) == {"evidenceId": 7}
    assert sentiment.payload == {"result": ["negative"]}
    assert json.loads(backend.requests[1].content) == {"textData": "they threatened me"}


@pytest.mark.asyncio
async def test_external_service_accepts_any_json_object(backend):
    backend.on("POST", "/api/security/quantum/verify", {"status": 200, "verified": True})
    services = http_external_services(backend.client())

    result = await services.verify_quantum(7)

    assert result.status == 200
    assert result.payload == {"status": 200, "verified": True}


@pytest.mark.asyncio
async def test_analysis_and_alert_services_use_their_routes(backend):
    backend.on("POST", "/api/analysis/advanced", {"sophisticationLevel": "high"})
    backend.on("GET", "/api/intelligence/cybercrime/upi fraud", {"trends": []})
    backend.on("POST", "/api/alerts/emergency", {"sent": 2})
    services = http_external_services(backend.client())

    advanced = await services.analyze_advanced("proxy logs", "Case CC-2024-004")
    intelligence = await services.lookup_cybercrime("upi fraud")
    alert = await services.send_emergency_alert("Bank server breach", "Shevgaon", ["1", "2"])

    assert advanced.payload == {"sophisticationLevel": "high"}
    assert json.loads(backend.requests[0].content) == {
        "evidenceData": "proxy logs",
        "caseContext": "Case CC-2024-004",
    }
    assert intelligence.payload == {"trends": []}
    assert backend.requests[1].method == "GET"
    assert backend.requests[1].url.raw_path == b"/api/intelligence/cybercrime/upi%20fraud"
    assert alert.payload == {"sent": 2}
    assert json.loads(backend.requests[2].content) == {
        "incident": "Bank server breach",
        "location": "Shevgaon",
        "officerPhones": ["1", "2"],
    }


@pytest.mark.asyncio
async def test_system_status_reads_bypass_cache(backend):
    backend.on(
        "GET", "/api/system/health",
        {"systemLoad": 12.5, "services": [{"name": "api", "status": "HEALTHY"}]},
    )
    backend.on("POST", "/api/alerts/emergency-broadcast", None, status=204)
    client = backend.client()

    await client.get_system_health()
    health = await client.get_system_health()
    await client.broadcast_emergency({"title": "System Test"})

    assert health.healthy_services == 1
    assert backend.count("GET", "/api/system/health") == 2
    assert json.loads(backend.requests[-1].content) == {"emergency": {"title": "System Test"}}


@pytest.mark.asyncio
async def test_error_report_ignores_reply_body(backend):
    backend.on_call("POST", "/api/errors", lambda request: httpx.Response(200, text="logged"))
    assert await backend.client().report_error({"message": "boom"}) is None
