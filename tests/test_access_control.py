import asyncio

import httpx
import pytest

from ccms_core_lib.auth import LoginRedirectPolicy, PublicAccessPolicy, RequestContext
from ccms_core_lib.views import Notifier, NotificationVariant


def unauthorized_error():
    request = httpx.Request("GET", "http://ccms.test/api/cases")
    response = httpx.Response(401, request=request)
    return httpx.HTTPStatusError("401 Unauthorized", request=request, response=response)


def test_public_access_shows_plain_failure():
    notifier = Notifier()
    policy = PublicAccessPolicy()

    policy.handle_unauthorized(unauthorized_error(), notifier, "Failed to load data")

    assert not policy.requires_login
    assert notifier.latest.title == "Error"
    assert notifier.latest.description == "Failed to load data"
    assert notifier.latest.variant == NotificationVariant.DESTRUCTIVE


def test_login_redirect_without_event_loop_redirects_immediately():
    redirects = []
    notifier = Notifier()
    policy = LoginRedirectPolicy(lambda: redirects.append("login"))

    policy.handle_unauthorized(unauthorized_error(), notifier, "Failed to load data")

    assert policy.requires_login
    assert notifier.latest.title == "Unauthorized"
    assert notifier.latest.description == "You are logged out. Logging in again..."
    assert redirects == ["login"]


@pytest.mark.asyncio
async def test_login_redirect_is_delayed_on_event_loop():
    redirects = []
    policy = LoginRedirectPolicy(lambda: redirects.append("login"))

    policy.handle_unauthorized(unauthorized_error(), Notifier(), "ignored")
    assert redirects == []

    await asyncio.sleep(0.6)
    assert redirects == ["login"]


def test_request_context_rank_and_headers():
    context = RequestContext(
        user_id="u-7", user_email="pi@ccms.test", user_roles=["inspector", "hc", "clerk"]
    )
    assert context.rank == 4
    assert RequestContext.anonymous().headers() == {}
    assert RequestContext.anonymous().rank is None

    traced = context.with_correlation_id()
    assert traced.correlation_id
    assert traced.headers()["X-User-Email"] == "pi@ccms.test"
    assert context.correlation_id is None
