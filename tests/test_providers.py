import time

import httpx
import orjson
import pytest

from conftest import json_transport
from mailfinder.providers.automizely import AutomizelyProvider
from mailfinder.providers.bazzigate import BazzigateProvider
from mailfinder.providers.email_checker import EmailCheckerProvider
from mailfinder.providers.mail7 import Mail7Provider
from mailfinder.providers.mslm import MslmProvider
from mailfinder.providers.registry import PROVIDER_CLASSES
from mailfinder.providers.site24x7 import Site24x7Provider, decode_entities
from mailfinder.providers.supersend import SuperSendProvider
from mailfinder.providers.validate_email import ValidateEmailProvider
from mailfinder.utils.clock import iso_now

EMAIL = "john.doe@example.com"


async def test_mslm_real_mailbox():
    calls = []
    provider = MslmProvider(transport=json_transport(
        {"status": "real", "has_mailbox": True, "domain": "example.com"}, calls=calls))
    r = await provider.validate(EMAIL)
    assert r.is_valid is True
    assert r.score == 95
    assert r.email == EMAIL
    assert r.domain == "example.com"
    assert r.provider == "mslm"
    assert r.timestamp
    assert calls[0].method == "GET"
    assert calls[0].url.params["email"] == EMAIL


async def test_mslm_scores_and_flags():
    provider = MslmProvider(transport=json_transport({
        "email": EMAIL, "status": "real", "has_mailbox": False, "disposable": True,
        "free": False, "role": True, "malformed": False, "mx": ["mx1.example.com"],
        "suggestion": "",
    }))
    r = await provider.validate(EMAIL)
    assert r.score == 75
    assert r.is_disposable is True
    assert r.is_role is True
    assert r.syntax_valid is True
    assert r.mx_valid is True
    assert r.suggestion is None

    provider = MslmProvider(transport=json_transport({"status": "fake", "mx": [], "suggestion": "john@example.com"}))
    r = await provider.validate(EMAIL)
    assert r.is_valid is False
    assert r.score == 25
    assert r.mx_valid is False
    assert r.suggestion == "john@example.com"


@pytest.mark.parametrize("success,valid,score", [(1, True, 85), (0, False, 15)])
async def test_email_checker(success, valid, score):
    provider = EmailCheckerProvider(transport=json_transport({"success": success}))
    r = await provider.validate(EMAIL)
    assert (r.is_valid, r.score, r.domain) == (valid, score, "example.com")


async def test_automizely_posts_list_and_maps_result():
    calls = []
    provider = AutomizelyProvider(transport=json_transport({"data": [{
        "email": EMAIL, "syntax": {"valid": True, "domain": "example.com"},
        "has_mx_records": True, "reachable": "unknown", "disposable": False,
        "role_account": False, "free": True, "suggestion": None,
    }]}, calls=calls))
    r = await provider.validate(EMAIL)
    assert orjson.loads(calls[0].content) == {"emails": [EMAIL]}
    assert calls[0].method == "POST"
    assert r.is_valid is True
    assert r.score == 70
    assert r.is_free is True
    assert r.domain == "example.com"


@pytest.mark.parametrize("reachable,score", [("deliverable", 95), ("risky", 25)])
async def test_automizely_reachable_scores(reachable, score):
    provider = AutomizelyProvider(transport=json_transport({"data": [{
        "syntax": {"valid": True, "domain": "example.com"}, "has_mx_records": False, "reachable": reachable,
    }]}))
    r = await provider.validate(EMAIL)
    assert r.score == score
    assert r.is_valid is False


async def test_automizely_empty_data_is_error():
    r = await AutomizelyProvider(transport=json_transport({"data": []})).validate(EMAIL)
    assert r.is_valid is False
    assert r.error == "No data returned from Automizely API"


@pytest.mark.parametrize("flags,score", [
    ({"smtpValid": True, "mxValid": True, "formatValid": True}, 95),
    ({"smtpValid": False, "mxValid": True, "formatValid": True}, 75),
    ({"smtpValid": False, "mxValid": False, "formatValid": True}, 50),
    ({"smtpValid": False, "mxValid": False, "formatValid": False}, 25),
])
async def test_mail7_score_tiers(flags, score):
    r = await Mail7Provider(transport=json_transport({"email": EMAIL, "valid": True, **flags})).validate(EMAIL)
    assert r.score == score


async def test_mail7_surfaces_provider_error():
    calls = []
    provider = Mail7Provider(transport=json_transport(
        {"email": EMAIL, "valid": False, "formatValid": True, "error": "Mailbox not found"}, calls=calls))
    r = await provider.validate(EMAIL)
    assert orjson.loads(calls[0].content) == {"email": EMAIL}
    assert r.is_valid is False
    assert r.error == "Mailbox not found"


async def test_validate_email_risk_score():
    payload = {"result": {
        "email": EMAIL, "reachable": "safe", "riskScore": {"score": 12},
        "syntax": {"domain": "example.com", "valid": True}, "smtp": {"is_deliverable": True},
        "mx": {"accepts_mail": True}, "disposable": False,
    }}
    r = await ValidateEmailProvider(transport=json_transport(payload)).validate(EMAIL)
    assert r.is_valid is True
    assert r.score == 88
    assert r.status == "safe"
    assert r.has_mailbox is True
    assert r.error is None


async def test_validate_email_invalid_without_risk_score():
    payload = {"result": {
        "email": EMAIL, "reachable": "invalid", "syntax": {"domain": "example.com", "valid": True},
        "smtp": {"is_deliverable": False}, "mx": {"accepts_mail": True},
    }}
    r = await ValidateEmailProvider(transport=json_transport(payload)).validate(EMAIL)
    assert r.is_valid is False
    assert r.score == 50
    assert r.error == "Email not deliverable"


async def test_validate_email_score_clamped():
    payload = {"result": {"reachable": "risky", "riskScore": {"score": 140}, "syntax": {}, "smtp": {}, "mx": {}}}
    r = await ValidateEmailProvider(transport=json_transport(payload)).validate(EMAIL)
    assert r.score == 0


async def test_bazzigate():
    r = await BazzigateProvider(transport=json_transport({"email": EMAIL, "res": True})).validate(EMAIL)
    assert (r.is_valid, r.score, r.domain) == (True, 85, "example.com")


async def test_supersend_nested_validators():
    payload = {
        "email": EMAIL, "valid": False, "message": "SMTP check failed",
        "valid_result": {"validators": {
            "regex": {"valid": True}, "mx": {"valid": True}, "smtp": {"valid": False},
        }},
    }
    r = await SuperSendProvider(transport=json_transport(payload)).validate(EMAIL)
    assert r.is_valid is False
    assert r.score == 10
    assert r.status == "invalid"
    assert (r.syntax_valid, r.mx_valid, r.smtp_valid) == (True, True, False)
    assert r.error == "SMTP check failed"


def test_decode_entities():
    text = "{&quot;a&quot;:&quot;&lt;b&gt;&#x41;&#x2f;&quot;}"
    assert decode_entities(text) == '{"a":"<b>A/"}'


def _site24x7_transport(status, reason=None, calls=None):
    entry = f"&quot;status&quot;:{status}"
    if reason:
        entry += f",&quot;reason&quot;:&quot;{reason}&quot;"
    body = (
        "{&quot;results&quot;:{&quot;example.com&quot;:{"
        f"&quot;{EMAIL}&quot;:{{{entry}}}"
        "}}}"
    )

    def handler(request):
        if calls is not None:
            calls.append(request)
        return httpx.Response(200, text=body)
    return httpx.MockTransport(handler)


async def test_site24x7_decodes_html_encoded_json():
    calls = []
    r = await Site24x7Provider(transport=_site24x7_transport(250, calls=calls)).validate(EMAIL)
    assert calls[0].method == "POST"
    assert calls[0].content == b"emails=john.doe%40example.com"
    assert r.is_valid is True
    assert r.smtp_valid is True
    assert r.score == 95
    assert r.domain == "example.com"
    assert r.error is None


async def test_site24x7_non_250_uses_reason():
    r = await Site24x7Provider(transport=_site24x7_transport(550, reason="User unknown")).validate(EMAIL)
    assert r.is_valid is False
    assert r.status == "invalid"
    assert r.error == "User unknown"


@pytest.mark.parametrize("cls", PROVIDER_CLASSES)
async def test_non_2xx_becomes_error_result(cls):
    provider = cls(transport=json_transport({"detail": "down"}, status_code=503))
    r = await provider.validate(EMAIL)
    assert r.is_valid is False
    assert r.error == f"{cls.label} API error: 503"
    assert r.email == EMAIL
    assert r.provider == cls.name
    assert r.timestamp


@pytest.mark.parametrize("cls", PROVIDER_CLASSES)
async def test_transport_failure_never_raises(cls):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)
    r = await cls(transport=httpx.MockTransport(handler)).validate(EMAIL)
    assert r.is_valid is False
    assert "connection refused" in r.error
    assert r.provider == cls.name


@pytest.mark.parametrize("cls", PROVIDER_CLASSES)
async def test_garbage_body_never_raises(cls):
    def handler(request):
        return httpx.Response(200, text="<html>not json</html>")
    r = await cls(transport=httpx.MockTransport(handler)).validate(EMAIL)
    assert r.is_valid is False
    assert r.error
    assert r.email == EMAIL


async def test_timestamp_marks_completion_not_request_start():
    requested = []

    def slow(request: httpx.Request) -> httpx.Response:
        requested.append(iso_now())
        time.sleep(0.02)
        return httpx.Response(200, json={"status": "real", "has_mailbox": True})

    r = await MslmProvider(transport=httpx.MockTransport(slow)).validate(EMAIL)
    assert r.timestamp > requested[0]
