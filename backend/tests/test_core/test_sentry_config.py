"""Tests for Sentry SDK configuration."""

from typing import Any
from unittest.mock import patch

from core.sentry_config import _before_send, _traces_sampler, init_sentry
from models.config import settings


class TestBeforeSendPIIScrubbing:
    """Tests for PII scrubbing in _before_send."""

    def test_scrubs_username_and_email(self) -> None:
        event: dict[str, Any] = {
            "user": {"id": "1", "username": "target", "email": "t@example.com"}
        }
        result = _before_send(event, {})  # type: ignore[arg-type]
        assert result is not None
        assert result["user"] == {"id": "1"}  # type: ignore[typeddict-item]

    def test_anonymizes_ip_address(self) -> None:
        event: dict[str, Any] = {"user": {"ip_address": "10.0.0.1"}}
        result = _before_send(event, {})  # type: ignore[arg-type]
        assert result["user"]["ip_address"] == "{{auto}}"  # type: ignore[index]

    def test_drops_request_body_and_cookies(self) -> None:
        """Report payloads name both users, so bodies never leave the process."""
        event: dict[str, Any] = {
            "request": {
                "url": "/api/report/create",
                "data": {"reporter_user": "a", "reported_user": "b"},
                "cookies": {"session": "x"},
                "headers": {"Authorization": "Bearer t", "Accept": "*/*"},
            }
        }
        result = _before_send(event, {})  # type: ignore[arg-type]
        request = result["request"]  # type: ignore[index]
        assert "data" not in request
        assert "cookies" not in request
        assert request["headers"]["Authorization"] == "[Filtered]"
        assert request["headers"]["Accept"] == "*/*"

    def test_event_without_user_or_request(self) -> None:
        event: dict[str, Any] = {"message": "Test error"}
        assert _before_send(event, {}) == {"message": "Test error"}  # type: ignore[arg-type]


class TestTracesSampler:
    """Tests for dynamic trace sampling."""

    def test_never_samples_health_checks(self) -> None:
        assert _traces_sampler({"asgi_scope": {"path": "/api/health"}}) == 0.0

    def test_report_endpoints_boosted(self) -> None:
        with patch.object(settings, "SENTRY_TRACES_SAMPLE_RATE", 0.2):
            assert _traces_sampler({"asgi_scope": {"path": "/api/report/create"}}) == 0.4

    def test_default_rate(self) -> None:
        with patch.object(settings, "SENTRY_TRACES_SAMPLE_RATE", 0.2):
            assert _traces_sampler({"asgi_scope": {"path": "/api/user/x/unread"}}) == 0.2
            assert _traces_sampler({}) == 0.2

    def test_respects_parent_sampling(self) -> None:
        context: dict[str, Any] = {
            "parent_sampled": True,
            "asgi_scope": {"path": "/api/health"},
        }
        assert _traces_sampler(context) == 1.0


class TestInitSentry:
    """Tests for Sentry initialization."""

    def test_disabled_without_dsn(self) -> None:
        with patch.object(settings, "SENTRY_DSN", ""):
            with patch("sentry_sdk.init") as mock_init:
                assert init_sentry() is False
                mock_init.assert_not_called()

    def test_initializes_with_dsn(self) -> None:
        dsn = "https://test@o0.ingest.sentry.io/0"
        with patch.object(settings, "SENTRY_DSN", dsn), patch.object(
            settings, "SENTRY_RELEASE", "1.2.3"
        ):
            with patch("sentry_sdk.init") as mock_init:
                assert init_sentry() is True

        kwargs = mock_init.call_args.kwargs
        assert kwargs["dsn"] == dsn
        assert kwargs["release"] == "1.2.3"
        assert kwargs["send_default_pii"] is False
        assert kwargs["before_send"] is _before_send
