# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging
import socket

import httpx
import pytest

from fluenthttp import config
from fluenthttp.config import DEFAULT_USER_AGENT, HttpSettings
from fluenthttp.errors import (
    ErrorCategory,
    FluentHttpError,
    TransportError,
    categorize_exception,
    error_category_to_reason,
)
from fluenthttp.http.models import HttpResponse
from fluenthttp.log import resolve_level, setup_logging


def test_http_settings_defaults_are_permissive():
    settings = HttpSettings()
    assert settings.connect_timeout == 15.0
    assert settings.read_timeout == 20.0
    assert settings.write_timeout == 20.0
    assert settings.verify_ssl is False
    assert settings.verify_hostname is False
    assert settings.retry_on_connection_failure is True
    assert settings.user_agent == DEFAULT_USER_AGENT


def test_http_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("FLUENTHTTP_CONNECT_TIMEOUT", "5.5")
    monkeypatch.setenv("FLUENTHTTP_READ_TIMEOUT", "7")
    monkeypatch.setenv("FLUENTHTTP_WRITE_TIMEOUT", "8")
    monkeypatch.setenv("FLUENTHTTP_VERIFY_SSL", "yes")
    monkeypatch.setenv("FLUENTHTTP_VERIFY_HOSTNAME", "1")
    monkeypatch.setenv("FLUENTHTTP_CONNECT_RETRIES", "0")
    monkeypatch.setenv("FLUENTHTTP_USER_AGENT", "CustomAgent/1.0")
    monkeypatch.setenv("FLUENTHTTP_MAX_WORKERS", "3")
    monkeypatch.setenv("FLUENTHTTP_STRICT_HEADERS", "on")

    settings = config.load_http_settings()

    assert settings.connect_timeout == 5.5
    assert settings.read_timeout == 7.0
    assert settings.write_timeout == 8.0
    assert settings.verify_ssl is True
    assert settings.verify_hostname is True
    assert settings.connect_retries == 0
    assert settings.retry_on_connection_failure is False
    assert settings.user_agent == "CustomAgent/1.0"
    assert settings.max_workers == 3
    assert settings.strict_headers is True


def test_http_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("FLUENTHTTP_CONNECT_TIMEOUT", "not-a-number")
    monkeypatch.setenv("FLUENTHTTP_CONNECT_RETRIES", "-4")
    monkeypatch.setenv("FLUENTHTTP_MAX_WORKERS", "0")
    monkeypatch.setenv("FLUENTHTTP_READ_TIMEOUT", "")

    settings = config.load_http_settings()

    assert settings.connect_timeout == HttpSettings.connect_timeout
    assert settings.connect_retries == HttpSettings.connect_retries
    assert settings.max_workers == HttpSettings.max_workers
    assert settings.read_timeout == HttpSettings.read_timeout


def test_load_http_settings_reads_env_at_call_time(monkeypatch):
    monkeypatch.setenv("FLUENTHTTP_READ_TIMEOUT", "7.7")
    assert config.load_http_settings().read_timeout == 7.7
    monkeypatch.setenv("FLUENTHTTP_READ_TIMEOUT", "8.8")
    assert config.load_http_settings().read_timeout == 8.8


def test_categorize_exception_maps_httpx_errors():
    assert categorize_exception(httpx.ConnectTimeout("slow")) is ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ReadTimeout("slow")) is ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ConnectError("refused")) is ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(httpx.RemoteProtocolError("garbage")) is ErrorCategory.PROTOCOL_ERROR
    assert categorize_exception(ConnectionResetError()) is ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(ValueError("boom")) is ErrorCategory.UNKNOWN_ERROR


def test_categorize_exception_follows_cause_chain():
    try:
        try:
            raise socket.gaierror(-2, "Name or service not known")
        except socket.gaierror as inner:
            raise httpx.ConnectError("dns failed") from inner
    except httpx.ConnectError as exc:
        assert categorize_exception(exc) is ErrorCategory.DNS_ERROR


def test_error_category_reason_strings():
    assert error_category_to_reason(ErrorCategory.TIMEOUT) == "Network timeout"
    assert error_category_to_reason(ErrorCategory.NONE) == ""
    assert error_category_to_reason(None) == ""


def test_response_render_and_raise_for_error():
    ok = HttpResponse(ok=True, status_code=200, text="pong")
    assert ok.render() == "pong"
    assert ok.raise_for_error() is ok

    failed = HttpResponse.from_exception(httpx.ConnectError("connection refused"), url="http://x")
    assert failed.ok is False
    assert failed.render() == "request failed: connection refused"
    assert failed.error_type == "ConnectError"
    with pytest.raises(TransportError) as exc_info:
        failed.raise_for_error()
    assert exc_info.value.category is ErrorCategory.CONNECTION_ERROR
    assert isinstance(exc_info.value, FluentHttpError)


def test_setup_logging_quiets_transport_loggers():
    setup_logging("info")
    assert logging.getLogger("httpx").level == logging.WARNING
    setup_logging("debug")
    assert logging.getLogger("httpx").level == logging.DEBUG
    assert resolve_level("nonsense") == logging.WARNING
