# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

import httpx
import pytest

from fluenthttp.cli.main import EXIT_OK, EXIT_TRANSPORT_FAILURE, EXIT_USAGE, build_parser, main
from fluenthttp.config import HttpSettings
from fluenthttp.http.adapters import CallableHttpClient, StubHttpClient
from fluenthttp.http.models import HttpRequest, HttpResponse
from fluenthttp.runtime import FluentHttp


@pytest.fixture
def echo_client():
    def echo(request: HttpRequest) -> HttpResponse:
        payload = {
            "method": request.method,
            "url": request.url,
            "headers": request.headers,
            "body": (request.body or b"").decode(),
        }
        return HttpResponse(ok=True, status_code=200, text=json.dumps(payload))

    with FluentHttp(http_client=CallableHttpClient(echo), settings=HttpSettings()) as client:
        yield client


@pytest.mark.parametrize("mode", ["blocking", "signal", "async"])
def test_cli_get_with_params_in_every_mode(echo_client, capsys, mode):
    code = main(
        ["http://example/search", "-p", "q=a b", "-H", "Accept: text/plain", "--mode", mode, "--timeout", "5"],
        client=echo_client,
    )
    assert code == EXIT_OK
    echoed = json.loads(capsys.readouterr().out)
    assert echoed["method"] == "GET"
    assert echoed["url"] == "http://example/search?q=a+b"
    assert echoed["headers"] == {"Accept": "text/plain"}


def test_cli_post_form(echo_client, capsys):
    code = main(["http://example/form", "-X", "post", "--form", "-p", "a=1", "-p", "b=2"], client=echo_client)
    assert code == EXIT_OK
    echoed = json.loads(capsys.readouterr().out)
    assert echoed["method"] == "POST"
    assert echoed["body"] == "a=1&b=2"


def test_cli_reports_transport_failure(capsys):
    with FluentHttp(http_client=StubHttpClient(), settings=HttpSettings()) as client:
        code = main(["http://example/down"], client=client)
    assert code == EXIT_TRANSPORT_FAILURE
    assert capsys.readouterr().err.startswith("request failed: ")


def test_cli_reports_build_errors(capsys):
    with FluentHttp(http_client=StubHttpClient(), settings=HttpSettings()) as client:
        code = main(["http://example", "-H", "Bad Header: ☃"], client=client)
    # lenient header policy drops the header, so the request still goes out
    assert code == EXIT_TRANSPORT_FAILURE

    with FluentHttp(http_client=StubHttpClient(), settings=HttpSettings(strict_headers=True)) as strict:
        code = main(["http://example", "-H", "Bad Header: x"], client=strict)
    assert code == EXIT_USAGE
    assert "fluenthttp:" in capsys.readouterr().err


def test_parser_rejects_malformed_params():
    parser = build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["http://example", "-p", "novalue"])
    args = parser.parse_args(["http://example", "--verify-ssl"])
    assert args.verify_ssl is True
    assert args.use_json is True


@pytest.mark.parametrize("mode", ["blocking", "signal", "async"])
def test_cli_exit_code_follows_response_not_body_text(capsys, mode):
    body = "request failed: this is just the page content"
    responses = {"http://example/page": HttpResponse(ok=True, status_code=200, text=body)}
    with FluentHttp(http_client=StubHttpClient(responses), settings=HttpSettings()) as client:
        code = main(["http://example/page", "--mode", mode, "--timeout", "5"], client=client)
    assert code == EXIT_OK
    assert capsys.readouterr().out == body + "\n"


@pytest.mark.parametrize("mode", ["blocking", "signal", "async"])
def test_cli_failure_reports_reason(capsys, mode):
    responses = {"http://example/slow": httpx.ConnectTimeout("timed out")}
    with FluentHttp(http_client=StubHttpClient(responses), settings=HttpSettings()) as client:
        code = main(["http://example/slow", "--mode", mode, "--timeout", "5"], client=client)
    assert code == EXIT_TRANSPORT_FAILURE
    err = capsys.readouterr().err
    assert err.startswith("request failed: timed out")
    assert "fluenthttp: Network timeout" in err
