# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""fluenthttp CLI."""

from __future__ import annotations

import argparse
import sys
import threading

from ..builder import RequestBuilder
from ..config import HttpSettings, load_http_settings
from ..dispatch import FunctionCallback, PreparedRequest
from ..errors import DispatchError, FluentHttpError, error_category_to_reason
from ..http.models import HttpRequest, HttpResponse
from ..log import setup_logging
from ..runtime import FluentHttp

EXIT_OK = 0
EXIT_TRANSPORT_FAILURE = 1
EXIT_USAGE = 2

MODES = ("blocking", "signal", "async")


def _key_value(raw: str) -> tuple[str, str]:
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected key=value, got {raw!r}")
    return key, value


def _header(raw: str) -> tuple[str, str]:
    name, sep, value = raw.partition(":")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected 'Name: value', got {raw!r}")
    return name.strip(), value.strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fluenthttp", description="Send one HTTP request through fluenthttp")
    parser.add_argument("url", help="Target URL (http or https)")
    parser.add_argument("-X", "--method", default="GET", help="GET, POST, PUT or DELETE (default: GET)")
    parser.add_argument("-p", "--param", dest="params", action="append", type=_key_value, default=[], metavar="KEY=VALUE")
    parser.add_argument("-H", "--header", dest="headers", action="append", type=_header, default=[], metavar="'NAME: VALUE'")
    body = parser.add_mutually_exclusive_group()
    body.add_argument("--json", dest="use_json", action="store_true", default=True, help="Send params as a JSON body (default)")
    body.add_argument("--form", dest="use_json", action="store_false", help="Send params as a form body")
    parser.add_argument("--mode", choices=MODES, default="blocking", help="Dispatch mode (default: blocking)")
    parser.add_argument("--timeout", type=float, default=None, help="Seconds to wait in signal/async mode")
    parser.add_argument(
        "--verify-ssl",
        action="store_true",
        help="Verify server certificates against the system trust store",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: FLUENTHTTP_LOG_LEVEL or WARNING)")
    return parser


def _prepare(args: argparse.Namespace, client: FluentHttp) -> PreparedRequest:
    request = RequestBuilder(client).url(args.url).method(args.method)
    for key, value in args.params:
        request.add_param(key, value)
    for name, value in args.headers:
        request.add_header(name, value)
    if request.get_method() == "GET":
        return request.render_for_read()
    return request.render_for_write(args.use_json)


def _dispatch_with_callback(prepared: PreparedRequest, timeout: float | None) -> HttpResponse:
    finished = threading.Event()

    def _done(_request: HttpRequest, _data: str) -> None:
        finished.set()

    future = prepared.dispatch_async(FunctionCallback(_done, _done))
    if not finished.wait(timeout):
        raise DispatchError(f"no response within {timeout}s")
    return future.result(timeout=timeout)


def run(args: argparse.Namespace, client: FluentHttp) -> int:
    prepared = _prepare(args, client)
    if args.mode == "blocking":
        response = prepared.execute()
    elif args.mode == "signal":
        response = prepared.execute_via_signal(timeout=args.timeout)
    else:
        response = _dispatch_with_callback(prepared, args.timeout)

    text = response.render()
    stream = sys.stdout if response.ok else sys.stderr
    stream.write(text)
    if not text.endswith("\n"):
        stream.write("\n")
    if not response.ok:
        reason = error_category_to_reason(response.error_category) or "Request failed"
        sys.stderr.write(f"fluenthttp: {reason}\n")
        return EXIT_TRANSPORT_FAILURE
    return EXIT_OK


def main(argv: list[str] | None = None, client: FluentHttp | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    settings: HttpSettings = load_http_settings()
    if args.verify_ssl:
        settings.verify_ssl = True
        settings.verify_hostname = True

    owned = client is None
    active = client or FluentHttp(settings=settings)
    try:
        return run(args, active)
    except FluentHttpError as exc:
        sys.stderr.write(f"fluenthttp: {exc}\n")
        return EXIT_USAGE if not isinstance(exc, DispatchError) else EXIT_TRANSPORT_FAILURE
    finally:
        if owned:
            active.close()


if __name__ == "__main__":
    raise SystemExit(main())
