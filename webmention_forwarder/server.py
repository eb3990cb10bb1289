"""Webmention HTTP server.

Routes:
- POST /webmention: validate source/target and open a GitHub pull request
- GET /: redirect to GitHub's token creation page with the needed scope
- anything else: 404
"""

import logging
from email import policy
from email.parser import BytesParser
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Callable, Mapping
from urllib.parse import parse_qs, urlsplit

from webmention_forwarder.config import AppConfig
from webmention_forwarder.errors import ForwarderError, UnexpectedError, ValidationError
from webmention_forwarder.logging import LOGGER_NAME
from webmention_forwarder.models import Response
from webmention_forwarder.submitter import PullRequestSubmitter
from webmention_forwarder.validator import extract_webmention

LOG = logging.getLogger("webmention_forwarder.server")

WEBMENTION_PATH = "/webmention"
TOKEN_URL = "https://github.com/settings/tokens/new?scopes=repo&description=Webmention%20Forwarder"

TEXT_HEADERS = {"Content-Type": "text/plain"}

Params = Mapping[str, Any]


def _text(status: int, body: str) -> Response:
    return Response(status=status, body=body, headers=dict(TEXT_HEADERS))


def parse_content_length(value: str | None) -> int:
    """Return the body length; raise ValueError unless it is a non-negative integer."""
    if value is None or not value.strip():
        return 0
    length = int(value)
    if length < 0:
        raise ValueError(f"Negative Content-Length: {value}")
    return length


def parse_form_body(body: bytes, content_type: str) -> dict[str, list[str]]:
    """Decode a urlencoded or multipart/form-data body into parse_qs-style lists.

    Other content types yield no params. File parts of multipart bodies are skipped.
    """
    if not body:
        return {}
    if not content_type or "application/x-www-form-urlencoded" in content_type:
        return parse_qs(body.decode("utf-8", errors="replace"), keep_blank_values=True)
    if "multipart/form-data" not in content_type:
        return {}
    header = f"Content-Type: {content_type}\r\n\r\n".encode("latin-1", errors="replace")
    message = BytesParser(policy=policy.HTTP).parsebytes(header + body)
    params: dict[str, list[str]] = {}
    if not message.is_multipart():
        return params
    for part in message.iter_parts():
        name = part.get_param("name", header="content-disposition")
        if not name or part.get_filename() is not None:
            continue
        payload = part.get_payload(decode=True) or b""
        params.setdefault(str(name), []).append(payload.decode("utf-8", errors="replace"))
    return params


class WebmentionForwarderApp:
    """Dispatches requests by method and path; the single error boundary.

    ``log`` is the package logger; the router, validator and submitter log
    through its ``server``, ``validator`` and ``submitter`` children.
    """

    def __init__(
        self,
        submitter: PullRequestSubmitter | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        base = log or logging.getLogger(LOGGER_NAME)
        self._log = base.getChild("server")
        self._validator_log = base.getChild("validator")
        self._submitter = submitter or PullRequestSubmitter(log=base.getChild("submitter"))

    def handle(
        self,
        method: str,
        path: str,
        params: Params | Callable[[], Params] | None = None,
    ) -> Response:
        """Return the response for one request. Never raises.

        ``params`` may be a callable so that reading the request body happens
        inside the error handling below.
        """
        route = (method.upper(), urlsplit(path).path)
        try:
            if route == ("POST", WEBMENTION_PATH):
                resolved = params() if callable(params) else params
                return self._handle_webmention(resolved or {})
            if route == ("GET", "/"):
                return Response(status=302, headers={"Location": TOKEN_URL})
            return _text(404, "Not Found")
        except ValidationError as e:
            return _text(400, f"Bad Request: {e}")
        except ForwarderError as e:
            self._log.error("Failed to create GitHub PR: %s", e, exc_info=True)
            return _text(500, "Internal Server Error")
        except Exception as e:
            wrapped = UnexpectedError(f"Unexpected error: {e}")
            self._log.error("%s", wrapped, exc_info=e)
            return _text(500, "Internal Server Error")

    def _handle_webmention(self, params: Params) -> Response:
        mention = extract_webmention(params, log=self._validator_log)
        self._submitter.submit(mention.source, mention.target)
        return _text(200, "Webmention processed successfully")


class WebmentionRequestHandler(BaseHTTPRequestHandler):
    """Adapts http.server requests to WebmentionForwarderApp."""

    app: WebmentionForwarderApp

    def do_GET(self) -> None:
        self._dispatch()

    def do_POST(self) -> None:
        self._dispatch()

    def do_PUT(self) -> None:
        self._dispatch()

    def do_PATCH(self) -> None:
        self._dispatch()

    def do_DELETE(self) -> None:
        self._dispatch()

    def do_OPTIONS(self) -> None:
        self._dispatch()

    def do_HEAD(self) -> None:
        self._dispatch(write_body=False)

    def _read_params(self) -> dict[str, list[str]]:
        """Merge query-string and form body params (body wins)."""
        params = parse_qs(urlsplit(self.path).query, keep_blank_values=True)
        length = parse_content_length(self.headers.get("Content-Length"))
        body = self.rfile.read(length) if length else b""
        params.update(parse_form_body(body, self.headers.get("Content-Type", "")))
        return params

    def _dispatch(self, write_body: bool = True) -> None:
        response = self.app.handle(self.command, self.path, self._read_params)
        # Unread body bytes would be taken as the next request.
        self.close_connection = True
        payload = response.body.encode()
        self.send_response(response.status)
        for name, value in response.headers.items():
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        if write_body and payload:
            self.wfile.write(payload)

    def log_message(self, format: str, *args: Any) -> None:
        LOG.debug(format, *args)


def make_server(config: AppConfig, app: WebmentionForwarderApp | None = None) -> ThreadingHTTPServer:
    """Bind the HTTP server; each request is handled in its own thread."""
    handler = type(
        "BoundWebmentionRequestHandler",
        (WebmentionRequestHandler,),
        {"app": app or WebmentionForwarderApp()},
    )
    return ThreadingHTTPServer((config.server.host, config.server.port), handler)


def run_server(config: AppConfig, app: WebmentionForwarderApp | None = None) -> None:
    """Run the webmention server until interrupted."""
    server = make_server(config, app)
    host, port = server.server_address[:2]
    LOG.info("Webmention forwarder listening on %s:%s", host, port)
    try:
        server.serve_forever()
    finally:
        server.server_close()
