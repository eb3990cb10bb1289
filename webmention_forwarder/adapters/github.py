"""GitHub API adapter."""

import logging
from typing import Any, Dict

import requests
from pydantic import ValidationError as ModelValidationError

from webmention_forwarder.adapters.base import GitPlatformAdapter
from webmention_forwarder.config import DEFAULT_API_URL
from webmention_forwarder.errors import RemoteApiError
from webmention_forwarder.models import PullRequestResult

LOG = logging.getLogger("webmention_forwarder.adapters.github")

USER_AGENT = "webmention-forwarder"
REQUEST_TIMEOUT = 30


class GitHubAdapter(GitPlatformAdapter):
    """GitHub REST API implementation (bearer token auth)."""

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_API_URL,
        timeout: float = REQUEST_TIMEOUT,
        log: logging.Logger | None = None,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._log = log or LOG
        self._session = requests.Session()
        self._session.headers["Authorization"] = f"Bearer {token}"
        self._session.headers["Accept"] = "application/vnd.github+json"
        self._session.headers["Content-Type"] = "application/json"
        self._session.headers["User-Agent"] = USER_AGENT

    def _request(
        self,
        method: str,
        path: str,
        json: Dict[str, Any] | None = None,
    ) -> requests.Response:
        url = f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"
        try:
            resp = self._session.request(method, url, json=json, timeout=self._timeout)
        except requests.Timeout as e:
            raise RemoteApiError(f"GitHub API request timed out after {self._timeout}s: {e}") from e
        except requests.RequestException as e:
            raise RemoteApiError(f"GitHub API request failed: {e}") from e
        if not 200 <= resp.status_code < 300:
            body = resp.text or ""
            self._log.error("GitHub API request failed with status %s: %s", resp.status_code, body)
            raise RemoteApiError(
                f"GitHub API request failed with status {resp.status_code}: {body}",
                status_code=resp.status_code,
                body=body,
            )
        return resp

    def close(self) -> None:
        self._session.close()

    def create_pr(
        self,
        repo: str,
        title: str,
        body: str,
        head: str,
        base: str,
    ) -> PullRequestResult:
        resp = self._request(
            "POST",
            f"/repos/{repo}/pulls",
            json={"title": title, "body": body, "head": head, "base": base},
        )
        try:
            return PullRequestResult.model_validate(resp.json())
        except (ValueError, ModelValidationError) as e:
            raise RemoteApiError(
                f"Unexpected GitHub API response: {e}",
                body=resp.text or "",
            ) from e
