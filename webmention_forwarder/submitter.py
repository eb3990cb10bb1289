"""Open a GitHub pull request describing a received webmention.

Each call resolves the forwarding config and the credential afresh, builds
the PR title, body and head branch from the current UTC time, and makes a
single API call. Nothing is retried.
"""

import logging
from datetime import UTC, datetime
from typing import Callable

from webmention_forwarder.adapters.base import GitPlatformAdapter
from webmention_forwarder.adapters.github import GitHubAdapter
from webmention_forwarder.config import ForwardingConfig
from webmention_forwarder.credentials import CredentialLoader
from webmention_forwarder.errors import ConfigError, RemoteApiError
from webmention_forwarder.models import PullRequestDraft, PullRequestResult

LOG = logging.getLogger("webmention_forwarder.submitter")

TITLE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S UTC"
BRANCH_TIME_FORMAT = "%Y-%m-%dT%H-%M-%S"
BRANCH_SUFFIX = "-new-webmention"

Clock = Callable[[], datetime]
AdapterFactory = Callable[[str, str], GitPlatformAdapter]


def utc_now() -> datetime:
    return datetime.now(UTC)


def build_draft(source: str, target: str, clock: Clock = utc_now) -> PullRequestDraft:
    """Build the PR draft for a webmention.

    Title and branch each read the clock, so they may differ by the time
    between the two reads.
    """
    title = f"New Webmention Received at {clock().strftime(TITLE_TIME_FORMAT)}"
    body = f"source: {source}\ntarget: {target}"
    head_branch = f"{clock().strftime(BRANCH_TIME_FORMAT)}{BRANCH_SUFFIX}"
    return PullRequestDraft(title=title, body=body, head_branch=head_branch)


def _github_adapter(token: str, api_url: str) -> GitPlatformAdapter:
    return GitHubAdapter(token=token, api_url=api_url)


class PullRequestSubmitter:
    """Turns a validated webmention into one pull request."""

    def __init__(
        self,
        config_provider: Callable[[], ForwardingConfig] = ForwardingConfig,
        adapter_factory: AdapterFactory = _github_adapter,
        clock: Clock = utc_now,
        log: logging.Logger | None = None,
    ) -> None:
        self._config_provider = config_provider
        self._adapter_factory = adapter_factory
        self._clock = clock
        self._log = log or LOG

    def _resolve_repo(self, config: ForwardingConfig) -> str:
        repo = (config.repo or "").strip()
        if not repo:
            raise ConfigError(
                "WEBMENTION_FORWARDER_REPO environment variable is not set. "
                "Please set it to OWNER/REPO format."
            )
        return repo

    def submit(self, source: str, target: str) -> PullRequestResult:
        """Create the pull request; raise ForwarderError subclasses on failure."""
        config = self._config_provider()
        repo = self._resolve_repo(config)
        credential = CredentialLoader(config.credentials_path_resolved, log=self._log).load()

        draft = build_draft(source, target, clock=self._clock)
        self._log.info("Creating PR in %s with title: %s", repo, draft.title)

        adapter = self._adapter_factory(credential.token, config.api_base_url)
        try:
            result = adapter.create_pr(
                repo,
                title=draft.title,
                body=draft.body,
                head=draft.head_branch,
                base=draft.base_branch,
            )
        except RemoteApiError as e:
            self._log.error("GitHub API error: %s", e)
            raise
        finally:
            adapter.close()

        self._log.info("Successfully created PR #%s: %s", result.number, result.html_url)
        return result
