"""Abstract base for Git platform adapters."""

from abc import ABC, abstractmethod

from webmention_forwarder.models import PullRequestResult


class GitPlatformAdapter(ABC):
    """Interface for the code-hosting platform that receives webmentions."""

    @abstractmethod
    def create_pr(
        self,
        repo: str,
        title: str,
        body: str,
        head: str,
        base: str,
    ) -> PullRequestResult:
        """Open a pull request from head into base.

        Raises RemoteApiError on any failure.
        """
        ...

    def close(self) -> None:
        """Release connections held by the adapter."""

    def __enter__(self) -> "GitPlatformAdapter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
