from webmention_forwarder.adapters.base import GitPlatformAdapter
from webmention_forwarder.adapters.github import GitHubAdapter

__all__ = ["GitHubAdapter", "GitPlatformAdapter"]
