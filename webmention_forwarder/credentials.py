"""Read the GitHub token from a local plain-text file.

The file is read on every call so a rotated token is picked up by the next
webmention without restarting the server.
"""

import logging
from pathlib import Path

from webmention_forwarder.errors import CredentialError
from webmention_forwarder.models import Credential

LOG = logging.getLogger("webmention_forwarder.credentials")


class CredentialLoader:
    """Loads a Credential from ``path``."""

    def __init__(self, path: Path, log: logging.Logger | None = None) -> None:
        self._path = Path(path)
        self._log = log or LOG

    def load(self) -> Credential:
        """Read and strip the token; raise CredentialError if missing or empty."""
        if not self._path.is_file():
            raise self._error(
                f"GitHub credentials file not found at {self._path}. "
                "Please create this file with your GitHub Personal Access Token."
            )
        try:
            token = self._path.read_text().strip()
        except (OSError, UnicodeDecodeError) as e:
            raise self._error(f"Cannot read GitHub credentials file {self._path}: {e}") from e
        if not token:
            raise self._error(
                "GitHub credentials file is empty. "
                f"Please add your GitHub Personal Access Token to {self._path}."
            )
        return Credential(token=token)

    def _error(self, message: str) -> CredentialError:
        self._log.error("Failed to read GitHub credentials: %s", message)
        return CredentialError(message)
