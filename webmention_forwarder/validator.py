"""Extract source and target from webmention request parameters."""

import logging
from typing import Any, Mapping

from webmention_forwarder.errors import ValidationError
from webmention_forwarder.models import WebmentionRequest

LOG = logging.getLogger("webmention_forwarder.validator")

MISSING_PARAMS_MESSAGE = "source and target parameters are required"


def _first(value: Any) -> str | None:
    """Return the first value when params come from parse_qs (lists)."""
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def extract_webmention(params: Mapping[str, Any], log: logging.Logger | None = None) -> WebmentionRequest:
    """Build WebmentionRequest from form or query parameters.

    Only absence is rejected; an empty string counts as present.
    """
    logger = log or LOG
    source = _first(params.get("source"))
    target = _first(params.get("target"))
    if source is None or target is None:
        logger.warning(
            "Invalid webmention: missing source or target. Source: %s, Target: %s",
            source,
            target,
        )
        raise ValidationError(MISSING_PARAMS_MESSAGE)
    return WebmentionRequest(source=source, target=target)
