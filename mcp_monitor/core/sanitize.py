"""Bound and redact payloads before they leave the process."""

from __future__ import annotations

import json
from typing import Any

PARAMS_LIMIT = 5000
RESPONSE_LIMIT = 10000
PREVIEW_CHARS = 500

UNSERIALIZABLE = {"error": "could not serialize"}


def _bounded(value: Any, limit: int) -> Any:
    try:
        serialized = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError, RecursionError):
        return dict(UNSERIALIZABLE)
    if len(serialized) > limit:
        return {"truncated": True, "size": len(serialized), "preview": serialized[:PREVIEW_CHARS]}
    return value


def sanitize_params(params: Any) -> Any:
    """Return ``params`` unchanged when small and serializable, else a marker dict."""
    if params is None:
        return {}
    return _bounded(params, PARAMS_LIMIT)


def sanitize_response(response: Any) -> Any:
    """Same as :func:`sanitize_params` with the larger response threshold; ``None`` stays ``None``."""
    if response is None:
        return None
    return _bounded(response, RESPONSE_LIMIT)
