import json

from mcp_monitor.core.sanitize import PARAMS_LIMIT, RESPONSE_LIMIT, sanitize_params, sanitize_response


def _params_of_length(length: int) -> dict:
    overhead = len(json.dumps({"blob": ""}, separators=(",", ":")))
    return {"blob": "x" * (length - overhead)}


def test_small_params_returned_unchanged() -> None:
    params = {"a": 1, "b": [1, 2, 3]}
    assert sanitize_params(params) is params


def test_params_over_limit_are_truncated_with_preview() -> None:
    params = _params_of_length(6000)
    serialized = json.dumps(params, separators=(",", ":"))
    assert len(serialized) == 6000

    sanitized = sanitize_params(params)
    assert sanitized == {"truncated": True, "size": 6000, "preview": serialized[:500]}


def test_params_at_limit_are_kept() -> None:
    params = _params_of_length(PARAMS_LIMIT)
    assert sanitize_params(params) is params


def test_response_uses_larger_threshold() -> None:
    response = _params_of_length(PARAMS_LIMIT + 1000)
    assert sanitize_response(response) is response

    large = _params_of_length(RESPONSE_LIMIT + 1)
    sanitized = sanitize_response(large)
    assert sanitized["truncated"] is True
    assert sanitized["size"] == RESPONSE_LIMIT + 1
    assert len(sanitized["preview"]) == 500


def test_absent_values() -> None:
    assert sanitize_params(None) == {}
    assert sanitize_response(None) is None
    assert sanitize_response(0) == 0
    assert sanitize_response("") == ""


def test_unserializable_values_are_redacted() -> None:
    assert sanitize_params({"handle": object()}) == {"error": "could not serialize"}
    assert sanitize_response({1, 2}) == {"error": "could not serialize"}
