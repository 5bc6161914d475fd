from __future__ import annotations

from typing import Optional


def classify_transport_error(error_info: object) -> Optional[str]:
    """Map a transport exception (or its text) to a short log tag."""
    if error_info is None:
        return None

    if isinstance(error_info, BaseException):
        parts = [type(error_info).__name__, str(error_info)]
    else:
        parts = [str(error_info)]

    text = " ".join(p for p in parts if p.strip()).lower()
    if not text:
        return None

    def has_any(patterns: tuple[str, ...]) -> bool:
        return any(pattern in text for pattern in patterns)

    if has_any((
        "timeout",
        "timed out",
        "readtimeout",
        "connecttimeout",
    )):
        return "rollup_timeout"

    if has_any((
        "connectionerror",
        "connection error",
        "connecterror",
        "connection refused",
        "connection reset",
        "connection aborted",
        "name or service not known",
        "nodename nor servname",
        "temporary failure in name resolution",
        "network is unreachable",
        "getaddrinfo",
    )):
        return "rollup_connection_error"

    if has_any((
        "jsondecodeerror",
        "expecting value",
        "unparseable",
        "invalid json",
    )):
        return "rollup_bad_response"

    if has_any(("http error", "httperror", "status code")):
        return "rollup_http_error"

    return None
