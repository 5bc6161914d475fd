"""Notice and report posting against the coordinating server."""

import logging
from typing import Any, Optional

import requests

from utils.error_tags import classify_transport_error

logger = logging.getLogger(__name__)

OUTPUT_CREATED = 201


class OutputEmitter:
    """Posts ``{"payload": ...}`` bodies to ``/notice`` and ``/report``.

    Failures are logged and reported through the return value only; they
    never change the outcome of the request being processed.
    """

    def __init__(self, base_url: str, session: Optional[Any] = None, timeout: float = 20.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._session = session if session is not None else requests.Session()
        self._timeout = timeout

    def emit_notice(self, payload: str) -> bool:
        return self._post("notice", payload)

    def emit_report(self, payload: str) -> bool:
        return self._post("report", payload)

    def _post(self, kind: str, payload: str) -> bool:
        url = f"{self._base_url}/{kind}"
        try:
            resp = self._session.post(url, json={"payload": payload}, timeout=self._timeout)
        except requests.RequestException as exc:
            logger.warning(
                "Failed to create %s [%s]: %s", kind, classify_transport_error(exc), exc
            )
            return False
        if resp.status_code != OUTPUT_CREATED:
            logger.warning("Failed to create %s: server answered %s", kind, resp.status_code)
            return False
        logger.info("%s created successfully (%d chars)", kind.capitalize(), len(payload))
        return True
