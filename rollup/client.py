"""The finish/poll loop against the coordinating server."""

import logging
import threading
import time
from typing import Any, Callable, Dict, Optional

import requests

from rollup.config import RollupConfig
from rollup.dispatcher import CommandDispatcher
from rollup.emitter import OutputEmitter
from rollup.errors import DecodeError, TransportFailure
from rollup.registry import StateRegistry
from rollup.schemas import ADVANCE_STATE, INSPECT_STATE, Outcome, RequestEnvelope
from utils.error_tags import classify_transport_error

logger = logging.getLogger(__name__)

NO_PENDING_REQUEST = 202


class RollupClient:
    """Single-threaded request loop.

    Each cycle reports the previous outcome to ``/finish`` and, when the
    server hands out a request, dispatches it and keeps its outcome for the
    next cycle. Transport failures are retried with exponential backoff
    without advancing the cycle.
    """

    def __init__(
        self,
        config: RollupConfig,
        dispatcher: CommandDispatcher,
        session: Optional[Any] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config
        self.dispatcher = dispatcher
        self._session = session if session is not None else requests.Session()
        self._sleep = sleep
        self.status: Outcome = Outcome.ACCEPT
        self._handlers: Dict[str, Callable[[RequestEnvelope], Outcome]] = {
            ADVANCE_STATE: dispatcher.advance,
            INSPECT_STATE: dispatcher.inspect,
        }

    @classmethod
    def from_config(
        cls,
        config: RollupConfig,
        session: Optional[Any] = None,
        registry: Optional[StateRegistry] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> "RollupClient":
        """Wire registry, emitter and dispatcher around one HTTP session."""
        session = session if session is not None else requests.Session()
        emitter = OutputEmitter(config.server_url, session=session, timeout=config.read_timeout)
        dispatcher = CommandDispatcher(registry if registry is not None else StateRegistry(), emitter)
        return cls(config, dispatcher, session=session, sleep=sleep)

    @property
    def registry(self) -> StateRegistry:
        return self.dispatcher.registry

    def _finish(self) -> Optional[Any]:
        """Send the previous status; return the next request body or None on 202."""
        url = f"{self.config.server_url}/finish"
        attempt = 0
        while True:
            try:
                logger.debug("Sending finish (%s)", self.status.value)
                resp = self._session.post(
                    url, json={"status": self.status.value}, timeout=self.config.read_timeout
                )
                logger.debug("Received finish status %s", resp.status_code)
                if resp.status_code == NO_PENDING_REQUEST:
                    return None
                if resp.status_code >= 400:
                    raise requests.HTTPError(
                        f"{resp.status_code} HTTP Error from {url}", response=resp
                    )
                return resp.json()
            except (requests.RequestException, ValueError) as exc:
                tag = classify_transport_error(exc)
                if attempt >= self.config.max_retries:
                    logger.error(
                        "Giving up on %s after %d attempts [%s]: %s", url, attempt + 1, tag, exc
                    )
                    raise TransportFailure(
                        f"finish failed: {exc}", endpoint=url, attempts=attempt + 1, tag=tag
                    ) from exc
                delay = self.config.backoff_delay(attempt)
                logger.warning(
                    "Finish attempt %d failed [%s]: %s; retrying in %.2fs",
                    attempt + 1, tag, exc, delay,
                )
                self._sleep(delay)
                attempt += 1

    def step(self) -> Optional[RequestEnvelope]:
        """Run one cycle. Returns the request handled, or None if there was none."""
        body = self._finish()
        if body is None:
            logger.debug("No pending rollup request, trying again")
            if self.config.poll_interval > 0:
                self._sleep(self.config.poll_interval)
            return None

        try:
            envelope = RequestEnvelope.from_dict(body)
        except DecodeError as exc:
            logger.warning("Rejecting malformed request: %s", exc)
            self.status = Outcome.REJECT
            return None

        handler = self._handlers.get(envelope.request_type)
        if handler is None:
            logger.warning("Rejecting unknown request type %r", envelope.request_type)
            self.status = Outcome.REJECT
            return envelope

        self.status = handler(envelope)
        logger.info("Request %s finished with %s", envelope.request_type, self.status.value)
        return envelope

    def run(self, max_cycles: int = 0, stop_event: Optional[threading.Event] = None) -> int:
        """Loop until *stop_event* is set or *max_cycles* cycles ran (0 = unlimited)."""
        cycles = 0
        while stop_event is None or not stop_event.is_set():
            self.step()
            cycles += 1
            if max_cycles > 0 and cycles >= max_cycles:
                break
        return cycles
