"""Thread-safe input queue and output log shared by the mock server routes."""

import threading
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, Dict, List, Optional

from rollup.codec import string_to_hex
from rollup.schemas import ADVANCE_STATE, INSPECT_STATE

QUEUED = "queued"
PROCESSING = "processing"
ACCEPTED = "accepted"
REJECTED = "rejected"


@dataclass
class InputRecord:
    """One input as seen by the coordinating server."""

    index: int
    request_type: str
    payload: str
    sender: Optional[str] = None
    timestamp: int = 0
    status: str = QUEUED
    notices: List[int] = field(default_factory=list)
    reports: List[int] = field(default_factory=list)

    def envelope(self) -> Dict[str, Any]:
        metadata: Dict[str, Any] = {}
        if self.request_type == ADVANCE_STATE:
            metadata = {
                "msg_sender": self.sender,
                "epoch_index": 0,
                "input_index": self.index,
                "block_number": self.index,
                "timestamp": self.timestamp,
            }
        return {
            "request_type": self.request_type,
            "data": {"metadata": metadata, "payload": self.payload},
        }


@dataclass
class OutputRecord:
    index: int
    input_index: int
    payload: str


class InputQueue:
    """Hands out inputs one at a time and tracks their verdicts.

    Thread-safe: all public methods acquire self._lock. Notices emitted
    while processing an input that ends up rejected are discarded.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._inputs: List[InputRecord] = []
        self._queued: Deque[InputRecord] = deque()
        self._current: Optional[InputRecord] = None
        self._notices: List[OutputRecord] = []
        self._reports: List[OutputRecord] = []
        self._next_output = 0
        self.finish_calls: List[str] = []

    def _enqueue(self, request_type: str, payload_text: str, sender: Optional[str]) -> InputRecord:
        with self._lock:
            record = InputRecord(
                index=len(self._inputs),
                request_type=request_type,
                payload=string_to_hex(payload_text),
                sender=sender,
                timestamp=int(time.time()),
            )
            self._inputs.append(record)
            self._queued.append(record)
            return record

    def enqueue_advance(self, sender: str, payload_text: str) -> InputRecord:
        return self._enqueue(ADVANCE_STATE, payload_text, sender)

    def enqueue_inspect(self, payload_text: str) -> InputRecord:
        return self._enqueue(INSPECT_STATE, payload_text, None)

    def finish(self, status: str) -> Optional[InputRecord]:
        """Settle the in-flight input with *status* and hand out the next one."""
        with self._lock:
            self.finish_calls.append(status)
            current = self._current
            if current is not None:
                current.status = ACCEPTED if status == "accept" else REJECTED
                if current.status == REJECTED and current.notices:
                    discarded = set(current.notices)
                    self._notices = [n for n in self._notices if n.index not in discarded]
                    current.notices = []
            self._current = self._queued.popleft() if self._queued else None
            if self._current is not None:
                self._current.status = PROCESSING
            return self._current

    def add_notice(self, payload: str) -> Optional[int]:
        return self._add_output(self._notices, "notices", payload)

    def add_report(self, payload: str) -> Optional[int]:
        return self._add_output(self._reports, "reports", payload)

    def _add_output(self, log: List[OutputRecord], kind: str, payload: str) -> Optional[int]:
        with self._lock:
            if self._current is None:
                return None
            index = self._next_output
            self._next_output += 1
            log.append(OutputRecord(index=index, input_index=self._current.index, payload=payload))
            getattr(self._current, kind).append(index)
            return index

    def get_inputs(self) -> List[InputRecord]:
        with self._lock:
            return list(self._inputs)

    def get_notices(self) -> List[OutputRecord]:
        with self._lock:
            return list(self._notices)

    def get_reports(self) -> List[OutputRecord]:
        with self._lock:
            return list(self._reports)
