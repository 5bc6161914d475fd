"""Data-transfer objects exchanged with the coordinating server."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Protocol, Sequence, runtime_checkable

from rollup.errors import DecodeError

ADVANCE_STATE = "advance_state"
INSPECT_STATE = "inspect_state"


class Outcome(str, Enum):
    """Terminal status reported for one request."""

    ACCEPT = "accept"
    REJECT = "reject"


@dataclass
class RequestEnvelope:
    """One unit of work handed out by ``/finish``."""

    request_type: str
    payload: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def sender(self) -> Optional[str]:
        sender = self.metadata.get("msg_sender")
        return sender if isinstance(sender, str) else None

    @classmethod
    def from_dict(cls, body: Any) -> "RequestEnvelope":
        """Build an envelope from a parsed ``/finish`` response body."""
        if not isinstance(body, dict):
            raise DecodeError("request body is not an object")
        request_type = body.get("request_type")
        data = body.get("data")
        if not isinstance(request_type, str) or not isinstance(data, dict):
            raise DecodeError("request body lacks request_type or data")
        metadata = data.get("metadata") or {}
        if not isinstance(metadata, dict):
            raise DecodeError("request metadata is not an object")
        payload = data.get("payload", "")
        if not isinstance(payload, str):
            raise DecodeError("request payload is not a string")
        return cls(request_type=request_type, payload=payload, metadata=metadata)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "request_type": self.request_type,
            "data": {"metadata": dict(self.metadata), "payload": self.payload},
        }


@runtime_checkable
class WorldState(Protocol):
    """Capability interface the dispatcher needs from a simulated world."""

    def create(self) -> None:
        ...

    def apply_tool(self, tool: Any, x: int, y: int) -> Any:
        ...

    def snapshot_grid(self) -> Sequence[int]:
        ...
