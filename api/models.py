"""Pydantic request/response models for the mock rollup server."""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel


class FinishRequest(BaseModel):
    """Body of ``POST /finish``."""

    status: Literal["accept", "reject"]


class OutputRequest(BaseModel):
    """Body of ``POST /notice`` and ``POST /report``."""

    payload: str


class OutputCreated(BaseModel):
    index: int


class AdvanceInput(BaseModel):
    """An advance request queued through the host-mode API."""

    sender: str
    payload: str = ""


class InspectInput(BaseModel):
    payload: str = ""


class InputInfo(BaseModel):
    """State of one queued input."""

    index: int
    request_type: str
    status: str
    sender: Optional[str] = None
    payload: str
    notices: List[int] = []
    reports: List[int] = []


class OutputInfo(BaseModel):
    index: int
    input_index: int
    payload: str


class RequestEnvelopeResponse(BaseModel):
    """Body handed to the node by a non-202 ``/finish``."""

    request_type: str
    data: Dict[str, Any]
