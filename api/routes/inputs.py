"""Host-mode endpoints for queueing inputs and reading outputs."""

import dataclasses
from typing import List

from fastapi import APIRouter, Depends

from api.deps import get_input_queue
from api.input_queue import InputQueue
from api.models import AdvanceInput, InputInfo, InspectInput, OutputInfo

router = APIRouter(prefix="/v1")


@router.post("/inputs/advance", response_model=InputInfo)
def queue_advance(body: AdvanceInput, queue: InputQueue = Depends(get_input_queue)) -> InputInfo:
    """Queue an advance request; *payload* is plain text, hex-encoded here."""
    record = queue.enqueue_advance(body.sender, body.payload)
    return InputInfo(**dataclasses.asdict(record))


@router.post("/inputs/inspect", response_model=InputInfo)
def queue_inspect(body: InspectInput, queue: InputQueue = Depends(get_input_queue)) -> InputInfo:
    record = queue.enqueue_inspect(body.payload)
    return InputInfo(**dataclasses.asdict(record))


@router.get("/inputs", response_model=List[InputInfo])
def list_inputs(queue: InputQueue = Depends(get_input_queue)) -> List[InputInfo]:
    return [InputInfo(**dataclasses.asdict(r)) for r in queue.get_inputs()]


@router.get("/notices", response_model=List[OutputInfo])
def list_notices(queue: InputQueue = Depends(get_input_queue)) -> List[OutputInfo]:
    return [OutputInfo(**dataclasses.asdict(n)) for n in queue.get_notices()]


@router.get("/reports", response_model=List[OutputInfo])
def list_reports(queue: InputQueue = Depends(get_input_queue)) -> List[OutputInfo]:
    return [OutputInfo(**dataclasses.asdict(r)) for r in queue.get_reports()]
