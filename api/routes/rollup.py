"""Endpoints the rollup node talks to: finish, notice and report."""

from fastapi import APIRouter, Depends, HTTPException, Response

from api.deps import get_input_queue
from api.input_queue import InputQueue
from api.models import FinishRequest, OutputCreated, OutputRequest, RequestEnvelopeResponse

router = APIRouter()


@router.post("/finish", response_model=RequestEnvelopeResponse)
def finish(body: FinishRequest, queue: InputQueue = Depends(get_input_queue)):
    """Settle the in-flight input and return the next one, or 202 if none is pending."""
    record = queue.finish(body.status)
    if record is None:
        return Response(status_code=202)
    return RequestEnvelopeResponse(**record.envelope())


@router.post("/notice", status_code=201, response_model=OutputCreated)
def create_notice(body: OutputRequest, queue: InputQueue = Depends(get_input_queue)) -> OutputCreated:
    index = queue.add_notice(body.payload)
    if index is None:
        raise HTTPException(status_code=400, detail="No input is being processed")
    return OutputCreated(index=index)


@router.post("/report", status_code=201, response_model=OutputCreated)
def create_report(body: OutputRequest, queue: InputQueue = Depends(get_input_queue)) -> OutputCreated:
    index = queue.add_report(body.payload)
    if index is None:
        raise HTTPException(status_code=400, detail="No input is being processed")
    return OutputCreated(index=index)
