"""Dependency injection helpers for the mock rollup server."""

from typing import Any, Dict

from fastapi import Request

from api.input_queue import InputQueue


def create_app_state() -> Dict[str, Any]:
    """Build the shared application state dictionary."""
    return {
        "inputs": InputQueue(),
    }


def get_input_queue(request: Request) -> InputQueue:
    return request.app.state.rollup["inputs"]
