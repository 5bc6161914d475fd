"""Typed commands decoded from an advance request payload."""

import json
from dataclasses import dataclass
from typing import Any, Optional, Union

from city.tools import EditingTool, parse_decimal
from rollup.codec import hex_to_string
from rollup.errors import DecodeError, MalformedHex, PreconditionViolation

CREATE_CITY = "createCity"
DO_TOOL = "doTool"


@dataclass(frozen=True)
class CreateCity:
    pass


@dataclass(frozen=True)
class DoTool:
    tool: EditingTool
    x: int
    y: int


@dataclass(frozen=True)
class UnknownCommand:
    method: Optional[str] = None


Command = Union[CreateCity, DoTool, UnknownCommand]


def _parse_int(value: Any, name: str) -> int:
    try:
        return parse_decimal(value)
    except ValueError as exc:
        raise PreconditionViolation(f"{name} is not an integer: {value!r}") from exc


def decode_payload(payload_hex: str) -> dict:
    """Hex-decode *payload_hex* and parse it as a JSON object."""
    try:
        text = hex_to_string(payload_hex)
    except MalformedHex as exc:
        raise DecodeError(str(exc)) from exc
    try:
        body = json.loads(text)
    except (ValueError, RecursionError) as exc:
        raise DecodeError(f"payload is not valid JSON: {exc}") from exc
    if not isinstance(body, dict):
        raise DecodeError("payload is not a JSON object")
    return body


def parse_command(payload_hex: str) -> Command:
    """Decode and validate a command in one step.

    Raises ``DecodeError`` for undecodable payloads and
    ``PreconditionViolation`` for malformed ``doTool`` fields. A missing or
    unrecognized ``method`` yields ``UnknownCommand``.
    """
    body = decode_payload(payload_hex)
    method = body.get("method")

    if method == CREATE_CITY:
        return CreateCity()

    if method == DO_TOOL:
        raw_tool = body.get("tool")
        try:
            tool = EditingTool.parse(raw_tool)
        except ValueError as exc:
            raise PreconditionViolation(f"unknown tool: {raw_tool!r}") from exc
        return DoTool(
            tool=tool,
            x=_parse_int(body.get("x"), "x"),
            y=_parse_int(body.get("y"), "y"),
        )

    return UnknownCommand(method=method if isinstance(method, str) else None)
