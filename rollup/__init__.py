"""Rollup node -- request loop, dispatcher and codec package."""

from rollup.client import RollupClient
from rollup.commands import CreateCity, DoTool, UnknownCommand, parse_command
from rollup.config import RollupConfig
from rollup.dispatcher import CommandDispatcher, encode_world
from rollup.emitter import OutputEmitter
from rollup.errors import (
    CodecError,
    ConfigurationError,
    DecodeError,
    InvalidAddressLength,
    MalformedHex,
    PreconditionViolation,
    RollupError,
    TransportFailure,
    ValueTooLarge,
)
from rollup.registry import StateRegistry
from rollup.schemas import ADVANCE_STATE, INSPECT_STATE, Outcome, RequestEnvelope, WorldState

__all__ = [
    "ADVANCE_STATE",
    "INSPECT_STATE",
    "CodecError",
    "CommandDispatcher",
    "ConfigurationError",
    "CreateCity",
    "DecodeError",
    "DoTool",
    "InvalidAddressLength",
    "MalformedHex",
    "Outcome",
    "OutputEmitter",
    "PreconditionViolation",
    "RequestEnvelope",
    "RollupClient",
    "RollupConfig",
    "RollupError",
    "StateRegistry",
    "TransportFailure",
    "UnknownCommand",
    "ValueTooLarge",
    "WorldState",
    "encode_world",
    "parse_command",
]
