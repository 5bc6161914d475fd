"""Command dispatch: decode, validate, apply and emit for one request."""

import logging
from typing import Optional

from rollup.codec import hex_to_string, uint16_array_to_hex
from rollup.commands import CreateCity, DoTool, parse_command
from rollup.emitter import OutputEmitter
from rollup.errors import CodecError, DecodeError, PreconditionViolation
from rollup.registry import StateRegistry
from rollup.schemas import Outcome, RequestEnvelope, WorldState

logger = logging.getLogger(__name__)


def encode_world(state: WorldState) -> str:
    """Hex encoding of the full tile grid, as carried by notices."""
    return uint16_array_to_hex(state.snapshot_grid())


class CommandDispatcher:
    """Turns request envelopes into outcomes.

    Decode and validation failures become ``Outcome.REJECT`` here and never
    propagate to the request loop. A notice is emitted for every applied
    command and for nothing else.
    """

    def __init__(self, registry: StateRegistry, emitter: OutputEmitter) -> None:
        self.registry = registry
        self.emitter = emitter

    def advance(self, envelope: RequestEnvelope) -> Outcome:
        try:
            return self._advance(envelope)
        except Exception:
            logger.exception("Rejecting advance after unexpected error")
            return Outcome.REJECT

    def _advance(self, envelope: RequestEnvelope) -> Outcome:
        sender = envelope.sender
        logger.info("Advance from %s, payload %s", sender, envelope.payload[:128])
        if sender is None:
            logger.warning("Rejecting advance without msg_sender")
            return Outcome.REJECT

        try:
            command = parse_command(envelope.payload)
        except DecodeError as exc:
            logger.warning("Rejecting undecodable payload from %s: %s", sender, exc)
            return Outcome.REJECT
        except PreconditionViolation as exc:
            logger.warning("Rejecting command from %s: %s", sender, exc)
            return Outcome.REJECT

        try:
            if isinstance(command, CreateCity):
                state = self._create_city(sender)
            elif isinstance(command, DoTool):
                state = self._do_tool(sender, command)
            else:
                logger.info("Ignoring unknown method %r from %s", command.method, sender)
                return Outcome.ACCEPT
        except PreconditionViolation as exc:
            logger.warning("Rejecting command from %s: %s", sender, exc)
            return Outcome.REJECT

        self.emitter.emit_notice(encode_world(state))
        return Outcome.ACCEPT

    def _create_city(self, sender: str) -> WorldState:
        if self.registry.exists(sender):
            raise PreconditionViolation(f"city already exists for {sender}")
        state = self.registry.get_or_create(sender)
        state.create()
        logger.info("City created for address %s", sender)
        return state

    def _do_tool(self, sender: str, command: DoTool) -> WorldState:
        state = self.registry.get(sender)
        if state is None:
            raise PreconditionViolation(f"no city for {sender}")
        result = state.apply_tool(command.tool, command.x, command.y)
        logger.info(
            "Tool %s done for address %s at (%d,%d): %s",
            command.tool.name, sender, command.x, command.y, result,
        )
        return state

    def inspect(self, envelope: RequestEnvelope) -> Outcome:
        """Read-only query; reports the grid of a known identity."""
        logger.info("Received inspect request data %s", envelope.to_dict())
        try:
            identity = self._inspect_identity(envelope.payload)
            state = self.registry.get(identity) if identity is not None else None
            if state is not None:
                self.emitter.emit_report(encode_world(state))
        except Exception:
            logger.exception("Inspect failed")
        return Outcome.ACCEPT

    @staticmethod
    def _inspect_identity(payload: str) -> Optional[str]:
        try:
            text = hex_to_string(payload)
        except CodecError:
            return None
        # accepts "0xabc", "/0xabc" and "city/0xabc"
        identity = text.strip().strip("/").rsplit("/", 1)[-1]
        return identity or None
