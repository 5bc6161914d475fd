"""Tests for command parsing, the state registry and the dispatcher."""

from typing import List, Tuple

import pytest

from city import WORLD_H, WORLD_W, City, EditingTool
from rollup.codec import format_address, string_to_hex
from rollup.commands import CreateCity, DoTool, UnknownCommand, parse_command
from rollup.dispatcher import CommandDispatcher, encode_world
from rollup.errors import DecodeError, PreconditionViolation
from rollup.registry import StateRegistry
from rollup.schemas import Outcome, RequestEnvelope

SENDER = "0xf39fd6e51aad88f6f4ce6ab8827279cfffb92266"


# ── Helpers ─────────────────────────────────────


class FakeWorld:
    """Records calls instead of simulating anything."""

    def __init__(self) -> None:
        self.calls: List[Tuple] = []

    def create(self) -> None:
        self.calls.append(("create",))

    def apply_tool(self, tool, x, y):
        self.calls.append(("apply", tool, x, y))

    def snapshot_grid(self):
        return [len(self.calls)]


class RecordingEmitter:
    def __init__(self, succeed: bool = True) -> None:
        self.notices: List[str] = []
        self.reports: List[str] = []
        self.succeed = succeed

    def emit_notice(self, payload: str) -> bool:
        self.notices.append(payload)
        return self.succeed

    def emit_report(self, payload: str) -> bool:
        self.reports.append(payload)
        return self.succeed


def _advance(command: str, sender=SENDER) -> RequestEnvelope:
    metadata = {"msg_sender": sender} if sender is not None else {}
    return RequestEnvelope("advance_state", string_to_hex(command), metadata)


def _inspect(text: str) -> RequestEnvelope:
    return RequestEnvelope("inspect_state", string_to_hex(text), {})


@pytest.fixture
def emitter():
    return RecordingEmitter()


@pytest.fixture
def fake_dispatcher(emitter):
    return CommandDispatcher(StateRegistry(factory=FakeWorld), emitter)


@pytest.fixture
def dispatcher(emitter):
    return CommandDispatcher(StateRegistry(), emitter)


# ── Command parsing ─────────────────────────────


class TestParseCommand:
    def test_create_city(self):
        assert parse_command(string_to_hex('{"method": "createCity"}')) == CreateCity()

    def test_do_tool_string_fields(self):
        cmd = parse_command(string_to_hex('{"method":"doTool","tool":"9","x":"3","y":"4"}'))
        assert cmd == DoTool(tool=EditingTool.ROAD, x=3, y=4)

    def test_do_tool_int_fields(self):
        cmd = parse_command(string_to_hex('{"method":"doTool","tool":0,"x":-2,"y":7}'))
        assert cmd == DoTool(tool=EditingTool.RESIDENTIAL, x=-2, y=7)

    def test_unknown_and_missing_method(self):
        assert parse_command(string_to_hex('{"method":"unknownThing"}')) == UnknownCommand("unknownThing")
        assert parse_command(string_to_hex("{}")) == UnknownCommand(None)

    @pytest.mark.parametrize("payload", ["0xzz", string_to_hex("not json"), string_to_hex("[1, 2]"), string_to_hex('"s"')])
    def test_decode_errors(self, payload):
        with pytest.raises(DecodeError):
            parse_command(payload)

    @pytest.mark.parametrize(
        "command",
        [
            '{"method":"doTool","tool":"20","x":"1","y":"1"}',
            '{"method":"doTool","tool":"-1","x":"1","y":"1"}',
            '{"method":"doTool","x":"1","y":"1"}',
            '{"method":"doTool","tool":"1","x":"abc","y":"1"}',
            '{"method":"doTool","tool":"1","x":"1"}',
            '{"method":"doTool","tool":"1","x":1.5,"y":"1"}',
            '{"method":"doTool","tool":"1","x":"1_000","y":"1"}',
            '{"method":"doTool","tool":"\u0663","x":"1","y":"1"}',
            '{"method":"doTool","tool":"1","x":" 2","y":"1"}',
        ],
    )
    def test_invalid_do_tool(self, command):
        with pytest.raises(PreconditionViolation):
            parse_command(string_to_hex(command))


# ── Registry ────────────────────────────────────


class TestStateRegistry:
    def test_get_or_create_is_stable(self):
        registry = StateRegistry()
        first = registry.get_or_create(SENDER)
        assert registry.get_or_create(SENDER) is first
        assert len(registry) == 1

    def test_get_does_not_create(self):
        registry = StateRegistry()
        assert registry.get(SENDER) is None
        assert not registry.exists(SENDER)
        assert len(registry) == 0

    def test_identity_is_case_insensitive(self):
        registry = StateRegistry()
        state = registry.get_or_create(SENDER)
        assert registry.get(format_address(SENDER)) is state
        assert format_address(SENDER) in registry

    def test_default_factory_builds_cities(self):
        assert isinstance(StateRegistry().get_or_create(SENDER), City)


# ── Dispatcher ──────────────────────────────────


class TestDispatcher:
    def test_create_city_then_duplicate(self, fake_dispatcher, emitter):
        assert fake_dispatcher.advance(_advance('{"method":"createCity"}')) is Outcome.ACCEPT
        assert fake_dispatcher.advance(_advance('{"method":"createCity"}')) is Outcome.REJECT
        assert len(emitter.notices) == 1
        assert fake_dispatcher.registry.get(SENDER).calls == [("create",)]

    def test_do_tool_without_city(self, fake_dispatcher, emitter):
        outcome = fake_dispatcher.advance(_advance('{"method":"doTool","tool":"9","x":"1","y":"1"}'))
        assert outcome is Outcome.REJECT
        assert emitter.notices == []
        assert len(fake_dispatcher.registry) == 0

    def test_do_tool_applies_and_emits(self, fake_dispatcher, emitter):
        fake_dispatcher.advance(_advance('{"method":"createCity"}'))
        outcome = fake_dispatcher.advance(_advance('{"method":"doTool","tool":"9","x":"3","y":"4"}'))
        assert outcome is Outcome.ACCEPT
        world = fake_dispatcher.registry.get(SENDER)
        assert world.calls[-1] == ("apply", EditingTool.ROAD, 3, 4)
        assert len(emitter.notices) == 2

    @pytest.mark.parametrize("tool", ["20", "99", "-1", "road"])
    def test_unknown_tool_rejected(self, fake_dispatcher, emitter, tool):
        fake_dispatcher.advance(_advance('{"method":"createCity"}'))
        command = '{"method":"doTool","tool":"%s","x":"1","y":"1"}' % tool
        assert fake_dispatcher.advance(_advance(command)) is Outcome.REJECT
        assert len(emitter.notices) == 1
        assert fake_dispatcher.registry.get(SENDER).calls == [("create",)]

    def test_unknown_method_accepted_without_notice(self, fake_dispatcher, emitter):
        assert fake_dispatcher.advance(_advance('{"method":"unknownThing"}')) is Outcome.ACCEPT
        assert emitter.notices == []
        assert len(fake_dispatcher.registry) == 0

    def test_missing_method_accepted(self, fake_dispatcher, emitter):
        assert fake_dispatcher.advance(_advance('{"tool":"1"}')) is Outcome.ACCEPT
        assert emitter.notices == []

    def test_undecodable_payloads_rejected(self, fake_dispatcher, emitter):
        bad = RequestEnvelope("advance_state", "0xnothex", {"msg_sender": SENDER})
        assert fake_dispatcher.advance(bad) is Outcome.REJECT
        assert fake_dispatcher.advance(_advance("{not json")) is Outcome.REJECT
        assert emitter.notices == []

    def test_double_prefixed_payload_rejected(self, fake_dispatcher, emitter):
        bad = RequestEnvelope("advance_state", "0x0x7b7d", {"msg_sender": SENDER})
        assert fake_dispatcher.advance(bad) is Outcome.REJECT
        assert emitter.notices == []

    def test_deeply_nested_json_rejected(self, fake_dispatcher, emitter):
        command = "[" * 100000 + "]" * 100000
        assert fake_dispatcher.advance(_advance(command)) is Outcome.REJECT
        assert emitter.notices == []

    def test_world_error_is_rejected(self, emitter):
        class BrokenWorld(FakeWorld):
            def apply_tool(self, tool, x, y):
                raise RuntimeError("engine fault")

        dispatcher = CommandDispatcher(StateRegistry(factory=BrokenWorld), emitter)
        dispatcher.advance(_advance('{"method":"createCity"}'))
        command = '{"method":"doTool","tool":"9","x":"1","y":"1"}'
        assert dispatcher.advance(_advance(command)) is Outcome.REJECT
        assert len(emitter.notices) == 1

    def test_missing_sender_rejected(self, fake_dispatcher, emitter):
        assert fake_dispatcher.advance(_advance('{"method":"createCity"}', sender=None)) is Outcome.REJECT
        assert len(fake_dispatcher.registry) == 0

    def test_mixed_case_sender_reaches_same_city(self, fake_dispatcher):
        fake_dispatcher.advance(_advance('{"method":"createCity"}'))
        command = '{"method":"doTool","tool":"9","x":"1","y":"1"}'
        assert fake_dispatcher.advance(_advance(command, sender=format_address(SENDER))) is Outcome.ACCEPT
        assert len(fake_dispatcher.registry) == 1

    def test_emitter_failure_does_not_change_outcome(self):
        dispatcher = CommandDispatcher(StateRegistry(factory=FakeWorld), RecordingEmitter(succeed=False))
        assert dispatcher.advance(_advance('{"method":"createCity"}')) is Outcome.ACCEPT

    def test_create_city_notice_is_empty_grid(self, dispatcher, emitter):
        dispatcher.advance(_advance('{"method":"createCity"}'))
        assert emitter.notices == ["0x" + "0000" * (WORLD_W * WORLD_H)]

    def test_notice_reflects_tool(self, dispatcher, emitter):
        dispatcher.advance(_advance('{"method":"createCity"}'))
        dispatcher.advance(_advance('{"method":"doTool","tool":"9","x":"0","y":"1"}'))
        assert emitter.notices[-1] == encode_world(dispatcher.registry.get(SENDER))
        assert emitter.notices[-1][2 + 4:2 + 8] == "0042"


class TestInspect:
    def test_inspect_unknown_identity(self, dispatcher, emitter):
        assert dispatcher.inspect(_inspect("/" + SENDER)) is Outcome.ACCEPT
        assert emitter.reports == []
        assert len(dispatcher.registry) == 0

    def test_inspect_reports_existing_city(self, dispatcher, emitter):
        dispatcher.advance(_advance('{"method":"createCity"}'))
        assert dispatcher.inspect(_inspect("city/" + format_address(SENDER))) is Outcome.ACCEPT
        assert emitter.reports == [encode_world(dispatcher.registry.get(SENDER))]

    def test_inspect_garbage_is_accepted(self, dispatcher, emitter):
        bad = RequestEnvelope("inspect_state", "0xqq", {})
        assert dispatcher.inspect(bad) is Outcome.ACCEPT
        assert emitter.reports == []

    def test_inspect_double_prefix_is_accepted(self, dispatcher, emitter):
        bad = RequestEnvelope("inspect_state", "0x0x7b7d", {})
        assert dispatcher.inspect(bad) is Outcome.ACCEPT
        assert emitter.reports == []


class TestRequestEnvelope:
    def test_from_dict(self):
        env = RequestEnvelope.from_dict(
            {"request_type": "advance_state", "data": {"metadata": {"msg_sender": SENDER}, "payload": "0x"}}
        )
        assert env.sender == SENDER
        assert env.to_dict()["data"]["payload"] == "0x"

    @pytest.mark.parametrize(
        "body",
        [
            [1, 2],
            {"data": {}},
            {"request_type": "advance_state"},
            {"request_type": "advance_state", "data": {"metadata": "sender", "payload": ""}},
            {"request_type": "advance_state", "data": {"payload": 5}},
        ],
    )
    def test_malformed(self, body):
        with pytest.raises(DecodeError):
            RequestEnvelope.from_dict(body)
