"""
Tests for lifeline.handler -- Emergency Call Handler.

Covers: assessment prompt, delegation to each responder, empty-slot no-op,
replacement of delegates, explicit registration, non-conforming delegates,
third-party conforming types, handler identity, and call log recording.
"""

from __future__ import annotations

import io

import pytest

from lifeline.call_log import CallEventType, CallLog
from lifeline.handler import EmergencyCallHandler, NonConformingDelegateError
from lifeline.models import (
    ASSESS_SITUATION_PROMPT,
    DOCTOR_CPR_MESSAGE,
    PARAMEDIC_CPR_MESSAGE,
    SURGEON_CPR_MESSAGE,
)
from lifeline.responders import Doctor, Paramedic, Surgeon


def _make_handler(call_log: CallLog | None = None) -> tuple[EmergencyCallHandler, io.StringIO]:
    stream = io.StringIO()
    return EmergencyCallHandler(stream=stream, call_log=call_log, handler_id="h1"), stream


def _lines(stream: io.StringIO) -> list[str]:
    return stream.getvalue().splitlines()


class _Lifeguard:
    def __init__(self, stream: io.StringIO) -> None:
        self.stream = stream

    def perform_cpr(self) -> None:
        print("The lifeguard starts CPR on the beach.", file=self.stream)


# ---------------------------------------------------------------------------
# 1. Assessment
# ---------------------------------------------------------------------------

class TestAssessSituation:
    def test_writes_prompt(self):
        handler, stream = _make_handler()
        handler.assess_situation()
        assert _lines(stream) == [ASSESS_SITUATION_PROMPT]

    def test_needs_no_delegate(self):
        handler, stream = _make_handler()
        assert not handler.has_delegate
        handler.assess_situation()
        assert len(_lines(stream)) == 1


# ---------------------------------------------------------------------------
# 2. Delegation
# ---------------------------------------------------------------------------

class TestMedicalEmergency:
    @pytest.mark.parametrize(
        "responder_type, expected",
        [
            (Paramedic, [PARAMEDIC_CPR_MESSAGE]),
            (Doctor, [DOCTOR_CPR_MESSAGE]),
            (Surgeon, [DOCTOR_CPR_MESSAGE, SURGEON_CPR_MESSAGE]),
        ],
    )
    def test_output_is_exactly_the_delegates(self, responder_type, expected):
        handler, stream = _make_handler()
        handler.register(responder_type(stream=stream))

        assert handler.medical_emergency() is True
        assert _lines(stream) == expected

    def test_no_delegate_is_silent_noop(self):
        handler, stream = _make_handler()
        assert handler.medical_emergency() is False
        assert stream.getvalue() == ""

    def test_no_delegate_writes_nothing_to_stdout(self, capsys):
        handler = EmergencyCallHandler()
        handler.medical_emergency()
        assert capsys.readouterr().out == ""

    def test_third_party_conforming_type(self):
        handler, stream = _make_handler()
        handler.register(_Lifeguard(stream))
        handler.medical_emergency()
        assert _lines(stream) == ["The lifeguard starts CPR on the beach."]

    def test_repeated_emergencies_repeat_output(self):
        handler, stream = _make_handler()
        handler.register(Paramedic(stream=stream))
        handler.medical_emergency()
        handler.medical_emergency()
        assert _lines(stream) == [PARAMEDIC_CPR_MESSAGE, PARAMEDIC_CPR_MESSAGE]


# ---------------------------------------------------------------------------
# 3. Delegate slot
# ---------------------------------------------------------------------------

class TestDelegateSlot:
    def test_construction_does_not_register(self):
        handler, stream = _make_handler()
        Paramedic(stream=stream)
        Doctor(stream=stream)
        assert handler.delegate is None

    def test_register_returns_previous(self):
        handler, stream = _make_handler()
        paramedic = Paramedic(stream=stream)
        doctor = Doctor(stream=stream)

        assert handler.register(paramedic) is None
        assert handler.register(doctor) is paramedic
        assert handler.delegate is doctor

    def test_replacement_not_accumulation(self):
        handler, stream = _make_handler()
        handler.register(Paramedic(stream=stream))
        handler.register(Surgeon(stream=stream))

        handler.medical_emergency()
        assert _lines(stream) == [DOCTOR_CPR_MESSAGE, SURGEON_CPR_MESSAGE]
        assert PARAMEDIC_CPR_MESSAGE not in _lines(stream)

    def test_property_setter_registers_and_clears(self):
        handler, stream = _make_handler()
        doctor = Doctor(stream=stream)

        handler.delegate = doctor
        assert handler.delegate is doctor

        handler.delegate = None
        assert handler.delegate is None
        assert handler.medical_emergency() is False

    def test_clear_delegate_returns_previous(self):
        handler, stream = _make_handler()
        paramedic = Paramedic(stream=stream)
        handler.register(paramedic)

        assert handler.clear_delegate() == paramedic
        assert not handler.has_delegate

    def test_same_responder_serves_two_handlers(self):
        stream = io.StringIO()
        first = EmergencyCallHandler(stream=stream)
        second = EmergencyCallHandler(stream=stream)
        doctor = Doctor(stream=stream)

        first.register(doctor)
        second.register(doctor)
        first.clear_delegate()

        assert second.delegate is doctor


# ---------------------------------------------------------------------------
# 4. Non-conforming delegates
# ---------------------------------------------------------------------------

class TestNonConformingDelegate:
    def test_register_rejects_non_conforming(self):
        handler, _ = _make_handler()
        with pytest.raises(NonConformingDelegateError):
            handler.register(object())

    def test_error_is_a_type_error(self):
        handler, _ = _make_handler()
        with pytest.raises(TypeError):
            handler.delegate = "paramedic"

    def test_rejected_delegate_keeps_previous(self):
        handler, stream = _make_handler()
        paramedic = Paramedic(stream=stream)
        handler.register(paramedic)

        with pytest.raises(NonConformingDelegateError):
            handler.register(42)
        assert handler.delegate == paramedic

    def test_register_rejects_responder_class(self):
        handler, stream = _make_handler()
        with pytest.raises(NonConformingDelegateError):
            handler.register(Doctor)
        with pytest.raises(NonConformingDelegateError):
            handler.register(Paramedic)

        assert handler.delegate is None
        assert handler.medical_emergency() is False
        assert stream.getvalue() == ""


# ---------------------------------------------------------------------------
# 5. Handler identity
# ---------------------------------------------------------------------------

class TestHandlerId:
    def test_explicit_id_kept(self):
        assert EmergencyCallHandler(handler_id="desk_1").handler_id == "desk_1"

    def test_generated_id_when_omitted(self):
        first = EmergencyCallHandler()
        second = EmergencyCallHandler()
        assert first.handler_id
        assert first.handler_id != second.handler_id

    def test_empty_id_rejected(self):
        with pytest.raises(ValueError, match="handler_id"):
            EmergencyCallHandler(handler_id="")


# ---------------------------------------------------------------------------
# 6. Call log recording
# ---------------------------------------------------------------------------

class TestCallLogRecording:
    def test_full_call_is_recorded_in_order(self):
        call_log = CallLog()
        handler, stream = _make_handler(call_log)

        handler.register(Paramedic(stream=stream))
        handler.assess_situation()
        handler.medical_emergency()

        events = call_log.query("h1")
        assert [e.event_type for e in events] == [
            CallEventType.DELEGATE_REGISTERED,
            CallEventType.SITUATION_ASSESSED,
            CallEventType.CPR_DELEGATED,
        ]
        assert events[2].responder == "Paramedic"

    def test_replacement_records_replaced_type(self):
        call_log = CallLog()
        handler, stream = _make_handler(call_log)

        handler.register(Paramedic(stream=stream))
        handler.register(Surgeon(stream=stream))

        events = call_log.query("h1", event_type=CallEventType.DELEGATE_REGISTERED)
        assert events[0].metadata["replaced"] == ""
        assert events[1].metadata["replaced"] == "Paramedic"
        assert events[1].responder == "Surgeon"

    def test_unhandled_emergency_recorded_without_output(self):
        call_log = CallLog()
        handler, stream = _make_handler(call_log)

        handler.medical_emergency()

        assert stream.getvalue() == ""
        events = call_log.query("h1", event_type=CallEventType.EMERGENCY_UNHANDLED)
        assert len(events) == 1

    def test_clear_recorded(self):
        call_log = CallLog()
        handler, stream = _make_handler(call_log)
        handler.register(Doctor(stream=stream))
        handler.clear_delegate()

        events = call_log.query("h1", event_type=CallEventType.DELEGATE_CLEARED)
        assert len(events) == 1
        assert events[0].responder == "Doctor"

    def test_rejected_registration_not_recorded(self):
        call_log = CallLog()
        handler, _ = _make_handler(call_log)
        with pytest.raises(NonConformingDelegateError):
            handler.register(object())
        assert len(call_log) == 0

    def test_logging_does_not_change_output(self):
        logged, logged_stream = _make_handler(CallLog())
        plain, plain_stream = _make_handler()

        for handler, stream in ((logged, logged_stream), (plain, plain_stream)):
            handler.register(Surgeon(stream=stream))
            handler.assess_situation()
            handler.medical_emergency()

        assert logged_stream.getvalue() == plain_stream.getvalue()
