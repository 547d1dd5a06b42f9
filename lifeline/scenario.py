"""
Scenario runner -- plays a ``CallScenario`` end to end.

With the default scenario the output is exactly::

    Can you tell me what happened?
    The paramedic does chest compressions, 30 per second.
"""

from __future__ import annotations

from typing import Optional, TextIO

from lifeline.call_log import CallLog
from lifeline.config import DEFAULT_SCENARIO, CallScenario
from lifeline.handler import EmergencyCallHandler
from lifeline.models import ResponderKind
from lifeline.responders import create_responder, responder_kind_of


class ScenarioResult:
    """Outcome of running one call scenario."""

    def __init__(
        self,
        scenario_id: str,
        handler_id: str,
        active_responder: Optional[ResponderKind],
        handled: int,
    ) -> None:
        self.scenario_id = scenario_id
        self.handler_id = handler_id
        self.active_responder = active_responder
        self.handled = handled

    def __repr__(self) -> str:
        responder = self.active_responder.value if self.active_responder else None
        return (
            f"ScenarioResult(scenario_id='{self.scenario_id}', "
            f"active_responder={responder}, handled={self.handled})"
        )


def run_scenario(
    scenario: CallScenario = DEFAULT_SCENARIO,
    stream: Optional[TextIO] = None,
    call_log: Optional[CallLog] = None,
) -> ScenarioResult:
    """Run a call scenario against a fresh handler.

    Each listed responder is built and then registered explicitly, in
    order.  The handler assesses the situation if the scenario asks for it
    and then raises ``scenario.emergencies`` medical emergencies.

    Args:
        scenario: The scenario to play.
        stream: Output stream shared by the handler and responders.
        call_log: Optional log receiving the handler's call events.

    Returns:
        A ``ScenarioResult`` describing the finished call.
    """
    handler = EmergencyCallHandler(stream=stream, call_log=call_log)

    for kind in scenario.responders:
        handler.register(create_responder(kind, stream=stream))

    if scenario.assess_situation:
        handler.assess_situation()

    handled = 0
    for _ in range(scenario.emergencies):
        if handler.medical_emergency():
            handled += 1

    return ScenarioResult(
        scenario_id=scenario.scenario_id,
        handler_id=handler.handler_id,
        active_responder=responder_kind_of(handler.delegate),
        handled=handled,
    )
