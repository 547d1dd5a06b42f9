"""
Emergency Call Walkthrough
==========================

Plays the classic call (a paramedic on the line, the handler asks what
happened, then CPR is delegated) and then every scenario in
``call_scenarios.yaml``.

Steps demonstrated:
  1. Register a responder explicitly and run the default call
  2. Reach responder-only operations through concrete references
  3. Run scenarios loaded from YAML
  4. Verify and export the call log

Usage:
    python -m examples.emergency_call
    # or: python examples/emergency_call.py
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

# Ensure the project root is on the path
sys.path.insert(0, str(Path(__file__).parent.parent))

from lifeline.call_log import CallLog
from lifeline.config import ScenarioRegistry, load_scenarios_from_yaml
from lifeline.handler import EmergencyCallHandler
from lifeline.responders import Doctor, Paramedic, Surgeon
from lifeline.scenario import run_scenario


def _banner(text: str) -> None:
    print(f"\n{'=' * 60}")
    print(f"  {text}")
    print(f"{'=' * 60}\n")


def main() -> None:
    call_log = CallLog()

    # ------------------------------------------------------------------
    # Step 1: The classic call
    # ------------------------------------------------------------------
    _banner("Step 1: Paramedic On The Line")

    handler = EmergencyCallHandler(call_log=call_log)
    handler.register(Paramedic())

    handler.assess_situation()
    handler.medical_emergency()

    # ------------------------------------------------------------------
    # Step 2: Concrete-only operations
    # ------------------------------------------------------------------
    _banner("Step 2: Doctor And Surgeon Extras")

    doctor = Doctor()
    doctor.use_stethoscope()

    surgeon = Surgeon()
    surgeon.use_electric_drill()
    previous = handler.register(surgeon)
    print(f"Surgeon replaced {type(previous).__name__} as delegate.")
    handler.medical_emergency()

    # ------------------------------------------------------------------
    # Step 3: YAML scenarios
    # ------------------------------------------------------------------
    _banner("Step 3: Scenarios From YAML")

    registry = ScenarioRegistry()
    for scenario in load_scenarios_from_yaml(Path(__file__).parent / "call_scenarios.yaml"):
        registry.register(scenario)

    for scenario_id in registry.list_ids():
        scenario = registry.get(scenario_id)
        print(f"--- {scenario.name} ---")
        result = run_scenario(scenario, call_log=call_log)
        print(f"{result}\n")

    # ------------------------------------------------------------------
    # Step 4: Call log
    # ------------------------------------------------------------------
    _banner("Step 4: Call Log")

    export = call_log.export(handler.handler_id)
    print(json.dumps(export["export_metadata"], indent=2))

    valid, broken_at = call_log.verify_chain()
    print(f"\nFull chain verification: valid={valid}, broken_at={broken_at}")


if __name__ == "__main__":
    main()
