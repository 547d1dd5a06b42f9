"""
Call Scenarios -- declarative configuration for emergency calls.

A scenario describes one call: which responders are dispatched to the
handler (registered in order, so the last one listed is the active
delegate), whether the handler assesses the situation first, and how many
medical emergencies are raised.  Scenarios are validated pydantic models
and can be loaded from YAML.

Example YAML structure::

    scenarios:
      - scenario_id: "paramedic_call"
        name: "Paramedic answers"
        responders: ["paramedic"]
      - scenario_id: "surgeon_handover"
        name: "Paramedic hands over to a surgeon"
        responders: ["paramedic", "surgeon"]
        assess_situation: false
"""

from __future__ import annotations

import copy
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from lifeline.models import ResponderKind


# ---------------------------------------------------------------------------
# Scenario model
# ---------------------------------------------------------------------------

class CallScenario(BaseModel):
    """A single emergency call, described declaratively."""

    scenario_id: str = Field(
        ...,
        min_length=1,
        description="Unique identifier for the scenario; registry key.",
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Human-readable name of the scenario.",
    )
    responders: list[ResponderKind] = Field(
        default_factory=lambda: [ResponderKind.PARAMEDIC],
        description=(
            "Responders registered with the handler in order.  Each one "
            "replaces the previous delegate, so the last entry is the one "
            "that performs CPR.  An empty list leaves the handler without "
            "a delegate."
        ),
    )
    assess_situation: bool = Field(
        default=True,
        description="Whether the handler asks what happened before the emergency.",
    )
    emergencies: int = Field(
        default=1,
        ge=0,
        description="How many times medical_emergency() is raised.",
    )

    @property
    def active_responder(self) -> ResponderKind | None:
        """The responder left in the delegate slot after registration."""
        return self.responders[-1] if self.responders else None


# ---------------------------------------------------------------------------
# Default scenario
# ---------------------------------------------------------------------------

DEFAULT_SCENARIO = CallScenario(
    scenario_id="default",
    name="Paramedic answers an emergency call",
    responders=[ResponderKind.PARAMEDIC],
    assess_situation=True,
    emergencies=1,
)
"""Register a paramedic, ask what happened, then raise one emergency."""


# ---------------------------------------------------------------------------
# Scenario registry
# ---------------------------------------------------------------------------

class ScenarioRegistry:
    """In-memory registry of call scenarios keyed by ``scenario_id``."""

    def __init__(self) -> None:
        self._scenarios: dict[str, CallScenario] = {}

    def register(self, scenario: CallScenario) -> None:
        """Register a new scenario.

        Raises:
            ValueError: If ``scenario_id`` is already registered.
        """
        if scenario.scenario_id in self._scenarios:
            raise ValueError(
                f"Scenario '{scenario.scenario_id}' already registered. "
                "Use update() to modify an existing scenario."
            )
        self._scenarios[scenario.scenario_id] = copy.deepcopy(scenario)

    def get(self, scenario_id: str) -> CallScenario:
        """Return a deep copy of a registered scenario.

        Raises:
            KeyError: If no scenario is registered under ``scenario_id``.
        """
        if scenario_id not in self._scenarios:
            raise KeyError(f"No scenario registered for scenario_id '{scenario_id}'")
        return copy.deepcopy(self._scenarios[scenario_id])

    def update(self, scenario: CallScenario) -> None:
        """Replace an existing scenario.

        Raises:
            KeyError: If the scenario was never registered.
        """
        if scenario.scenario_id not in self._scenarios:
            raise KeyError(
                f"Cannot update: no scenario registered for scenario_id "
                f"'{scenario.scenario_id}'"
            )
        self._scenarios[scenario.scenario_id] = copy.deepcopy(scenario)

    def list_ids(self) -> list[str]:
        """Return the sorted list of registered scenario IDs."""
        return sorted(self._scenarios.keys())

    def __len__(self) -> int:
        return len(self._scenarios)

    def __contains__(self, scenario_id: str) -> bool:
        return scenario_id in self._scenarios


# ---------------------------------------------------------------------------
# YAML loader
# ---------------------------------------------------------------------------

def load_scenarios_from_yaml(path: str | Path) -> list[CallScenario]:
    """Load call scenarios from a YAML file.

    The file must contain a top-level ``scenarios`` key holding a list of
    scenario mappings.  Each mapping is validated through ``CallScenario``.

    Args:
        path: Path to the YAML file.

    Returns:
        List of validated ``CallScenario`` instances, in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the YAML structure is invalid.
        pydantic.ValidationError: If any scenario fails validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Scenario file not found: {path}")

    with open(path, "r") as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict) or "scenarios" not in raw:
        raise ValueError(
            "YAML file must contain a top-level 'scenarios' key with a list of scenario objects."
        )

    scenarios_data = raw["scenarios"]
    if not isinstance(scenarios_data, list):
        raise ValueError("'scenarios' must be a list of scenario objects.")

    scenarios: list[CallScenario] = []
    for idx, entry in enumerate(scenarios_data):
        if not isinstance(entry, dict):
            raise ValueError(f"Scenario entry at index {idx} must be a mapping.")
        scenarios.append(CallScenario(**entry))

    return scenarios
