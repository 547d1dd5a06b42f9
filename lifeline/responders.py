"""
Responders -- concrete entities conforming to Advanced Life Support.

Three responders can be dispatched to an emergency call:

* ``Paramedic`` -- an immutable value object.
* ``Doctor``    -- a plain reference object with an extra stethoscope
  operation that is not part of the capability contract.
* ``Surgeon``   -- a specialised Doctor.  It is built by *composition*: it
  holds its own ``Doctor`` and, when asked to perform CPR, runs the Doctor's
  CPR first and then adds its own line.

Responders do not register themselves with a handler.  The caller builds a
responder and then hands it to ``EmergencyCallHandler.register()``.

Every responder writes to an optional ``stream``.  When no stream is given
the line goes to standard output, resolved at the moment of writing.
"""

from __future__ import annotations

from typing import Any, Optional, TextIO

from pydantic import BaseModel, ConfigDict, Field

from lifeline.models import (
    DOCTOR_CPR_MESSAGE,
    DOCTOR_STETHOSCOPE_MESSAGE,
    PARAMEDIC_CPR_MESSAGE,
    SURGEON_CPR_MESSAGE,
    SURGEON_DRILL_MESSAGE,
    ResponderKind,
)


# ---------------------------------------------------------------------------
# Paramedic (value type)
# ---------------------------------------------------------------------------

class Paramedic(BaseModel):
    """Value-type responder.

    Frozen, so two paramedics writing to the same stream compare equal and
    a registered paramedic cannot be altered behind the handler's back.
    """

    model_config = ConfigDict(frozen=True)

    stream: Any = Field(
        default=None,
        exclude=True,
        description="Text stream for output; None means standard output.",
    )

    def perform_cpr(self) -> None:
        print(PARAMEDIC_CPR_MESSAGE, file=self.stream)


# ---------------------------------------------------------------------------
# Doctor (reference type)
# ---------------------------------------------------------------------------

class Doctor:
    """Reference-type responder.

    ``use_stethoscope()`` is only reachable through a reference typed as
    ``Doctor``; the handler, which sees only the capability, cannot call it.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream

    def perform_cpr(self) -> None:
        print(DOCTOR_CPR_MESSAGE, file=self.stream)

    def use_stethoscope(self) -> None:
        print(DOCTOR_STETHOSCOPE_MESSAGE, file=self.stream)

    def __repr__(self) -> str:
        return f"Doctor(stream={self.stream!r})"


# ---------------------------------------------------------------------------
# Surgeon (specialised Doctor, by composition)
# ---------------------------------------------------------------------------

class Surgeon:
    """A Doctor that sings while doing CPR and owns an electric drill.

    The surgeon holds a ``Doctor`` sharing its stream.  ``perform_cpr()``
    always runs the doctor's CPR before its own line, so the surgeon's
    output is the doctor's output followed by one more line.  It is not a
    ``Doctor`` subclass, so ``isinstance(surgeon, Doctor)`` is False; use
    ``surgeon.doctor`` where a ``Doctor`` reference is required.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._doctor = Doctor(stream=stream)

    @property
    def doctor(self) -> Doctor:
        """The base Doctor whose behaviour this surgeon extends."""
        return self._doctor

    @property
    def stream(self) -> Optional[TextIO]:
        return self._doctor.stream

    def perform_cpr(self) -> None:
        self._doctor.perform_cpr()
        print(SURGEON_CPR_MESSAGE, file=self.stream)

    def use_stethoscope(self) -> None:
        self._doctor.use_stethoscope()

    def use_electric_drill(self) -> None:
        print(SURGEON_DRILL_MESSAGE, file=self.stream)

    def __repr__(self) -> str:
        return f"Surgeon(stream={self.stream!r})"


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

_RESPONDER_TYPES: dict[ResponderKind, type] = {
    ResponderKind.PARAMEDIC: Paramedic,
    ResponderKind.DOCTOR: Doctor,
    ResponderKind.SURGEON: Surgeon,
}


def create_responder(
    kind: ResponderKind | str,
    stream: Optional[TextIO] = None,
) -> Paramedic | Doctor | Surgeon:
    """Build a fresh responder of the given kind.

    Args:
        kind: A ``ResponderKind`` or its string value (e.g. ``"surgeon"``).
        stream: Optional output stream handed to the responder.

    Returns:
        A new, unregistered responder.

    Raises:
        ValueError: If ``kind`` is not a known responder kind.
    """
    try:
        kind = ResponderKind(kind)
    except ValueError:
        allowed = [k.value for k in ResponderKind]
        raise ValueError(
            f"Unknown responder kind '{kind}'. Expected one of {allowed}."
        ) from None
    return _RESPONDER_TYPES[kind](stream=stream)


def responder_kind_of(responder: Any) -> Optional[ResponderKind]:
    """Return the ``ResponderKind`` for a built-in responder, or None."""
    for kind, responder_type in _RESPONDER_TYPES.items():
        if type(responder) is responder_type:
            return kind
    return None
