"""
Shared enums and fixed messages for Lifeline.

The message constants are the exact lines written to the output stream by
the handler and the responders.  Tests and scenarios compare against these
values, so they are defined once here.
"""

from __future__ import annotations

import enum


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ResponderKind(str, enum.Enum):
    """The responder variants that can be dispatched to a call.

    * ``PARAMEDIC`` -- value-type responder.
    * ``DOCTOR``    -- reference-type responder with a stethoscope.
    * ``SURGEON``   -- a Doctor that also sings while doing CPR.
    """

    PARAMEDIC = "paramedic"
    DOCTOR = "doctor"
    SURGEON = "surgeon"


# ---------------------------------------------------------------------------
# Fixed messages
# ---------------------------------------------------------------------------

ASSESS_SITUATION_PROMPT = "Can you tell me what happened?"

PARAMEDIC_CPR_MESSAGE = "The paramedic does chest compressions, 30 per second."

DOCTOR_CPR_MESSAGE = "The doctor does chest compressions, 30 per second."
DOCTOR_STETHOSCOPE_MESSAGE = "Listening for heart sounds."

SURGEON_CPR_MESSAGE = "Sings staying alive by the BeeGees"
SURGEON_DRILL_MESSAGE = "Whirr..."
