"""
Lifeline -- Capability Delegation for Emergency Call Handling
=============================================================

A small Python package showing the protocol/delegate pattern through a toy
emergency call.  An ``EmergencyCallHandler`` forwards one capability,
performing CPR, to whichever responder currently conforms to the
``AdvancedLifeSupport`` contract.  The handler never depends on the concrete
responder (``Paramedic``, ``Doctor`` or ``Surgeon``).

Every handler action can be recorded in an append-only, hash-chained call
log, and whole calls can be described as YAML scenarios.
"""

__version__ = "0.1.0"
