"""
Advanced Life Support -- the capability contract.

A call handler never knows which responder will answer a medical emergency.
It only knows that whoever is registered can perform CPR.  That promise is
captured here as a structural ``Protocol``: any object exposing a callable
``perform_cpr()`` conforms, whatever its class or lineage.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class AdvancedLifeSupport(Protocol):
    """Capability contract with exactly one required operation.

    Implementations take no arguments and return nothing; the only effect
    of ``perform_cpr()`` is what the responder writes to its output stream.
    """

    def perform_cpr(self) -> None:
        """Perform CPR on the caller's patient."""
        ...


def conforms(obj: Any) -> bool:
    """Return True if ``obj`` satisfies the ``AdvancedLifeSupport`` contract.

    ``isinstance`` against a runtime-checkable protocol only checks that the
    attribute exists, so the attribute is also required to be callable.
    ``None`` and classes never conform; only instances can be delegates.
    """
    if obj is None or isinstance(obj, type):
        return False
    return isinstance(obj, AdvancedLifeSupport) and callable(
        getattr(obj, "perform_cpr", None)
    )
