"""
Emergency Call Handler -- the coordinator side of the delegate pattern.

The handler answers the call and asks what happened.  When a medical
emergency arises it forwards the CPR request to its delegate, whatever
concrete responder that happens to be.  It only ever sees the delegate
through the ``AdvancedLifeSupport`` contract.

**Delegate slot rules:**

* At most one delegate is registered at a time.
* Registering a new delegate replaces the previous one unconditionally.
* With no delegate, ``medical_emergency()`` does nothing on the output
  stream and does not fail.
* Registration is an explicit call made after the responder is built.
  Constructing a responder never changes any handler.

If a ``CallLog`` is supplied every action is recorded there as well.
"""

from __future__ import annotations

import uuid
from typing import Any, Optional, TextIO

from lifeline.call_log import CallEvent, CallEventType, CallLog
from lifeline.capability import AdvancedLifeSupport, conforms
from lifeline.models import ASSESS_SITUATION_PROMPT


class NonConformingDelegateError(TypeError):
    """Raised when a delegate does not satisfy ``AdvancedLifeSupport``."""
    pass


class EmergencyCallHandler:
    """Coordinator holding zero-or-one ``AdvancedLifeSupport`` delegate.

    The handler does not own its delegate; the responder lives on
    independently and can be registered with several handlers.
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        call_log: Optional[CallLog] = None,
        handler_id: Optional[str] = None,
    ) -> None:
        self.stream = stream
        if handler_id is not None and not handler_id:
            raise ValueError("handler_id must be a non-empty string when given.")
        self.handler_id = handler_id if handler_id is not None else str(uuid.uuid4())
        self._call_log = call_log
        self._delegate: Optional[AdvancedLifeSupport] = None

    # -- helpers --

    def _record(
        self,
        event_type: CallEventType,
        responder: Any = None,
        metadata: dict | None = None,
    ) -> None:
        if self._call_log is None:
            return
        self._call_log.append(CallEvent(
            handler_id=self.handler_id,
            event_type=event_type,
            responder=_type_name(responder),
            metadata=metadata or {},
        ))

    # -- delegate slot --

    @property
    def delegate(self) -> Optional[AdvancedLifeSupport]:
        """The currently registered responder, or None."""
        return self._delegate

    @delegate.setter
    def delegate(self, value: Optional[AdvancedLifeSupport]) -> None:
        if value is None:
            self.clear_delegate()
        else:
            self.register(value)

    @property
    def has_delegate(self) -> bool:
        """Whether a responder is currently registered."""
        return self._delegate is not None

    def register(
        self, delegate: AdvancedLifeSupport
    ) -> Optional[AdvancedLifeSupport]:
        """Make ``delegate`` the handler's sole responder.

        Args:
            delegate: Any object conforming to ``AdvancedLifeSupport``.

        Returns:
            The delegate that was replaced, or None.

        Raises:
            NonConformingDelegateError: If ``delegate`` has no callable
                ``perform_cpr``.  The current delegate is kept.
        """
        if not conforms(delegate):
            raise NonConformingDelegateError(
                f"{_type_name(delegate) or 'None'} does not conform to "
                "AdvancedLifeSupport: a callable perform_cpr() is required."
            )

        previous = self._delegate
        self._delegate = delegate

        self._record(
            CallEventType.DELEGATE_REGISTERED,
            responder=delegate,
            metadata={"replaced": _type_name(previous)},
        )
        return previous

    def clear_delegate(self) -> Optional[AdvancedLifeSupport]:
        """Empty the delegate slot and return what was in it."""
        previous = self._delegate
        self._delegate = None

        self._record(CallEventType.DELEGATE_CLEARED, responder=previous)
        return previous

    # -- call flow --

    def assess_situation(self) -> None:
        """Ask the caller what happened."""
        print(ASSESS_SITUATION_PROMPT, file=self.stream)
        self._record(CallEventType.SITUATION_ASSESSED)

    def medical_emergency(self) -> bool:
        """Forward a CPR request to the registered delegate, if any.

        Returns:
            True if a delegate performed CPR, False if the slot was empty.
        """
        delegate = self._delegate
        if delegate is None:
            self._record(CallEventType.EMERGENCY_UNHANDLED)
            return False

        delegate.perform_cpr()
        self._record(CallEventType.CPR_DELEGATED, responder=delegate)
        return True

    def __repr__(self) -> str:
        return (
            f"EmergencyCallHandler(handler_id='{self.handler_id}', "
            f"delegate={_type_name(self._delegate) or None})"
        )


def _type_name(obj: Any) -> str:
    return "" if obj is None else type(obj).__name__
