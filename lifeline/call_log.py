"""
Append-Only Call Log (Hash-Chained).

Every action an ``EmergencyCallHandler`` takes -- registering or clearing a
delegate, assessing the situation, and forwarding an emergency -- can be
recorded as a structured call event.  Events are linked via a SHA-256 hash
chain: if any recorded event is modified after the fact, ``verify_chain()``
reports the first broken link.

Recording never writes to the handler's output stream.  The call transcript
a caller sees is the same whether or not a log is attached.

**Handler isolation:**  Queries and exports are scoped by ``handler_id``.
Several handlers may share one log without seeing each other's events.
"""

from __future__ import annotations

import enum
import hashlib
import json
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Event types
# ---------------------------------------------------------------------------

class CallEventType(str, enum.Enum):
    """Every recordable action of a call handler."""

    # Delegate management
    DELEGATE_REGISTERED = "DELEGATE_REGISTERED"
    DELEGATE_CLEARED = "DELEGATE_CLEARED"

    # Call flow
    SITUATION_ASSESSED = "SITUATION_ASSESSED"
    CPR_DELEGATED = "CPR_DELEGATED"
    EMERGENCY_UNHANDLED = "EMERGENCY_UNHANDLED"


# ---------------------------------------------------------------------------
# Call event model
# ---------------------------------------------------------------------------

class CallEvent(BaseModel):
    """A single call log entry.

    Records which handler did what, when, with which responder, and links to
    the previous entry's hash.
    """

    entry_id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        description="Unique identifier for this entry (UUID).",
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="UTC timestamp of the event.",
    )
    handler_id: str = Field(
        ...,
        min_length=1,
        description="Identifier of the handler that produced the event.",
    )
    event_type: CallEventType = Field(
        ...,
        description="The type of event being recorded.",
    )
    responder: str = Field(
        default="",
        description="Type name of the responder involved, empty when none.",
    )
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data.",
    )
    previous_hash: str = Field(
        default="",
        description=(
            "SHA-256 hash of the previous entry's canonical representation. "
            "Empty string for the first entry in the chain."
        ),
    )

    def canonical_bytes(self) -> bytes:
        """Return a deterministic byte representation for hashing."""
        data = {
            "entry_id": self.entry_id,
            "timestamp": self.timestamp.isoformat(),
            "handler_id": self.handler_id,
            "event_type": self.event_type.value,
            "responder": self.responder,
            "metadata": self.metadata,
            "previous_hash": self.previous_hash,
        }
        return json.dumps(data, sort_keys=True, default=str).encode("utf-8")

    def compute_hash(self) -> str:
        """Compute the SHA-256 hash of this entry's canonical representation."""
        return hashlib.sha256(self.canonical_bytes()).hexdigest()


# ---------------------------------------------------------------------------
# Call log
# ---------------------------------------------------------------------------

class CallLog:
    """Append-only call log with SHA-256 hash chaining.

    * **Append-only writes** -- there is no ``update()`` or ``delete()``.
    * **Hash chain verification** -- ``verify_chain()`` walks the full log.
    * **Handler-scoped reads** -- ``query()`` and ``export()`` always take a
      ``handler_id`` and return copies.
    """

    def __init__(self) -> None:
        self._entries: list[CallEvent] = []
        self._hashes: list[str] = []  # parallel list of computed hashes

    def append(self, entry: CallEvent) -> CallEvent:
        """Append an entry, linking it to the previous one.

        Args:
            entry: The call event to append.

        Returns:
            The entry with ``previous_hash`` populated.
        """
        entry.previous_hash = self._hashes[-1] if self._hashes else ""
        self._entries.append(entry)
        self._hashes.append(entry.compute_hash())
        return entry

    def verify_chain(self) -> tuple[bool, Optional[int]]:
        """Walk the log and validate every hash link.

        Returns:
            ``(valid, broken_at)`` where ``broken_at`` is the index of the
            first broken link, or None when the chain is intact.
        """
        for i, entry in enumerate(self._entries):
            if i == 0:
                if entry.previous_hash != "":
                    return (False, 0)
            elif entry.previous_hash != self._entries[i - 1].compute_hash():
                return (False, i)

            if self._hashes[i] != entry.compute_hash():
                return (False, i)

        return (True, None)

    def query(
        self,
        handler_id: str,
        event_type: Optional[CallEventType] = None,
        responder: Optional[str] = None,
    ) -> list[CallEvent]:
        """Return copies of the entries recorded by one handler.

        Args:
            handler_id: Required.  Only this handler's entries are returned.
            event_type: Optional filter by event type.
            responder: Optional filter by responder type name.

        Returns:
            Matching ``CallEvent`` copies in append order.
        """
        results = []
        for entry in self._entries:
            if entry.handler_id != handler_id:
                continue
            if event_type is not None and entry.event_type != event_type:
                continue
            if responder is not None and entry.responder != responder:
                continue
            results.append(entry.model_copy(deep=True))
        return results

    def export(self, handler_id: str) -> dict[str, Any]:
        """Produce a JSON-serializable bundle of one handler's events.

        Includes the chain verification result for the whole log.
        """
        entries = []
        for entry in self.query(handler_id):
            entry_dict = entry.model_dump()
            entry_dict["event_type"] = entry.event_type.value
            entry_dict["timestamp"] = entry.timestamp.isoformat()
            entries.append(entry_dict)

        chain_valid, broken_at = self.verify_chain()

        return {
            "export_metadata": {
                "handler_id": handler_id,
                "exported_at": datetime.now(timezone.utc).isoformat(),
                "entry_count": len(entries),
                "chain_integrity": "VALID" if chain_valid else f"BROKEN_AT_INDEX_{broken_at}",
            },
            "entries": entries,
        }

    def __len__(self) -> int:
        return len(self._entries)
