"""
Checkbox Service - Completion state per (user, item) and its audit trail.

Architecture Decision: One transaction per change
A checkbox change touches three documents: the state map, the audit log
(one entry per user/item, replaced in place) and the append-only history.
All three are read, modified and written back under one asyncio lock and
committed with a single set_many(), so a change is either fully recorded or
not at all, and two changes in flight cannot overwrite each other's log.
"""

import asyncio
import datetime
import logging
from typing import Dict, List, Optional, Tuple

from pydantic import TypeAdapter, ValidationError

from portal.domain.errors import PersistenceError
from portal.domain.models import AuditEvent, AuditLogEntry, CheckboxState, PortalOptions
from portal.infra.config import get_settings
from portal.infra.kv_store import KeyValueStore
from portal.services import latency
from portal.services.latency import SimulatedLatency

logger = logging.getLogger(__name__)

STATES_KEY = "data_portal_checkbox_states"
LOGS_KEY = "data_portal_checkbox_logs"
HISTORY_KEY = "data_portal_checkbox_history"

LogKey = Tuple[str, str]  # (owner_email, item_id)

# owner_email -> item_id -> state
StateMap = Dict[str, Dict[str, CheckboxState]]
_state_map = TypeAdapter(StateMap)
_log_entries = TypeAdapter(List[AuditLogEntry])
_history_events = TypeAdapter(List[AuditEvent])


class CheckboxService:
    """Reads and records checkbox changes"""

    def __init__(self, store: Optional[KeyValueStore] = None,
                 options: Optional[PortalOptions] = None):
        self.store = store or KeyValueStore()
        self.options = options or get_settings().options
        self.latency = SimulatedLatency(self.options.latency_scale)
        self._write_lock = asyncio.Lock()

    async def _load_log(self) -> Dict[LogKey, AuditLogEntry]:
        """
        Load the audit log keyed by (owner, item).

        Dict order is the stored order, and assigning an existing key keeps
        its position, which gives replace-in-place-else-append for free.
        """
        data = await self.store.get_json(LOGS_KEY, [])
        try:
            entries = _log_entries.validate_python(data)
        except ValidationError as e:
            raise PersistenceError(f"Corrupt audit log: {e}") from e
        return {(e.owner_email, e.item_id): e for e in entries}

    async def _load_states(self) -> StateMap:
        data = await self.store.get_json(STATES_KEY, {})
        try:
            return _state_map.validate_python(data)
        except ValidationError as e:
            raise PersistenceError(f"Corrupt checkbox states: {e}") from e

    async def _load_history(self) -> List[AuditEvent]:
        data = await self.store.get_json(HISTORY_KEY, [])
        try:
            return _history_events.validate_python(data)
        except ValidationError as e:
            raise PersistenceError(f"Corrupt audit history: {e}") from e

    async def get_states_for_user(self, email: str) -> Dict[str, CheckboxState]:
        """Get item_id -> state for one user (empty if nothing recorded)"""
        logger.info(f"Fetching checkbox states for user: {email}")
        await self.latency.wait(latency.STATES_DELAY)

        states = (await self._load_states()).get(email, {})

        logger.info(f"Found {len(states)} checkbox states for {email}")
        return states

    async def set_state(self, email: str, item_id: str, checked: bool) -> CheckboxState:
        """
        Record a checkbox change.

        Replaces the user's state for the item, upserts the audit log entry
        and appends a history event, all with the same timestamp.

        Raises:
            PersistenceError: the change could not be stored; nothing was written
        """
        logger.info(f"Logging checkbox action: {email}, row {item_id}, checked: {checked}")
        await self.latency.wait(latency.SET_STATE_DELAY)

        async with self._write_lock:
            timestamp = datetime.datetime.now()
            state = CheckboxState(item_id=item_id, checked=checked, last_updated=timestamp)

            all_states = await self._load_states()
            all_states.setdefault(email, {})[item_id] = state

            log = await self._load_log()
            key = (email, item_id)
            replaced = key in log
            log[key] = AuditLogEntry(owner_email=email, item_id=item_id, checked=checked, timestamp=timestamp)

            writes = {
                STATES_KEY: _state_map.dump_python(all_states, mode="json"),
                LOGS_KEY: [entry.model_dump(mode="json") for entry in log.values()],
            }

            if self.options.keep_history:
                history = await self._load_history()
                history.append(AuditEvent(owner_email=email, item_id=item_id, checked=checked, timestamp=timestamp))
                writes[HISTORY_KEY] = [event.model_dump(mode="json") for event in history]

            await self.store.set_many_json(writes)

        if replaced:
            logger.info(f"Updated existing log entry for {email}, row {item_id}")
        else:
            logger.info(f"Created new log entry for {email}, row {item_id}")
        return state

    async def get_logs(self, email: Optional[str] = None) -> List[AuditLogEntry]:
        """Get the audit log, optionally only one user's entries"""
        logger.info(f"Fetching checkbox logs{f' for user: {email}' if email else ''}")
        await self.latency.wait(latency.LOGS_DELAY)

        entries = list((await self._load_log()).values())
        if email:
            return [e for e in entries if e.owner_email == email]
        return entries

    async def get_audit_trail(self, item_id: str) -> List[AuditLogEntry]:
        """Get the audit log entries for one item across all users"""
        logger.info(f"Fetching audit trail for row: {item_id}")
        await self.latency.wait(latency.AUDIT_TRAIL_DELAY)

        return [e for e in (await self._load_log()).values() if e.item_id == item_id]

    async def get_history(self, email: Optional[str] = None,
                          item_id: Optional[str] = None) -> List[AuditEvent]:
        """Get every recorded change in order, optionally filtered by user and/or item"""
        await self.latency.wait(latency.LOGS_DELAY)

        events = await self._load_history()
        if email:
            events = [e for e in events if e.owner_email == email]
        if item_id:
            events = [e for e in events if e.item_id == item_id]
        return events
