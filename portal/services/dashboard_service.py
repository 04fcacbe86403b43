"""
Dashboard Service - What a logged-in user sees.

Holds the user's items and checkbox states in memory, filters them for the
table and computes the summary cards. Checkbox toggles are applied locally
first and rolled back if the change cannot be stored.
"""

import datetime
import logging
from typing import Dict, List, Optional

from portal.domain.errors import PortalError
from portal.domain.models import CheckboxState, DashboardStats, ItemFilter, Priority, Session, WorkItem
from portal.services.catalog_service import CatalogService
from portal.services.checkbox_service import CheckboxService

logger = logging.getLogger(__name__)

ALL = "all"


def filter_items(items: List[WorkItem], item_filter: Optional[ItemFilter] = None) -> List[WorkItem]:
    """
    Apply the table filters.

    The search term matches title or description, case-insensitively.
    Category and priority must match exactly unless set to "all".
    """
    if item_filter is None:
        return list(items)

    term = item_filter.search.lower()
    result = []
    for item in items:
        if term and term not in item.title.lower() and term not in item.description.lower():
            continue
        if item_filter.category != ALL and item.category != item_filter.category:
            continue
        if item_filter.priority != ALL and item.priority.value != item_filter.priority:
            continue
        result.append(item)
    return result


def list_categories(items: List[WorkItem]) -> List[str]:
    """Unique categories in first-seen order (for the category filter)"""
    return list(dict.fromkeys(item.category for item in items))


def compute_stats(items: List[WorkItem], states: Dict[str, CheckboxState]) -> DashboardStats:
    total = len(items)
    checked = sum(1 for state in states.values() if state.checked)
    return DashboardStats(
        total_items=total,
        checked_items=checked,
        high_priority=sum(1 for item in items if item.priority == Priority.HIGH),
        completion_rate=round(checked / total * 100) if total else 0,
    )


class DashboardView:
    """
    One user's dashboard.

    Built for an explicit Session; nothing here reads the persisted
    current-user record.
    """

    def __init__(self, session: Session, catalog: CatalogService, checkboxes: CheckboxService):
        self.session = session
        self.catalog = catalog
        self.checkboxes = checkboxes
        self.items: List[WorkItem] = []
        self.states: Dict[str, CheckboxState] = {}

    async def load(self) -> None:
        """Fetch the user's items and checkbox states"""
        email = self.session.email
        logger.info(f"Loading data for user: {email}")
        self.items = await self.catalog.get_user_items(email)
        self.states = await self.checkboxes.get_states_for_user(email)
        logger.info(f"Loaded {len(self.items)} data rows and {len(self.states)} checkbox states")

    @property
    def stats(self) -> DashboardStats:
        return compute_stats(self.items, self.states)

    @property
    def categories(self) -> List[str]:
        return list_categories(self.items)

    def visible_items(self, item_filter: Optional[ItemFilter] = None) -> List[WorkItem]:
        return filter_items(self.items, item_filter)

    def is_checked(self, item_id: str) -> bool:
        """Untouched items have no state and count as unchecked"""
        state = self.states.get(item_id)
        return state.checked if state else False

    async def toggle(self, item_id: str, checked: bool) -> CheckboxState:
        """
        Set a checkbox, optimistically.

        The local state changes before the write; if the write fails the
        previous local state is restored and the error re-raised.
        """
        previous = self.states
        self.states = {
            **previous,
            item_id: CheckboxState(item_id=item_id, checked=checked, last_updated=datetime.datetime.now()),
        }

        try:
            saved = await self.checkboxes.set_state(self.session.email, item_id, checked)
        except PortalError as e:
            logger.error(f"Error updating checkbox state for row {item_id}: {e}")
            self.states = previous
            raise

        self.states[item_id] = saved
        return saved
