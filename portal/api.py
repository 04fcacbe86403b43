"""
DataPortal - the service surface the presentation layer talks to.

Wires the auth, catalog and checkbox services around one key-value store.
"""

import logging
from typing import Dict, List, Optional

from portal.domain.errors import PortalError
from portal.domain.models import (
    AuditEvent, AuditLogEntry, CheckboxState, PortalOptions, Session, User, WorkItem,
)
from portal.infra.config import Settings, get_settings
from portal.infra.db import init_db
from portal.infra.kv_store import KeyValueStore
from portal.services.auth_service import AuthService
from portal.services.catalog_service import CatalogService
from portal.services.checkbox_service import CheckboxService
from portal.services.dashboard_service import DashboardView

logger = logging.getLogger(__name__)


class DataPortal:
    """Facade over the portal services"""

    def __init__(self, store: Optional[KeyValueStore] = None,
                 options: Optional[PortalOptions] = None):
        self.store = store or KeyValueStore()
        self.options = options or get_settings().options
        self.auth = AuthService(self.store, self.options)
        self.catalog = CatalogService(self.store, self.options)
        self.checkboxes = CheckboxService(self.store, self.options)

    @classmethod
    async def open(cls, settings: Optional[Settings] = None) -> 'DataPortal':
        """Create the database tables if needed and return a portal using them"""
        settings = settings or get_settings()
        await init_db(settings.get_db_url())
        return cls(options=settings.options)

    # Accounts

    async def register(self, email: str, password: str) -> User:
        return await self.auth.register(email, password)

    async def login(self, email: str, password: str) -> User:
        return await self.auth.login(email, password)

    async def get_current_user(self) -> Optional[User]:
        return await self.auth.get_current_user()

    async def get_current_session(self) -> Optional[Session]:
        return await self.auth.get_current_session()

    async def logout(self) -> None:
        await self.auth.logout()

    # Catalog

    async def get_user_items(self, email: str) -> List[WorkItem]:
        return await self.catalog.get_user_items(email)

    async def get_all_items(self) -> List[WorkItem]:
        return await self.catalog.get_all_items()

    async def run_query(self, query_text: str, email: str) -> List[WorkItem]:
        return await self.catalog.run_query(query_text, email)

    # Checkboxes

    async def get_states_for_user(self, email: str) -> Dict[str, CheckboxState]:
        return await self.checkboxes.get_states_for_user(email)

    async def set_state(self, email: str, item_id: str, checked: bool) -> CheckboxState:
        return await self.checkboxes.set_state(email, item_id, checked)

    async def get_logs(self, email: Optional[str] = None) -> List[AuditLogEntry]:
        return await self.checkboxes.get_logs(email)

    async def get_audit_trail(self, item_id: str) -> List[AuditLogEntry]:
        return await self.checkboxes.get_audit_trail(item_id)

    async def get_history(self, email: Optional[str] = None,
                          item_id: Optional[str] = None) -> List[AuditEvent]:
        return await self.checkboxes.get_history(email, item_id)

    # Dashboard

    async def open_dashboard(self, session: Session) -> DashboardView:
        """Build and load the dashboard for an authenticated session"""
        view = DashboardView(session, self.catalog, self.checkboxes)
        try:
            await view.load()
        except PortalError as e:
            logger.error(f"Error loading dashboard data: {e}")
            raise
        return view
