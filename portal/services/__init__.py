"""Services layer - Business logic"""

from .auth_service import AuthService
from .catalog_service import CatalogService
from .checkbox_service import CheckboxService
from .dashboard_service import DashboardView

__all__ = ["AuthService", "CatalogService", "CheckboxService", "DashboardView"]
