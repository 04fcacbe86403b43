"""Data portal - accounts, assigned work items and audited checkboxes"""

from .api import DataPortal

__all__ = ["DataPortal"]
