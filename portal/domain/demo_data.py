"""
Fixed demo data: the seeded accounts and the work item templates.

Owners and templates are positional: owner i gets templates [i*5, (i+1)*5).
"""

from typing import List, Tuple

from .models import Priority


DEMO_PASSWORD = "demo123"

DEMO_OWNERS: List[str] = [
    "john@company.com",
    "sarah@company.com",
    "mike@company.com",
]

ITEMS_PER_OWNER = 5

CATEGORIES: List[str] = ["Documentation", "Development", "Testing", "Review", "Planning"]

PRIORITY_CYCLE: List[Priority] = [Priority.LOW, Priority.MEDIUM, Priority.HIGH]

# (title, description)
TASK_TEMPLATES: List[Tuple[str, str]] = [
    ("Complete API Documentation", "Finalize the REST API documentation for the new endpoints"),
    ("Review Security Audit", "Analyze and address findings from the quarterly security audit"),
    ("Update User Interface", "Implement new design changes for the dashboard"),
    ("Database Migration", "Migrate legacy data to the new database schema"),
    ("Performance Testing", "Conduct load testing on the production environment"),
    ("Client Presentation", "Prepare slides for the quarterly business review"),
    ("Code Review Process", "Establish new code review guidelines and workflows"),
    ("Training Materials", "Create training content for new team members"),
    ("Backup Verification", "Verify all backup systems are functioning correctly"),
    ("Compliance Check", "Ensure all processes meet regulatory requirements"),
    ("User Feedback Analysis", "Analyze user feedback from the latest feature release"),
    ("Infrastructure Upgrade", "Plan and execute server infrastructure improvements"),
    ("Integration Testing", "Test new third-party service integrations"),
    ("Documentation Review", "Review and update existing technical documentation"),
    ("Quality Assurance", "Perform comprehensive QA testing on new features"),
]
