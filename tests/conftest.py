"""
Root test configuration.

Test organization:
- unit/        Fast, isolated, no I/O
- integration/ Component boundaries, real I/O to temp locations

Run specific levels:
    pytest tests/unit -v           # Fast feedback loop
    pytest tests/integration -v    # Before commit
    pytest tests -v                # Everything
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from datetime import datetime

from directory import InMemoryDirectory
from models import AccessLevel, Department, Institution, Participant, ProjectRecord


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast isolated tests")
    config.addinivalue_line("markers", "integration: Component boundary tests")
    config.addinivalue_line("markers", "slow: Tests that take > 1s")


# === Identities ===

ALICE = "0xAAA"          # Institution 1, department 1
BOB = "0xBBB"            # Institution 1, department 2
CAROL = "0xCCC"          # Institution 2, department 5
STRANGER = "0xDDD"       # Not in the directory


@pytest.fixture
def directory():
    """Small directory: two institutions, three participants."""
    return InMemoryDirectory(
        participants=[
            Participant(identity=ALICE, name="Alice", institution_id=1, department_id=1),
            Participant(identity=BOB, name="Bob", institution_id=1, department_id=2),
            Participant(identity=CAROL, name="Carol", institution_id=2, department_id=5),
        ],
        institutions=[
            Institution(id=1, name="Northbridge"),
            Institution(id=2, name="Eastvale"),
        ],
        departments=[
            Department(id=1, name="Computer Science", institution_id=1),
            Department(id=2, name="Electrical Engineering", institution_id=1),
            Department(id=5, name="Economics", institution_id=2),
        ],
    )


@pytest.fixture
def make_record():
    """Factory for valid records; override any field by keyword."""

    def make(**overrides) -> ProjectRecord:
        author = overrides.pop("author", ALICE)
        fields = {
            "id": 1,
            "title": "Test project",
            "description": "A project used in tests",
            "department_id": 1,
            "institution_id": 1,
            "year": 2024,
            "access_level": AccessLevel.PUBLIC,
            "artifact_hash": "QmTestHash",
            "authors": [author],
            "creator_identity": author,
            "created_at": datetime(2024, 1, 15, 12, 0, 0),
        }
        fields.update(overrides)
        return ProjectRecord(**fields)

    return make
