"""
Directory - maps participant identities to institution and department.

Read-only from the registry's point of view. The directory data is owned by
an external collaborator; YamlDirectory reads an exported snapshot of it.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from config import DIRECTORY_FILE, load_yaml
from logging_config import get_logger
from models import Affiliation, Department, Institution, Participant

logger = get_logger(__name__)


class Directory(ABC):
    """Abstract directory lookup."""

    @abstractmethod
    def resolve(self, identity: str) -> Optional[Affiliation]:
        """Affiliation for identity, or None if it is not listed."""
        pass

    @abstractmethod
    def institutions(self) -> list[Institution]:
        """All known institutions."""
        pass

    @abstractmethod
    def departments(self, institution_id: int) -> list[Department]:
        """Departments of one institution."""
        pass

    def institution_name(self, institution_id: int) -> Optional[str]:
        for inst in self.institutions():
            if inst.id == institution_id:
                return inst.name
        return None

    def department_name(self, department_id: int) -> Optional[str]:
        for inst in self.institutions():
            for dept in self.departments(inst.id):
                if dept.id == department_id:
                    return dept.name
        return None


class InMemoryDirectory(Directory):
    """Directory held in dictionaries."""

    def __init__(
        self,
        participants: list[Participant] = None,
        institutions: list[Institution] = None,
        departments: list[Department] = None,
    ):
        self._participants = {p.identity: p for p in participants or []}
        self._institutions = list(institutions or [])
        self._departments = list(departments or [])

    def resolve(self, identity: str) -> Optional[Affiliation]:
        if not identity:
            return None
        participant = self._participants.get(identity)
        return participant.affiliation if participant else None

    def institutions(self) -> list[Institution]:
        return list(self._institutions)

    def departments(self, institution_id: int) -> list[Department]:
        return [d for d in self._departments if d.institution_id == institution_id]

    def add_participant(self, participant: Participant) -> None:
        self._participants[participant.identity] = participant


class YamlDirectory(InMemoryDirectory):
    """
    Directory loaded from a YAML snapshot.

    Layout:
        institutions: [{id, name, departments: [{id, name}, ...]}, ...]
        participants: [{identity, name, institution_id, department_id}, ...]
    """

    def __init__(self, path: Path = None):
        self.path = path or DIRECTORY_FILE
        data = load_yaml(self.path)
        if data is None:
            logger.warning("[DIRECTORY] No directory file at %s, every identity is unresolved", self.path)
            data = {}

        institutions = []
        departments = []
        for inst in data.get("institutions", []):
            institutions.append(Institution(id=inst["id"], name=inst["name"]))
            for dept in inst.get("departments", []):
                departments.append(Department(id=dept["id"], name=dept["name"], institution_id=inst["id"]))

        participants = [Participant(**p) for p in data.get("participants", [])]

        super().__init__(participants, institutions, departments)
        logger.debug(
            "[DIRECTORY] Loaded %d participants, %d institutions from %s",
            len(participants), len(institutions), self.path,
        )
