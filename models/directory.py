"""
Directory entities - institutions, departments and participant affiliation.
"""

from pydantic import BaseModel, ConfigDict


class Affiliation(BaseModel):
    """Where a participant belongs."""
    model_config = ConfigDict(frozen=True)

    institution_id: int
    department_id: int


class Institution(BaseModel):
    id: int
    name: str


class Department(BaseModel):
    id: int
    name: str
    institution_id: int


class Participant(BaseModel):
    """A directory entry: an identity and its affiliation."""
    identity: str
    name: str = ""
    institution_id: int
    department_id: int

    @property
    def affiliation(self) -> Affiliation:
        return Affiliation(
            institution_id=self.institution_id,
            department_id=self.department_id,
        )
