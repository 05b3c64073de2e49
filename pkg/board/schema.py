"""
Project schema and lane identities.

Project lifecycle:
  Active ⇄ Finished

A project is created Active and only its status ever changes afterwards.
Instances are frozen; the store swaps in a new instance on every move so
that snapshots handed to listeners never change underneath them.
"""
from enum import Enum
from dataclasses import dataclass, replace
from typing import Dict, Any


class ProjectStatus(Enum):
    """The two statuses a project can be in."""
    ACTIVE = "active"
    FINISHED = "finished"

    @classmethod
    def from_str(cls, value: str) -> "ProjectStatus":
        try:
            return cls[value.strip().upper()]
        except (KeyError, AttributeError):
            raise ValueError(f"Invalid status: {value!r}")


class LaneKind(Enum):
    """Display lanes. Each lane shows, and accepts drops for, one status."""
    ACTIVE = "active"
    FINISHED = "finished"

    @property
    def status(self) -> ProjectStatus:
        return ProjectStatus(self.value)

    @classmethod
    def from_str(cls, value: str) -> "LaneKind":
        try:
            return cls[value.strip().upper()]
        except (KeyError, AttributeError):
            raise ValueError(f"Invalid lane: {value!r}")


@dataclass(frozen=True)
class Project:
    """One work item on the board."""

    id: str                         # e.g. prj-3f2a..., also the element id once rendered
    title: str
    description: str
    people: int
    status: ProjectStatus = ProjectStatus.ACTIVE

    def with_status(self, status: ProjectStatus) -> "Project":
        return replace(self, status=status)

    @property
    def persons(self) -> str:
        """Person-count line: "1 person", otherwise "<n> persons"."""
        if self.people == 1:
            return "1 person"
        return f"{self.people} persons"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "people": self.people,
            "status": self.status.value,
        }
