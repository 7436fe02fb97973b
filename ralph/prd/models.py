"""
Data models for the PRD (story store).

Field names are snake_case in Python and camelCase on disk (prd.json).
Optional fields that were absent on disk stay None and are omitted again on
save; keys the model does not know are kept in `extra` so a
load-modify-save cycle never drops anything.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

# (python attribute, json key) for optional story fields, in on-disk order
_STORY_OPTIONAL = [
    ("title", "title"),
    ("description", "description"),
    ("acceptance_criteria", "acceptanceCriteria"),
]
_STORY_KNOWN = {"id", "title", "description", "acceptanceCriteria", "priority", "passes", "notes"}
_PRD_KNOWN = {"project", "branchName", "description", "userStories"}


@dataclass
class Story:
    """A single unit of work handed to the agent.

    Only `passes` changes during normal operation.
    """
    id: str                                    # US-001
    priority: int                              # lower runs first
    passes: bool = False
    title: Optional[str] = None
    description: Optional[str] = None
    acceptance_criteria: Optional[list[str]] = None
    notes: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def criteria(self) -> list[str]:
        return list(self.acceptance_criteria or [])

    @classmethod
    def from_dict(cls, data: dict) -> "Story":
        return cls(
            id=data["id"],
            priority=data["priority"],
            passes=data["passes"],
            title=data.get("title"),
            description=data.get("description"),
            acceptance_criteria=list(data["acceptanceCriteria"]) if "acceptanceCriteria" in data else None,
            notes=data.get("notes"),
            extra={k: v for k, v in data.items() if k not in _STORY_KNOWN},
        )

    def to_dict(self) -> dict:
        out: dict[str, Any] = {"id": self.id}
        for attr, key in _STORY_OPTIONAL:
            value = getattr(self, attr)
            if value is not None:
                out[key] = list(value) if isinstance(value, list) else value
        out["priority"] = self.priority
        out["passes"] = self.passes
        if self.notes is not None:
            out["notes"] = self.notes
        out.update(self.extra)
        return out


@dataclass
class Prd:
    """The requirements document: one branch, many stories."""
    branch: str
    stories: list[Story] = field(default_factory=list)
    project: Optional[str] = None
    description: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "Prd":
        return cls(
            branch=data["branchName"],
            stories=[Story.from_dict(s) for s in data["userStories"]],
            project=data.get("project"),
            description=data.get("description"),
            extra={k: v for k, v in data.items() if k not in _PRD_KNOWN},
        )

    def to_dict(self) -> dict:
        out: dict[str, Any] = {}
        if self.project is not None:
            out["project"] = self.project
        out["branchName"] = self.branch
        if self.description is not None:
            out["description"] = self.description
        out["userStories"] = [s.to_dict() for s in self.stories]
        out.update(self.extra)
        return out
