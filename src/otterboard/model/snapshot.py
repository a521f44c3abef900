"""Immutable board snapshot values and their JSON wire format."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

MODES = ("strategy", "process", "wireframe")
GROUP_COLORS = ("yellow", "pink", "green", "blue", "orange")
PRIORITY_TYPES = ("Big Rock", "Quick Win")


@dataclass(frozen=True)
class Card:
    """A sticky note. ``id`` is the only durable identity in a board."""

    id: str
    text: str
    video_url: str | None = None
    image_url: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Card:
        return cls(
            id=str(data["id"]),
            text=data.get("text", ""),
            video_url=data.get("videoUrl"),
            image_url=data.get("imageUrl"),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id, "text": self.text}
        if self.video_url is not None:
            out["videoUrl"] = self.video_url
        if self.image_url is not None:
            out["imageUrl"] = self.image_url
        return out


@dataclass(frozen=True)
class Group:
    """A theme column. Identified only by its position in the board."""

    title: str
    meta_insight: str = ""
    notes: tuple[Card, ...] = ()
    color: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Group:
        color = data.get("color")
        return cls(
            title=data.get("title", ""),
            meta_insight=data.get("metaInsight", ""),
            notes=tuple(Card.from_dict(n) for n in data.get("notes") or ()),
            color=color if color in GROUP_COLORS else None,
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "title": self.title,
            "metaInsight": self.meta_insight,
            "notes": [n.to_dict() for n in self.notes],
        }
        if self.color is not None:
            out["color"] = self.color
        return out


@dataclass(frozen=True)
class Priority:
    """An action-plan entry. ``source_note_ids`` may name missing cards."""

    id: str
    title: str
    type: str = "Quick Win"
    reasoning: str = ""
    source_note_ids: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Priority:
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            type=data.get("type", "Quick Win"),
            reasoning=data.get("reasoning", ""),
            source_note_ids=tuple(str(i) for i in data.get("sourceNoteIds") or ()),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "type": self.type,
            "reasoning": self.reasoning,
            "sourceNoteIds": list(self.source_note_ids),
        }

    @property
    def is_big_rock(self) -> bool:
        return self.type == "Big Rock"


@dataclass(frozen=True)
class ActionPlan:
    priorities: tuple[Priority, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ActionPlan:
        return cls(priorities=tuple(Priority.from_dict(p) for p in data.get("priorities") or ()))

    def to_dict(self) -> dict[str, Any]:
        return {"priorities": [p.to_dict() for p in self.priorities]}

    def find(self, priority_id: str) -> Priority | None:
        for priority in self.priorities:
            if priority.id == priority_id:
                return priority
        return None


@dataclass(frozen=True)
class BoardSnapshot:
    """The whole analysis result of one board; the unit of remote sync."""

    mode: str = "strategy"
    themes: tuple[Group, ...] = ()
    raw_markdown: str = ""
    strategic_gaps: tuple[str, ...] | None = None
    action_plan: ActionPlan | None = None
    diagram_code: str | None = None
    wireframe_code: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BoardSnapshot:
        gaps = data.get("strategicGaps")
        plan = data.get("actionPlan")
        return cls(
            mode=data.get("mode", "strategy"),
            themes=tuple(Group.from_dict(t) for t in data.get("themes") or ()),
            raw_markdown=data.get("rawMarkdown", ""),
            strategic_gaps=tuple(gaps) if gaps is not None else None,
            action_plan=ActionPlan.from_dict(plan) if plan is not None else None,
            diagram_code=data.get("diagramCode"),
            wireframe_code=data.get("wireframeCode"),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "mode": self.mode,
            "themes": [t.to_dict() for t in self.themes],
            "rawMarkdown": self.raw_markdown,
        }
        if self.strategic_gaps is not None:
            out["strategicGaps"] = list(self.strategic_gaps)
        if self.action_plan is not None:
            out["actionPlan"] = self.action_plan.to_dict()
        if self.diagram_code is not None:
            out["diagramCode"] = self.diagram_code
        if self.wireframe_code is not None:
            out["wireframeCode"] = self.wireframe_code
        return out

    def report(self) -> str:
        """The analysis write-up as markdown: the raw report, then the strategic gaps."""
        parts = [self.raw_markdown.strip()] if self.raw_markdown.strip() else []
        if self.strategic_gaps:
            parts.append("## Gaps\n\n" + "\n".join(f"- {gap}" for gap in self.strategic_gaps))
        return "\n\n".join(parts)

    def card_ids(self) -> set[str]:
        return {card.id for group in self.themes for card in group.notes}

    def iter_cards(self):
        """Yield (group_index, card_index, card) for every card."""
        for g, group in enumerate(self.themes):
            for i, card in enumerate(group.notes):
                yield g, i, card


@dataclass(frozen=True)
class Board:
    """A stored board record as returned by the boards API."""

    id: str
    title: str = ""
    owner: str = ""
    owner_email: str | None = None
    collaborators: tuple[str, ...] = field(default_factory=tuple)
    updated_at: str | None = None
    result: BoardSnapshot | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Board:
        result = data.get("result")
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            owner=data.get("owner", ""),
            owner_email=data.get("ownerEmail"),
            collaborators=tuple(data.get("collaborators") or ()),
            updated_at=data.get("updatedAt"),
            result=BoardSnapshot.from_dict(result) if result is not None else None,
        )


def serialize(snapshot: BoardSnapshot | None) -> str:
    """Canonical JSON text for a snapshot, used for change detection."""
    data = snapshot.to_dict() if snapshot is not None else None
    return json.dumps(data, sort_keys=True, separators=(",", ":"))
