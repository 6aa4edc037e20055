"""Shared resource data models and helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ResourceType(str, Enum):
    """Provenance tag assigned by the source a resource came from."""

    INTERNAL = "internal"
    EXTERNAL = "external"


# Attribute name -> JSON key for the optional pass-through fields.
EXTRA_FIELDS: Dict[str, str] = {
    "eligibility": "eligibility",
    "important_dates": "importantDates",
    "stage": "stage",
    "parent_item": "parentItem",
    "sub_item": "subItem",
}


@dataclass(slots=True)
class Resource:
    """Canonical resource entry, independent of the source it came from."""

    name: str
    category: str
    type: ResourceType
    description: str = ""
    link: str = "#"
    eligibility: Optional[str] = None
    important_dates: Optional[str] = None
    stage: Optional[str] = None
    parent_item: Optional[str] = None
    sub_item: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "link": self.link,
            "category": self.category,
            "type": self.type.value,
        }
        for attr, key in EXTRA_FIELDS.items():
            value = getattr(self, attr)
            if value is not None:
                data[key] = value
        return data


@dataclass(slots=True)
class ResourceGroup:
    """Resources sharing one grouping key, in input order."""

    key: str
    items: List[Resource] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.key, "items": [item.to_dict() for item in self.items]}


def clean_value(value: Any) -> Optional[str]:
    """Trim a raw upstream value, mapping blanks to ``None``."""

    if value is None:
        return None
    text = str(value).strip()
    return text or None

