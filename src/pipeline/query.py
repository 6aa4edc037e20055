"""Search filtering over flat resource lists and grouped views."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional

from src.utils.resource_models import Resource, ResourceGroup, ResourceType

ALL = "all"

_TYPE_VALUES = {ALL} | {member.value for member in ResourceType}


@dataclass(frozen=True)
class SearchParams:
    query: str = ""
    category: str = ALL
    type: str = ALL

    def __post_init__(self) -> None:
        if self.type not in _TYPE_VALUES:
            raise ValueError(f"Unsupported resource type filter '{self.type}'")

    @classmethod
    def from_mapping(cls, values: Mapping[str, Optional[str]]) -> "SearchParams":
        """Build params from query-string style input; blanks mean no filter."""

        return cls(
            query=(values.get("query") or "").strip(),
            category=(values.get("category") or "").strip() or ALL,
            type=(values.get("type") or "").strip().lower() or ALL,
        )

    @property
    def is_active(self) -> bool:
        return bool(self.query) or self.category != ALL or self.type != ALL


def _matches_text(resource: Resource, lowered_query: str) -> bool:
    return (
        lowered_query in resource.name.lower()
        or lowered_query in resource.description.lower()
    )


def _matches_item(resource: Resource, params: SearchParams) -> bool:
    if params.query and not _matches_text(resource, params.query.lower()):
        return False
    if params.type != ALL and resource.type.value != params.type:
        return False
    return True


def filter_resources(resources: Iterable[Resource], params: SearchParams) -> List[Resource]:
    """Return the resources matching every active criterion, in input order."""

    lowered_category = params.category.lower()
    return [
        resource
        for resource in resources
        if _matches_item(resource, params)
        and (params.category == ALL or resource.category.lower() == lowered_category)
    ]


def filter_groups(groups: Iterable[ResourceGroup], params: SearchParams) -> List[ResourceGroup]:
    """Filter grouped data.

    Text and type criteria narrow the items of each group and drop groups
    left empty. The category criterion selects whole groups by key.
    """

    lowered_category = params.category.lower()
    filtered: List[ResourceGroup] = []
    for group in groups:
        if params.category != ALL and group.key.lower() != lowered_category:
            continue
        items = [item for item in group.items if _matches_item(item, params)]
        if not items:
            continue
        filtered.append(ResourceGroup(key=group.key, items=items))
    return filtered


def unique_categories(resources: Iterable[Resource]) -> List[str]:
    return list(dict.fromkeys(resource.category for resource in resources))
