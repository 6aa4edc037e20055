from __future__ import annotations

from typing import Callable, Dict, Iterable, List

from src.utils.resource_models import Resource, ResourceGroup

KeyFn = Callable[[Resource], str]


def by_category(resource: Resource) -> str:
    return resource.category


def by_type(resource: Resource) -> str:
    return resource.type.value


def group_resources(resources: Iterable[Resource], key_fn: KeyFn = by_category) -> List[ResourceGroup]:
    """Partition resources by ``key_fn``, keeping first-seen group order."""

    groups: Dict[str, ResourceGroup] = {}
    for resource in resources:
        key = key_fn(resource)
        group = groups.get(key)
        if group is None:
            group = groups[key] = ResourceGroup(key=key)
        group.items.append(resource)
    return list(groups.values())
