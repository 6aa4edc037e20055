"""Maps raw upstream rows onto the canonical ``Resource`` shape.

Each upstream source has its own column names. They are captured once in a
``SourceSchema`` table instead of being looked up ad hoc by every consumer.
Rows that cannot become a usable resource are dropped here and only here:

* rows with a blank grouping key;
* rows with a blank name, or a name that looks like a URL (some exports have
  the link pasted into the name column). The check is a substring heuristic
  and can reject a legitimate name such as "www.org initiative".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional

from src.tools.base import RawRow
from src.utils.resource_models import Resource, ResourceType, clean_value

logger = logging.getLogger(__name__)

URL_NAME_MARKERS = ("http", "www.", ".com", ".org", ".edu")
DEFAULT_LINK = "#"


@dataclass(frozen=True)
class SourceSchema:
    """Canonical field -> upstream column for one source."""

    provenance: ResourceType
    category: str
    name: str = "Name"
    description: str = "Description"
    link: str = "Link"
    extras: Mapping[str, str] = field(default_factory=dict)


INTERNAL_SCHEMA = SourceSchema(
    provenance=ResourceType.INTERNAL,
    category="Category",
    extras={
        "eligibility": "Eligibility",
        "important_dates": "Important Dates",
        "stage": "Stage",
    },
)

CATALOG_SCHEMA = SourceSchema(
    provenance=ResourceType.INTERNAL,
    category="Category",
    extras={
        **INTERNAL_SCHEMA.extras,
        "parent_item": "Parent item",
        "sub_item": "Sub-item",
    },
)

EXTERNAL_SCHEMA = SourceSchema(
    provenance=ResourceType.EXTERNAL,
    category="Resource Type",
)


def looks_like_url(name: str) -> bool:
    lowered = name.lower()
    return any(marker in lowered for marker in URL_NAME_MARKERS)


def normalize(raw: RawRow, schema: SourceSchema) -> Optional[Resource]:
    """Return the canonical resource for ``raw``, or ``None`` if it is rejected."""

    category = clean_value(raw.get(schema.category))
    if category is None:
        logger.debug("Skipping row without %r: %r", schema.category, raw.get(schema.name))
        return None

    name = clean_value(raw.get(schema.name))
    if name is None:
        logger.debug("Skipping %s row without a name", category)
        return None
    if looks_like_url(name):
        logger.debug("Skipping row whose name looks like a URL: %r", name)
        return None

    extras: Dict[str, Optional[str]] = {
        attr: clean_value(raw.get(column)) for attr, column in schema.extras.items()
    }

    return Resource(
        name=name,
        category=category,
        type=schema.provenance,
        description=clean_value(raw.get(schema.description)) or "",
        link=clean_value(raw.get(schema.link)) or DEFAULT_LINK,
        **extras,
    )


def normalize_rows(rows: Iterable[RawRow], schema: SourceSchema) -> List[Resource]:
    resources: List[Resource] = []
    skipped = 0
    for raw in rows:
        resource = normalize(raw, schema)
        if resource is None:
            skipped += 1
            continue
        resources.append(resource)
    if skipped:
        logger.info(
            "Normalized %s %s resources, skipped %s rows",
            len(resources),
            schema.provenance.value,
            skipped,
        )
    return resources
