"""Utilities for translating Notion database pages into raw resource rows."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from src.tools.base import RawRow


TITLE_PROPERTY = "Name"
DESCRIPTION_PROPERTY = "Description"
LINK_PROPERTY = "Link"
RESOURCE_TYPE_PROPERTY = "Resource Type"
DATES_PROPERTY = "Important Dates"


def build_select_equals_filter(property_name: str, value: str) -> dict:
    return {"property": property_name, "select": {"equals": value}}


def _plain_text(items: List[dict]) -> Optional[str]:
    text = "".join(
        item.get("plain_text") or item.get("text", {}).get("content", "")
        for item in items
    )
    return text or None


def _extract_select(prop: dict) -> Optional[str]:
    option = prop.get("select")
    if not option:
        return None
    return option.get("name") or None


def _extract_multi_select(prop: dict) -> Optional[str]:
    names = [item.get("name", "") for item in prop.get("multi_select", []) if item.get("name")]
    return ", ".join(names) or None


def _extract_date(prop: dict) -> Optional[str]:
    date = prop.get("date")
    if not date or not date.get("start"):
        return None
    if date.get("end"):
        return f"{date['start']} - {date['end']}"
    return date["start"]


def _extract_number(prop: dict) -> Optional[str]:
    value = prop.get("number")
    return None if value is None else str(value)


_EXTRACTORS: Dict[str, Callable[[dict], Optional[str]]] = {
    "title": lambda prop: _plain_text(prop.get("title", [])),
    "rich_text": lambda prop: _plain_text(prop.get("rich_text", [])),
    "select": _extract_select,
    "multi_select": _extract_multi_select,
    "url": lambda prop: prop.get("url") or None,
    "email": lambda prop: prop.get("email") or None,
    "phone_number": lambda prop: prop.get("phone_number") or None,
    "date": _extract_date,
    "number": _extract_number,
}


def extract_property_value(prop: dict) -> Optional[str]:
    """Flatten one Notion property value into a string, if the type is known."""

    prop_type = prop.get("type")
    if prop_type is None:
        # Hand-built payloads sometimes omit "type"; infer it from the keys.
        prop_type = next((key for key in _EXTRACTORS if key in prop), None)
    extractor = _EXTRACTORS.get(prop_type or "")
    if extractor is None:
        return None
    return extractor(prop)


def parse_page_to_row(page: dict, *, title_property: str = TITLE_PROPERTY) -> Optional[RawRow]:
    """Convert a Notion page into a raw row keyed by property name.

    Returns ``None`` when the page has no value for its title property.
    """

    properties: Dict[str, Any] = page.get("properties", {})
    row: RawRow = {
        name: extract_property_value(prop)
        for name, prop in properties.items()
        if isinstance(prop, dict)
    }
    if not row.get(title_property):
        return None
    return row
