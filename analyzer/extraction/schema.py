"""Structured data (JSON-LD and microdata) extraction."""

import json
import re
from typing import Any

from bs4 import BeautifulSoup

# Catches @type values inside JSON-LD blocks that fail to parse
_RAW_TYPE_RE = re.compile(r'"@type"\s*:\s*"([A-Za-z]+)"')
_ITEMTYPE_RE = re.compile(r"schema\.org/(\w+)")


def extract_json_ld(soup: BeautifulSoup) -> list[dict[str, Any]]:
    """Extract all parseable JSON-LD objects from the page."""
    results: list[dict[str, Any]] = []

    for script in soup.find_all("script", type="application/ld+json"):
        content = script.string or script.get_text()
        if not content or not content.strip():
            continue
        try:
            data = json.loads(content)
        except (json.JSONDecodeError, TypeError):
            continue
        if isinstance(data, list):
            results.extend(item for item in data if isinstance(item, dict))
        elif isinstance(data, dict):
            results.append(data)

    return results


def get_schema_types(data: dict[str, Any]) -> set[str]:
    """Collect @type values from a JSON-LD object, following @graph."""
    types: set[str] = set()

    type_val = data.get("@type")
    if isinstance(type_val, list):
        types.update(t for t in type_val if isinstance(t, str))
    elif isinstance(type_val, str):
        types.add(type_val)

    graph = data.get("@graph")
    if isinstance(graph, list):
        for item in graph:
            if isinstance(item, dict):
                types.update(get_schema_types(item))

    return types


def extract_schema_types(soup: BeautifulSoup) -> list[str]:
    """Schema.org types declared by JSON-LD (parsed or raw) and microdata."""
    types: set[str] = set()

    for data in extract_json_ld(soup):
        types.update(get_schema_types(data))

    # Malformed JSON-LD still declares its types
    for script in soup.find_all("script", type="application/ld+json"):
        types.update(_RAW_TYPE_RE.findall(script.get_text()))

    for tag in soup.find_all(attrs={"itemtype": True}):
        itemtype = tag.get("itemtype", "")
        if isinstance(itemtype, list):
            itemtype = " ".join(itemtype)
        types.update(_ITEMTYPE_RE.findall(itemtype))

    return sorted(types)
