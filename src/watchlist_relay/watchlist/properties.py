# src/watchlist_relay/watchlist/properties.py

"""
Notion property extraction.

A Notion page exposes its columns as a bag of typed property values, e.g.

    {"Tier": {"type": "select", "select": {"name": "Radar"}},
     "Entry Conditions": {"type": "rich_text", "rich_text": [{"plain_text": "..."}]}}

Each value is validated into one variant of a tagged union keyed on `type`.
Anything that is missing, of another kind or malformed reads as "".
"""

# --- Built Ins  ---
from typing import Annotated, Any, Dict, List, Literal, Mapping, Optional, Union

# --- Installed  ---
from loguru import logger as log
from pydantic import BaseModel, Discriminator, Tag, TypeAdapter, ValidationError

# --- Local  ---
from ..core.models import WatchlistRecord


class TextFragment(BaseModel):
    plain_text: str = ""


class SelectOption(BaseModel):
    name: str = ""


class RichTextProperty(BaseModel):
    type: Literal["rich_text"]
    rich_text: List[TextFragment] = []

    @property
    def text(self) -> str:
        return "".join(fragment.plain_text for fragment in self.rich_text)


class TitleProperty(BaseModel):
    type: Literal["title"]
    title: List[TextFragment] = []

    @property
    def text(self) -> str:
        return "".join(fragment.plain_text for fragment in self.title)


class SelectProperty(BaseModel):
    type: Literal["select"]
    select: Optional[SelectOption] = None

    @property
    def text(self) -> str:
        return self.select.name if self.select else ""


class OtherProperty(BaseModel):
    """Any kind the relay does not read (number, date, multi_select, ...)."""

    type: str = ""

    @property
    def text(self) -> str:
        return ""


_KNOWN_KINDS = {"rich_text", "title", "select"}


def _property_kind(value: Any) -> str:
    kind = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    return kind if kind in _KNOWN_KINDS else "other"


NotionProperty = Annotated[
    Union[
        Annotated[RichTextProperty, Tag("rich_text")],
        Annotated[TitleProperty, Tag("title")],
        Annotated[SelectProperty, Tag("select")],
        Annotated[OtherProperty, Tag("other")],
    ],
    Discriminator(_property_kind),
]

_property_adapter = TypeAdapter(NotionProperty)


def parse_property(raw: Any) -> Optional[Union[RichTextProperty, TitleProperty, SelectProperty, OtherProperty]]:
    """Validates one raw property value; returns None when it is absent or malformed."""
    if not isinstance(raw, dict):
        return None
    try:
        return _property_adapter.validate_python(raw)
    except ValidationError as e:
        log.debug(f"Ignoring malformed Notion property ({raw.get('type')}): {e.error_count()} error(s)")
        return None


def _extract(properties: Mapping[str, Any], name: str, kind: type) -> str:
    prop = parse_property(properties.get(name)) if properties else None
    if not isinstance(prop, kind):
        return ""
    return prop.text


def get_rich_text(properties: Mapping[str, Any], name: str) -> str:
    return _extract(properties, name, RichTextProperty)


def get_title(properties: Mapping[str, Any], name: str) -> str:
    return _extract(properties, name, TitleProperty)


def get_select(properties: Mapping[str, Any], name: str) -> str:
    return _extract(properties, name, SelectProperty)


# Notion column name -> WatchlistRecord field, grouped by property kind.
TITLE_FIELDS = {"Ticker": "ticker"}
SELECT_FIELDS = {"Tier": "tier"}
RICH_TEXT_FIELDS = {
    "Entry Conditions": "entry_conditions",
    "Invalidation Level": "invalidation_level",
    "Industry ETF": "industry_etf",
    "Demand Zone": "demand_zone",
    "Strength Level": "strength_level",
    "Pivot Level": "pivot_level",
    "Execution Lines": "execution_lines",
}


def extract_record(page: Mapping[str, Any]) -> WatchlistRecord:
    """Flattens a Notion page into a WatchlistRecord."""
    properties = page.get("properties")
    if not isinstance(properties, dict):
        properties = {}
    fields: Dict[str, str] = {}
    for column, field in TITLE_FIELDS.items():
        fields[field] = get_title(properties, column)
    for column, field in SELECT_FIELDS.items():
        fields[field] = get_select(properties, column)
    for column, field in RICH_TEXT_FIELDS.items():
        fields[field] = get_rich_text(properties, column)
    return WatchlistRecord(**fields)
