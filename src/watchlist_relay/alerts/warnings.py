# src/watchlist_relay/alerts/warnings.py

"""
Risk warnings derived from a watchlist entry.

Warnings are emitted in a fixed order: Radar tier, paused entry, stale analysis.
"""

# --- Built Ins  ---
import re
from datetime import datetime
from typing import List, Optional, Tuple

# --- Installed  ---
from loguru import logger as log

# --- Local  ---
from ..core.enums import Tier

RADAR_WARNING = "⚠️ RADAR STOCK - Review before acting"
PAUSED_WARNING = "🛑 ENTRY PAUSED"
STALE_WARNING = "⏰ STALE ANALYSIS - Refresh before acting"

PAUSE_MARKERS = ("PAUSED", "DO NOT ENTER")
DEFAULT_STALE_AFTER_DAYS = 7.0
SECONDS_PER_DAY = 86_400

# e.g. "ENTRY DATE: 14 Jan 2026" or "entry date: 3 january 2026"
ENTRY_DATE_PATTERN = re.compile(r"ENTRY DATE:\s*(\d{1,2})\s+(\w+)\s+(\d{4})", re.IGNORECASE)

MONTHS = {
    "jan": 1, "january": 1,
    "feb": 2, "february": 2,
    "mar": 3, "march": 3,
    "apr": 4, "april": 4,
    "may": 5,
    "jun": 6, "june": 6,
    "jul": 7, "july": 7,
    "aug": 8, "august": 8,
    "sep": 9, "september": 9,
    "oct": 10, "october": 10,
    "nov": 11, "november": 11,
    "dec": 12, "december": 12,
}


def parse_entry_date(entry_conditions: str) -> Optional[datetime]:
    """
    Finds the first "ENTRY DATE: <day> <month> <year>" token and returns it as a
    naive local datetime at midnight. Unknown months and impossible dates
    (31 Feb) return None instead of raising.
    """
    match = ENTRY_DATE_PATTERN.search(entry_conditions or "")
    if not match:
        return None

    day, month_name, year = match.groups()
    month = MONTHS.get(month_name.lower())
    if month is None:
        log.debug(f"Unrecognised month '{month_name}' in entry date; ignoring.")
        return None

    try:
        return datetime(int(year), month, int(day))
    except ValueError:
        log.debug(f"Invalid calendar date '{match.group(0)}'; ignoring.")
        return None


def is_stale(
    entry_date: datetime,
    now: Optional[datetime] = None,
    threshold_days: float = DEFAULT_STALE_AFTER_DAYS,
) -> bool:
    """Strictly older than the threshold. Future dates are never stale."""
    now = now or datetime.now()
    if now.tzinfo is not None:
        # Entry dates are naive local midnights.
        now = now.astimezone().replace(tzinfo=None)
    age_days = (now - entry_date).total_seconds() / SECONDS_PER_DAY
    return age_days > threshold_days


def derive_warnings(
    tier: str,
    entry_conditions: str,
    now: Optional[datetime] = None,
    stale_after_days: float = DEFAULT_STALE_AFTER_DAYS,
) -> Tuple[str, ...]:
    warnings: List[str] = []
    entry_conditions = entry_conditions or ""

    if tier == Tier.RADAR.value:
        warnings.append(RADAR_WARNING)

    if any(marker in entry_conditions for marker in PAUSE_MARKERS):
        warnings.append(PAUSED_WARNING)

    entry_date = parse_entry_date(entry_conditions)
    if entry_date and is_stale(entry_date, now, stale_after_days):
        warnings.append(STALE_WARNING)

    return tuple(warnings)
