# src/watchlist_relay/utils/formatter.py

PLACEHOLDER = "-"


# --- Helper Functions for Formatting ---
def format_price(value: float) -> str:
    """Echoes the alert price as sent: 10 stays '10', 10.5 stays '10.5'."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def or_placeholder(value: str) -> str:
    return value or PLACEHOLDER


def join_sections(sections: list[str]) -> str:
    return "\n\n".join(section for section in sections if section)
