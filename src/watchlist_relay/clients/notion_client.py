# src/watchlist_relay/clients/notion_client.py

# --- Built Ins ---
import asyncio
from typing import Any, Dict, List, Optional

# --- Installed ---
import aiohttp
from loguru import logger as log

# --- Local ---
from ..config.models import NotionSettings
from ..core.exceptions import WatchlistLookupError
from ..core.models import WatchlistRecord
from ..watchlist.properties import extract_record

LOOKUP_FAILED = "Failed to query Notion database"


class NotionWatchlistClient:
    """
    Read-only client for the Notion watchlist database.
    Looks pages up by exact match on the `Ticker` title column.
    """

    TICKER_PROPERTY = "Ticker"

    def __init__(
        self,
        session: aiohttp.ClientSession,
        settings: NotionSettings,
        timeout_s: float = 5.0,
    ):
        self._session = session
        self._settings = settings
        self._timeout = aiohttp.ClientTimeout(total=timeout_s)

    @property
    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._settings.api_key.get_secret_value()}",
            "Notion-Version": self._settings.api_version,
            "Content-Type": "application/json",
        }

    def _build_query(self, ticker: str) -> Dict[str, Any]:
        return {
            "filter": {
                "property": self.TICKER_PROPERTY,
                "title": {"equals": ticker.upper()},
            }
        }

    async def query_ticker(self, ticker: str) -> List[Dict[str, Any]]:
        """Returns every page whose ticker matches; raises WatchlistLookupError on failure."""
        try:
            async with self._session.post(
                self._settings.query_url,
                json=self._build_query(ticker),
                headers=self._headers,
                timeout=self._timeout,
            ) as response:
                if response.status != 200:
                    error_text = await response.text()
                    log.error(
                        f"Notion query for {ticker} failed. Status: {response.status}, "
                        f"Response: {error_text}"
                    )
                    raise WatchlistLookupError(LOOKUP_FAILED)

                data = await response.json()

        except asyncio.TimeoutError as e:
            log.error(f"Notion query for {ticker} timed out.")
            raise WatchlistLookupError(LOOKUP_FAILED) from e
        except aiohttp.ClientError as e:
            log.error(f"Notion API error for {ticker}: {e}")
            raise WatchlistLookupError(LOOKUP_FAILED) from e
        except ValueError as e:
            log.error(f"Notion returned an unreadable body for {ticker}: {e}")
            raise WatchlistLookupError(LOOKUP_FAILED) from e

        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list) or not all(isinstance(page, dict) for page in results):
            log.error(f"Unexpected Notion response shape for {ticker}: {data!r:.200}")
            raise WatchlistLookupError(LOOKUP_FAILED)
        return results

    async def fetch_record(self, ticker: str) -> Optional[WatchlistRecord]:
        """The first matching page as a WatchlistRecord, or None when not listed."""
        pages = await self.query_ticker(ticker)
        if not pages:
            return None
        if len(pages) > 1:
            log.warning(f"{len(pages)} watchlist pages match {ticker}; using the first.")
        return extract_record(pages[0])
