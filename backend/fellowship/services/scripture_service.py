import logging
import random
from typing import Any, Callable, Dict, Optional

import httpx

from ..core.config import settings
from ..core.constants import RANDOM_VERSES
from ..core.exceptions import UpstreamServiceError

logger = logging.getLogger(__name__)

DAILY_VERSE = "john+3:16"

# Served when the verse API answers without text
DAILY_EMPTY_FALLBACK = {
    "reference": "John 3:16",
    "text": "For God so loved the world that he gave his one and only Son, that whoever believes in him shall not perish but have eternal life.",
    "translation_name": "NIV",
}
RANDOM_EMPTY_FALLBACK = {
    "reference": "Psalm 23:1",
    "text": "The Lord is my shepherd, I lack nothing.",
    "translation_name": "NIV",
}

# Served when the verse API cannot be reached
DAILY_ERROR_FALLBACK = {
    "reference": "Philippians 4:13",
    "text": "I can do all this through him who gives me strength.",
    "translation_name": "NIV",
}
RANDOM_ERROR_FALLBACK = {
    "reference": "Romans 8:28",
    "text": "And we know that in all things God works for the good of those who love him, who have been called according to his purpose.",
    "translation_name": "NIV",
}


class ScriptureService:
    """Verse lookups against bible-api.com, masked by static verses on failure"""

    def __init__(self, client_factory: Optional[Callable[[], httpx.AsyncClient]] = None):
        self.api_url = settings.SCRIPTURE_API_URL.rstrip("/")
        self.client_factory = client_factory or self._default_client

    def _default_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=settings.SCRIPTURE_API_TIMEOUT)

    async def fetch_verse(self, reference: str) -> Dict[str, Any]:
        """Raw API payload for a reference such as 'john+3:16'."""
        url = f"{self.api_url}/{reference}"
        try:
            async with self.client_factory() as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            raise UpstreamServiceError(f"Verse API request failed: {e}")

        if response.status_code != 200:
            raise UpstreamServiceError(f"Verse API returned {response.status_code}")
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamServiceError(f"Verse API returned invalid JSON: {e}")

    async def _lookup(
        self, reference: str, empty_fallback: Dict[str, Any], error_fallback: Dict[str, Any]
    ) -> Dict[str, Any]:
        try:
            data = await self.fetch_verse(reference)
        except UpstreamServiceError as e:
            logger.warning(f"Scripture lookup failed for {reference}, serving fallback: {e.message}")
            return dict(error_fallback)

        if not isinstance(data, dict) or not data.get("text"):
            logger.warning(f"Scripture lookup for {reference} returned no text, serving fallback")
            return dict(empty_fallback)
        return data

    async def daily_verse(self) -> Dict[str, Any]:
        return await self._lookup(DAILY_VERSE, DAILY_EMPTY_FALLBACK, DAILY_ERROR_FALLBACK)

    async def random_verse(self) -> Dict[str, Any]:
        reference = random.choice(RANDOM_VERSES)
        return await self._lookup(reference, RANDOM_EMPTY_FALLBACK, RANDOM_ERROR_FALLBACK)


# Singleton instance
scripture_service = ScriptureService()
