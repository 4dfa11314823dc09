"""
Catalog rewrite side-channel.

After an admin changes an archetype's rating or price, the new values are
POSTed to an external endpoint that rewrites the static catalog source, so
the next deploy ships them as base data. The call is best effort: the
overlay is already updated and nothing waits on the result.
"""

import logging

import httpx

from ryunix.config import settings
from ryunix.models.catalog import Rating

logger = logging.getLogger(__name__)


class CatalogRewriteClient:
    def __init__(
        self,
        url: str | None = None,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = settings.catalog_update_url if url is None else url
        self.timeout = timeout
        self._client = client

    @property
    def enabled(self) -> bool:
        return bool(self.url)

    async def publish(self, archetype_name: str, rating: Rating, price: int) -> bool:
        """
        Send new values for one archetype.

        Returns True if the endpoint accepted them. Errors are logged, never raised.
        """
        if not self.enabled:
            return False

        body = {"archetypeName": archetype_name, "rating": rating.value, "price": price}
        try:
            if self._client is not None:
                response = await self._client.post(self.url, json=body)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(self.url, json=body)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("Catalog rewrite failed for %s: %s", archetype_name, e)
            return False

        logger.info("Catalog rewrite sent for %s (%s, %d)", archetype_name, rating.value, price)
        return True
