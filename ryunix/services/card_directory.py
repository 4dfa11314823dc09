"""
Card directory client.

Queries the public YGOPRODeck cardinfo endpoint for card records by
archetype, exact name, fuzzy name, or banlist membership.

Two failure shapes are kept apart so callers can log them distinctly:
- CardNotFoundError: the directory answered but has no match for the query
- DirectoryUnavailableError: timeout, network error, 5xx or malformed payload
"""

from typing import Any

import httpx

from ryunix.config import settings

USER_AGENT = "RyunixFormat/1.0"


class DirectoryLookupError(Exception):
    """Base class for card directory failures."""

    def __init__(self, query: str, message: str):
        self.query = query
        super().__init__(message)


class CardNotFoundError(DirectoryLookupError):
    """The directory has no card matching the query."""

    def __init__(self, query: str):
        super().__init__(query, f"No cards match {query}")


class DirectoryUnavailableError(DirectoryLookupError):
    """The directory could not be reached or returned an unusable response."""

    def __init__(self, query: str, reason: str):
        self.reason = reason
        super().__init__(query, f"Card directory unavailable for {query}: {reason}")


class CardDirectoryClient:
    """
    Thin async wrapper over the cardinfo endpoint.

    Pass `client` to reuse one connection pool across lookups; otherwise each
    lookup opens a short-lived client.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url or settings.card_directory_url
        self.timeout = settings.card_directory_timeout if timeout is None else timeout
        self._client = client

    async def _get(self, params: dict[str, Any]) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(self.base_url, params=params)
        async with httpx.AsyncClient(
            timeout=self.timeout, headers={"User-Agent": USER_AGENT}
        ) as client:
            return await client.get(self.base_url, params=params)

    async def _query(self, params: dict[str, Any]) -> list[dict[str, Any]]:
        """
        Run a cardinfo query.

        Args:
            params: Query string parameters

        Returns:
            Non-empty list of card records

        Raises:
            CardNotFoundError: If the directory reports no match
            DirectoryUnavailableError: If the directory cannot be used
        """
        query = ", ".join(f"{k}={v}" for k, v in params.items())
        try:
            response = await self._get(params)
        except httpx.TimeoutException as e:
            raise DirectoryUnavailableError(query, "timeout") from e
        except httpx.HTTPError as e:
            raise DirectoryUnavailableError(query, str(e) or type(e).__name__) from e

        if response.status_code >= 500 or response.status_code == 429:
            raise DirectoryUnavailableError(query, f"HTTP {response.status_code}")
        if response.is_error:
            # The directory answers 400 with an error message when nothing matches
            raise CardNotFoundError(query)

        try:
            payload = response.json()
        except ValueError as e:
            raise DirectoryUnavailableError(query, "malformed JSON") from e

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, list):
            raise DirectoryUnavailableError(query, "missing data field")
        if not data:
            raise CardNotFoundError(query)
        return data

    async def cards_by_archetype(
        self, archetype: str, limit: int | None = None
    ) -> list[dict[str, Any]]:
        """All cards tagged with an archetype."""
        params: dict[str, Any] = {"archetype": archetype}
        if limit is not None:
            params["num"] = limit
            params["offset"] = 0
        return await self._query(params)

    async def card_by_name(self, name: str) -> dict[str, Any]:
        """Exact-name lookup."""
        cards = await self._query({"name": name})
        return cards[0]

    async def search(self, fragment: str, limit: int | None = None) -> list[dict[str, Any]]:
        """Fuzzy lookup: every card whose name contains `fragment`."""
        params: dict[str, Any] = {"fname": fragment}
        if limit is not None:
            params["num"] = limit
            params["offset"] = 0
        return await self._query(params)

    async def tcg_banlist(self) -> list[dict[str, Any]]:
        """Every card on the current TCG banlist, with `banlist_info` populated."""
        return await self._query({"banlist": "tcg"})
