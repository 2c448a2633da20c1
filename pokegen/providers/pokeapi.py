"""PokeAPI-backed creature data provider."""

from __future__ import annotations

import httpx

from .base import ProviderFailure, ProviderPayload, parse_pokemon_payload

USER_AGENT = "PokeGen/1.0"


class PokeApiProvider:
    """Fetch species records from ``{base_url}/pokemon/{id}``."""

    def __init__(
        self,
        base_url: str = "https://pokeapi.co/api/v2",
        *,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={"User-Agent": USER_AGENT},
                follow_redirects=True,
            )
        return self._client

    async def fetch(self, species_id: int) -> ProviderPayload:
        url = f"{self._base_url}/pokemon/{species_id}"
        try:
            response = await self._get_client().get(url)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            raise ProviderFailure(f"Request for species {species_id} failed: {exc}") from exc
        except ValueError as exc:
            raise ProviderFailure(f"Species {species_id} returned invalid JSON") from exc
        return parse_pokemon_payload(data)

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
