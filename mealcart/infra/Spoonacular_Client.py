"""Spoonacular recipe provider client (async, httpx)."""
import logging
from typing import Any, Dict, Optional

import httpx

from mealcart.domain.RecipeDetail import RecipeDetail
from mealcart.utilities.config import SPOONACULAR_API_KEY, SPOONACULAR_BASE_URL, SPOONACULAR_TIMEOUT

logger = logging.getLogger(__name__)


class SpoonacularError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SpoonacularClient:
    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None,
                 timeout: Optional[float] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = SPOONACULAR_API_KEY if api_key is None else api_key
        self.base_url = (base_url or SPOONACULAR_BASE_URL).rstrip('/')
        self.timeout = SPOONACULAR_TIMEOUT if timeout is None else timeout
        self._transport = transport

    async def _get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        if not self.api_key:
            raise SpoonacularError("SPOONACULAR_API_KEY is not set in environment variables")
        query = dict(params or {})
        query['apiKey'] = self.api_key
        url = f"{self.base_url}{endpoint}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url, params=query)
        except httpx.HTTPError as e:
            raise SpoonacularError(f"Spoonacular request failed: {e}") from e
        if response.status_code != 200:
            raise SpoonacularError(
                f"Spoonacular API error ({response.status_code}): {response.text}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as e:
            raise SpoonacularError(f"Spoonacular returned invalid JSON: {e}", status_code=response.status_code) from e

    async def get_recipe_information(self, recipe_id: int) -> Dict[str, Any]:
        '''Raw /recipes/{id}/information document.'''
        data = await self._get(f"/recipes/{recipe_id}/information")
        if not isinstance(data, dict):
            raise SpoonacularError(f"Unexpected recipe information payload for {recipe_id}")
        return data

    async def fetch_recipe_detail(self, recipe_id: int) -> RecipeDetail:
        data = await self.get_recipe_information(recipe_id)
        detail = RecipeDetail.from_dict(data)
        logger.debug("Fetched recipe %s (%s ingredients)", recipe_id, len(detail.extended_ingredients))
        return detail


__all__ = ['SpoonacularClient', 'SpoonacularError']
