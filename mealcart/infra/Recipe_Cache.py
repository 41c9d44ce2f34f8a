"""Bounded LRU cache for recipe detail lookups.

The cache is always passed in explicitly (see cached_lookup); nothing here
keeps module-level state.
"""
import inspect
import logging
from collections import OrderedDict
from typing import Any, Optional

from mealcart.domain.RecipeDetail import RecipeDetail

logger = logging.getLogger(__name__)


class RecipeDetailCache:
    def __init__(self, max_size: int = 256):
        if max_size < 1:
            raise ValueError(f"Cache size must be at least 1, got {max_size}")
        self.max_size = max_size
        self._items: "OrderedDict[Any, RecipeDetail]" = OrderedDict()

    def get(self, recipe_id) -> Optional[RecipeDetail]:
        detail = self._items.get(recipe_id)
        if detail is not None:
            self._items.move_to_end(recipe_id)
        return detail

    def put(self, recipe_id, detail: RecipeDetail):
        self._items[recipe_id] = detail
        self._items.move_to_end(recipe_id)
        while len(self._items) > self.max_size:
            evicted, _ = self._items.popitem(last=False)
            logger.debug("Evicted recipe %s from cache", evicted)

    def clear(self):
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, recipe_id) -> bool:
        return recipe_id in self._items


def cached_lookup(lookup, cache: RecipeDetailCache):
    """Wrap a recipe lookup so hits are served from cache.

    Only successful results are stored; failures and not-found results go
    through to the provider again on the next call.
    """
    async def _lookup(recipe_id):
        hit = cache.get(recipe_id)
        if hit is not None:
            return hit
        result = lookup(recipe_id)
        if inspect.isawaitable(result):
            result = await result
        if isinstance(result, dict):
            result = RecipeDetail.from_dict(result)
        if result is not None:
            cache.put(recipe_id, result)
        return result

    return _lookup


__all__ = ['RecipeDetailCache', 'cached_lookup']
