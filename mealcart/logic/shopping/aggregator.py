"""Weekly shopping list aggregation.

Provides aggregate_ingredients(plan, fetch_recipe): turns a WeeklyMealPlan into
a de-duplicated, unit-normalized list of AggregatedIngredient sorted by
category then name.

Pipeline:
  1. collect_entries       - planned meals in day, then slot order
  2. fetch_recipe_details  - one lookup per distinct recipe id, run concurrently
  3. bucket_ingredients    - scale by servings and group by normalized name
  4. summarize_bucket      - merge amounts of the winning unit kind, pick category
"""
import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from mealcart.domain.MealPlan import MealPlanEntry, WeeklyMealPlan
from mealcart.domain.RecipeDetail import RecipeDetail
from mealcart.domain.ShoppingItem import AggregatedIngredient
from mealcart.logic.shopping.categories import map_aisle_to_category
from mealcart.logic.shopping.formatting import round_amount
from mealcart.logic.shopping.units import KIND_PRECEDENCE, UnitClass, UnitKind, classify_unit, from_base, to_base

logger = logging.getLogger(__name__)

RecipeLookup = Callable[[Any], Union[Awaitable[Optional[RecipeDetail]], Optional[RecipeDetail]]]


def _normalize(name: str) -> str:
    return (name or '').strip().lower()


class _Amount:
    __slots__ = ('amount', 'unit', 'unit_class', 'aisle')

    def __init__(self, amount: float, unit: str, unit_class: UnitClass, aisle: Optional[str]):
        self.amount = amount
        self.unit = unit
        self.unit_class = unit_class
        self.aisle = aisle


class Bucket:
    """All contributions for one normalized ingredient name."""

    def __init__(self, display_name: str):
        self.display_name = display_name
        self.amounts: List[_Amount] = []
        self.source_recipes: Dict[str, None] = {}  # insertion-ordered set

    def add(self, amount: float, unit: str, aisle: Optional[str], recipe_title: str):
        self.amounts.append(_Amount(amount, unit, classify_unit(unit), aisle))
        self.source_recipes.setdefault(recipe_title, None)


def _coerce_plan(plan) -> WeeklyMealPlan:
    if isinstance(plan, WeeklyMealPlan):
        return plan
    if isinstance(plan, dict):
        return WeeklyMealPlan.from_dict(plan)
    raise TypeError(f"Expected a WeeklyMealPlan or a meal plan dict, got {type(plan).__name__}")


def collect_entries(plan: WeeklyMealPlan) -> List[MealPlanEntry]:
    """Planned meals across the week: day order, then breakfast, lunch, dinner."""
    return plan.entries()


async def _fetch_one(fetch_recipe: RecipeLookup, recipe_id) -> Optional[RecipeDetail]:
    result = fetch_recipe(recipe_id)
    if inspect.isawaitable(result):
        result = await result
    if result is None or isinstance(result, RecipeDetail):
        return result
    if isinstance(result, dict):
        return RecipeDetail.from_dict(result)
    raise TypeError(f"Recipe lookup returned {type(result).__name__} for recipe {recipe_id}")


async def fetch_recipe_details(recipe_ids: List[Any], fetch_recipe: RecipeLookup) -> Dict[Any, RecipeDetail]:
    """Look up every recipe id concurrently and wait for all of them.

    Failed or missing lookups are logged and left out of the returned map.
    """
    outcomes = await asyncio.gather(
        *(_fetch_one(fetch_recipe, rid) for rid in recipe_ids),
        return_exceptions=True,
    )
    details: Dict[Any, RecipeDetail] = {}
    for recipe_id, outcome in zip(recipe_ids, outcomes):
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            logger.warning("Recipe fetch failed recipe_id=%s error=%s", recipe_id, outcome)
            continue
        if outcome is None:
            logger.warning("Recipe not found recipe_id=%s", recipe_id)
            continue
        details[recipe_id] = outcome
    return details


def bucket_ingredients(entries: List[MealPlanEntry], details: Dict[Any, RecipeDetail]) -> Dict[str, Bucket]:
    buckets: Dict[str, Bucket] = {}
    for entry in entries:
        detail = details.get(entry.recipe_id)
        if detail is None:
            continue
        scale = entry.scale_factor
        for ing in detail.extended_ingredients:
            key = _normalize(ing.name)
            if not key:
                continue
            bucket = buckets.get(key)
            if bucket is None:
                bucket = buckets[key] = Bucket(ing.name)
            # The plan's snapshot title names the source, not the provider's title.
            bucket.add((ing.amount or 0) * scale, ing.unit or '', ing.aisle, entry.title)
    return buckets


def summarize_bucket(bucket: Bucket) -> AggregatedIngredient:
    """Collapse a bucket into one shopping line.

    Only the highest-precedence unit kind present is reported
    (volume > weight > count > unknown); amounts of lower kinds are dropped.
    Unknown units cannot be merged, so the first one is kept as is.
    """
    by_kind: Dict[UnitKind, List[_Amount]] = {}
    for a in bucket.amounts:
        by_kind.setdefault(a.unit_class.kind, []).append(a)
    kind = next(k for k in KIND_PRECEDENCE if k in by_kind)
    winners = by_kind[kind]

    if kind in (UnitKind.VOLUME, UnitKind.WEIGHT):
        total, unit = from_base(sum(to_base(a.amount, a.unit_class) for a in winners), kind)
    elif kind == UnitKind.COUNT:
        total, unit = sum(a.amount for a in winners), winners[0].unit
    else:
        total, unit = winners[0].amount, winners[0].unit

    return AggregatedIngredient(
        name=bucket.display_name,
        total_amount=round_amount(total),
        unit=unit,
        category=map_aisle_to_category(winners[0].aisle),
        source_recipes=list(bucket.source_recipes),
    )


async def aggregate_ingredients(plan, fetch_recipe: RecipeLookup) -> List[AggregatedIngredient]:
    """Build the shopping list for a weekly meal plan.

    Args:
        plan: WeeklyMealPlan (or its dict document).
        fetch_recipe: recipe id -> RecipeDetail | dict | None; may be async.
            Raising or returning None drops that recipe from the list.

    Returns:
        AggregatedIngredient list sorted by category, then name.
    """
    week_plan = _coerce_plan(plan)
    entries = collect_entries(week_plan)
    if not entries:
        return []

    recipe_ids = list(dict.fromkeys(e.recipe_id for e in entries))
    details = await fetch_recipe_details(recipe_ids, fetch_recipe)
    logger.debug("Fetched %s/%s recipes for week %s", len(details), len(recipe_ids), week_plan.week_start)

    result = [summarize_bucket(b) for b in bucket_ingredients(entries, details).values()]
    result.sort(key=lambda item: (item.category, item.name))
    return result


__all__ = ['aggregate_ingredients', 'collect_entries', 'fetch_recipe_details', 'bucket_ingredients',
           'summarize_bucket', 'Bucket', 'RecipeLookup']
