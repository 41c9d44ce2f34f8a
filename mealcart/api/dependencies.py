"""FastAPI dependencies shared by the routers (overridable in tests)."""
from datetime import date, datetime

from fastapi import Depends, HTTPException, Request

from mealcart.infra.Plan_Repository import PlanRepository
from mealcart.infra.Recipe_Cache import RecipeDetailCache, cached_lookup
from mealcart.infra.Spoonacular_Client import SpoonacularClient
from mealcart.utilities.constants import ISO_DATE_FORMAT


def get_plan_repository() -> PlanRepository:
    return PlanRepository()


def get_spoonacular_client() -> SpoonacularClient:
    return SpoonacularClient()


def get_recipe_cache(request: Request) -> RecipeDetailCache:
    return request.app.state.recipe_cache


def get_recipe_lookup(client: SpoonacularClient = Depends(get_spoonacular_client),
                      cache: RecipeDetailCache = Depends(get_recipe_cache)):
    return cached_lookup(client.fetch_recipe_detail, cache)


def parse_week_start(value) -> date:
    if not value:
        raise HTTPException(status_code=400, detail="weekStart parameter required")
    try:
        return datetime.strptime(value, ISO_DATE_FORMAT).date()
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid weekStart: {value}") from None
