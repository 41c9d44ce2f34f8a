from fastapi import FastAPI
import logging

from mealcart.infra.Recipe_Cache import RecipeDetailCache
from mealcart.utilities.config import RECIPE_CACHE_SIZE

# Routers
from mealcart.api.routes import meal_plan, shopping_list, spoonacular

# Logging
logger = logging.getLogger("mealcart_app")


def create_app(cache_size: int = RECIPE_CACHE_SIZE) -> FastAPI:
    """Build the API app; each app owns its recipe detail cache."""
    application = FastAPI(title="Meal Plan Shopping List API")
    application.state.recipe_cache = RecipeDetailCache(cache_size)

    application.include_router(spoonacular.router)
    application.include_router(meal_plan.router)
    application.include_router(shopping_list.router)

    @application.get("/health")
    def health():
        return {"status": "ok", "cached_recipes": len(application.state.recipe_cache)}

    logger.info("API ready (recipe cache size %s)", cache_size)
    return application


# Initialize FastAPI app
app = create_app()
