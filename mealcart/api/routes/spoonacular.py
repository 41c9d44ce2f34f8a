import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from mealcart.api.dependencies import get_spoonacular_client
from mealcart.infra.Spoonacular_Client import SpoonacularClient, SpoonacularError

router = APIRouter(prefix="/api/spoonacular")
logger = logging.getLogger(__name__)


@router.get("/recipes/info")
async def recipe_info(id: Optional[str] = Query(default=None),
                      client: SpoonacularClient = Depends(get_spoonacular_client)):
    """Proxy a recipe's full information (ingredients included) from Spoonacular."""
    if not id:
        raise HTTPException(status_code=400, detail="Recipe ID is required")
    try:
        recipe_id = int(id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Recipe ID must be an integer") from None
    try:
        return await client.get_recipe_information(recipe_id)
    except SpoonacularError as e:
        logger.error("Failed to fetch recipe info %s: %s", recipe_id, e)
        raise HTTPException(status_code=500, detail="Failed to fetch recipe information")
