import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from mealcart.api.dependencies import get_plan_repository, get_recipe_lookup, parse_week_start
from mealcart.api.routes.meal_plan import plan_from_payload
from mealcart.domain.MealPlan import WeeklyMealPlan
from mealcart.infra.Plan_Repository import PlanRepository
from mealcart.infra.pdf_utils import generate_pdf_for_shopping_list
from mealcart.logic.shopping.aggregator import aggregate_ingredients

router = APIRouter(prefix="/api/shopping-list")
logger = logging.getLogger(__name__)


def _stored_plan(week_start: Optional[str], repo: PlanRepository) -> WeeklyMealPlan:
    start = parse_week_start(week_start)
    try:
        return repo.get_or_create_week_plan(start)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _response(plan: WeeklyMealPlan, items):
    return {
        "weekStart": plan.week_start.isoformat(),
        "count": len(items),
        "items": [i.to_dict() for i in items],
    }


@router.get("")
@router.get("/")
async def api_shopping_list(week_start: Optional[str] = Query(default=None, alias="weekStart"),
                            repo: PlanRepository = Depends(get_plan_repository),
                            lookup=Depends(get_recipe_lookup)):
    plan = _stored_plan(week_start, repo)
    items = await aggregate_ingredients(plan, lookup)
    logger.info("Shopping list week=%s items=%s", plan.week_start, len(items))
    return _response(plan, items)


@router.post("")
@router.post("/")
async def api_shopping_list_for_plan(payload: dict, lookup=Depends(get_recipe_lookup)):
    plan = plan_from_payload(payload)
    items = await aggregate_ingredients(plan, lookup)
    return _response(plan, items)


@router.get("/pdf")
async def api_shopping_list_pdf(week_start: Optional[str] = Query(default=None, alias="weekStart"),
                                repo: PlanRepository = Depends(get_plan_repository),
                                lookup=Depends(get_recipe_lookup)):
    plan = _stored_plan(week_start, repo)
    items = await aggregate_ingredients(plan, lookup)
    pdf_bytes = generate_pdf_for_shopping_list(plan.week_start.isoformat(), items)
    filename = f"shopping_list_{plan.week_start.isoformat()}.pdf"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
