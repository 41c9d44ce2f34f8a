import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError

from mealcart.api.dependencies import get_plan_repository, parse_week_start
from mealcart.domain.MealPlan import WeeklyMealPlan
from mealcart.infra.Plan_Repository import PlanRepository
from mealcart.utilities.validators import MealPlanPayload

router = APIRouter(prefix="/api/meal-plan")
logger = logging.getLogger(__name__)


def plan_from_payload(payload: dict) -> WeeklyMealPlan:
    """Validate a {"plan": {...}} body into a WeeklyMealPlan or raise HTTP 400."""
    if not isinstance(payload, dict) or not payload.get('plan'):
        raise HTTPException(status_code=400, detail="Invalid meal plan data")
    try:
        document = MealPlanPayload.model_validate(payload).plan.to_document()
        return WeeklyMealPlan.from_dict(document)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors(include_url=False, include_context=False))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("")
@router.get("/")
def get_meal_plan(week_start: Optional[str] = Query(default=None, alias="weekStart"),
                  repo: PlanRepository = Depends(get_plan_repository)):
    plan = repo.get_week_plan(parse_week_start(week_start))
    return {"plan": plan.to_dict() if plan is not None else None}


@router.post("")
@router.post("/")
def save_meal_plan(payload: dict, repo: PlanRepository = Depends(get_plan_repository)):
    plan = plan_from_payload(payload)
    repo.save_week_plan(plan)
    logger.info("Saved meal plan week=%s meals=%s", plan.week_start, len(plan.entries()))
    return {"ok": True, "plan": plan.to_dict()}
