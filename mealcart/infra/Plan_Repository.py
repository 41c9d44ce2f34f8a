import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional, Union

from mealcart.domain.MealPlan import MealPlanEntry, WeeklyMealPlan
from mealcart.infra.paths import PLAN_FILE
from mealcart.utilities.constants import ISO_DATE_FORMAT, MEAL_SLOTS

logger = logging.getLogger(__name__)


def _week_key(week_start: Union[date, str]) -> str:
    if isinstance(week_start, date):
        return week_start.strftime(ISO_DATE_FORMAT)
    return str(week_start).strip()


class PlanRepository:
    """Weekly meal plans stored in one JSON file keyed by weekStart (YYYY-MM-DD)."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else PLAN_FILE

    def _load_store(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                store = json.load(f) or {}
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to read meal plans from %s: %s", self.path, e)
            return {}
        if not isinstance(store, dict):
            logger.error("Meal plan file %s does not hold an object; ignoring it", self.path)
            return {}
        return store

    def _save_store(self, store: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(store, f, indent=2, ensure_ascii=False)

    def get_week_plan(self, week_start: Union[date, str]) -> Optional[WeeklyMealPlan]:
        raw = self._load_store().get(_week_key(week_start))
        if raw is None:
            return None
        try:
            return WeeklyMealPlan.from_dict(raw)
        except ValueError as e:
            logger.error("Stored plan for %s is invalid: %s", _week_key(week_start), e)
            return None

    def get_or_create_week_plan(self, week_start: date) -> WeeklyMealPlan:
        plan = self.get_week_plan(week_start)
        return plan if plan is not None else WeeklyMealPlan.empty(week_start)

    def save_week_plan(self, plan: WeeklyMealPlan) -> None:
        store = self._load_store()
        store[_week_key(plan.week_start)] = plan.to_dict()
        self._save_store(store)

    def set_meal(self, week_start: date, day_index: int, slot: str, entry: Optional[MealPlanEntry]) -> WeeklyMealPlan:
        """Put one entry into (day_index, slot); None empties the slot."""
        if slot not in MEAL_SLOTS:
            raise ValueError(f"Unknown meal slot: {slot!r}")
        if not 0 <= day_index < 7:
            raise ValueError(f"Day index must be between 0 and 6, got {day_index}")
        plan = self.get_or_create_week_plan(week_start)
        plan.days[day_index].set_slot(slot, entry)
        self.save_week_plan(plan)
        return plan

    def clear_meal(self, week_start: date, day_index: int, slot: str) -> WeeklyMealPlan:
        return self.set_meal(week_start, day_index, slot, None)
