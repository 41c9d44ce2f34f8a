"""Meal plan domain entities: a week of days, each with breakfast/lunch/dinner slots."""
import random
import string
import time
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

from mealcart.utilities.constants import ISO_DATE_FORMAT, MEAL_SLOTS


def _parse_iso(value, field: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"'{field}' must be an ISO date string, got {value!r}")
    try:
        return datetime.strptime(value.strip(), ISO_DATE_FORMAT).date()
    except ValueError:
        raise ValueError(f"'{field}' is not a valid ISO date: {value!r}") from None


def get_week_monday(d: date) -> date:
    '''Monday of the week containing d; a Sunday rolls forward to the upcoming Monday.'''
    if d.weekday() == 6:
        return d + timedelta(days=1)
    return d - timedelta(days=d.weekday())


def generate_meal_entry_id() -> str:
    suffix = ''.join(random.choices(string.ascii_lowercase + string.digits, k=9))
    return f"meal-{int(time.time() * 1000)}-{suffix}"


class MealPlanEntry:
    def __init__(self, id: str = "", recipe_id: int = 0, title: str = "", image: Optional[str] = None,
                 servings: int = 1, original_servings: int = 1):
        self.id = id or generate_meal_entry_id()
        self.recipe_id = recipe_id
        self.title = title
        self.image = image
        self.servings = servings
        self.original_servings = original_servings

    @property
    def scale_factor(self) -> float:
        '''Desired servings over the recipe's published servings (1.0 when either is missing).'''
        original = self.original_servings or 1
        desired = self.servings or original
        return desired / original

    def __str__(self) -> str:
        return f"{self.title} (#{self.recipe_id}) - {self.servings}/{self.original_servings} servings"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        if not isinstance(data, dict):
            raise ValueError(f"Meal plan entry must be an object, got {type(data).__name__}")
        if data.get('recipeId') is None:
            raise ValueError("Meal plan entry is missing 'recipeId'")
        servings = data.get('servings')
        original = data.get('originalServings')
        for field, value in (('servings', servings), ('originalServings', original)):
            if value is not None and (not isinstance(value, (int, float)) or isinstance(value, bool) or value < 0):
                raise ValueError(f"'{field}' must be a non-negative number, got {value!r}")
        try:
            recipe_id = int(data['recipeId'])
        except (TypeError, ValueError):
            raise ValueError(f"'recipeId' must be an integer, got {data['recipeId']!r}") from None
        return MealPlanEntry(
            id=str(data.get('id') or ''),
            recipe_id=recipe_id,
            title=str(data.get('title') or ''),
            image=data.get('image'),
            servings=servings or 0,
            original_servings=original or 0,
        )

    def to_dict(self):
        d = {
            "id": self.id,
            "recipeId": self.recipe_id,
            "title": self.title,
            "servings": self.servings,
            "originalServings": self.original_servings,
        }
        if self.image:
            d["image"] = self.image
        return d


class DayPlan:
    def __init__(self, date: date, breakfast: Optional[MealPlanEntry] = None,
                 lunch: Optional[MealPlanEntry] = None, dinner: Optional[MealPlanEntry] = None):
        self.date = date
        self.breakfast = breakfast
        self.lunch = lunch
        self.dinner = dinner

    def get_slot(self, slot: str) -> Optional[MealPlanEntry]:
        if slot not in MEAL_SLOTS:
            raise ValueError(f"Unknown meal slot: {slot!r}")
        return getattr(self, slot)

    def set_slot(self, slot: str, entry: Optional[MealPlanEntry]):
        if slot not in MEAL_SLOTS:
            raise ValueError(f"Unknown meal slot: {slot!r}")
        setattr(self, slot, entry)

    def entries(self) -> List[MealPlanEntry]:
        '''Non-empty slots in breakfast, lunch, dinner order.'''
        return [e for e in (self.breakfast, self.lunch, self.dinner) if e is not None]

    @staticmethod
    def from_dict(data):
        if not isinstance(data, dict):
            raise ValueError(f"Day plan must be an object, got {type(data).__name__}")
        slots = {}
        for slot in MEAL_SLOTS:
            raw = data.get(slot)
            slots[slot] = MealPlanEntry.from_dict(raw) if raw else None
        return DayPlan(_parse_iso(data.get('date'), 'date'), **slots)

    def to_dict(self):
        d: Dict[str, object] = {"date": self.date.strftime(ISO_DATE_FORMAT)}
        for slot in MEAL_SLOTS:
            entry = getattr(self, slot)
            if entry is not None:
                d[slot] = entry.to_dict()
        return d


class WeeklyMealPlan:
    """Seven consecutive days starting on a Monday.

    The constructor enforces the shape: exactly seven days with
    ``days[i].date == week_start + i days``. Anything else is a caller
    error and raises ValueError.
    """

    def __init__(self, week_start: date, days: List[DayPlan]):
        if week_start.weekday() != 0:
            raise ValueError(f"weekStart must be a Monday, got {week_start.isoformat()}")
        if len(days) != 7:
            raise ValueError(f"A weekly plan needs exactly 7 days, got {len(days)}")
        for i, day in enumerate(days):
            expected = week_start + timedelta(days=i)
            if day.date != expected:
                raise ValueError(f"Day {i} should be {expected.isoformat()}, got {day.date.isoformat()}")
        self.week_start = week_start
        self.days = days

    @classmethod
    def empty(cls, week_start: date) -> 'WeeklyMealPlan':
        return cls(week_start, [DayPlan(week_start + timedelta(days=i)) for i in range(7)])

    def entries(self) -> List[MealPlanEntry]:
        return [entry for day in self.days for entry in day.entries()]

    def __str__(self) -> str:
        return f"Week of {self.week_start.isoformat()} - {len(self.entries())} meals planned"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Builds a plan from the JSON document shape; raises ValueError when the shape is wrong.'''
        if not isinstance(data, dict):
            raise ValueError(f"Meal plan must be an object, got {type(data).__name__}")
        if not data.get('weekStart'):
            raise ValueError("Meal plan is missing 'weekStart'")
        raw_days = data.get('days')
        if not isinstance(raw_days, list):
            raise ValueError("Meal plan 'days' must be a list")
        return WeeklyMealPlan(
            _parse_iso(data['weekStart'], 'weekStart'),
            [DayPlan.from_dict(d) for d in raw_days],
        )

    def to_dict(self):
        return {
            "weekStart": self.week_start.strftime(ISO_DATE_FORMAT),
            "days": [d.to_dict() for d in self.days],
        }
