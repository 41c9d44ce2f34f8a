"""
Input validation schemas using Pydantic for meal plan request bodies.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional


class MealPlanEntryInput(BaseModel):
    """Schema for one planned recipe in a slot."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    recipe_id: int = Field(..., alias="recipeId")
    title: str = Field(..., min_length=1, max_length=300)
    image: Optional[str] = None
    servings: int = Field(1, ge=1)
    original_servings: int = Field(1, ge=1, alias="originalServings")

    @field_validator('title')
    @classmethod
    def strip_title(cls, v):
        """Remove leading/trailing whitespace."""
        return v.strip()


class DayPlanInput(BaseModel):
    """Schema for a single day: ISO date plus optional meal slots."""
    date: str = Field(..., pattern=r'^\d{4}-\d{2}-\d{2}$')
    breakfast: Optional[MealPlanEntryInput] = None
    lunch: Optional[MealPlanEntryInput] = None
    dinner: Optional[MealPlanEntryInput] = None


class WeeklyMealPlanInput(BaseModel):
    """Schema for a full week."""
    model_config = ConfigDict(populate_by_name=True)

    week_start: str = Field(..., alias="weekStart", pattern=r'^\d{4}-\d{2}-\d{2}$')
    days: List[DayPlanInput] = Field(..., min_length=7, max_length=7)

    def to_document(self) -> dict:
        """Camel-cased plan document accepted by WeeklyMealPlan.from_dict."""
        return self.model_dump(by_alias=True, exclude_none=True)


class MealPlanPayload(BaseModel):
    """Request body wrapper: {"plan": {...}}."""
    plan: WeeklyMealPlanInput
