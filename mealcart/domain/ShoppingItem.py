"""AggregatedIngredient: one line of the weekly shopping list."""
from typing import List, Optional

from mealcart.logic.shopping.formatting import format_amount


class AggregatedIngredient:
    def __init__(self, name: str, total_amount: float, unit: str = "", category: str = "Pantry",
                 source_recipes: Optional[List[str]] = None):
        self.name = name
        self.total_amount = total_amount
        self.unit = unit
        self.category = category
        self.source_recipes = source_recipes[:] if source_recipes else []

    @property
    def display_amount(self) -> str:
        return format_amount(self.total_amount)

    def __str__(self) -> str:
        qty = f"{self.display_amount} {self.unit}".strip()
        return f"[{self.category}] {self.name} - {qty} ({', '.join(self.source_recipes)})"

    __repr__ = __str__

    def to_dict(self):
        return {
            "name": self.name,
            "totalAmount": self.total_amount,
            "displayAmount": self.display_amount,
            "unit": self.unit,
            "category": self.category,
            "sourceRecipes": list(self.source_recipes),
        }
