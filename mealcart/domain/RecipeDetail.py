"""Recipe detail as returned by the recipe provider: title plus extended ingredients."""
from typing import List, Optional


class ExtendedIngredient:
    def __init__(self, name: str = "", amount: Optional[float] = 0, unit: str = "", aisle: Optional[str] = None):
        self.name = name
        self.amount = amount
        self.unit = unit
        self.aisle = aisle

    def __str__(self) -> str:
        return f"{self.name} - {self.amount} {self.unit}".rstrip()

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates an ExtendedIngredient from a provider dict. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        amount = d.get('amount')
        return ExtendedIngredient(
            name=str(d.get('name') or ''),
            amount=amount if isinstance(amount, (int, float)) and not isinstance(amount, bool) else None,
            unit=str(d.get('unit') or ''),
            aisle=d.get('aisle') if isinstance(d.get('aisle'), str) else None,
        )

    def to_dict(self):
        return {"name": self.name, "amount": self.amount, "unit": self.unit, "aisle": self.aisle}


class RecipeDetail:
    def __init__(self, title: str = "", extended_ingredients: Optional[List[ExtendedIngredient]] = None,
                 id: Optional[int] = None, servings: Optional[int] = None):
        self.id = id
        self.title = title
        self.servings = servings
        self.extended_ingredients = extended_ingredients[:] if extended_ingredients else []

    def __str__(self) -> str:
        return f"{self.title} - {len(self.extended_ingredients)} ingredients"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        raw = d.get('extendedIngredients') or []
        return RecipeDetail(
            title=str(d.get('title') or ''),
            extended_ingredients=[ExtendedIngredient.from_dict(i) for i in raw if isinstance(i, dict)],
            id=d.get('id'),
            servings=d.get('servings'),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "servings": self.servings,
            "extendedIngredients": [i.to_dict() for i in self.extended_ingredients],
        }
