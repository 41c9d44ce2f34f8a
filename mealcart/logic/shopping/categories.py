from typing import Optional

from mealcart.utilities.constants import AISLE_CATEGORY_RULES, DEFAULT_CATEGORY


def map_aisle_to_category(aisle: Optional[str]) -> str:
    '''Collapse a provider aisle hint ("Milk, Eggs, Other Dairy") into a store category.'''
    lower = (aisle or '').lower()
    if not lower:
        return DEFAULT_CATEGORY
    for needles, category in AISLE_CATEGORY_RULES:
        if any(n in lower for n in needles):
            return category
    return DEFAULT_CATEGORY


__all__ = ['map_aisle_to_category']
