from typing import Final

ISO_DATE_FORMAT: Final[str] = "%Y-%m-%d"
MEAL_SLOTS: Final[tuple[str, ...]] = ("breakfast", "lunch", "dinner")

DEFAULT_CATEGORY: Final[str] = "Pantry"

# Checked in order, first substring match wins.
AISLE_CATEGORY_RULES: Final[tuple[tuple[tuple[str, ...], str], ...]] = (
    (("produce", "vegetable", "fruit"), "Produce"),
    (("dairy", "milk", "cheese", "egg"), "Dairy"),
    (("meat", "seafood", "poultry"), "Meat & Seafood"),
    (("bakery", "bread"), "Bakery"),
    (("frozen",), "Frozen"),
    (("spice", "seasoning"), "Spices & Seasonings"),
    (("canned", "jarred"), "Canned Goods"),
    (("pasta", "rice", "grain"), "Pasta & Grains"),
    (("condiment", "sauce"), "Condiments"),
    (("oil", "vinegar"), "Oils & Vinegars"),
    (("baking",), "Baking"),
    (("beverage", "drink"), "Beverages"),
)

# Base unit per 1 source unit: milliliters for volume, grams for weight.
VOLUME_CONVERSIONS: Final[dict[str, float]] = {
    "ml": 1, "milliliter": 1, "milliliters": 1,
    "l": 1000, "liter": 1000, "liters": 1000,
    "tsp": 4.929, "teaspoon": 4.929, "teaspoons": 4.929,
    "tbsp": 14.787, "tablespoon": 14.787, "tablespoons": 14.787,
    "cup": 236.588, "cups": 236.588,
    "fl oz": 29.574, "fluid ounce": 29.574, "fluid ounces": 29.574,
}
WEIGHT_CONVERSIONS: Final[dict[str, float]] = {
    "g": 1, "gram": 1, "grams": 1,
    "kg": 1000, "kilogram": 1000, "kilograms": 1000,
    "oz": 28.3495, "ounce": 28.3495, "ounces": 28.3495,
    "lb": 453.592, "lbs": 453.592, "pound": 453.592, "pounds": 453.592,
}
COUNT_UNITS: Final[frozenset[str]] = frozenset({
    "", "piece", "pieces", "whole", "clove", "cloves", "large", "medium", "small",
})

# Largest display unit first: (threshold in base units, divisor, label).
VOLUME_DISPLAY_STEPS: Final[tuple[tuple[float, float, str], ...]] = (
    (1000, 1000, "L"),
    (236.588, 236.588, "cups"),
    (14.787, 14.787, "tbsp"),
)
VOLUME_DISPLAY_FALLBACK: Final[tuple[float, str]] = (4.929, "tsp")
WEIGHT_DISPLAY_STEPS: Final[tuple[tuple[float, float, str], ...]] = (
    (1000, 1000, "kg"),
    (453.592, 453.592, "lbs"),
    (28.3495, 28.3495, "oz"),
)
WEIGHT_DISPLAY_FALLBACK: Final[tuple[float, str]] = (1, "g")

DISPLAY_FRACTIONS: Final[tuple[tuple[float, str], ...]] = (
    (0.25, "1/4"),
    (0.33, "1/3"),
    (0.5, "1/2"),
    (0.67, "2/3"),
    (0.75, "3/4"),
)
FRACTION_TOLERANCE: Final[float] = 0.05
