import asyncio
import unittest
from datetime import date
from mealcart.domain.MealPlan import MealPlanEntry, WeeklyMealPlan
from mealcart.domain.RecipeDetail import ExtendedIngredient, RecipeDetail
from mealcart.logic.shopping.aggregator import aggregate_ingredients, collect_entries

MONDAY = date(2025, 3, 3)


def _plan(*slots):
    """slots: (day_index, slot, MealPlanEntry) triples."""
    plan = WeeklyMealPlan.empty(MONDAY)
    for day_index, slot, entry in slots:
        plan.days[day_index].set_slot(slot, entry)
    return plan


def _entry(recipe_id, title, servings=1, original=1):
    return MealPlanEntry(recipe_id=recipe_id, title=title, servings=servings, original_servings=original)


def _recipe(title, *ingredients):
    return RecipeDetail(title, [ExtendedIngredient(*i) for i in ingredients])


class StubLookup:
    """Async recipe lookup over a dict; ids mapped to an exception instance raise it."""

    def __init__(self, recipes):
        self.recipes = recipes
        self.calls = []

    async def __call__(self, recipe_id):
        self.calls.append(recipe_id)
        await asyncio.sleep(0)
        value = self.recipes.get(recipe_id)
        if isinstance(value, BaseException):
            raise value
        return value


def _run(plan, lookup):
    return asyncio.run(aggregate_ingredients(plan, lookup))


def _by_name(items):
    return {i.name: i for i in items}


class TestCollectEntries(unittest.TestCase):

    def test_day_then_slot_order(self):
        dinner_mon = _entry(1, "A")
        breakfast_tue = _entry(2, "B")
        breakfast_mon = _entry(3, "C")
        plan = _plan((1, "breakfast", breakfast_tue), (0, "dinner", dinner_mon), (0, "breakfast", breakfast_mon))
        self.assertEqual(collect_entries(plan), [breakfast_mon, dinner_mon, breakfast_tue])


class TestAggregateIngredients(unittest.TestCase):

    def test_empty_plan_returns_empty_without_fetching(self):
        lookup = StubLookup({})
        self.assertEqual(_run(WeeklyMealPlan.empty(MONDAY), lookup), [])
        self.assertEqual(lookup.calls, [])

    def test_scaling_by_servings(self):
        lookup = StubLookup({1: _recipe("Smoothie", ("milk", 2, "cup", "Milk, Eggs, Other Dairy"))})
        plan = _plan((0, "breakfast", _entry(1, "Smoothie", servings=8, original=4)))
        [item] = _run(plan, lookup)
        # 4 cups = 946.352 ml, below the 1 L threshold
        self.assertEqual(item.total_amount, 4.0)
        self.assertEqual(item.unit, "cups")
        self.assertEqual(item.category, "Dairy")

    def test_scaling_past_liter_threshold(self):
        lookup = StubLookup({1: _recipe("Soup", ("stock", 2, "cups", "Canned and Jarred"))})
        plan = _plan((0, "dinner", _entry(1, "Soup", servings=6, original=2)))
        [item] = _run(plan, lookup)
        # 6 cups = 1419.528 ml
        self.assertEqual((item.total_amount, item.unit), (1.42, "L"))

    def test_missing_original_servings_means_no_scaling(self):
        lookup = StubLookup({1: _recipe("Salad", ("cucumber", 1, "", "Produce"))})
        plan = _plan((0, "lunch", _entry(1, "Salad", servings=5, original=0)))
        [item] = _run(plan, lookup)
        self.assertEqual(item.total_amount, 5)

    def test_missing_amount_counts_as_zero(self):
        lookup = StubLookup({1: _recipe("Salad", ("salt", None, "pinch", "Spices and Seasonings"))})
        [item] = _run(_plan((0, "lunch", _entry(1, "Salad"))), lookup)
        self.assertEqual(item.total_amount, 0)
        self.assertEqual(item.unit, "pinch")

    def test_cross_recipe_count_summation(self):
        lookup = StubLookup({
            1: _recipe("Omelette", ("egg", 2, "", "Milk, Eggs, Other Dairy")),
            2: _recipe("Cake", ("egg", 3, "", "Milk, Eggs, Other Dairy")),
        })
        plan = _plan((0, "breakfast", _entry(1, "Omelette")), (2, "dinner", _entry(2, "Birthday Cake")))
        [item] = _run(plan, lookup)
        self.assertEqual(item.name, "egg")
        self.assertEqual(item.total_amount, 5)
        self.assertEqual(item.unit, "")
        self.assertEqual(item.source_recipes, ["Omelette", "Birthday Cake"])

    def test_same_recipe_twice_is_fetched_once_and_listed_once(self):
        lookup = StubLookup({1: _recipe("Toast", ("bread", 2, "slices", "Bakery/Bread"))})
        plan = _plan((0, "breakfast", _entry(1, "Toast")), (1, "breakfast", _entry(1, "Toast")))
        [item] = _run(plan, lookup)
        self.assertEqual(lookup.calls, [1])
        self.assertEqual(item.source_recipes, ["Toast"])
        # "slices" is an unknown unit: only the first amount is kept
        self.assertEqual((item.total_amount, item.unit), (2, "slices"))

    def test_name_identity_ignores_case_and_whitespace(self):
        lookup = StubLookup({
            1: _recipe("Sauce", ("Tomato", 2, "", "Produce")),
            2: _recipe("Salad", (" tomato ", 1, "", "Produce")),
        })
        plan = _plan((0, "lunch", _entry(1, "Sauce")), (0, "dinner", _entry(2, "Salad")))
        [item] = _run(plan, lookup)
        self.assertEqual(item.name, "Tomato")
        self.assertEqual(item.total_amount, 3)

    def test_volume_wins_over_count(self):
        # Mixed unit kinds for one name keep only the highest-precedence kind.
        lookup = StubLookup({
            1: _recipe("Latte", ("milk", 1, "cup", "Milk, Eggs, Other Dairy")),
            2: _recipe("Cereal", ("milk", 2, "", "Beverages")),
        })
        plan = _plan((0, "breakfast", _entry(1, "Latte")), (1, "breakfast", _entry(2, "Cereal")))
        [item] = _run(plan, lookup)
        self.assertEqual((item.total_amount, item.unit), (1.0, "cups"))
        self.assertEqual(item.category, "Dairy")
        self.assertEqual(item.source_recipes, ["Latte", "Cereal"])

    def test_weight_wins_over_count_and_unknown(self):
        lookup = StubLookup({
            1: _recipe("Stew", ("beef", 1, "", "Gourmet"), ("beef", 1, "pinch", "Gourmet")),
            2: _recipe("Tacos", ("beef", 1, "lb", "Meat")),
        })
        plan = _plan((0, "dinner", _entry(1, "Stew")), (1, "dinner", _entry(2, "Tacos")))
        [item] = _run(plan, lookup)
        self.assertEqual((item.total_amount, item.unit), (1.0, "lbs"))
        # category follows the ingredient that supplied the reported amount
        self.assertEqual(item.category, "Meat & Seafood")

    def test_weight_summed_across_units(self):
        lookup = StubLookup({
            1: _recipe("Pasta", ("parmesan", 200, "g", "Cheese")),
            2: _recipe("Risotto", ("parmesan", 0.5, "lb", "Cheese")),
        })
        plan = _plan((0, "dinner", _entry(1, "Pasta")), (1, "dinner", _entry(2, "Risotto")))
        [item] = _run(plan, lookup)
        # 200 g + 226.796 g = 426.796 g -> 15.05 oz
        self.assertEqual((item.total_amount, item.unit), (15.05, "oz"))

    def test_small_volumes_display_in_teaspoons(self):
        lookup = StubLookup({
            1: _recipe("Curry", ("cumin", 1, "tsp", "Spices and Seasonings")),
            2: _recipe("Chili", ("Cumin", 1, "teaspoon", "Spices and Seasonings")),
        })
        plan = _plan((0, "dinner", _entry(1, "Curry")), (1, "dinner", _entry(2, "Chili")))
        [item] = _run(plan, lookup)
        self.assertEqual((item.name, item.total_amount, item.unit), ("cumin", 2.0, "tsp"))

    def test_count_keeps_first_count_unit(self):
        lookup = StubLookup({
            1: _recipe("Pesto", ("garlic", 2, "cloves", "Produce")),
            2: _recipe("Bread", ("garlic", 1, "clove", "Produce")),
        })
        plan = _plan((0, "dinner", _entry(1, "Pesto")), (1, "dinner", _entry(2, "Bread")))
        [item] = _run(plan, lookup)
        self.assertEqual((item.total_amount, item.unit), (3, "cloves"))

    def test_partial_fetch_failure_is_isolated(self):
        lookup = StubLookup({
            1: RuntimeError("provider down"),
            2: _recipe("Salad", ("lettuce", 1, "head", "Produce"), ("olive oil", 2, "tbsp", "Oil, Vinegar, Salad Dressing")),
            3: None,
        })
        plan = _plan((0, "lunch", _entry(1, "Broken")), (0, "dinner", _entry(2, "Salad")), (1, "lunch", _entry(3, "Gone")))
        with self.assertLogs("mealcart.logic.shopping.aggregator", level="WARNING") as logs:
            items = _run(plan, lookup)
        self.assertEqual(sorted(lookup.calls), [1, 2, 3])
        self.assertEqual([i.name for i in items], ["olive oil", "lettuce"])
        self.assertTrue(all(i.source_recipes == ["Salad"] for i in items))
        self.assertEqual(len(logs.records), 2)

    def test_all_fetches_failing_gives_empty_list(self):
        lookup = StubLookup({1: ValueError("bad json")})
        self.assertEqual(_run(_plan((0, "lunch", _entry(1, "Broken"))), lookup), [])

    def test_sorted_by_category_then_name(self):
        lookup = StubLookup({1: _recipe(
            "Everything",
            ("zucchini", 1, "", "Produce"),
            ("Zest", 1, "", "Produce"),
            ("apple", 1, "", "Produce"),
            ("flour", 2, "cups", "Baking"),
            ("honey", 1, "tbsp", None),
            ("butter", 100, "g", "Milk, Eggs, Other Dairy"),
        )})
        items = _run(_plan((0, "dinner", _entry(1, "Everything"))), lookup)
        self.assertEqual(
            [(i.category, i.name) for i in items],
            [("Baking", "flour"), ("Dairy", "butter"), ("Pantry", "honey"),
             ("Produce", "Zest"), ("Produce", "apple"), ("Produce", "zucchini")],
        )

    def test_unknown_aisle_falls_back_to_pantry(self):
        lookup = StubLookup({1: _recipe("Snack", ("peanut butter", 2, "tbsp", "Nut butters, Jams, and Honey"),
                                        ("crackers", 10, "", None))})
        items = _run(_plan((0, "lunch", _entry(1, "Snack"))), lookup)
        self.assertEqual({i.category for i in items}, {"Pantry"})

    def test_idempotent(self):
        lookup = StubLookup({
            1: _recipe("Soup", ("carrot", 3, "", "Produce"), ("stock", 4, "cups", "Canned and Jarred")),
            2: _recipe("Stew", ("Carrot", 2, "", "Produce"), ("beef", 1.5, "lbs", "Meat")),
        })
        plan = _plan((0, "dinner", _entry(1, "Soup", servings=2, original=4)), (4, "dinner", _entry(2, "Stew")))
        first = [i.to_dict() for i in _run(plan, lookup)]
        second = [i.to_dict() for i in _run(plan, lookup)]
        self.assertEqual(first, second)

    def test_accepts_plan_dict_sync_lookup_and_raw_provider_dicts(self):
        raw = {"title": "Pancakes", "extendedIngredients": [
            {"name": "flour", "amount": 1.5, "unit": "cups", "aisle": "Baking"},
        ]}
        plan = _plan((0, "breakfast", _entry(7, "Pancakes"))).to_dict()
        [item] = _run(plan, lambda recipe_id: raw if recipe_id == 7 else None)
        self.assertEqual((item.total_amount, item.unit, item.display_amount), (1.5, "cups", "1 1/2"))

    def test_structurally_invalid_plan_raises(self):
        lookup = StubLookup({})
        with self.assertRaises(TypeError):
            _run("not a plan", lookup)
        with self.assertRaises(ValueError):
            _run({"weekStart": "2025-03-03", "days": []}, lookup)

    def test_lookups_run_concurrently(self):
        recipes = {rid: _recipe(f"Dish {rid}", (f"item {rid}", 1, "", "Produce")) for rid in (1, 2, 3, 4)}
        started = []

        async def scenario():
            all_started = asyncio.Event()

            async def lookup(recipe_id):
                started.append(recipe_id)
                if len(started) == len(recipes):
                    all_started.set()
                # each lookup waits until every other one has started
                await all_started.wait()
                return recipes[recipe_id]

            plan = _plan(*((i, "dinner", _entry(rid, f"Dish {rid}")) for i, rid in enumerate(recipes)))
            return await asyncio.wait_for(aggregate_ingredients(plan, lookup), timeout=1)

        items = asyncio.run(scenario())
        self.assertEqual(sorted(started), [1, 2, 3, 4])
        self.assertEqual([i.name for i in items], ["item 1", "item 2", "item 3", "item 4"])

    def test_string_and_int_recipe_ids_are_fetched_once(self):
        lookup = StubLookup({716429: _recipe("Pasta", ("garlic", 2, "cloves", "Produce"))})
        doc = _plan((0, "dinner", _entry(716429, "Pasta"))).to_dict()
        doc['days'][1]['dinner'] = {"id": "m2", "recipeId": "716429", "title": "Pasta", "servings": 1, "originalServings": 1}
        [item] = _run(doc, lookup)
        self.assertEqual(lookup.calls, [716429])
        self.assertEqual((item.total_amount, item.unit, item.source_recipes), (4, "cloves", ["Pasta"]))

    def test_cancelled_lookup_propagates(self):
        lookup = StubLookup({
            1: _recipe("Salad", ("lettuce", 1, "head", "Produce")),
            2: asyncio.CancelledError(),
        })
        plan = _plan((0, "lunch", _entry(1, "Salad")), (0, "dinner", _entry(2, "Cancelled")))
        with self.assertRaises(asyncio.CancelledError):
            _run(plan, lookup)


if __name__ == '__main__':
    unittest.main()
