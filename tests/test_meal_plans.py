"""Meal type and meal plan API tests."""

from datetime import date

import pytest

from mealplan.services.records import DateRange


def test_meal_types_are_appended_in_order(client):
    """Test new meal types go to the end of the order."""
    for name in ("Breakfast", "Lunch", "Dinner"):
        client.post("/api/v1/meal-types", json={"name": name})

    meal_types = client.get("/api/v1/meal-types").json()
    assert [(m["name"], m["sort_order"]) for m in meal_types] == [
        ("Breakfast", 1),
        ("Lunch", 2),
        ("Dinner", 3),
    ]


def test_new_meal_type_goes_last_after_a_delete(client):
    """Test a meal type added after a delete doesn't share an order with another."""
    ids = [
        client.post("/api/v1/meal-types", json={"name": name}).json()["id"]
        for name in ("Breakfast", "Lunch", "Dinner")
    ]
    assert client.delete(f"/api/v1/meal-types/{ids[0]}").status_code == 204
    client.post("/api/v1/meal-types", json={"name": "Snack"})

    meal_types = client.get("/api/v1/meal-types").json()
    assert [(m["name"], m["sort_order"]) for m in meal_types] == [
        ("Lunch", 2),
        ("Dinner", 3),
        ("Snack", 4),
    ]


def test_reorder_meal_types(client):
    """Test reordering sets 1-based positions."""
    ids = [
        client.post("/api/v1/meal-types", json={"name": name}).json()["id"]
        for name in ("Breakfast", "Lunch", "Dinner")
    ]

    response = client.put("/api/v1/meal-types/order", json={"meal_type_ids": ids[::-1]})
    assert response.status_code == 200
    assert [(m["name"], m["sort_order"]) for m in response.json()] == [
        ("Dinner", 1),
        ("Lunch", 2),
        ("Breakfast", 3),
    ]

    response = client.put("/api/v1/meal-types/order", json={"meal_type_ids": ids[:2]})
    assert response.status_code == 422


def test_rename_meal_type(client, meal_type):
    """Test renaming a meal type."""
    response = client.put(f"/api/v1/meal-types/{meal_type['id']}", json={"name": "Brunch"})
    assert response.status_code == 200
    assert response.json()["name"] == "Brunch"


def test_plan_meal(client, rice, make_recipe, plan_meal):
    """Test planning a recipe scales its nutrition to the planned portions."""
    recipe = make_recipe(
        "Plain rice", [{"ingredient_id": rice["id"], "quantity": 200}], porciones=2
    )

    entry = plan_meal(recipe["id"], "2024-01-01", porciones=3)
    assert entry["recipe_name"] == "Plain rice"
    assert entry["meal_type"] == "Lunch"
    assert entry["recipe_porciones"] == 2
    assert entry["nutrition"]["calories"] == pytest.approx(390)


def test_plan_requires_existing_recipe_and_meal_type(client, meal_type, rice, make_recipe):
    """Test 404 for unknown references and 422 for zero portions."""
    recipe = make_recipe("Plain rice", [{"ingredient_id": rice["id"], "quantity": 200}])
    base = {"date": "2024-01-01", "meal_type_id": meal_type["id"], "recipe_id": recipe["id"]}

    assert client.post("/api/v1/meal-plans", json={**base, "recipe_id": 999}).status_code == 404
    assert client.post("/api/v1/meal-plans", json={**base, "meal_type_id": 999}).status_code == 404
    assert client.post("/api/v1/meal-plans", json={**base, "porciones": 0}).status_code == 422


def test_weekly_plan(client, rice, make_recipe, plan_meal):
    """Test the weekly plan lists every day with totals and person progress."""
    recipe = make_recipe(
        "Plain rice", [{"ingredient_id": rice["id"], "quantity": 200}], porciones=2
    )
    dinner = client.post("/api/v1/meal-types", json={"name": "Dinner"}).json()
    plan_meal(recipe["id"], "2024-01-02", porciones=2, meal_type_id=dinner["id"])
    plan_meal(recipe["id"], "2024-01-02", porciones=1)
    client.post("/api/v1/persons", json={"name": "Alex", "calories": 780})

    response = client.get("/api/v1/meal-plans?start=2024-01-01&end=2024-01-07")
    assert response.status_code == 200
    plan = response.json()
    assert [day["date"] for day in plan["days"]][:2] == ["2024-01-01", "2024-01-02"]
    assert len(plan["days"]) == 7

    tuesday = plan["days"][1]
    assert [meal["meal_type"] for meal in tuesday["meals"]] == ["Lunch", "Dinner"]
    assert tuesday["rounded_totals"]["calories"] == 390
    assert set(tuesday["macro_distribution"]) == {"carbs", "protein", "fat"}
    assert tuesday["macro_distribution"]["carbs"]["recommended"] == 50

    progress = tuesday["persons"][0]["progress"]["calories"]
    assert progress == {"actual": 390, "target": 780, "percentage": 50}

    monday = plan["days"][0]
    assert monday["meals"] == []
    assert monday["macro_distribution"] == {}


def test_weekly_plan_defaults_to_current_week(client):
    """Test the plan covers the current week when no range is given."""
    plan = client.get("/api/v1/meal-plans").json()
    week = DateRange.week_of(date.today())
    assert plan["start"] == str(week.start)
    assert plan["end"] == str(week.end)


def test_invalid_range(client):
    """Test an end before the start is rejected."""
    response = client.get("/api/v1/meal-plans?start=2024-01-07&end=2024-01-01")
    assert response.status_code == 422


def test_update_and_delete_entry(client, rice, make_recipe, plan_meal):
    """Test changing portions and deleting by entry id."""
    recipe = make_recipe(
        "Plain rice", [{"ingredient_id": rice["id"], "quantity": 200}], porciones=2
    )
    entry = plan_meal(recipe["id"], "2024-01-01")

    response = client.put(f"/api/v1/meal-plans/{entry['id']}", json={"porciones": 4})
    assert response.status_code == 200
    assert response.json()["nutrition"]["calories"] == pytest.approx(520)

    assert client.delete(f"/api/v1/meal-plans/{entry['id']}").status_code == 204
    assert client.delete(f"/api/v1/meal-plans/{entry['id']}").status_code == 404


def test_delete_meal_type_removes_entries(client, meal_type, rice, make_recipe, plan_meal):
    """Test deleting a meal type removes the meals planned in it."""
    recipe = make_recipe("Plain rice", [{"ingredient_id": rice["id"], "quantity": 200}])
    plan_meal(recipe["id"], "2024-01-01")

    assert client.delete(f"/api/v1/meal-types/{meal_type['id']}").status_code == 204
    plan = client.get("/api/v1/meal-plans?start=2024-01-01&end=2024-01-01").json()
    assert plan["days"][0]["meals"] == []
