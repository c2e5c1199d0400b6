"""Shopping list API tests."""

import pytest

from mealplan.config import Settings, get_settings
from mealplan.main import app


@pytest.fixture
def planned_week(client, rice, oil, make_recipe, plan_meal):
    """Recipe X (4 portions) planned 2 + 2 portions on Jan 1 and once on Jan 3."""
    recipe = make_recipe(
        "Rice with oil",
        [
            {"ingredient_id": rice["id"], "quantity": 400},
            {"ingredient_id": oil["id"], "quantity": 2, "unit_name": "tbsp"},
        ],
        porciones=4,
    )
    dinner = client.post("/api/v1/meal-types", json={"name": "Dinner"}).json()
    plan_meal(recipe["id"], "2024-01-01", porciones=2)
    plan_meal(recipe["id"], "2024-01-01", porciones=2, meal_type_id=dinner["id"])
    plan_meal(recipe["id"], "2024-01-03", porciones=1)
    return {"recipe": recipe, "rice": rice, "oil": oil}


def live(client, **params):
    query = {"start": "2024-01-01", "end": "2024-01-07", **params}
    response = client.get("/api/v1/shopping-lists/live", params=query)
    assert response.status_code == 200, response.text
    return response.json()


def save(client, **fields):
    payload = {"start_date": "2024-01-01", "end_date": "2024-01-07", **fields}
    response = client.post("/api/v1/shopping-lists", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_live_list(client, planned_week):
    """Test the live list consolidates quantities in the base unit."""
    data = live(client)
    assert data["kind"] == "live"
    items = {item["name"]: item for item in data["items"]}

    rice = items["Rice"]
    assert rice["total_quantity"] == pytest.approx(500)
    assert rice["display_unit"] == "g"
    assert rice["total_portions"] == 5
    assert [(r["date"], r["porciones"]) for r in rice["recipes"]] == [
        ("2024-01-01", 4),
        ("2024-01-03", 1),
    ]

    oil = items["Olive oil"]
    assert oil["total_quantity"] == pytest.approx(37.5)
    assert oil["equivalences"] == [
        {"unit": "ml", "quantity": 37.5},
        {"unit": "tbsp", "quantity": 2.5},
    ]
    assert data["available_tags"] == ["Grain", "Oil"]
    assert "Vegetable" in data["suggested_tags"]


def test_live_list_respects_range_and_tags(client, planned_week):
    """Test entries outside the range are left out and tag filters apply."""
    data = live(client, end="2024-01-02")
    rice = next(item for item in data["items"] if item["name"] == "Rice")
    assert rice["total_quantity"] == pytest.approx(400)

    data = live(client, tags="Oil")
    assert [item["name"] for item in data["items"]] == ["Olive oil"]
    assert data["groups"] == {"Oil": [planned_week["oil"]["id"]]}


def test_save_snapshot(client, planned_week):
    """Test saving keeps quantities and provenance, with nothing purchased."""
    saved = save(client, name="Week 1")
    assert saved["kind"] == "saved"
    assert saved["item_count"] == 2
    assert saved["original_list_id"] is None
    assert all(item["purchased"] is False for item in saved["items"])

    live_items = {item["ingredient_id"]: item for item in live(client)["items"]}
    for item in saved["items"]:
        assert item["total_quantity"] == pytest.approx(
            live_items[item["ingredient_id"]]["total_quantity"]
        )
        assert item["recipes"] == live_items[item["ingredient_id"]]["recipes"]

    summaries = client.get("/api/v1/shopping-lists").json()
    assert [s["name"] for s in summaries] == ["Week 1"]


def test_default_name(client, planned_week):
    """Test a saved list gets a name from its range."""
    assert save(client)["name"] == "Shopping list 2024-01-01 - 2024-01-07"


def test_saved_list_is_a_snapshot(client, planned_week, plan_meal):
    """Test later planning doesn't change a saved list."""
    saved = save(client)
    plan_meal(planned_week["recipe"]["id"], "2024-01-05", porciones=4)

    reloaded = client.get(f"/api/v1/shopping-lists/{saved['id']}").json()
    rice = next(item for item in reloaded["items"] if item["name"] == "Rice")
    assert rice["total_quantity"] == pytest.approx(500)


def test_quantity_edits_only_on_copies(client, planned_week):
    """Test overrides are refused on saved lists and allowed on copies."""
    saved = save(client, name="Week 1")
    oil_id = planned_week["oil"]["id"]
    url = f"/api/v1/shopping-lists/{saved['id']}/items/{oil_id}"

    response = client.put(url, json={"custom_quantity": 3, "custom_unit": "tbsp"})
    assert response.status_code == 409

    response = client.post(f"/api/v1/shopping-lists/{saved['id']}/copy")
    assert response.status_code == 201
    copy = response.json()
    assert copy["kind"] == "copied"
    assert copy["original_list_id"] == saved["id"]
    assert copy["name"] == "Week 1 (consolidated)"

    response = client.put(
        f"/api/v1/shopping-lists/{copy['id']}/items/{oil_id}",
        json={"custom_quantity": 3, "custom_unit": "tbsp"},
    )
    assert response.status_code == 200
    oil = next(item for item in response.json()["items"] if item["ingredient_id"] == oil_id)
    assert oil["display_quantity"] == 3
    assert oil["display_unit"] == "tbsp"
    assert oil["total_quantity"] == pytest.approx(37.5)
    assert oil["equivalences"] == [
        {"unit": "ml", "quantity": 45},
        {"unit": "tbsp", "quantity": 3},
    ]

    response = client.put(
        f"/api/v1/shopping-lists/{copy['id']}/items/{oil_id}", json={"custom_quantity": None}
    )
    oil = next(item for item in response.json()["items"] if item["ingredient_id"] == oil_id)
    assert oil["custom_quantity"] is None
    assert oil["display_quantity"] == pytest.approx(37.5)


def test_saved_lists_editable_when_policy_disabled(client, planned_week):
    """Test overrides are allowed on saved lists once the copy-only policy is off."""
    app.dependency_overrides[get_settings] = lambda: Settings(only_copied_lists_editable=False)
    saved = save(client)
    oil_id = planned_week["oil"]["id"]

    response = client.put(
        f"/api/v1/shopping-lists/{saved['id']}/items/{oil_id}",
        json={"custom_quantity": 50},
    )
    assert response.status_code == 200
    oil = next(item for item in response.json()["items"] if item["ingredient_id"] == oil_id)
    assert oil["display_quantity"] == 50
    assert oil["display_unit"] == "ml"


def test_override_rejects_undeclared_unit(client, planned_week):
    """Test overrides must use a unit the ingredient declares."""
    saved = save(client)
    copy = client.post(f"/api/v1/shopping-lists/{saved['id']}/copy").json()
    response = client.put(
        f"/api/v1/shopping-lists/{copy['id']}/items/{planned_week['oil']['id']}",
        json={"custom_quantity": 1, "custom_unit": "cup"},
    )
    assert response.status_code == 422


def test_copy_keeps_overrides_and_resets_purchased(client, planned_week):
    """Test copying a copy carries its overrides but not its purchases."""
    saved = save(client)
    first = client.post(f"/api/v1/shopping-lists/{saved['id']}/copy").json()
    rice_id = planned_week["rice"]["id"]
    client.put(
        f"/api/v1/shopping-lists/{first['id']}/items/{rice_id}", json={"custom_quantity": 600}
    )
    client.post(f"/api/v1/shopping-lists/{first['id']}/items/{rice_id}/toggle-purchased")

    second = client.post(f"/api/v1/shopping-lists/{first['id']}/copy").json()
    rice = next(item for item in second["items"] if item["ingredient_id"] == rice_id)
    assert rice["custom_quantity"] == 600
    assert rice["purchased"] is False


def test_toggle_purchased_on_saved_list(client, planned_week):
    """Test purchased state can be toggled on any saved list."""
    saved = save(client)
    rice_id = planned_week["rice"]["id"]
    url = f"/api/v1/shopping-lists/{saved['id']}/items/{rice_id}/toggle-purchased"

    response = client.post(url)
    assert response.status_code == 200
    rice = next(item for item in response.json()["items"] if item["name"] == "Rice")
    assert rice["purchased"] is True

    rice = next(item for item in client.post(url).json()["items"] if item["name"] == "Rice")
    assert rice["purchased"] is False


def test_missing_item(client, planned_week):
    """Test 404 for an ingredient that isn't on the list."""
    saved = save(client)
    response = client.post(f"/api/v1/shopping-lists/{saved['id']}/items/999/toggle-purchased")
    assert response.status_code == 404


def test_delete_cascades_to_copies(client, planned_week):
    """Test deleting a list also deletes the lists copied from it."""
    saved = save(client)
    copy = client.post(f"/api/v1/shopping-lists/{saved['id']}/copy").json()
    other = save(client, name="Other")

    assert client.delete(f"/api/v1/shopping-lists/{saved['id']}").status_code == 204
    assert client.get(f"/api/v1/shopping-lists/{copy['id']}").status_code == 404
    assert [s["id"] for s in client.get("/api/v1/shopping-lists").json()] == [other["id"]]


def test_delete_keeps_copies_of_copies(client, planned_week):
    """Test only direct copies are deleted and a copy of a copy stays editable."""
    saved = save(client)
    copy = client.post(f"/api/v1/shopping-lists/{saved['id']}/copy").json()
    grand_copy = client.post(f"/api/v1/shopping-lists/{copy['id']}/copy").json()

    assert client.delete(f"/api/v1/shopping-lists/{saved['id']}").status_code == 204
    assert client.get(f"/api/v1/shopping-lists/{copy['id']}").status_code == 404

    response = client.get(f"/api/v1/shopping-lists/{grand_copy['id']}")
    assert response.status_code == 200
    assert response.json()["kind"] == "copied"
    assert response.json()["original_list_id"] is None

    rice_id = planned_week["rice"]["id"]
    response = client.put(
        f"/api/v1/shopping-lists/{grand_copy['id']}/items/{rice_id}",
        json={"custom_quantity": 600},
    )
    assert response.status_code == 200


def test_force_deleting_ingredient_removes_saved_rows(client, planned_week):
    """Test deleting an ingredient removes it from saved lists."""
    saved = save(client)
    response = client.delete(f"/api/v1/ingredients/{planned_week['oil']['id']}?force=true")
    assert response.status_code == 204

    items = client.get(f"/api/v1/shopping-lists/{saved['id']}").json()["items"]
    assert [item["name"] for item in items] == ["Rice"]
