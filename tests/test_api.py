"""End-to-end tests for the HTTP API."""


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy", "database": "connected"}


def test_populate_then_list(client):
    resp = client.post("/api/meal-pool/populate", json={
        "country_code": "BR", "meal_type": "cafe_manha", "quantity": 4,
        "intolerance_filter": ["milk"], "seed": 21,
    })
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["rule"] == {"rule_id": "BR:breakfast", "chain": ["BR"]}
    assert body["generated"] == body["inserted"] + body["skipped"] + body["rejected"]
    for meal in body["meals"]:
        assert meal["meal_type"] == "breakfast"
        assert "lactose" not in meal["blocked_for_intolerances"]

    listed = client.get("/api/meal-pool", params={"meal_type": "breakfast", "safe_for": "lactose"})
    assert listed.status_code == 200
    assert {m["id"] for m in listed.json()} >= {m["id"] for m in body["meals"]}


def test_alternatives_endpoint(client):
    populated = client.post("/api/meal-pool/populate", json={"meal_type": "lunch", "quantity": 6, "seed": 5}).json()
    target = populated["meals"][0]["id"]

    resp = client.get(f"/api/meal-pool/{target}/alternatives", params={"top_k": 3})
    assert resp.status_code == 200
    alternatives = resp.json()
    assert 0 < len(alternatives) <= 3
    assert all(a["id"] != target and a["meal_type"] == "lunch" for a in alternatives)
    assert all("score" in a for a in alternatives)


def test_list_ingredients_by_category(client):
    resp = client.get("/api/ingredients", params={"category": "beverage"})
    assert resp.status_code == 200
    keys = [i["key"] for i in resp.json()]
    assert keys == sorted(keys)
    assert "whole_milk" in keys and "white_rice" not in keys

    assert client.get("/api/ingredients", params={"category": "dessert"}).status_code == 400


def test_get_ingredient(client):
    resp = client.get("/api/ingredients/whole_milk")
    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "Whole Milk"
    assert body["triggers_intolerances"] == ["lactose"]
    assert body["unit"] == "ml"


def test_substitute_endpoint(client):
    resp = client.get("/api/ingredients/whole_milk/substitute", params={"intolerances": "milk"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["intolerances"] == ["lactose"]
    assert body["substitute"]["key"] == "lactose_free_milk"
    assert body["kcal_difference"] == 0.0
    assert body["alternatives"] == ["soy_beverage"]


def test_rule_endpoint_reports_fallback_chain(client):
    resp = client.get("/api/rules/ao/dinner")
    assert resp.status_code == 200
    body = resp.json()
    assert body["requested_country"] == "AO"
    assert body["rule_id"] == "BR:dinner"
    assert body["chain"] == ["AO", "PT", "BR"]
    assert body["required_pairings"] == [{"if_key": "white_rice", "then_key": "black_beans", "probability": 0.6}]


def test_reject_endpoint(client):
    populated = client.post("/api/meal-pool/populate", json={"meal_type": "breakfast", "quantity": 2, "seed": 8}).json()
    target = populated["meals"][0]

    resp = client.post(f"/api/meal-pool/{target['id']}/reject", json={"reason": "culturally odd"})
    assert resp.status_code == 200
    body = resp.json()
    assert body == {
        "meal_id": target["id"], "meal_type": "breakfast", "content_hash": target["content_hash"],
        "country_codes": ["BR"], "recorded": True,
    }
    assert client.post(f"/api/meal-pool/{target['id']}/reject").json()["recorded"] is False
    assert client.post("/api/meal-pool/99999/reject").status_code == 404
