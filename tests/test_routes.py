from datetime import date, timedelta


def _ensure_family(authed_client):
    if not authed_client.get("/family").json():
        authed_client.post("/family", data={"name": "太郎", "appetite_level": "4", "likes": "鶏肉"})
        authed_client.post("/family", data={"name": "花子", "dislikes": "ピーマン"})


def _generate(authed_client, days=7, seed="1"):
    _ensure_family(authed_client)
    start = date.today()
    end = start + timedelta(days=days - 1)
    return authed_client.post("/plan/generate", data={
        "start_date": start.isoformat(),
        "end_date": end.isoformat(),
        "seed": seed,
    })


# ── Settings & family ────────────────────────────────────────────────────────

def test_settings_get_and_put(authed_client):
    resp = authed_client.put("/settings", json={"family_mode": "normal", "preferred_types": ["japanese"]})
    assert resp.status_code == 200
    data = authed_client.get("/settings").json()
    assert data["family_mode"] == "normal"
    assert data["preferred_types"] == ["japanese"]
    assert "muscle" in data["family_modes"]


def test_settings_rejects_unknown_mode(authed_client):
    resp = authed_client.put("/settings", json={"family_mode": "keto", "preferred_types": []})
    assert resp.status_code == 422


def test_family_edit_and_delete(authed_client):
    _ensure_family(authed_client)
    added = authed_client.post("/family", data={"name": "一時", "appetite_level": "2"}).json()
    temp = next(m for m in added if m["name"] == "一時")
    edited = authed_client.put(f"/family/{temp['id']}", data={"name": "一時", "appetite_level": "5"}).json()
    assert next(m for m in edited if m["id"] == temp["id"])["appetite_level"] == 5
    remaining = authed_client.delete(f"/family/{temp['id']}").json()
    assert temp["id"] not in [m["id"] for m in remaining]


def test_family_rejects_bad_appetite(authed_client):
    resp = authed_client.post("/family", data={"name": "x", "appetite_level": "9"})
    assert resp.status_code == 422


def test_family_edit_missing_member_404(authed_client):
    resp = authed_client.put("/family/999999", data={"name": "x"})
    assert resp.status_code == 404


# ── Plan ─────────────────────────────────────────────────────────────────────

def test_generate_plan(authed_client):
    resp = _generate(authed_client)
    assert resp.status_code == 200
    data = resp.json()
    assert len(data["menu"]) == 7
    assert data["menu"][0]["date"] == date.today().isoformat()
    assert data["shopping_list"]
    assert authed_client.get("/plan").json()["menu"] == data["menu"]


def test_generate_rejects_long_range(authed_client):
    resp = _generate(authed_client, days=31)
    assert resp.status_code == 422


def test_generate_rejects_bad_date(authed_client):
    _ensure_family(authed_client)
    resp = authed_client.post("/plan/generate", data={"start_date": "next week", "end_date": "2026-03-08"})
    assert resp.status_code == 422


def test_refresh_and_swap_plan_days(authed_client):
    plan = _generate(authed_client).json()
    refreshed = authed_client.post("/plan/days/1/refresh", data={"seed": "3"}).json()
    assert refreshed["menu"][1]["dish"] != plan["menu"][1]["dish"]
    assert refreshed["menu"][0] == plan["menu"][0]

    swapped = authed_client.post("/plan/swap", data={"first": "0", "second": "1"}).json()
    assert swapped["menu"][0]["dish"] == refreshed["menu"][1]["dish"]
    assert swapped["menu"][0]["date"] == refreshed["menu"][0]["date"]


def test_refresh_out_of_range_day(authed_client):
    _generate(authed_client)
    resp = authed_client.post("/plan/days/40/refresh")
    assert resp.status_code == 422


# ── Daily menus ──────────────────────────────────────────────────────────────

def test_daily_menus_follow_generated_plan(authed_client):
    plan = _generate(authed_client, days=3).json()
    daily = authed_client.get("/daily-menus", params={"start": plan["menu"][0]["date"]}).json()
    assert [d["dish"] for d in daily[:3]] == [m["dish"] for m in plan["menu"]]


def test_daily_menu_swap_refresh_and_cook(authed_client):
    _generate(authed_client, days=2)
    today = date.today().isoformat()
    first, second = authed_client.get("/daily-menus", params={"start": today}).json()[:2]

    swapped = authed_client.post("/daily-menus/swap", data={
        "first_id": str(first["id"]), "second_id": str(second["id"]),
    }).json()
    assert swapped[0]["dish"] == second["dish"]

    refreshed = authed_client.post(f"/daily-menus/{first['id']}/refresh", data={"seed": "9"}).json()
    assert refreshed["dish"] != second["dish"]
    assert refreshed["menu_date"] == first["menu_date"]

    cooked = authed_client.post(f"/daily-menus/{first['id']}/cooked").json()
    assert cooked["recorded"] is True
    again = authed_client.post(f"/daily-menus/{first['id']}/cooked").json()
    assert again["recorded"] is False
    dishes = [r["dish_name"] for r in authed_client.get("/history").json()]
    assert refreshed["dish"] in dishes


def test_daily_menu_missing_404(authed_client):
    resp = authed_client.post("/daily-menus/999999/cooked")
    assert resp.status_code == 404


# ── Shopping ─────────────────────────────────────────────────────────────────

def test_shopping_list_and_check(authed_client):
    _generate(authed_client)
    data = authed_client.get("/shopping").json()
    assert data["week"].startswith(str(date.today().isocalendar()[0]))
    item = data["items"][0]
    assert item["checked"] is False

    resp = authed_client.post("/shopping/check", data={"name": item["name"], "unit": item["unit"], "checked": "true"})
    assert resp.status_code == 200
    stock = {(i["name"], i["unit"]): i["qty"] for i in authed_client.get("/inventory").json()}
    assert stock[(item["name"], item["unit"])] >= item["qty"]

    resp = authed_client.post("/shopping/check", data={"name": item["name"], "unit": item["unit"], "checked": "false"})
    assert resp.status_code == 200


def test_shopping_check_unknown_item_404(authed_client):
    resp = authed_client.post("/shopping/check", data={"name": "存在しない", "unit": "個", "checked": "true"})
    assert resp.status_code == 404


def test_shopping_check_requires_matching_unit(authed_client):
    _generate(authed_client)
    item = authed_client.get("/shopping").json()["items"][0]
    resp = authed_client.post("/shopping/check", data={"name": item["name"], "unit": "箱", "checked": "true"})
    assert resp.status_code == 404


def test_shopping_quantities_stay_whole_with_fractional_stock(authed_client):
    authed_client.post("/inventory", data={"name": "米", "unit": "g", "qty": "0.5"})
    _generate(authed_client)
    items = authed_client.get("/shopping").json()["items"]
    authed_client.delete("/inventory", params={"name": "米", "unit": "g"})
    assert items
    assert all(isinstance(i["qty"], int) for i in items)


def test_shopping_export(authed_client):
    _generate(authed_client)
    resp = authed_client.get("/shopping/export")
    assert resp.status_code == 200
    assert "text/plain" in resp.headers["content-type"]
    assert "attachment" in resp.headers["content-disposition"]


def test_shopping_breakdown(authed_client):
    plan = _generate(authed_client, days=1).json()
    line = plan["shopping_list"][0]
    sources = authed_client.get("/shopping/breakdown", params={"name": line["name"], "unit": line["unit"]}).json()
    assert sources
    assert all(s["date"] == plan["menu"][0]["date"] for s in sources)


# ── Inventory ────────────────────────────────────────────────────────────────

def test_inventory_add_adjust_delete(authed_client):
    authed_client.post("/inventory", data={"name": "テスト粉", "unit": "g", "qty": "200"})
    items = authed_client.post("/inventory/adjust", data={"name": "テスト粉", "unit": "g", "delta": "-50"}).json()
    assert {"name": "テスト粉", "unit": "g", "qty": 150.0} in items
    items = authed_client.delete("/inventory", params={"name": "テスト粉", "unit": "g"}).json()
    assert "テスト粉" not in [i["name"] for i in items]


def test_inventory_rejects_zero_quantity(authed_client):
    resp = authed_client.post("/inventory", data={"name": "テスト粉", "unit": "g", "qty": "0"})
    assert resp.status_code == 422


# ── History & favourites ─────────────────────────────────────────────────────

def test_rate_and_list_by_rank(authed_client):
    resp = authed_client.post("/history/rate", data={
        "dish_name": "親子丼", "cooked_date": "2026-01-05",
        "taste_rating": "5", "time_rating": "4", "repeat_desire": "5",
    })
    assert resp.status_code == 200
    assert resp.json()["rank"] == "A"
    authed_client.post("/favorites/toggle", data={"dish_name": "親子丼"})
    a_list = authed_client.get("/history/rank/a").json()
    entry = next(r for r in a_list if r["dish_name"] == "親子丼")
    assert entry["favorite"] is True
    assert "親子丼" in authed_client.get("/favorites").json()


def test_rate_rejects_out_of_range(authed_client):
    resp = authed_client.post("/history/rate", data={
        "dish_name": "親子丼", "taste_rating": "7", "time_rating": "4", "repeat_desire": "5",
    })
    assert resp.status_code == 422


def test_history_range(authed_client):
    authed_client.post("/history/rate", data={
        "dish_name": "餃子", "cooked_date": "2025-12-01",
        "taste_rating": "3", "time_rating": "3", "repeat_desire": "3",
    })
    records = authed_client.get("/history", params={"start": "2025-12-01", "end": "2025-12-01"}).json()
    assert [r["dish_name"] for r in records] == ["餃子"]


def test_favorite_toggle_off(authed_client):
    assert authed_client.post("/favorites/toggle", data={"dish_name": "テスト丼"}).json()["favorite"] is True
    assert authed_client.post("/favorites/toggle", data={"dish_name": "テスト丼"}).json()["favorite"] is False
    assert "テスト丼" not in authed_client.get("/favorites").json()


def test_generate_conflict_when_everything_vetoed():
    from fastapi.testclient import TestClient
    from app.main import app
    with TestClient(app, raise_server_exceptions=True) as c:
        c.post("/login", data={"household": "veto-house", "password": "testpass"})
        c.post("/family", data={"name": "花子", "dislikes": "玉ねぎ キャベツ 木綿豆腐 卵 鮭 トマト にんにく"})
        resp = c.post("/plan/generate", data={"start_date": "2026-03-02", "end_date": "2026-03-03"})
        assert resp.status_code == 409
        assert c.get("/daily-menus").json() == []
