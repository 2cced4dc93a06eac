import json


def _read(data_dir, key):
    path = data_dir / f"{key}.json"
    return json.loads(path.read_text(encoding="utf-8"))


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.get_json() == {"success": True, "data": {"status": "ok"}, "error": None}


def test_cors_headers(client):
    resp = client.get("/health", headers={"Origin": "http://example.test"})

    assert resp.headers["Access-Control-Allow-Origin"] == "*"


def test_cors_preflight_echoes_requested_headers(client):
    resp = client.options(
        "/reserve",
        headers={
            "Origin": "http://example.test",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "content-type, x-requested-with",
        },
    )

    assert resp.status_code == 200
    assert resp.headers["Access-Control-Allow-Origin"] == "*"
    assert "POST" in resp.headers["Access-Control-Allow-Methods"]
    allowed = resp.headers["Access-Control-Allow-Headers"].lower()
    assert "x-requested-with" in allowed
    assert "content-type" in allowed


def test_cors_restricted_origins(store, clock, timer, data_dir):
    from weeklydraw import create_app

    app = create_app(
        {"DATA_DIR": str(data_dir), "SCHEDULER_ENABLED": False, "CORS_ORIGINS": "http://front.test"},
        store=store,
        clock=clock,
        timer=timer,
    )
    client = app.test_client()

    allowed = client.get("/health", headers={"Origin": "http://front.test"})
    other = client.get("/health", headers={"Origin": "http://evil.test"})

    assert allowed.headers["Access-Control-Allow-Origin"] == "http://front.test"
    assert "Access-Control-Allow-Origin" not in other.headers


def test_unknown_route_is_json_404(client):
    resp = client.get("/nope")

    assert resp.status_code == 404
    assert resp.get_json()["success"] is False


# --- reservations ------------------------------------------------------------


def test_reserve_then_release(client):
    resp = client.post("/reserve", json={"number": 42, "nickname": "Bob"})
    assert resp.status_code == 200
    assert resp.get_json()["success"] is True

    names = client.get("/names").get_json()["data"]
    assert {"number": 42, "nickname": "Bob"} in names

    client.post("/reserve", json={"number": 42, "nickname": ""})
    names = client.get("/names").get_json()["data"]
    assert all(item["number"] != 42 for item in names)


def test_reserve_replaces_owner(client):
    client.post("/reserve", json={"number": 7, "nickname": "Ann"})
    client.post("/reserve", json={"number": 7, "nickname": "Max"})

    assert client.get("/names").get_json()["data"] == [{"number": 7, "nickname": "Max"}]


def test_blank_nickname_is_not_persisted(client, data_dir):
    client.post("/reserve", json={"number": 3, "nickname": "   "})

    assert _read(data_dir, "names") == []


def test_reserve_requires_number(client):
    resp = client.post("/reserve", json={"nickname": "Bob"})

    body = resp.get_json()
    assert resp.status_code == 400
    assert body["success"] is False
    assert body["message"]
    assert "number" in body["error"]["details"]


def test_reserve_rejects_out_of_range(client):
    assert client.post("/reserve", json={"number": 101, "nickname": "X"}).status_code == 400
    assert client.post("/reserve", json={"number": 0, "nickname": "X"}).status_code == 400


def test_clear_names(client):
    client.post("/reserve", json={"number": 1, "nickname": "A"})
    client.post("/reserve", json={"number": 2, "nickname": "B"})

    assert client.post("/clear-names").status_code == 200
    assert client.get("/names").get_json()["data"] == []


# --- prizes ------------------------------------------------------------------


def test_update_existing_prize(client, write_json, data_dir):
    write_json("prizes", [{"prize": "T-Shirt", "count": 10}, {"prize": "Mug", "count": 2}])

    resp = client.post("/update-prize", json={"prize": "T-Shirt", "count": 3})

    assert resp.status_code == 200
    assert resp.get_json()["data"] == {"prize": "T-Shirt", "count": 3}
    assert _read(data_dir, "prizes") == [{"prize": "T-Shirt", "count": 3}, {"prize": "Mug", "count": 2}]


def test_update_unknown_prize_does_not_write(client, write_json, data_dir):
    write_json("prizes", [{"prize": "Mug", "count": 2}])
    before = (data_dir / "prizes.json").read_bytes()

    resp = client.post("/update-prize", json={"prize": "T-Shirt", "count": 3})

    assert resp.status_code == 404
    assert resp.get_json()["success"] is False
    assert (data_dir / "prizes.json").read_bytes() == before


def test_update_prize_validation(client):
    assert client.post("/update-prize", json={"prize": "Mug", "count": -1}).status_code == 400
    assert client.post("/update-prize", json={"prize": "", "count": 1}).status_code == 400
    assert client.post("/update-prize", json={"prize": "Mug"}).status_code == 400


def test_prizes_missing_collection(client):
    assert client.get("/prizes").status_code == 404


def test_list_prizes(client, write_json):
    write_json("prizes", [{"prize": "Mug", "count": 2}])

    assert client.get("/prizes").get_json()["data"] == [{"prize": "Mug", "count": 2}]


# --- history -----------------------------------------------------------------


def test_history_empty_when_absent(client):
    assert client.get("/history").get_json()["data"] == []


def test_add_history_defaults(client):
    resp = client.post("/add-history", json={"date": "13.10.2026", "number": "17"})

    assert resp.status_code == 201
    record = client.get("/history").get_json()["data"][0]
    assert record["number"] == 17
    assert record["name"] == "Unknown"
    assert record["prize"] == ""


def test_add_history_keeps_chosen_number(client, data_dir):
    client.post("/add-history", json={"date": "13.10.2026", "number": 17, "name": "Eve", "chosenNumber": "21"})

    assert _read(data_dir, "history")[0]["chosenNumber"] == "21"


def test_add_history_validation(client):
    assert client.post("/add-history", json={"date": "2026-10-13", "number": 5}).status_code == 400
    assert client.post("/add-history", json={"number": 5}).status_code == 400
    assert client.post("/add-history", json={"date": "13.10.2026"}).status_code == 400


def test_update_winner(client, write_json, data_dir):
    write_json("history", [{"date": "13.10.2026", "number": 17, "name": "", "prize": ""}])

    resp = client.post("/update-winner", json={"date": "13.10.2026", "number": 17, "name": "Eve"})

    assert resp.status_code == 200
    assert _read(data_dir, "history")[0]["name"] == "Eve"

    missing = client.post("/update-winner", json={"date": "13.10.2026", "number": 18, "name": "Eve"})
    assert missing.status_code == 404


def test_update_winner_prize(client, write_json):
    write_json(
        "history",
        [
            {"date": "13.10.2026", "number": 17, "name": "Eve", "prize": ""},
            {"date": "10.10.2026", "number": 4, "name": "Eve", "prize": ""},
        ],
    )

    resp = client.post("/update-winner-prize", json={"date": "13.10.2026", "name": "Eve", "prize": "Mug"})

    assert resp.status_code == 200
    history = resp.get_json()["data"]["history"]
    assert [r["prize"] for r in history] == ["Mug", ""]

    missing = client.post("/update-winner-prize", json={"date": "13.10.2026", "name": "Bob", "prize": "Mug"})
    assert missing.status_code == 404


def test_delete_history(client, write_json, data_dir):
    write_json(
        "history",
        [
            {"date": "13.10.2026", "number": 17, "name": "", "prize": ""},
            {"date": "10.10.2026", "number": 4, "name": "", "prize": ""},
        ],
    )

    assert client.post("/delete-history", json={"date": "13.10.2026", "number": 17}).status_code == 200
    assert client.delete("/history/10.10.2026/4").status_code == 200
    assert _read(data_dir, "history") == []
    assert client.delete("/history/10.10.2026/4").status_code == 404


def test_save_history_replaces_collection(client, write_json, data_dir):
    write_json("history", [{"date": "13.10.2026", "number": 17, "name": "", "prize": ""}])

    resp = client.post("/save-history", json=[{"date": "10.10.2026", "number": 4}])

    assert resp.status_code == 200
    assert _read(data_dir, "history") == [{"date": "10.10.2026", "number": 4, "name": "", "prize": ""}]

    wrapped = client.post("/save-history", json={"history": []})
    assert wrapped.status_code == 200
    assert _read(data_dir, "history") == []


def test_save_history_rejects_invalid_records(client, write_json, data_dir):
    original = [{"date": "13.10.2026", "number": 17, "name": "", "prize": ""}]
    write_json("history", original)

    garbage = client.post("/save-history", json=[{"date": "garbage", "number": 500}])
    out_of_range = client.post("/save-history", json={"history": [{"date": "10.10.2026", "number": 0}]})

    assert garbage.status_code == 400
    assert garbage.get_json()["error"]["code"] == "validation_error"
    assert out_of_range.status_code == 400
    assert _read(data_dir, "history") == original


def test_corrupt_stored_number_is_store_error(client, write_json):
    write_json("history", [{"date": "13.10.2026", "number": "seventeen", "name": "", "prize": ""}])

    resp = client.post("/update-winner", json={"date": "13.10.2026", "number": 17, "name": "Ann"})

    assert resp.status_code == 500
    assert resp.get_json()["error"]["code"] == "store_unavailable"
    assert resp.get_json()["error"]["message"] == "Corrupt collection"


# --- auth --------------------------------------------------------------------


def test_auth(client):
    assert client.post("/auth", json={"password": "1001"}).get_json()["success"] is True

    resp = client.post("/auth", json={"password": "nope"})
    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


# --- archives ----------------------------------------------------------------


def test_log_directory_missing(client):
    assert client.get("/log").status_code == 404


def test_save_and_read_log(client, write_json):
    write_json("history", [{"date": "13.10.2026", "number": 17, "name": "Eve", "prize": ""}])
    client.post("/reserve", json={"number": 5, "nickname": "Ann"})

    resp = client.post("/save-to-log", json={"filename": "week-42.json"})
    assert resp.status_code == 201
    assert resp.get_json()["data"] == {"filename": "week-42.json"}

    assert client.get("/log").get_json()["data"] == ["week-42.json"]
    snapshot = client.get("/log/week-42.json").get_json()["data"]
    assert snapshot["history"][0]["name"] == "Eve"
    assert snapshot["names"] == [{"number": 5, "nickname": "Ann"}]

    assert client.post("/save-to-log", json={"filename": "week-42.json"}).status_code == 409
    assert client.get("/log/other.json").status_code == 404


def test_save_to_log_default_name(client):
    resp = client.post("/save-to-log", json={})

    assert resp.status_code == 201
    assert resp.get_json()["data"]["filename"] == "history-2026-10-14-120000.json"


def test_log_rejects_non_json_names(client):
    assert client.post("/save-to-log", json={"filename": "notes.txt"}).status_code == 400


# --- scheduler status --------------------------------------------------------


def test_next_draw_when_scheduler_disabled(client):
    body = client.get("/next-draw").get_json()["data"]

    assert body["state"] is None
    assert body["next_draw_at"] == "2026-10-17T00:01:00+03:00"
