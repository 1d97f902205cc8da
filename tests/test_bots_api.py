"""
Tests for state replacement and trading bot endpoints.
"""

import json

import pytest


def active_and_completed(client, email):
    state = client.get(f"/users/{email}").json()["state"]
    return state.get("activeTradingBots"), state.get("completedTradingBots")


def test_example_bot_lifecycle(client, registered):
    assert client.get(f"/users/{registered}").json()["state"] == {}

    response = client.post(f"/users/{registered}/addActiveBot", json={"id": 1, "name": "bot1"})
    assert response.status_code == 200
    assert response.json() == {"message": "Bot added successfully!", "bot": {"id": 1, "name": "bot1"}}

    response = client.put(f"/users/{registered}/moveBot/1")
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Bot moved to completed successfully!"
    assert data["movedBot"]["id"] == 1

    active, completed = active_and_completed(client, registered)
    assert active == []
    assert completed == [{"id": 1, "name": "bot1"}]


class TestUpdateState:

    def test_replaces_state_wholesale(self, client, registered):
        client.put(f"/users/{registered}/updateState", json={"theme": "dark", "activeTradingBots": [{"id": 1}]})

        response = client.put(f"/users/{registered}/updateState", json={"completedTradingBots": []})

        assert response.status_code == 200
        assert response.json() == {"message": "State updated successfully!", "state": {"completedTradingBots": []}}
        assert client.get(f"/users/{registered}").json()["state"] == {"completedTradingBots": []}

    def test_replacing_twice_matches_replacing_once(self, client, registered, store):
        new_state = {"activeTradingBots": [{"id": "x", "pair": "ETH/USD"}], "notes": {"a": [1, 2]}}

        client.put(f"/users/{registered}/updateState", json=new_state)
        once = store.path.read_bytes()
        client.put(f"/users/{registered}/updateState", json=new_state)

        assert store.path.read_bytes() == once
        assert client.get(f"/users/{registered}").json()["state"] == new_state

    def test_user_not_found(self, client):
        response = client.put("/users/missing@x.com/updateState", json={})
        assert response.status_code == 404
        assert response.json()["message"] == "User not found!"

    def test_any_object_is_stored_verbatim(self, client, registered):
        response = client.put(f"/users/{registered}/updateState", json={"activeTradingBots": "paused"})

        assert response.status_code == 200
        assert client.get(f"/users/{registered}").json()["state"] == {"activeTradingBots": "paused"}


class TestAddActiveBot:

    def test_appends_in_order(self, client, registered):
        for bot_id in (1, 2, 3):
            client.post(f"/users/{registered}/addActiveBot", json={"id": bot_id})

        active, completed = active_and_completed(client, registered)
        assert [bot["id"] for bot in active] == [1, 2, 3]
        assert completed is None

    def test_keeps_other_state_keys(self, client, registered):
        client.put(f"/users/{registered}/updateState", json={"theme": "dark"})

        client.post(f"/users/{registered}/addActiveBot", json={"id": "a"})

        state = client.get(f"/users/{registered}").json()["state"]
        assert state == {"theme": "dark", "activeTradingBots": [{"id": "a"}]}

    @pytest.mark.parametrize("duplicate", [1, "1", 1.0])
    def test_duplicate_id_rejected(self, client, registered, store, duplicate):
        client.post(f"/users/{registered}/addActiveBot", json={"id": 1})
        before = store.path.read_bytes()

        response = client.post(f"/users/{registered}/addActiveBot", json={"id": duplicate})

        assert response.status_code == 400
        assert response.json()["message"] == "Bot already exists!"
        assert store.path.read_bytes() == before

    def test_distinct_text_ids_are_different_bots(self, client, registered):
        client.post(f"/users/{registered}/addActiveBot", json={"id": "1"})

        response = client.post(f"/users/{registered}/addActiveBot", json={"id": "01"})

        assert response.status_code == 200
        active, _ = active_and_completed(client, registered)
        assert [bot["id"] for bot in active] == ["1", "01"]

    def test_id_values_are_stored_as_given(self, client, registered, store):
        response = client.post(f"/users/{registered}/addActiveBot", json={"id": True, "name": "flag"})

        assert response.json()["bot"] == {"id": True, "name": "flag"}
        stored = json.loads(store.path.read_text(encoding="utf-8"))[0]
        assert stored["state"]["activeTradingBots"] == [{"id": True, "name": "flag"}]

    def test_completed_id_cannot_be_reused(self, client, registered):
        client.post(f"/users/{registered}/addActiveBot", json={"id": 5})
        client.put(f"/users/{registered}/moveBot/5")

        response = client.post(f"/users/{registered}/addActiveBot", json={"id": 5})
        assert response.status_code == 400

    def test_user_not_found(self, client):
        response = client.post("/users/missing@x.com/addActiveBot", json={"id": 1})
        assert response.status_code == 404
        assert response.json()["message"] == "User not found!"


class TestMoveBot:

    def test_remaining_order_preserved(self, client, registered):
        client.put(f"/users/{registered}/updateState", json={
            "activeTradingBots": [{"id": 1}, {"id": 2}, {"id": 3}],
            "completedTradingBots": [{"id": 0}],
        })

        client.put(f"/users/{registered}/moveBot/2")

        active, completed = active_and_completed(client, registered)
        assert active == [{"id": 1}, {"id": 3}]
        assert completed == [{"id": 0}, {"id": 2}]

    def test_numeric_id_matches_path_text(self, client, registered):
        client.post(f"/users/{registered}/addActiveBot", json={"id": 7, "name": "seven"})

        response = client.put(f"/users/{registered}/moveBot/7.0")

        assert response.status_code == 200
        assert response.json()["movedBot"] == {"id": 7, "name": "seven"}

    def test_text_id_needs_exact_path(self, client, registered):
        client.post(f"/users/{registered}/addActiveBot", json={"id": "07"})

        assert client.put(f"/users/{registered}/moveBot/7").status_code == 404
        assert client.put(f"/users/{registered}/moveBot/07").status_code == 200

    def test_text_ids(self, client, registered):
        client.post(f"/users/{registered}/addActiveBot", json={"id": "grid-btc"})

        assert client.put(f"/users/{registered}/moveBot/grid-btc").status_code == 200

    def test_unknown_bot_leaves_lists_unchanged(self, client, registered, store):
        client.post(f"/users/{registered}/addActiveBot", json={"id": 1})
        before = store.path.read_bytes()

        response = client.put(f"/users/{registered}/moveBot/99")

        assert response.status_code == 404
        assert response.json()["message"] == "Active bot not found!"
        assert store.path.read_bytes() == before

    def test_moving_twice_fails_second_time(self, client, registered):
        client.post(f"/users/{registered}/addActiveBot", json={"id": 1})
        assert client.put(f"/users/{registered}/moveBot/1").status_code == 200

        response = client.put(f"/users/{registered}/moveBot/1")

        assert response.status_code == 404
        active, completed = active_and_completed(client, registered)
        assert active == []
        assert completed == [{"id": 1}]

    def test_user_not_found(self, client):
        response = client.put("/users/missing@x.com/moveBot/1")
        assert response.status_code == 404
        assert response.json()["message"] == "User not found!"


class TestMalformedStoredState:

    @pytest.fixture
    def legacy_store(self, store):
        store.path.write_text(json.dumps([
            {"username": "ann", "email": "a@x.com", "password": "pw123", "state": {}},
            {"username": "bob", "email": "b@x.com", "password": "pw123",
             "state": {"activeTradingBots": ["legacy-string-bot"]}},
        ]), encoding="utf-8")
        return store

    def test_other_users_are_unaffected(self, client, legacy_store):
        assert client.get("/users/a@x.com").status_code == 200
        assert client.post("/login", json={"email": "a@x.com", "password": "pw123"}).status_code == 200
        assert client.post("/register", json={
            "username": "cat",
            "email": "c@x.com",
            "password": "pw123",
            "confirmPassword": "pw123",
        }).status_code == 201
        assert client.post("/users/a@x.com/addActiveBot", json={"id": 1}).status_code == 200

    def test_bot_operations_fail_for_that_user_only(self, client, legacy_store):
        before = legacy_store.path.read_bytes()

        added = client.post("/users/b@x.com/addActiveBot", json={"id": 1})
        moved = client.put("/users/b@x.com/moveBot/1")

        assert added.status_code == 400
        assert added.json()["message"] == "Trading bot state is malformed!"
        assert moved.status_code == 400
        assert legacy_store.path.read_bytes() == before

    def test_state_can_be_repaired(self, client, legacy_store):
        client.put("/users/b@x.com/updateState", json={"activeTradingBots": []})

        assert client.post("/users/b@x.com/addActiveBot", json={"id": 1}).status_code == 200
