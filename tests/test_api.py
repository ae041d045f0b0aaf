def post(client, url, body=None):
    return client.post(url, json=body if body is not None else {})


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------
def test_registry_lists_algorithms_and_structures(client):
    data = client.get("/api/algorithms").get_json()

    keys = [a["key"] for a in data["algorithms"]]
    assert "binary_search" in keys and "brute_force" in keys
    ring = next(s for s in data["structures"] if s["key"] == "circular_queue")
    assert ring["defaults"] == {"capacity": 8}
    assert "enqueue" in ring["commands"]


# ---------------------------------------------------------------------------
# Plan / compare
# ---------------------------------------------------------------------------
def test_plan_returns_steps_and_metrics(client):
    resp = post(client, "/api/plan", {"algorithm": "bubble_sort", "input": {"values": "5, 3 8"}})
    data = resp.get_json()

    assert resp.status_code == 200
    assert data["steps"][-1]["state"]["array"] == [3, 5, 8]
    assert data["steps"][-1]["is_final"] is True
    assert data["metrics"]["sorted"] is True
    assert data["total_steps"] == len(data["steps"])


def test_plan_enforces_input_limits(client):
    resp = post(client, "/api/plan", {"algorithm": "merge_sort", "input": {"values": list(range(9))}})

    assert resp.status_code == 400
    assert resp.get_json()["type"] == "InvalidInputError"


def test_plan_unknown_algorithm(client):
    resp = post(client, "/api/plan", {"algorithm": "nope", "input": {}})
    assert resp.status_code == 400
    assert "Unknown algorithm" in resp.get_json()["error"]


def test_plan_rejects_non_object_body(client):
    resp = client.post("/api/plan", json=[1, 2])
    assert resp.status_code == 400


def test_compare(client):
    resp = post(client, "/api/compare", {
        "left": "bubble_sort", "right": "merge_sort", "input": {"values": [3, 2, 1]},
    })
    data = resp.get_json()

    assert resp.status_code == 200
    assert data["winner_comparisons"] == "merge_sort"


def test_compare_unknown_algorithm(client):
    resp = post(client, "/api/compare", {"left": "bubble_sort", "right": "circular_queue", "input": {"values": [1]}})
    assert resp.status_code == 400


# ---------------------------------------------------------------------------
# Step navigation
# ---------------------------------------------------------------------------
def test_navigation_without_a_run(client):
    resp = post(client, "/api/step/next")
    assert resp.status_code == 400


def test_step_navigation(client):
    post(client, "/api/plan", {"algorithm": "binary_search", "input": {"values": [1, 3, 5, 7], "key": 7}})

    assert post(client, "/api/step/prev").status_code == 400

    data = post(client, "/api/step/next").get_json()
    assert data["current_step"] == 1
    assert data["step"]["step_number"] == 1

    data = post(client, "/api/step/goto", {"index": 0}).get_json()
    assert data["step"]["kind"] == "compare"

    last = data["total_steps"] - 1
    data = post(client, "/api/step/goto", {"index": last}).get_json()
    assert data["step"]["kind"] == "accept"
    assert post(client, "/api/step/next").status_code == 400

    assert post(client, "/api/step/goto", {"index": 99}).status_code == 400
    assert post(client, "/api/step/goto", {"index": "1"}).status_code == 400


# ---------------------------------------------------------------------------
# Live structures
# ---------------------------------------------------------------------------
def test_circular_queue_session(client):
    for v in range(1, 9):
        resp = post(client, "/api/structures/circular_queue/enqueue", {"args": [v]})
        assert resp.get_json()["steps"][0]["kind"] == "enqueue"

    data = post(client, "/api/structures/circular_queue/enqueue", {"args": [9]}).get_json()
    assert data["steps"][0]["kind"] == "reject"
    assert data["steps"][0]["overlay"]["reason"] == "full"

    state = client.get("/api/structures/circular_queue").get_json()["state"]
    assert state["slots"] == [1, 2, 3, 4, 5, 6, 7, 8]
    assert len(client.get("/api/structures/circular_queue").get_json()["history"]) == 9


def test_structure_reset(client):
    post(client, "/api/structures/stack/push", {"args": 4})
    data = post(client, "/api/structures/stack/reset").get_json()
    assert data["state"]["items"] == []
    assert data["history"] == []

    again = post(client, "/api/structures/stack/reset").get_json()
    assert again == data


def test_structure_create_with_input(client):
    resp = post(client, "/api/structures/token_bucket", {"capacity": 10})
    assert resp.get_json()["state"]["tokens"] == 10

    steps = [post(client, "/api/structures/token_bucket/request", {"args": [5]}).get_json()["steps"][0]
             for _ in range(3)]
    assert [s["kind"] for s in steps] == ["accept", "accept", "reject"]
    assert steps[-1]["overlay"]["reason"] == "rate-limited"


def test_bst_duplicate_across_requests(client):
    post(client, "/api/structures/bst", {"keys": "5 3 8"})
    data = post(client, "/api/structures/bst/insert", {"args": [3]}).get_json()

    assert data["steps"][-1]["overlay"]["reason"] == "duplicate"
    assert data["state"]["size"] == 3


def test_structure_errors_map_to_400(client):
    resp = post(client, "/api/structures/linked_list/remove_at", {"args": [3]})
    assert resp.status_code == 200
    assert resp.get_json()["steps"][0]["overlay"]["reason"] == "empty"

    post(client, "/api/structures/linked_list/insert_head", {"args": [1]})
    resp = post(client, "/api/structures/linked_list/remove_at", {"args": [3]})
    assert resp.status_code == 400
    assert resp.get_json()["type"] == "InvalidInputError"

    assert client.get("/api/structures/heap").status_code == 400
    resp = post(client, "/api/structures/bst/bfs")
    assert resp.get_json()["type"] == "EmptyStructureError"


def test_structure_session_cookie_stays_small(client):
    for v in range(500):
        post(client, "/api/structures/circular_queue/enqueue", {"args": [1_000_000 + v]})
        post(client, "/api/structures/circular_queue/dequeue")

    cookie = client.get_cookie("session")
    assert cookie is not None
    assert len(cookie.value) < 4093
    assert len(client.get("/api/structures/circular_queue").get_json()["history"]) <= 20


def test_null_args_mean_no_arguments(client):
    post(client, "/api/structures/stack/push", {"args": [3]})
    resp = post(client, "/api/structures/stack/pop", {"args": None})

    assert resp.status_code == 200
    assert resp.get_json()["steps"][0]["kind"] == "pop"


def test_linked_list_clear_through_the_api(client):
    post(client, "/api/structures/linked_list", {"values": [1, 2]})
    data = post(client, "/api/structures/linked_list/clear").get_json()

    assert [s["kind"] for s in data["steps"]] == ["remove", "remove"]
    assert data["state"]["values"] == []
