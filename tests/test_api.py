from family_portal.services.notifications import EventKind


def _member(client, name="Ana", points=0, role="Child", pin="1234"):
    resp = client.post("/members", json={"name": name, "pin": pin, "role": role, "points": points})
    assert resp.status_code == 201, resp.text
    return resp.json()


def _task(client, member_id, points=200, recurrence="none", title="Make the bed"):
    resp = client.post(
        "/tasks",
        json={
            "member_id": member_id,
            "title": title,
            "points": points,
            "category": "Chores",
            "recurrence": recurrence,
            "schedule": {"start": "07:00", "end": "08:00"},
        },
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def _reward(client, cost, title="Movie night"):
    resp = client.post("/rewards", json={"title": title, "cost": cost, "category": "Leisure"})
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_daily_task_scenario(client, clock, adult_headers):
    member = _member(client)
    task = _task(client, member["id"], points=200, recurrence="daily")
    assert task["schedule_start"] == "07:00"

    resp = client.post(f"/tasks/{task['id']}/toggle", json={"member_id": member["id"]})
    assert resp.status_code == 200
    assert resp.json() == {"completed": True, "new_points": 200, "current_streak": 1, "longest_streak": 1}

    clock.advance(days=1)
    resp = client.post("/tasks/reset-recurring", headers=adult_headers)
    assert resp.json() == {"reset": 1}

    detail = client.get(f"/members/{member['id']}").json()
    assert detail["points"] == 200
    assert detail["current_streak"] == 1
    assert detail["tasks"][0]["completed"] is False

    resp = client.post(f"/tasks/{task['id']}/toggle", json={"member_id": member["id"]})
    assert resp.json()["new_points"] == 400
    assert resp.json()["current_streak"] == 2


def test_toggle_unknown_task_is_404(client):
    member = _member(client)
    resp = client.post("/tasks/nope/toggle", json={"member_id": member["id"]})
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Task not found"


def test_toggle_sends_notification(client, notifier):
    member = _member(client)
    task = _task(client, member["id"], points=30)

    client.post(f"/tasks/{task['id']}/toggle", json={"member_id": member["id"]})

    assert [e.kind for e in notifier.events] == [EventKind.TASK_COMPLETED]
    assert notifier.events[0].new_balance == 30


def test_redeem_below_threshold(client):
    member = _member(client, points=1000)
    reward = _reward(client, cost=1000)

    resp = client.post(f"/rewards/{reward['id']}/redeem", json={"member_id": member["id"]})

    assert resp.status_code == 200
    assert resp.json() == {"settled": True, "requires_approval": False, "request_id": None, "new_points": 0}


def test_redeem_insufficient_points_is_400(client):
    member = _member(client, points=10)
    reward = _reward(client, cost=11)

    resp = client.post(f"/rewards/{reward['id']}/redeem", json={"member_id": member["id"]})

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Insufficient points"
    assert client.get(f"/members/{member['id']}").json()["points"] == 10


def test_redeem_unknown_member_is_404(client):
    reward = _reward(client, cost=5)
    resp = client.post(f"/rewards/{reward['id']}/redeem", json={"member_id": "ghost"})
    assert resp.status_code == 404


def test_approval_flow(client, adult_headers, notifier):
    member = _member(client, points=2000)
    reward = _reward(client, cost=1500, title="Theme park")

    redeemed = client.post(f"/rewards/{reward['id']}/redeem", json={"member_id": member["id"]}).json()
    assert redeemed["requires_approval"] is True
    assert redeemed["new_points"] == 500

    pending = client.get("/rewards/requests/pending").json()
    assert [r["id"] for r in pending] == [redeemed["request_id"]]
    assert pending[0]["status"] == "pending"

    resp = client.post(
        f"/rewards/requests/{redeemed['request_id']}/process",
        json={"approve": False},
        headers=adult_headers,
    )
    assert resp.status_code == 200
    assert resp.json() == {"approved": False, "status": "denied", "new_points": 2000}
    assert client.get("/rewards/requests/pending").json() == []

    again = client.post(
        f"/rewards/requests/{redeemed['request_id']}/process",
        json={"approve": True},
        headers=adult_headers,
    )
    assert again.status_code == 409
    assert client.get(f"/members/{member['id']}").json()["points"] == 2000
    assert [e.kind for e in notifier.events] == [EventKind.REWARD_REQUESTED, EventKind.REQUEST_DENIED]


def test_process_requires_approve_flag(client, adult_headers):
    member = _member(client, points=2000)
    reward = _reward(client, cost=1500)
    request_id = client.post(f"/rewards/{reward['id']}/redeem", json={"member_id": member["id"]}).json()["request_id"]

    resp = client.post(f"/rewards/requests/{request_id}/process", json={}, headers=adult_headers)
    assert resp.status_code == 400


def test_process_needs_an_adult(client):
    child = _member(client, name="Leo", pin="4321")
    token = client.post("/auth/pin", json={"member_id": child["id"], "pin": "4321"}).json()["access_token"]

    resp = client.post(
        "/rewards/requests/whatever/process",
        json={"approve": True},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert resp.status_code == 403
    assert client.post("/rewards/requests/whatever/process", json={"approve": True}).status_code == 401


def test_process_unknown_request_is_404(client, adult_headers):
    resp = client.post("/rewards/requests/nope/process", json={"approve": True}, headers=adult_headers)
    assert resp.status_code == 404


def test_wrong_pin_is_rejected(client):
    member = _member(client)
    resp = client.post("/auth/pin", json={"member_id": member["id"], "pin": "0000"})
    assert resp.status_code == 401


def test_adjust_points(client, adult_headers):
    member = _member(client, points=20)

    resp = client.post(f"/members/{member['id']}/adjust-points", json={"amount": -50}, headers=adult_headers)
    assert resp.json() == {"new_points": 0}

    resp = client.post(f"/members/{member['id']}/adjust-points", json={"reason": "x"}, headers=adult_headers)
    assert resp.status_code == 400

    resp = client.post(f"/members/{member['id']}/adjust-points", json={"amount": 30}, headers=adult_headers)
    assert resp.json() == {"new_points": 30}

    logs = client.get(f"/logs/member/{member['id']}").json()
    assert {entry["action"]: entry["type"] for entry in logs} == {
        "Points adjusted (-50 points)": "warning",
        "Points adjusted (+30 points)": "success",
    }


def test_point_loss_punishment(client, adult_headers):
    member = _member(client, points=100)

    resp = client.post(
        f"/members/{member['id']}/punishments",
        json={"type": "PointLoss", "amount": 30, "reason": "Late"},
        headers=adult_headers,
    )
    assert resp.status_code == 201
    assert resp.json()["new_points"] == 70

    missing = client.post(
        f"/members/{member['id']}/punishments",
        json={"type": "PointLoss", "reason": "Late"},
        headers=adult_headers,
    )
    assert missing.status_code == 400
    assert len(client.get(f"/members/{member['id']}/punishments").json()) == 1


def test_block_punishment_keeps_points(client, adult_headers):
    member = _member(client, points=100)

    resp = client.post(
        f"/members/{member['id']}/punishments",
        json={"type": "Block", "duration": 2, "reason": "Screen time"},
        headers=adult_headers,
    )
    assert resp.json()["new_points"] == 100
    assert resp.json()["punishment"]["duration"] == 2


def test_delete_member_cascades(client, adult_headers):
    member = _member(client, points=2000)
    _task(client, member["id"])
    reward = _reward(client, cost=1500)
    client.post(f"/rewards/{reward['id']}/redeem", json={"member_id": member["id"]})
    client.post(
        f"/members/{member['id']}/punishments",
        json={"type": "Block", "duration": 1},
        headers=adult_headers,
    )

    assert client.delete(f"/members/{member['id']}").status_code == 200

    assert client.get(f"/members/{member['id']}").status_code == 404
    assert client.get("/rewards/requests/pending").json() == []
    assert client.get(f"/tasks/member/{member['id']}").status_code == 404
    # activity entries stay, detached from the member
    assert any(entry["member_id"] is None for entry in client.get("/logs").json())


def test_rewards_listed_by_cost(client):
    _reward(client, cost=300, title="Cinema")
    _reward(client, cost=50, title="Candy")
    assert [r["title"] for r in client.get("/rewards").json()] == ["Candy", "Cinema"]


def test_update_task_and_reward(client):
    member = _member(client)
    task = _task(client, member["id"])
    reward = _reward(client, cost=10)

    resp = client.put(f"/tasks/{task['id']}", json={"points": 15, "recurrence": "weekly"})
    assert resp.json()["points"] == 15
    assert resp.json()["recurrence"] == "weekly"

    resp = client.put(f"/rewards/{reward['id']}", json={"cost": 99})
    assert resp.json()["cost"] == 99

    assert client.put("/rewards/nope", json={"cost": 1}).status_code == 404


def test_invalid_schedule_is_rejected(client):
    member = _member(client)
    resp = client.post(
        "/tasks",
        json={
            "member_id": member["id"],
            "title": "Piano",
            "points": 10,
            "category": "School",
            "schedule": {"start": "25:00"},
        },
    )
    assert resp.status_code == 422


def test_manual_log_entry(client, adult_headers):
    member = _member(client)

    resp = client.post(
        "/logs",
        json={"member_id": member["id"], "action": "Screen time extended", "type": "warning"},
        headers=adult_headers,
    )
    assert resp.status_code == 201
    entry = resp.json()
    assert entry["member_name"] == "Ana"
    assert entry["type"] == "warning"

    resp = client.post("/logs", json={"action": "House rules updated"}, headers=adult_headers)
    assert resp.status_code == 201
    assert resp.json()["member_id"] is None
    assert resp.json()["type"] == "info"

    assert client.post("/logs", json={"member_id": member["id"]}, headers=adult_headers).status_code == 400
    assert client.post("/logs", json={"member_id": "nope", "action": "x"}, headers=adult_headers).status_code == 404
    assert client.post("/logs", json={"action": "x"}).status_code == 401

    logs = client.get(f"/logs/member/{member['id']}").json()
    assert [e["action"] for e in logs] == ["Screen time extended"]
