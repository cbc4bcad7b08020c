from __future__ import annotations


def _create(client, **overrides):
    body = {"employeeId": 1, "startDate": "2025-02-03", "endDate": "2025-02-05", "type": "sick", "reason": "Flu"}
    body.update(overrides)
    return client.post("/api/leaves", json=body)


def test_create_and_get(client):
    resp = _create(client)

    assert resp.status_code == 201
    leave = resp.get_json()["leave"]
    assert leave["status"] == "pending"
    assert leave["type"] == "sick"

    got = client.get(f"/api/leaves/{leave['id']}").get_json()["leave"]
    assert got["employeeName"] == "Alice Nguyen"


def test_create_missing_reason(client):
    resp = _create(client, reason="")
    assert resp.status_code == 400
    assert resp.get_json() == {"message": "Reason is required"}


def test_approve_without_body(client):
    leave_id = _create(client).get_json()["leave"]["id"]

    resp = client.put(f"/api/leaves/{leave_id}/approve")

    assert resp.status_code == 200
    assert resp.get_json()["leave"]["adminComment"] == "Approved"
    assert client.get("/api/leaves/pending").get_json() == []


def test_reject_twice(client):
    leave_id = _create(client).get_json()["leave"]["id"]

    assert client.put(f"/api/leaves/{leave_id}/reject", json={"comment": "No cover"}).status_code == 200
    assert client.put(f"/api/leaves/{leave_id}/reject").status_code == 400


def test_update_delete_and_employee_list(client):
    leave_id = _create(client).get_json()["leave"]["id"]

    resp = client.put(f"/api/leaves/{leave_id}", json={"reason": "Doctor visit"})
    assert resp.get_json()["leave"]["reason"] == "Doctor visit"

    assert len(client.get("/api/leaves/employee/1").get_json()["leaves"]) == 1
    assert client.delete(f"/api/leaves/{leave_id}").status_code == 200
    assert client.get(f"/api/leaves/{leave_id}").status_code == 404
