"""HTTP surface tests using FastAPI TestClient."""

from datetime import date

HEADERS = {"X-User-Id": "staff-1"}


def _contract_payload(child, package, status="pending"):
    return {
        "parent_id": child.parent_id,
        "child_id": child.id,
        "package_id": package.id,
        "start_date": "2024-01-06",
        "end_date": "2024-02-04",
        "start_time": "16:00:00",
        "end_time": "18:00:00",
        "days_of_week": 62,
        "is_online": True,
        "status": status,
    }


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_create_and_read_contract(client, factory):
    child = factory.child()
    package = factory.package()

    response = client.post("/contracts", json=_contract_payload(child, package), headers=HEADERS)

    assert response.status_code == 201
    contract_id = response.json()["contract_id"]
    view = client.get(f"/contracts/{contract_id}").json()
    assert view["status"] == "pending"
    assert view["days_of_week_display"] == "T2, T3, T4, T5, T6"


def test_invalid_status_is_bad_request(client, factory):
    response = client.post(
        "/contracts", json=_contract_payload(factory.child(), factory.package(), status="invalid"), headers=HEADERS
    )

    assert response.status_code == 400
    assert response.json() == {"detail": "Invalid status."}


def test_missing_user_header(client, factory):
    response = client.post("/contracts", json=_contract_payload(factory.child(), factory.package()))
    assert response.status_code == 401


def test_unknown_contract_is_not_found(client):
    assert client.get("/contracts/missing").status_code == 404
    response = client.put("/contracts/missing/status", json={"status": "active"}, headers=HEADERS)
    assert response.status_code == 404


def test_status_transition(client, factory):
    contract = factory.contract(factory.child(), factory.package())

    ok = client.put(f"/contracts/{contract.id}/status", json={"status": "active"}, headers=HEADERS)
    illegal = client.put(f"/contracts/{contract.id}/status", json={"status": "pending"}, headers=HEADERS)

    assert ok.json() == {"updated": True}
    assert illegal.status_code == 400


def test_schedule_preview(client):
    response = client.get(
        "/contracts/schedule-preview",
        params={
            "start_date": "2024-01-06",
            "end_date": "2024-02-04",
            "days_of_week": 62,
            "start_time": "16:00",
            "end_time": "18:00",
            "session_count": 10,
        },
    )

    slots = response.json()
    assert len(slots) == 10
    assert slots[0]["session_date"] == "2024-01-08"


def test_progress_without_sessions_is_not_found(client, factory):
    contract = factory.contract(factory.child(), factory.package())

    assert client.get(f"/contracts/{contract.id}/unit-progress").status_code == 404


def test_completion_forecast(client, factory, enrolled_child):
    units = [factory.unit(enrolled_child["curriculum"], order) for order in range(1, 5)]
    factory.report(
        enrolled_child["child"], enrolled_child["tutor"], enrolled_child["sessions"][0], units[0], date(2024, 1, 1)
    )

    body = client.get(f"/children/{enrolled_child['child'].id}/completion-forecast").json()

    assert body["total_units_to_complete"] == 3
    assert body["weeks_to_completion"] == 6.0


def test_push_to_offline_user(client):
    response = client.post(
        "/notifications/offline-user",
        json={"title": "Hi", "message": "Your lesson moved"},
        headers=HEADERS,
    )
    assert response.json() == {"delivered": False}
