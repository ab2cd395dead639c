import pytest
from datetime import date, timedelta


def _create_leave_request(client, employee_id, leave_type="annual", days=3, **extra):
    start = date.today() + timedelta(days=10)
    end = start + timedelta(days=days - 1)
    payload = {
        "employee_id": employee_id,
        "type": leave_type,
        "start_date": start.isoformat(),
        "end_date": end.isoformat(),
        "reason": "Family visit",
    }
    payload.update(extra)
    return client.post("/api/leaves", json=payload)


def _decide(client, leave_id, role, decision="approved", **extra):
    payload = {"role": role, "decision": decision, "approver_name": f"{role.upper()} Office"}
    payload.update(extra)
    return client.post(f"/api/leaves/{leave_id}/decisions", json=payload)


def test_create_leave_request(client, create_employee):
    """Test creating a leave request."""
    employee = create_employee()
    response = _create_leave_request(client, employee["id"])
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "Pending"
    assert data["current_approver"] == "hod"
    assert data["days"] == 3
    assert [s["role"] for s in data["approval_chain"]] == ["hod", "dean", "hr"]
    assert data["employee"]["employee_name"] == "Sara Khan"


def test_standard_leave_happy_path(client, create_employee):
    """HOD -> Dean (with split) -> HR, then the annual balance drops by 3."""
    employee = create_employee()
    leave_id = _create_leave_request(client, employee["id"]).json()["id"]

    response = _decide(client, leave_id, "hod")
    assert response.status_code == 200
    assert response.json()["status"] == "Forwarded"
    assert response.json()["current_approver"] == "dean"

    response = _decide(client, leave_id, "dean", metadata={"paid_days": 3, "unpaid_days": 0})
    assert response.json()["status"] == "Forwarded"
    assert response.json()["current_approver"] == "hr"
    assert response.json()["paid_days"] == 3

    response = _decide(client, leave_id, "hr", decision="Approve", metadata={"leave_category": "Earned"})
    data = response.json()
    assert data["status"] == "Approved"
    assert data["current_approver"] is None
    assert data["leave_category"] == "Earned"

    balance = client.get(f"/api/employees/{employee['id']}").json()["leave_balance"]
    assert balance["annual"] == 17


def test_medical_leave_rejection(client, create_employee):
    employee = create_employee()
    leave = _create_leave_request(client, employee["id"], leave_type="medical").json()
    assert [s["role"] for s in leave["approval_chain"]] == ["hod", "vc", "president"]

    _decide(client, leave["id"], "hod")
    response = _decide(client, leave["id"], "vc", decision="rejected", comment="insufficient documentation")
    data = response.json()
    assert data["status"] == "Rejected"
    assert data["approval_chain"][2]["status"] == "pending"
    assert data["approval_chain"][1]["comment"] == "insufficient documentation"


def test_out_of_order_decision_conflicts(client, create_employee):
    employee = create_employee()
    leave_id = _create_leave_request(client, employee["id"]).json()["id"]
    response = _decide(client, leave_id, "hr")
    assert response.status_code == 409
    error = response.json()["errors"][0]
    assert error["code"] == "OUT_OF_ORDER_APPROVAL"
    assert error["details"]["expected_role"] == "hod"


def test_role_outside_chain_conflicts(client, create_employee):
    employee = create_employee()
    leave_id = _create_leave_request(client, employee["id"]).json()["id"]
    response = _decide(client, leave_id, "vc")
    assert response.status_code == 409
    assert response.json()["errors"][0]["code"] == "ROLE_NOT_IN_CHAIN"


def test_decided_leave_is_final(client, create_employee):
    employee = create_employee()
    leave_id = _create_leave_request(client, employee["id"]).json()["id"]
    _decide(client, leave_id, "hod", decision="rejected")
    response = _decide(client, leave_id, "hod")
    assert response.status_code == 409
    assert response.json()["errors"][0]["code"] == "INVALID_TRANSITION"


def test_invalid_split_is_rejected(client, create_employee):
    employee = create_employee()
    leave_id = _create_leave_request(client, employee["id"]).json()["id"]
    _decide(client, leave_id, "hod")
    response = _decide(client, leave_id, "dean", metadata={"paid_days": 5})
    assert response.status_code == 422
    assert response.json()["errors"][0]["code"] == "VALIDATION_ERROR"
    assert client.get(f"/api/leaves/{leave_id}").json()["current_approver"] == "dean"


@pytest.mark.parametrize("payload_change,status_code", [
    ({"decision": "maybe"}, 422),
    ({"role": "janitor"}, 422),
    ({"approver_name": ""}, 422),
])
def test_malformed_decisions(client, create_employee, payload_change, status_code):
    employee = create_employee()
    leave_id = _create_leave_request(client, employee["id"]).json()["id"]
    payload = {"role": "hod", "decision": "approved", "approver_name": "Dr. Hassan"}
    payload.update(payload_change)
    response = client.post(f"/api/leaves/{leave_id}/decisions", json=payload)
    assert response.status_code == status_code
    assert response.json()["success"] is False


def test_unknown_leave_and_employee(client):
    response = client.get("/api/leaves/missing")
    assert response.status_code == 404
    assert response.json()["errors"][0]["code"] == "REQUEST_NOT_FOUND"

    response = _create_leave_request(client, "missing")
    assert response.status_code == 404
    assert response.json()["errors"][0]["code"] == "EMPLOYEE_NOT_FOUND"


def test_maternity_blocked_for_male_employee(client, create_employee):
    employee = create_employee(code="EMP101", name="Omar Farooq", email="omar@university.edu", gender="male")
    eligibility = client.get(f"/api/employees/{employee['id']}/maternity-eligibility").json()
    assert eligibility["eligible"] is False
    assert "only available for female employees" in eligibility["reason"]

    expected = (date.today() + timedelta(days=90)).isoformat()
    response = _create_leave_request(client, employee["id"], leave_type="maternity", expected_delivery_date=expected)
    assert response.status_code == 422
    assert "female" in response.json()["errors"][0]["msg"]


def test_maternity_needs_advance_notice(client, create_employee):
    employee = create_employee()
    soon = (date.today() + timedelta(days=30)).isoformat()
    response = _create_leave_request(client, employee["id"], leave_type="maternity", expected_delivery_date=soon)
    assert response.status_code == 422
    assert response.json()["errors"][0]["details"]["days_in_advance"] == 30

    later = (date.today() + timedelta(days=90)).isoformat()
    response = _create_leave_request(client, employee["id"], leave_type="maternity", expected_delivery_date=later)
    assert response.status_code == 200
    assert response.json()["expected_delivery_date"] == later


def test_validate_notice_endpoint(client):
    response = client.post(
        "/api/leaves/maternity/validate-notice",
        json={"expected_delivery_date": "2025-03-02", "application_date": "2025-01-01"}
    )
    assert response.status_code == 200
    assert response.json() == {
        "valid": True,
        "days_in_advance": 60,
        "min_required": 60,
        "reason": "Application made 60 days in advance",
    }


def test_leave_listings(client, create_employee):
    alice = create_employee()
    bob = create_employee(
        code="EMP102", name="Bilal Shah", email="bilal@university.edu", gender="male",
        faculty="Engineering", department="EE", designation="Lecturer"
    )
    annual_id = _create_leave_request(client, alice["id"]).json()["id"]
    medical_id = _create_leave_request(client, alice["id"], leave_type="medical").json()["id"]
    casual_id = _create_leave_request(client, bob["id"], leave_type="casual").json()["id"]
    _decide(client, annual_id, "hod")

    assert len(client.get("/api/leaves").json()) == 3
    assert [item["id"] for item in client.get("/api/leaves", params={"faculty": "Engineering"}).json()] == [casual_id]
    assert [item["id"] for item in client.get("/api/leaves", params={"type": "medical"}).json()] == [medical_id]
    assert [item["id"] for item in client.get("/api/leaves", params={"status": "Forwarded"}).json()] == [annual_id]
    assert [item["id"] for item in client.get("/api/leaves", params={"search": "bilal"}).json()] == [casual_id]
    assert [item["id"] for item in client.get("/api/leaves/awaiting/dean").json()] == [annual_id]
    assert len(client.get("/api/leaves/pending").json()) == 3
    assert len(client.get(f"/api/employees/{alice['id']}/leaves").json()) == 2

    stats = client.get("/api/leaves/stats").json()
    assert stats["total"] == 3
    assert stats["by_status"]["Forwarded"] == 1
    assert stats["by_type"]["medical"] == 1
