import uuid

from app.core.security import decode_access_token


def test_register_staff(client, staff_payload):
    response = client.post("/api/staff/register", json=staff_payload)
    assert response.status_code == 201

    body = response.json()
    assert body["success"] is True
    assert body["token"]
    staff = body["staff"]
    assert staff["email"] == "ada.obi@example.com"
    assert staff["staffId"] == "FIN-001"
    assert staff["isActive"] is True
    assert staff["isVerified"] is False
    assert decode_access_token(body["token"])["sub"] == staff["id"]


def test_register_then_get_returns_input_plus_defaults(client, registered_staff, staff_payload):
    response = client.get(f"/api/staff/{registered_staff['id']}")
    assert response.status_code == 200

    staff = response.json()["staff"]
    assert staff["firstName"] == staff_payload["firstName"]
    assert staff["lastName"] == staff_payload["lastName"]
    assert staff["phone"] == staff_payload["phone"]
    assert staff["jobRole"] == staff_payload["jobRole"]
    assert staff["department"] == staff_payload["department"]
    assert staff["email"] == staff_payload["email"].lower()
    assert staff["staffId"] == staff_payload["staffId"].upper()
    assert staff["isActive"] is True
    assert staff["isVerified"] is False
    assert staff["lastLogin"] is None


def test_register_missing_fields(client):
    response = client.post("/api/staff/register", json={"email": "x@example.com"})
    assert response.status_code == 400

    body = response.json()
    assert body["success"] is False
    assert body["message"].startswith("Please provide all required fields")
    for field in ("firstName", "lastName", "phone", "staffId", "jobRole"):
        assert field in body["message"]


def test_register_invalid_email(client, staff_payload):
    staff_payload["email"] = "not-an-email"
    response = client.post("/api/staff/register", json=staff_payload)
    assert response.status_code == 400
    assert "email" in response.json()["message"]


def test_register_name_too_long(client, staff_payload):
    staff_payload["firstName"] = "A" * 51
    response = client.post("/api/staff/register", json=staff_payload)
    assert response.status_code == 400
    assert "firstName" in response.json()["message"]


def test_register_duplicate_email_case_insensitive(client, registered_staff, staff_payload):
    staff_payload["email"] = staff_payload["email"].upper()
    staff_payload["staffId"] = "FIN-002"
    response = client.post("/api/staff/register", json=staff_payload)
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Staff already exists with this email"}


def test_register_duplicate_staff_id_case_insensitive(client, registered_staff, staff_payload):
    staff_payload["email"] = "someone.else@example.com"
    staff_payload["staffId"] = "Fin-001"
    response = client.post("/api/staff/register", json=staff_payload)
    assert response.status_code == 400
    assert response.json()["message"] == "Staff ID already exists"


def test_list_staff(client, registered_staff, approver):
    response = client.get("/api/staff")
    assert response.status_code == 200

    body = response.json()
    assert body["count"] == 2
    assert {s["id"] for s in body["staff"]} == {registered_staff["id"], approver["id"]}


def test_search_staff(client, registered_staff, approver):
    by_name = client.get("/api/staff/search/ADA").json()
    assert [s["id"] for s in by_name["staff"]] == [registered_staff["id"]]

    by_role = client.get("/api/staff/search/finance").json()
    assert [s["id"] for s in by_role["staff"]] == [approver["id"]]

    by_code = client.get("/api/staff/search/mgr").json()
    assert by_code["count"] == 1

    nothing = client.get("/api/staff/search/zzz").json()
    assert nothing["count"] == 0


def test_search_treats_wildcards_literally(client, registered_staff):
    response = client.get("/api/staff/search/%25")
    assert response.status_code == 200
    assert response.json()["count"] == 0


def test_get_staff_invalid_id(client):
    response = client.get("/api/staff/not-a-uuid")
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Invalid staff ID"}


def test_get_staff_not_found(client):
    response = client.get(f"/api/staff/{uuid.uuid4()}")
    assert response.status_code == 404
    assert response.json()["message"] == "Staff member not found"


def test_update_staff_partial(client, registered_staff):
    response = client.put(
        f"/api/staff/{registered_staff['id']}",
        json={"jobRole": "Senior Accountant", "isVerified": True},
    )
    assert response.status_code == 200

    staff = response.json()["staff"]
    assert staff["jobRole"] == "Senior Accountant"
    assert staff["isVerified"] is True
    assert staff["firstName"] == registered_staff["firstName"]
    assert staff["email"] == registered_staff["email"]


def test_update_staff_keeps_own_email(client, registered_staff):
    response = client.put(
        f"/api/staff/{registered_staff['id']}",
        json={"email": registered_staff["email"], "staffId": registered_staff["staffId"]},
    )
    assert response.status_code == 200


def test_update_staff_duplicate_email(client, registered_staff, approver):
    response = client.put(
        f"/api/staff/{registered_staff['id']}",
        json={"email": approver["email"].upper()},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Staff already exists with this email"


def test_update_staff_duplicate_staff_id(client, registered_staff, approver):
    response = client.put(
        f"/api/staff/{registered_staff['id']}",
        json={"staffId": approver["staffId"].lower()},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Staff ID already exists"


def test_update_staff_rejects_null_required_field(client, registered_staff):
    response = client.put(f"/api/staff/{registered_staff['id']}", json={"firstName": None})
    assert response.status_code == 400
    assert response.json()["message"] == "firstName cannot be empty"


def test_update_staff_not_found(client):
    response = client.put(f"/api/staff/{uuid.uuid4()}", json={"phone": "123"})
    assert response.status_code == 404


def test_delete_staff(client, registered_staff):
    response = client.delete(f"/api/staff/{registered_staff['id']}")
    assert response.status_code == 200
    assert response.json()["success"] is True

    assert client.get(f"/api/staff/{registered_staff['id']}").status_code == 404
    assert client.delete(f"/api/staff/{registered_staff['id']}").status_code == 404
