from app.dependencies import BearerTokenIdentity, get_identity_resolver
from app.main import app


def use_token_identity():
    app.dependency_overrides[get_identity_resolver] = BearerTokenIdentity


def test_token_identity_sets_approver(client, cash_advance):
    use_token_identity()
    registered = client.post("/api/staff/register", json={
        "email": "approver@example.com",
        "firstName": "Bola",
        "lastName": "Ade",
        "phone": "0801",
        "staffId": "fin-900",
        "jobRole": "CFO",
    }).json()

    response = client.put(
        f"/api/cash-advance/{cash_advance['id']}/status",
        json={"status": "approved"},
        headers={"Authorization": f"Bearer {registered['token']}"},
    )
    assert response.status_code == 200
    assert response.json()["cashAdvance"]["approvedBy"] == registered["staff"]["id"]


def test_token_identity_ignores_caller_assertions(client, cash_advance, approver):
    use_token_identity()
    response = client.put(
        f"/api/cash-advance/{cash_advance['id']}/status",
        json={"status": "approved", "approvedBy": approver["id"]},
        headers={"X-Staff-Id": approver["id"]},
    )
    assert response.status_code == 200
    assert response.json()["cashAdvance"]["approvedBy"] is None


def test_token_identity_rejects_bad_token(client, cash_advance):
    use_token_identity()
    response = client.put(
        f"/api/cash-advance/{cash_advance['id']}/status",
        json={"status": "approved"},
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid or expired session token"


def test_caller_identity_rejects_malformed_header(client, cash_advance):
    response = client.put(
        f"/api/cash-advance/{cash_advance['id']}/status",
        json={"status": "approved"},
        headers={"X-Staff-Id": "S1"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid X-Staff-Id header"
