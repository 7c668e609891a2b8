"""Demo: register a user, log in, and use the bearer token, via TestClient.

Run with:
    python scripts/demo_login_flow.py
"""

from __future__ import annotations

from fastapi.testclient import TestClient

from msusers.main import app

USER = {
    "firstName": "Maria",
    "lastName": "Souza",
    "email": "demo@example.com",
    "cpf": "111.444.777-35",
    "birthdate": "1990-05-17",
    "password": "demo-pass",
    "active": True,
}


def main() -> None:
    client = TestClient(app)

    # ── Step 1: POST /v1/users ──────────────────────────────────────
    r = client.post("/v1/users", json=USER)
    print(f"1. POST /v1/users            → {r.status_code}  {r.json()}")
    user_id = r.json()["id"]

    # ── Step 2: same CPF again ──────────────────────────────────────
    r = client.post("/v1/users", json={**USER, "email": "other@example.com"})
    print(f"2. POST /v1/users (dup cpf)  → {r.status_code}  {r.json()['detail']['error']}")

    # ── Step 3: POST /v1/login (bad creds) ──────────────────────────
    r = client.post("/v1/login", json={"email": USER["email"], "password": "wrong"})
    print(f"3. POST /v1/login (bad)      → {r.status_code}  (empty body)")

    # ── Step 4: POST /v1/login ──────────────────────────────────────
    r = client.post(
        "/v1/login", json={"email": USER["email"], "password": USER["password"]}
    )
    body = r.json()
    print(f"4. POST /v1/login            → {r.status_code}  type={body['tokenType']}")

    # ── Step 5: GET /v1/users/{id} with the token ───────────────────
    headers = {"Authorization": f"{body['tokenType']} {body['token']}"}
    r = client.get(f"/v1/users/{user_id}", headers=headers)
    print(f"5. GET  /v1/users/{user_id}         → {r.status_code}  {r.json()}")


if __name__ == "__main__":
    main()
