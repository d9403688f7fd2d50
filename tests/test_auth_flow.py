def _register(client, *, email: str, password: str, role: str, name: str = "Test User"):
    return client.post(
        "/auth/register",
        json={"email": email, "password": password, "role": role, "name": name},
    )


def _login(client, *, email: str, password: str, role: str | None):
    body = {"email": email, "password": password}
    if role is not None:
        body["role"] = role
    return client.post("/auth/login", json=body)


def _auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def test_register_hr_success(client):
    r = _register(
        client,
        email="hr@example.com",
        password="Testpass123!",
        role="hr",
        name="Hiring Manager",
    )
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["user"]["role"] == "hr"
    assert isinstance(data.get("access_token"), str) and len(data["access_token"]) > 10


def test_register_candidate_success(client):
    r = _register(
        client,
        email="candidate@example.com",
        password="Testpass123!",
        role="candidate",
        name="Candidate",
    )
    assert r.status_code == 200, r.text
    assert r.json()["user"]["role"] == "candidate"


def test_register_duplicate_email_conflicts(client):
    _register(client, email="dup@example.com", password="Testpass123!", role="candidate")
    r = _register(client, email="DUP@example.com", password="Testpass123!", role="hr")
    assert r.status_code == 409, r.text
    assert r.json()["success"] is False


def test_register_rejects_unknown_role(client):
    r = _register(client, email="who@example.com", password="Testpass123!", role="recruiter")
    assert r.status_code == 400, r.text


def test_register_rejects_short_password(client):
    r = _register(client, email="short@example.com", password="123", role="candidate")
    assert r.status_code == 400, r.text


def test_login_role_mismatch_fails(client):
    _register(client, email="cand2@example.com", password="Testpass123!", role="candidate", name="Cand2")
    r = _login(client, email="cand2@example.com", password="Testpass123!", role="hr")
    assert r.status_code == 403, r.text


def test_login_invalid_credentials_fails(client):
    _register(client, email="hr2@example.com", password="Testpass123!", role="hr", name="HR2")
    r = _login(client, email="hr2@example.com", password="wrong-pass", role="hr")
    assert r.status_code == 401, r.text

    r = _login(client, email="nobody@example.com", password="Testpass123!", role=None)
    assert r.status_code == 401, r.text


def test_logout_endpoint_exists(client):
    r = client.post("/auth/logout")
    assert r.status_code == 200, r.text
    assert "message" in r.json()


def test_me_returns_candidate_variant(client):
    _register(client, email="me.cand@example.com", password="Testpass123!", role="candidate", name="Casey")
    token = _login(client, email="me.cand@example.com", password="Testpass123!", role="candidate").json()["access_token"]

    r = client.get("/auth/me", headers=_auth_headers(token))
    assert r.status_code == 200, r.text
    session = r.json()["session"]
    assert session["role"] == "candidate"
    assert session["user"]["email"] == "me.cand@example.com"
    assert session["candidate_profile"]["full_name"] == "Casey"
    assert session["candidate_profile"]["skills"] == []
    assert "hr_profile" not in session


def test_me_returns_hr_variant(client):
    _register(client, email="me.hr@example.com", password="Testpass123!", role="hr", name="Harper")
    token = _login(client, email="me.hr@example.com", password="Testpass123!", role=None).json()["access_token"]

    session = client.get("/auth/me", headers=_auth_headers(token)).json()["session"]
    assert session["role"] == "hr"
    assert "hr_profile" in session
    assert "candidate_profile" not in session


def test_me_requires_token(client):
    assert client.get("/auth/me").status_code == 401
    r = client.get("/auth/me", headers=_auth_headers("not-a-jwt"))
    assert r.status_code == 401, r.text


def test_demo_accounts_can_log_in(client, seeded):
    r = _login(client, email="hr.manager@techcorp.com", password="password123", role="hr")
    assert r.status_code == 200, r.text
    r = _login(client, email="john.doe@example.com", password="password123", role="candidate")
    assert r.status_code == 200, r.text


def test_candidate_cannot_create_job(client):
    _register(client, email="cand3@example.com", password="Testpass123!", role="candidate", name="Cand3")
    token = _login(client, email="cand3@example.com", password="Testpass123!", role="candidate").json()["access_token"]

    r = client.post(
        "/jobs",
        json={"title": "PM", "description": "A" * 20, "status": "active"},
        headers=_auth_headers(token),
    )
    assert r.status_code == 403, r.text


def test_hr_can_create_job_and_validation_applies(client):
    _register(client, email="hr3@example.com", password="Testpass123!", role="hr", name="HR3")
    token = _login(client, email="hr3@example.com", password="Testpass123!", role="hr").json()["access_token"]

    r = client.post("/jobs", json={"status": "active"}, headers=_auth_headers(token))
    assert r.status_code in (400, 422), r.text

    r = client.post(
        "/jobs",
        json={"title": "Product Manager", "salary_min": 200, "salary_max": 100},
        headers=_auth_headers(token),
    )
    assert r.status_code == 400, r.text

    r2 = client.post(
        "/jobs",
        json={"title": "Product Manager", "description": "A" * 20, "required_skills": ["Roadmaps"]},
        headers=_auth_headers(token),
    )
    assert r2.status_code == 201, r2.text
    job = r2.json()["job"]
    assert job["title"] == "Product Manager"
    assert job["status"] == "active"
    assert job["required_skills"] == ["Roadmaps"]
