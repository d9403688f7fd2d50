import pytest


def _login(client, *, email: str, password: str = "password123", role: str | None = None):
    body = {"email": email, "password": password}
    if role is not None:
        body["role"] = role
    return client.post("/auth/login", json=body)


def _auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def hr_headers(client, seeded) -> dict:
    token = _login(client, email="hr.manager@techcorp.com", role="hr").json()["access_token"]
    return _auth_headers(token)


@pytest.fixture()
def alex_headers(client, seeded) -> dict:
    token = _login(client, email="alex.chen@example.com", role="candidate").json()["access_token"]
    return _auth_headers(token)


@pytest.fixture()
def john_headers(client, seeded) -> dict:
    token = _login(client, email="john.doe@example.com", role="candidate").json()["access_token"]
    return _auth_headers(token)


def _job_by_title(client, headers, title):
    return next(j for j in client.get("/jobs", headers=headers).json()["jobs"] if j["title"] == title)


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["service"] == "SwipeHire"
    assert client.get("/db/health").json() == {"status": "ok"}


def test_dashboard_totals(client, hr_headers):
    r = client.get("/jobs/dashboard", headers=hr_headers)
    assert r.status_code == 200, r.text
    totals = r.json()["totals"]
    assert totals == {"jobs": 2, "active_jobs": 2, "total": 5, "shortlisted": 0, "rejected": 0, "pending": 5}


def test_dashboard_is_hr_only(client, john_headers):
    assert client.get("/jobs/dashboard", headers=john_headers).status_code == 403


def test_hr_job_list_carries_stats(client, hr_headers):
    job = _job_by_title(client, hr_headers, "Senior Frontend Engineer")
    assert job["stats"] == {"shortlisted": 0, "rejected": 0, "pending": 3, "total": 3}
    assert job["salary_range"] == {"min": 140000, "max": 180000}
    assert job["applicant_count"] == 3


def test_candidate_sees_active_jobs_and_applies(client, alex_headers, hr_headers):
    job = _job_by_title(client, alex_headers, "Data Analyst")
    assert "stats" not in job

    r = client.post(f"/jobs/{job['id']}/apply", headers=alex_headers)
    assert r.status_code == 201, r.text
    assert r.json()["application"]["status"] == "applied"

    dup = client.post(f"/jobs/{job['id']}/apply", headers=alex_headers)
    assert dup.status_code == 409, dup.text

    mine = client.get("/candidates/me/applications", headers=alex_headers).json()["applications"]
    assert sorted(a["job"]["title"] for a in mine) == ["Data Analyst", "Senior Frontend Engineer"]

    totals = client.get("/jobs/dashboard", headers=hr_headers).json()["totals"]
    assert totals["total"] == 6


def test_apply_to_missing_job(client, alex_headers):
    assert client.post("/jobs/9999/apply", headers=alex_headers).status_code == 404


def test_hr_cannot_apply(client, hr_headers):
    job = _job_by_title(client, hr_headers, "Data Analyst")
    assert client.post(f"/jobs/{job['id']}/apply", headers=hr_headers).status_code == 403


def test_candidate_profile_update(client, john_headers):
    r = client.put(
        "/candidates/me",
        headers=john_headers,
        json={
            "location": "Oakland, CA",
            "skills": ["React", " GraphQL ", ""],
            "education": [{"institution": "Stanford", "degree": "M.S.", "start_year": 2017, "end_year": 2019}],
        },
    )
    assert r.status_code == 200, r.text
    profile = r.json()["profile"]
    assert profile["location"] == "Oakland, CA"
    assert profile["skills"] == ["React", "GraphQL"]
    assert [e["institution"] for e in profile["education"]] == ["Stanford"]
    assert profile["full_name"] == "John Doe"

    me = client.get("/candidates/me", headers=john_headers).json()["profile"]
    assert me["location"] == "Oakland, CA"


def test_candidate_profile_update_validation(client, john_headers):
    r = client.put("/candidates/me", headers=john_headers, json={"github": "not a url"})
    assert r.status_code == 400, r.text

    r = client.put(
        "/candidates/me",
        headers=john_headers,
        json={"education": [{"institution": "X", "degree": "Y", "start_year": 2020, "end_year": 2010}]},
    )
    assert r.status_code == 400, r.text


def test_hr_views_candidate_profile(client, hr_headers, john_headers):
    me = client.get("/candidates/me", headers=john_headers).json()["profile"]
    r = client.get(f"/candidates/{me['id']}", headers=hr_headers)
    assert r.status_code == 200, r.text
    assert r.json()["profile"]["email"] == "john.doe@example.com"

    assert client.get(f"/candidates/{me['id']}", headers=john_headers).status_code == 403
    assert client.get("/candidates/9999", headers=hr_headers).status_code == 404


def test_chat_conversations_and_stub_send(client, hr_headers, john_headers, alex_headers):
    convs = client.get("/chat/conversations", headers=hr_headers).json()["conversations"]
    assert len(convs) == 1
    conv_id = convs[0]["id"]

    r = client.get(f"/chat/conversations/{conv_id}/messages", headers=john_headers)
    assert r.status_code == 200, r.text
    messages = r.json()["messages"]
    assert [m["sender_role"] for m in messages] == ["hr", "candidate"]

    sent = client.post(f"/chat/conversations/{conv_id}/messages", headers=john_headers, json={"message": "See you then"})
    assert sent.status_code == 202, sent.text
    assert sent.json()["delivered"] is False
    assert sent.json()["persisted"] is False

    after = client.get(f"/chat/conversations/{conv_id}/messages", headers=john_headers).json()["messages"]
    assert len(after) == 2

    empty = client.post(f"/chat/conversations/{conv_id}/messages", headers=john_headers, json={"message": "   "})
    assert empty.status_code == 400, empty.text

    assert client.get(f"/chat/conversations/{conv_id}/messages", headers=alex_headers).status_code == 403
    assert client.get("/chat/conversations/9999/messages", headers=hr_headers).status_code == 404


def test_job_details(client, hr_headers, alex_headers):
    job = _job_by_title(client, hr_headers, "Data Analyst")
    r = client.get(f"/jobs/{job['id']}", headers=alex_headers)
    assert r.status_code == 200, r.text
    assert r.json()["job"]["required_skills"] == ["SQL", "Python"]

    draft = client.post("/jobs", headers=hr_headers, json={"title": "Draft Role", "status": "draft"}).json()["job"]
    assert client.get(f"/jobs/{draft['id']}", headers=hr_headers).status_code == 200
    assert client.get(f"/jobs/{draft['id']}", headers=alex_headers).status_code == 404
    assert client.get("/jobs/9999", headers=hr_headers).status_code == 404
