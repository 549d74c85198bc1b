from datetime import timedelta

import pytest

from models.project import Project
from models.service_order import ServiceOrder
from schemas.user import TokenClaims
from utils.tokenJWT import TokenService


def test_projects_require_token(client, db):
    assert client.get("/projects").status_code == 401
    resp = client.post("/projects", json={"name": "Sneaky"})

    assert resp.status_code == 401
    assert resp.json() == {
        "statusCode": 401,
        "error": "Unauthorized",
        "message": "Invalid token or session expired",
    }
    assert db.query(Project).count() == 0


@pytest.mark.parametrize(
    "header",
    [
        "Bearer not-a-jwt",
        "Basic YWRtaW46cGFzc3dvcmQxMjM=",
        "Bearer",
    ],
)
def test_projects_reject_bad_authorization_header(client, db, header):
    resp = client.post("/projects", json={"name": "Sneaky"}, headers={"Authorization": header})

    assert resp.status_code == 401
    assert resp.json()["message"] == "Invalid token or session expired"
    assert db.query(Project).count() == 0


def test_projects_reject_expired_token(app, client, auth_headers):
    claims = app.state.token_service.verify(auth_headers["Authorization"].split()[1])
    expired = app.state.token_service.issue(claims, expires_delta=timedelta(seconds=-5))

    resp = client.get("/projects", headers={"Authorization": f"Bearer {expired}"})

    assert resp.status_code == 401
    assert resp.json()["message"] == "Invalid token or session expired"


def test_projects_reject_token_from_other_secret(client):
    forged = TokenService("someone-elses-secret").issue(
        TokenClaims(id=1, username="admin", email="admin@example.com")
    )

    resp = client.get("/projects", headers={"Authorization": f"Bearer {forged}"})

    assert resp.status_code == 401


def test_create_and_get_project(client, auth_headers, project):
    assert project["name"] == "Website Redesign"
    assert project["created_at"]
    assert project["updated_at"]

    resp = client.get(f"/projects/{project['id']}", headers=auth_headers)

    assert resp.status_code == 200
    assert resp.json() == project


def test_create_project_without_description(client, auth_headers):
    resp = client.post("/projects", json={"name": "Infrastructure Upgrade"}, headers=auth_headers)

    assert resp.status_code == 201
    assert resp.json()["description"] is None


def test_create_project_requires_name(client, auth_headers, db):
    resp = client.post("/projects", json={"name": "", "description": "x"}, headers=auth_headers)

    assert resp.status_code == 400
    assert db.query(Project).count() == 0


def test_list_projects(client, auth_headers, project):
    client.post("/projects", json={"name": "Mobile App Development"}, headers=auth_headers)

    resp = client.get("/projects", headers=auth_headers)

    assert resp.status_code == 200
    assert [p["name"] for p in resp.json()] == ["Website Redesign", "Mobile App Development"]


def test_get_unknown_project(client, auth_headers):
    resp = client.get("/projects/999", headers=auth_headers)

    assert resp.status_code == 404
    assert resp.json()["message"] == "Project with ID 999 not found"


def test_update_project(client, auth_headers, project):
    resp = client.put(
        f"/projects/{project['id']}",
        json={"name": "Website Relaunch"},
        headers=auth_headers,
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == project["id"]
    assert body["name"] == "Website Relaunch"
    assert body["description"] is None


def test_update_unknown_project(client, auth_headers, db):
    resp = client.put("/projects/999", json={"name": "Ghost"}, headers=auth_headers)

    assert resp.status_code == 404
    assert db.query(Project).count() == 0


def test_delete_project(client, auth_headers, project):
    resp = client.delete(f"/projects/{project['id']}", headers=auth_headers)

    assert resp.status_code == 204
    assert resp.content == b""
    assert client.get(f"/projects/{project['id']}", headers=auth_headers).status_code == 404


def test_delete_unknown_project(client, auth_headers):
    resp = client.delete("/projects/999", headers=auth_headers)

    assert resp.status_code == 404


def test_delete_project_removes_its_service_orders(client, auth_headers, project, db):
    other = client.post("/projects", json={"name": "Mobile App Development"}, headers=auth_headers).json()
    for name, project_id in [("Homepage Design", project["id"]), ("About Page Content", project["id"]),
                             ("Notification System", other["id"])]:
        client.post(
            "/service-orders",
            json={"name": name, "category": "Development", "project_id": project_id},
            headers=auth_headers,
        )

    resp = client.delete(f"/projects/{project['id']}", headers=auth_headers)

    assert resp.status_code == 204
    remaining = db.query(ServiceOrder).all()
    assert [o.name for o in remaining] == ["Notification System"]
