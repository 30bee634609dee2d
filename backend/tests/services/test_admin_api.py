"""Admin API — verifies HTTP Basic + ADMIN role on the physical delete endpoint.

Invariants:
    - No or wrong credentials -> 401 UNAUTHORIZED with WWW-Authenticate: Basic
    - Valid non-admin account -> 403 FORBIDDEN
    - Admin -> 204, student and courses gone; unknown id -> 404
"""

from tests.services.payloads import basic_auth, registration

UNKNOWN_ID = "123e4567-e89b-12d3-a456-426614174000"
ADMIN = basic_auth("admin", "password")
VIEWER = basic_auth("viewer", "viewer")


async def _create(client) -> str:
    res = await client.post("/students", json=registration())
    return res.json()["student"]["studentId"]


async def test_force_delete_without_credentials(client):
    sid = await _create(client)
    res = await client.delete(f"/admin/students/{sid}")
    assert res.status_code == 401
    assert res.headers["www-authenticate"] == "Basic"
    body = res.json()
    assert (body["code"], body["error"]) == ("E401", "UNAUTHORIZED")


async def test_force_delete_with_wrong_password(client):
    sid = await _create(client)
    res = await client.delete(
        f"/admin/students/{sid}", headers=basic_auth("admin", "nope"),
    )
    assert res.status_code == 401
    assert res.json()["code"] == "E401"


async def test_force_delete_with_malformed_header(client):
    sid = await _create(client)
    res = await client.delete(
        f"/admin/students/{sid}", headers={"Authorization": "Basic !!!"},
    )
    assert res.status_code == 401
    assert res.json()["error"] == "UNAUTHORIZED"


async def test_force_delete_as_viewer_is_forbidden(client):
    sid = await _create(client)
    res = await client.delete(f"/admin/students/{sid}", headers=VIEWER)
    assert res.status_code == 403
    body = res.json()
    assert (body["status"], body["code"], body["error"]) == (403, "E403", "FORBIDDEN")
    assert (await client.get(f"/students/{sid}")).status_code == 200


async def test_force_delete_as_admin(client):
    sid = await _create(client)
    res = await client.delete(f"/admin/students/{sid}", headers=ADMIN)
    assert res.status_code == 204

    assert (await client.get(f"/students/{sid}")).status_code == 404
    assert (await client.get(f"/students/{sid}/courses")).status_code == 404


async def test_force_delete_unknown_student(client):
    res = await client.delete(f"/admin/students/{UNKNOWN_ID}", headers=ADMIN)
    assert res.status_code == 404
    assert res.json()["code"] == "E404"
