"""Students API — verifies HTTP status codes, wire shapes, and error mapping.

Invariants:
    - Success bodies are camelCase StudentDetail objects with UUID-string ids
    - Every failure is {status, code, error, message, errors?} with application/json; charset=utf-8
    - "{}" -> EMPTY_OBJECT, nothing -> MISSING_PARAMETER, garbage -> INVALID_JSON (all 400)
"""

import pytest

from tests.services.payloads import course_payload, registration, student_payload

UNKNOWN_ID = "123e4567-e89b-12d3-a456-426614174000"


async def _create(client, **student_overrides) -> dict:
    res = await client.post(
        "/students", json=registration(student_payload(**student_overrides)),
    )
    assert res.status_code == 200
    return res.json()


def _assert_error(res, status: int, code: str, error: str) -> dict:
    assert res.status_code == status
    assert res.headers["content-type"] == "application/json; charset=utf-8"
    body = res.json()
    assert (body["status"], body["code"], body["error"]) == (status, code, error)
    assert body["message"]
    return body


# --- POST /students -----------------------------------------------------------

async def test_register_returns_detail(client):
    body = await _create(client)
    student = body["student"]
    assert len(student["studentId"]) == 36
    assert student["fullName"] == "Yamada Taro"
    assert student["isDeleted"] is False
    assert student["deletedAt"] is None
    assert body["courses"][0]["courseName"] == "Java"
    assert body["courses"][0]["startDate"] == "2024-04-01"


async def test_register_empty_object(client):
    res = await client.post(
        "/students", content=b"{}", headers={"Content-Type": "application/json"},
    )
    body = _assert_error(res, 400, "E003", "EMPTY_OBJECT")
    assert "errors" not in body


async def test_register_without_body(client):
    res = await client.post("/students")
    _assert_error(res, 400, "E003", "MISSING_PARAMETER")


async def test_register_whitespace_body_counts_as_missing(client):
    res = await client.post(
        "/students", content=b"  \n ", headers={"Content-Type": "application/json"},
    )
    _assert_error(res, 400, "E003", "MISSING_PARAMETER")


async def test_register_malformed_json(client):
    res = await client.post(
        "/students", content=b'{"student": ', headers={"Content-Type": "application/json"},
    )
    _assert_error(res, 400, "E002", "INVALID_JSON")


async def test_register_non_object_json(client):
    res = await client.post("/students", json=[1, 2, 3])
    _assert_error(res, 400, "E006", "INVALID_REQUEST")


async def test_register_missing_full_name(client):
    student = student_payload()
    del student["fullName"]
    res = await client.post("/students", json=registration(student))
    body = _assert_error(res, 400, "E001", "VALIDATION_FAILED")
    assert body["errors"] == [
        {"field": "student.fullName", "message": "Full name is required"},
    ]


async def test_register_course_error_path(client):
    res = await client.post("/students", json=registration(
        courses=[course_payload(), course_payload("AWS", start="someday")],
    ))
    body = _assert_error(res, 400, "E001", "VALIDATION_FAILED")
    assert [e["field"] for e in body["errors"]] == ["courses[1].startDate"]


async def test_register_wrong_json_type_is_validation_failure(client):
    res = await client.post("/students", json=registration(student_payload(age="old")))
    body = _assert_error(res, 400, "E001", "VALIDATION_FAILED")
    assert body["errors"][0]["field"] == "student.age"


async def test_register_duplicate_email(client):
    await _create(client)
    res = await client.post("/students", json=registration(student_payload(fullName="Other")))
    _assert_error(res, 409, "E409", "CONFLICT")


async def test_register_course_id_with_trailing_newline(client):
    res = await client.post("/students", json=registration(
        courses=[course_payload(courseId=UNKNOWN_ID + "\n")],
    ))
    body = _assert_error(res, 400, "E001", "VALIDATION_FAILED")
    assert [e["field"] for e in body["errors"]] == ["courses[0].courseId"]


async def test_register_overlong_nickname_is_validation_failure(client):
    res = await client.post("/students", json=registration(student_payload(nickname="n" * 51)))
    body = _assert_error(res, 400, "E001", "VALIDATION_FAILED")
    assert [e["field"] for e in body["errors"]] == ["student.nickname"]


# --- GET ----------------------------------------------------------------------

async def test_get_student(client):
    created = await _create(client)
    sid = created["student"]["studentId"]
    res = await client.get(f"/students/{sid}")
    assert res.status_code == 200
    body = res.json()
    assert body["student"]["studentId"] == sid
    assert body["student"]["email"] == created["student"]["email"]
    assert [c["courseId"] for c in body["courses"]] == [
        c["courseId"] for c in created["courses"]
    ]


async def test_get_unknown_student(client):
    res = await client.get(f"/students/{UNKNOWN_ID}")
    _assert_error(res, 404, "E404", "NOT_FOUND")


async def test_get_malformed_id(client):
    res = await client.get("/students/not-a-uuid")
    body = _assert_error(res, 400, "E006", "INVALID_REQUEST")
    assert body["errors"][0]["field"] == "studentId"


async def test_get_id_with_trailing_newline_is_malformed(client):
    res = await client.get(f"/students/{UNKNOWN_ID}%0A")
    body = _assert_error(res, 400, "E006", "INVALID_REQUEST")
    assert body["errors"][0]["field"] == "studentId"


async def test_list_courses(client):
    created = await _create(client)
    res = await client.get(f"/students/{created['student']['studentId']}/courses")
    assert res.status_code == 200
    assert [c["courseName"] for c in res.json()] == ["Java"]


async def test_search_type_mismatch(client):
    res = await client.get("/students", params={"includeDeleted": "maybe"})
    body = _assert_error(res, 400, "E004", "TYPE_MISMATCH")
    assert body["errors"][0]["field"] == "includeDeleted"
    assert "includeDeleted" in body["message"]


async def test_search_filters(client):
    active = await _create(client)
    gone = await _create(client, email="gone@example.com", furigana="さとう")
    await client.delete(f"/students/{gone['student']['studentId']}")

    default = (await client.get("/students")).json()
    assert [d["student"]["studentId"] for d in default] == [active["student"]["studentId"]]

    deleted_only = (await client.get("/students", params={"deletedOnly": "true"})).json()
    assert [d["student"]["studentId"] for d in deleted_only] == [gone["student"]["studentId"]]

    by_name = (await client.get(
        "/students", params={"furigana": "さと", "includeDeleted": "true"},
    )).json()
    assert [d["student"]["studentId"] for d in by_name] == [gone["student"]["studentId"]]


async def test_unknown_url(client):
    res = await client.get("/nowhere")
    _assert_error(res, 404, "E404", "NOT_FOUND")


# --- PUT / PATCH --------------------------------------------------------------

async def test_put_replaces_student(client):
    created = await _create(client)
    sid = created["student"]["studentId"]
    res = await client.put(f"/students/{sid}", json=registration(
        student_payload(nickname="Jiro"), courses=[course_payload("Python")],
    ))
    assert res.status_code == 200
    body = res.json()
    assert body["student"]["nickname"] == "Jiro"
    assert [c["courseName"] for c in body["courses"]] == ["Python"]


async def test_put_empty_object(client):
    created = await _create(client)
    res = await client.put(
        f"/students/{created['student']['studentId']}", content=b"{}",
        headers={"Content-Type": "application/json"},
    )
    _assert_error(res, 400, "E003", "EMPTY_OBJECT")


async def test_put_unknown_student(client):
    res = await client.put(f"/students/{UNKNOWN_ID}", json=registration())
    _assert_error(res, 404, "E404", "NOT_FOUND")


async def test_patch_updates_supplied_fields(client):
    created = await _create(client)
    sid = created["student"]["studentId"]
    res = await client.patch(f"/students/{sid}", json={"student": {"remarks": "transferred"}})
    assert res.status_code == 200
    body = res.json()
    assert body["student"]["remarks"] == "transferred"
    assert body["student"]["fullName"] == "Yamada Taro"


@pytest.mark.parametrize("payload", [{"student": {}}, {"courses": []}])
async def test_patch_with_nothing_to_apply(client, payload):
    created = await _create(client)
    res = await client.patch(f"/students/{created['student']['studentId']}", json=payload)
    _assert_error(res, 400, "E003", "EMPTY_OBJECT")


# --- DELETE / restore ---------------------------------------------------------

async def test_soft_delete_and_restore(client):
    created = await _create(client)
    sid = created["student"]["studentId"]

    res = await client.delete(f"/students/{sid}")
    assert res.status_code == 204
    assert res.content == b""
    assert (await client.get(f"/students/{sid}")).json()["student"]["isDeleted"] is True

    res = await client.patch(f"/students/{sid}/restore")
    assert res.status_code == 204
    assert (await client.get(f"/students/{sid}")).json()["student"]["isDeleted"] is False


async def test_soft_delete_unknown(client):
    res = await client.delete(f"/students/{UNKNOWN_ID}")
    _assert_error(res, 404, "E404", "NOT_FOUND")


async def test_search_by_katakana_furigana_newest_first(client):
    first = await _create(client, furigana="ヤマダタロウ")
    await _create(client, email="hanako@example.com", furigana="ヤマダハナコ")
    third = await _create(client, email="jiro@example.com", furigana="スズキタロウ")

    res = await client.get("/students", params={"furigana": "タロウ"})
    assert res.status_code == 200
    ids = [d["student"]["studentId"] for d in res.json()]
    assert ids == [third["student"]["studentId"], first["student"]["studentId"]]
