"""
Admin API: listing, status transitions, account creation, edit, delete, activity feed.
"""
import pytest

pytestmark = pytest.mark.anyio

ADMIN_EMAIL = "admin@ieti.edu.ph"


async def _register_teacher(client, email="t@x.com", full_name="Teacher One"):
    r = await client.post("/api/register/teacher",
                          json={"full_name": full_name, "email": email, "password": "pw"})
    assert r.status_code == 200, r.text


async def _register_student(client, email="s@x.com", full_name="Student One"):
    r = await client.post("/api/register/student",
                          json={"name": full_name, "email": email, "password": "pw",
                                "course": "BSIT", "year_level": "1"})
    assert r.status_code == 200, r.text


async def _teachers(client):
    return (await client.get("/api/admin/teachers")).json()["teachers"]


async def _students(client):
    return (await client.get("/api/admin/students")).json()["students"]


async def _activities(client):
    return [a["description"] for a in (await client.get("/api/admin/activities")).json()["activities"]]


# Listing

async def test_lists_are_newest_first(client):
    await _register_teacher(client, "a@x.com", "A")
    await _register_teacher(client, "b@x.com", "B")
    await _register_student(client, "c@x.com", "C")
    await _register_student(client, "d@x.com", "D")

    body = (await client.get("/api/admin/teachers")).json()
    assert body["success"] is True
    assert [t["full_name"] for t in body["teachers"]] == ["B", "A"]
    assert set(body["teachers"][0]) == {"id", "full_name", "email", "status", "created_at"}

    students = await _students(client)
    assert [s["full_name"] for s in students] == ["D", "C"]
    assert set(students[0]) == {"id", "full_name", "email", "course", "year_level", "created_at"}


async def test_empty_lists(client):
    assert await _teachers(client) == []
    assert await _students(client) == []
    r = await client.get("/api/admin/activities")
    assert r.json() == {"success": True, "activities": []}


# Status transitions

async def test_status_transitions(client):
    await _register_teacher(client)
    teacher_id = (await _teachers(client))[0]["id"]

    for status in ("active", "inactive", "active"):
        r = await client.post("/api/admin/teacher-status", json={"teacherId": teacher_id, "status": status})
        assert r.status_code == 200
        assert r.json() == {"success": True, "message": f"Teacher ID {teacher_id} status updated to {status}."}
        assert (await _teachers(client))[0]["status"] == status


async def test_denial_from_pending(client):
    await _register_teacher(client)
    teacher_id = (await _teachers(client))[0]["id"]
    r = await client.post("/api/admin/teacher-status", json={"teacherId": teacher_id, "status": "inactive"})
    assert r.status_code == 200
    assert (await _teachers(client))[0]["status"] == "inactive"
    assert (await _activities(client))[0] == "Deactivated faculty account: Teacher One."


@pytest.mark.parametrize("status", ["pending", "ACTIVE", "", None])
async def test_status_must_be_active_or_inactive(client, status):
    await _register_teacher(client)
    teacher_id = (await _teachers(client))[0]["id"]
    r = await client.post("/api/admin/teacher-status", json={"teacherId": teacher_id, "status": status})
    assert r.status_code == 400
    assert (await _teachers(client))[0]["status"] == "pending"


async def test_status_requires_teacher_id(client):
    r = await client.post("/api/admin/teacher-status", json={"status": "active"})
    assert r.status_code == 400


async def test_status_for_missing_teacher_is_acknowledged(client):
    r = await client.post("/api/admin/teacher-status", json={"teacherId": 999, "status": "active"})
    assert r.status_code == 200
    assert r.json()["success"] is False
    assert "999" in r.json()["message"]
    assert await _activities(client) == []


# Admin-created accounts

async def test_admin_created_faculty_is_active(client):
    for role, email in (("teacher", "t@x.com"), ("admin", "root@x.com")):
        r = await client.post("/api/admin/register-user",
                              json={"role": role, "full_name": role, "email": email, "password": "pw"})
        assert r.status_code == 200
    assert {t["status"] for t in await _teachers(client)} == {"active"}
    assert (await _activities(client))[0].startswith("Admin created ADMIN account")
    assert (await _activities(client))[1].startswith("Admin created FACULTY account")


async def test_admin_created_student_requires_course_and_year(client):
    r = await client.post("/api/admin/register-user",
                          json={"role": "student", "full_name": "S", "email": "s@x.com", "password": "pw"})
    assert r.status_code == 400
    r2 = await client.post("/api/admin/register-user",
                           json={"role": "student", "full_name": "S", "email": "s@x.com", "password": "pw",
                                 "course": "BSCS", "year_level": "4"})
    assert r2.status_code == 200
    assert (await _students(client))[0]["course"] == "BSCS"
    assert (await _activities(client))[0] == "Admin created STUDENT account: S (s@x.com)."


async def test_admin_create_conflicts_per_collection(client):
    await _register_teacher(client, "dup@x.com")
    r = await client.post("/api/admin/register-user",
                          json={"role": "admin", "full_name": "X", "email": "dup@x.com", "password": "pw"})
    assert r.status_code == 409
    r2 = await client.post("/api/admin/register-user",
                           json={"role": "student", "full_name": "X", "email": "dup@x.com", "password": "pw",
                                 "course": "BSIT", "year_level": "1"})
    assert r2.status_code == 200


async def test_admin_create_rejects_unknown_role(client):
    r = await client.post("/api/admin/register-user",
                          json={"role": "guest", "full_name": "X", "email": "x@x.com", "password": "pw"})
    assert r.status_code == 400


# Edit

async def test_update_student_profile(client):
    await _register_student(client)
    student_id = (await _students(client))[0]["id"]
    r = await client.post("/api/admin/update-user",
                          json={"id": student_id, "role": "student", "full_name": "Renamed",
                                "email": "new@x.com", "meta1": "BSCS", "meta2": "3"})
    assert r.status_code == 200
    assert r.json() == {"success": True, "message": "student account updated successfully."}
    student = (await _students(client))[0]
    assert (student["full_name"], student["email"], student["course"], student["year_level"]) == \
        ("Renamed", "new@x.com", "BSCS", "3")
    assert (await _activities(client))[0] == "Updated STUDENT account: Renamed (new@x.com)."


async def test_update_student_without_meta_keeps_profile(client):
    await _register_student(client)
    student_id = (await _students(client))[0]["id"]
    r = await client.post("/api/admin/update-user",
                          json={"id": student_id, "role": "student", "full_name": "Renamed", "email": "s@x.com"})
    assert r.status_code == 200
    student = (await _students(client))[0]
    assert (student["course"], student["year_level"]) == ("BSIT", "1")


async def test_update_teacher_password(client):
    await _register_teacher(client)
    teacher_id = (await _teachers(client))[0]["id"]
    await client.post("/api/admin/teacher-status", json={"teacherId": teacher_id, "status": "active"})

    r = await client.post("/api/admin/update-user",
                          json={"id": teacher_id, "role": "teacher", "full_name": "Teacher One",
                                "email": "t@x.com", "password": "changed"})
    assert r.status_code == 200

    old = await client.post("/api/login", json={"identifier": "t@x.com", "password": "pw", "role": "teacher"})
    new = await client.post("/api/login", json={"identifier": "t@x.com", "password": "changed", "role": "teacher"})
    assert old.status_code == 401
    assert new.status_code == 200


async def test_update_with_empty_password_keeps_it(client):
    await client.post("/api/admin/register-user",
                      json={"role": "teacher", "full_name": "T", "email": "t@x.com", "password": "pw"})
    teacher_id = (await _teachers(client))[0]["id"]
    r = await client.post("/api/admin/update-user",
                          json={"id": teacher_id, "role": "teacher", "full_name": "T2",
                                "email": "t@x.com", "password": ""})
    assert r.status_code == 200
    login = await client.post("/api/login", json={"identifier": "t@x.com", "password": "pw", "role": "teacher"})
    assert login.status_code == 200
    assert login.json()["full_name"] == "T2"


async def test_update_missing_account(client):
    r = await client.post("/api/admin/update-user",
                          json={"id": 42, "role": "teacher", "full_name": "X", "email": "x@x.com"})
    assert r.status_code == 404
    assert r.json() == {"success": False, "message": "teacher with ID 42 not found."}


async def test_update_email_collision(client):
    await _register_student(client, "a@x.com", "A")
    await _register_student(client, "b@x.com", "B")
    b_id = (await _students(client))[0]["id"]
    r = await client.post("/api/admin/update-user",
                          json={"id": b_id, "role": "student", "full_name": "B", "email": "a@x.com"})
    assert r.status_code == 409
    assert r.json()["message"] == "Update failed: That email is already in use by another account."
    assert {s["email"] for s in await _students(client)} == {"a@x.com", "b@x.com"}


@pytest.mark.parametrize("missing", ["id", "role", "full_name", "email"])
async def test_update_requires_fields(client, missing):
    body = {"id": 1, "role": "teacher", "full_name": "X", "email": "x@x.com"}
    body.pop(missing)
    r = await client.post("/api/admin/update-user", json=body)
    assert r.status_code == 400


# Delete

@pytest.mark.parametrize("account_id", [1, 999, None])
async def test_admin_role_can_never_be_deleted(client, account_id):
    await client.post("/api/admin/register-user",
                      json={"role": "admin", "full_name": "Admin", "email": ADMIN_EMAIL, "password": "pw"})
    r = await client.post("/api/admin/delete-user", json={"id": account_id, "role": "admin"})
    assert r.status_code == 403
    assert r.json() == {"success": False, "message": "The admin account cannot be deleted."}
    assert len(await _teachers(client)) == 1


async def test_admin_row_cannot_be_deleted_as_teacher(client):
    await client.post("/api/admin/register-user",
                      json={"role": "admin", "full_name": "Admin", "email": ADMIN_EMAIL, "password": "pw"})
    admin_id = (await _teachers(client))[0]["id"]
    r = await client.post("/api/admin/delete-user", json={"id": admin_id, "role": "teacher"})
    assert r.status_code == 403
    assert len(await _teachers(client)) == 1


async def test_delete_student(client):
    await _register_student(client)
    student_id = (await _students(client))[0]["id"]
    r = await client.post("/api/admin/delete-user", json={"id": student_id, "role": "student"})
    assert r.status_code == 200
    assert r.json()["success"] is True
    assert await _students(client) == []
    assert (await _activities(client))[0] == "Removed STUDENT account: Student One (s@x.com)."


async def test_delete_teacher(client):
    await _register_teacher(client)
    teacher_id = (await _teachers(client))[0]["id"]
    r = await client.post("/api/admin/delete-user", json={"id": teacher_id, "role": "teacher"})
    assert r.status_code == 200
    assert await _teachers(client) == []
    assert (await _activities(client))[0] == "Removed FACULTY account: Teacher One (t@x.com)."


async def test_delete_missing_account(client):
    r = await client.post("/api/admin/delete-user", json={"id": 7, "role": "student"})
    assert r.status_code == 404
    assert r.json()["success"] is False


async def test_delete_requires_known_role(client):
    r = await client.post("/api/admin/delete-user", json={"id": 7, "role": "janitor"})
    assert r.status_code == 400


# Activity feed

async def test_activity_feed_is_capped_at_ten(client):
    for i in range(12):
        await _register_student(client, f"s{i}@x.com", f"S{i}")
    body = (await client.get("/api/admin/activities")).json()
    assert body["success"] is True
    assert len(body["activities"]) == 10
    assert "S11" in body["activities"][0]["description"]
    assert "S2 " in body["activities"][-1]["description"]
    assert all(set(a) == {"timestamp", "description"} for a in body["activities"])
