from conftest import ADMIN_CONTACT

STUDENT_PAYLOAD = {
    "contact": "9000000001",
    "name": "Ayesha",
    "father_name": "Abdul Karim",
    "class_name": "Class III",
    "roll_number": "1",
}


def _student_headers(contact="9000000001"):
    return {"Authorization": f"Bearer {contact}"}


def test_health(anon_client):
    response = anon_client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["storage"] == "local_store"


def test_login_roles(client, anon_client):
    response = anon_client.post("/api/auth/login", json={"contact": ADMIN_CONTACT})
    assert response.status_code == 200, response.text
    assert response.json()["user"]["role"] == "TEACHER"

    assert anon_client.post("/api/auth/login", json={"contact": "9000000001"}).status_code == 401

    client.post("/api/students", json=STUDENT_PAYLOAD)
    response = anon_client.post("/api/auth/login", json={"contact": "9000000001"})
    assert response.json()["user"]["role"] == "STUDENT"
    assert response.json()["user"]["class_name"] == "Class III"

    assert anon_client.post("/api/auth/login", json={"contact": "abc"}).status_code == 422


def test_student_crud_flow(client):
    create_response = client.post("/api/students", json=STUDENT_PAYLOAD)
    assert create_response.status_code == 201, f"Failed to create student: {create_response.text}"

    duplicate = client.post("/api/students", json={**STUDENT_PAYLOAD, "name": "Other"})
    assert duplicate.status_code == 409

    roster = client.get("/api/students", params={"class_name": "Class III"})
    assert [s["contact"] for s in roster.json()] == ["9000000001"]

    update_payload = {k: v for k, v in STUDENT_PAYLOAD.items() if k != "contact"}
    update_payload["roll_number"] = "7"
    assert client.put("/api/students/9000000001", json=update_payload).json()["roll_number"] == "7"

    assert client.delete("/api/students/9000000001").status_code == 204
    assert client.get("/api/students/9000000001").status_code == 404


def test_students_cannot_use_admin_routes(client):
    client.post("/api/students", json=STUDENT_PAYLOAD)
    response = client.get("/api/students", headers=_student_headers())
    assert response.status_code == 403
    assert client.get("/api/students", headers={"Authorization": "Bearer 9999999999"}).status_code == 401
    assert client.get("/api/students", headers={"Authorization": ""}).status_code == 401


def test_results_flow(client):
    client.post("/api/students", json=STUDENT_PAYLOAD)
    client.post("/api/students", json={**STUDENT_PAYLOAD, "contact": "9000000002", "roll_number": "2"})

    bulk = client.post("/api/results/bulk", json={
        "exam_name": "Annual 2024",
        "subject_name": "mathematics",
        "updates": [
            {"student_id": "9000000001", "marks": 90},
            {"student_id": "9000000002", "marks": 95},
        ],
    })
    assert bulk.status_code == 200, bulk.text
    assert bulk.json()["failed"] == {}

    single = client.put("/api/results/marks", json={
        "student_id": "9000000001", "exam_name": "Annual 2024", "subject_name": "ENGLISH", "marks": 30,
    })
    result = single.json()
    assert result["marks"] == {"MATHEMATICS": 90, "ENGLISH": 30}
    assert result["total_marks"] == 120
    assert result["percentage"] == 60.0
    assert result["overall_grade"] == "B"
    assert result["is_pass"] is False

    rank = client.get("/api/results/9000000001/Annual 2024/rank", headers=_student_headers())
    assert rank.json()["rank"] == 1

    marksheet = client.get("/api/results/9000000001/Annual 2024/marksheet", headers=_student_headers())
    assert marksheet.status_code == 200
    assert marksheet.json()["student"]["name"] == "Ayesha"

    # A student only sees their own results
    own = client.get("/api/results", params={"student_id": "9000000002"}, headers=_student_headers())
    assert [r["student_id"] for r in own.json()] == ["9000000001"]
    assert client.get("/api/results/9000000002/Annual 2024", headers=_student_headers()).status_code == 403
    assert client.get("/api/results/9000000001/Unknown").status_code == 404


def test_full_result_update(client):
    response = client.put("/api/results", json={
        "student_id": "9000000001", "exam_name": "Half Yearly", "marks": {"arabic": 70, "bengali": 80},
    })
    assert response.status_code == 200, response.text
    assert response.json()["marks"] == {"ARABIC": 70, "BENGALI": 80}
    assert response.json()["overall_grade"] == "B+"

    negative = client.put("/api/results", json={
        "student_id": "9000000001", "exam_name": "Half Yearly", "marks": {"ARABIC": -1},
    })
    assert negative.status_code == 422


def test_rank_uses_the_stored_exam_name(client):
    client.put("/api/results", json={"student_id": "9000000001", "exam_name": "Term 1", "marks": {"MATHEMATICS": 60}})
    client.put("/api/results", json={"student_id": "9000000002", "exam_name": "Term 1", "marks": {"MATHEMATICS": 80}})

    rank = client.get("/api/results/9000000001/Term  1/rank")
    assert rank.status_code == 200, rank.text
    assert rank.json()["exam_name"] == "Term 1"
    assert rank.json()["rank"] == 2


def test_attendance_flow(client):
    client.post("/api/students", json=STUDENT_PAYLOAD)
    client.post("/api/students", json={**STUDENT_PAYLOAD, "contact": "9000000002", "roll_number": "2"})

    for present_ids in (["9000000001"], ["9000000001"], ["9000000002"]):
        response = client.post("/api/attendance/class", json={
            "class_name": "Class III", "date": "2024-01-05", "present_ids": present_ids,
        })
        assert response.status_code == 200, response.text

    first = client.get("/api/attendance/9000000001", headers=_student_headers()).json()
    assert first["total_classes"] == 1
    assert first["present_days"] == 0

    second = client.get("/api/attendance/9000000002").json()
    assert second["present_days"] == 1
    assert second["attendance_percentage"] == 100.0

    register = client.get("/api/attendance/class", params={"class_name": "Class III", "date": "2024-01-05"})
    assert [e["status"] for e in register.json()] == ["absent", "present"]

    empty = client.get("/api/attendance/9000000009").json()
    assert empty["total_classes"] == 0


def test_fees_flow(client):
    client.put("/api/fees/records/month", json={
        "student_id": "9000000001", "year": "2024", "month": "January", "paid": True,
    })
    record = client.get("/api/fees/records/9000000001/2024").json()
    assert record["payments"] == {"January": True}

    due = client.get("/api/fees/records/9000000001/2024/due").json()
    assert len(due) == 11
    assert "January" not in due

    assert client.put("/api/fees/structure", json={"fees": {"KG": 250}}).status_code == 200
    assert client.get("/api/fees/structure").json() == {"fees": {"KG": 250}}
    assert client.get("/api/fees/records", params={"year": "24"}).status_code == 400
    assert client.get("/api/fees/records/9000000001/abcd/due").status_code == 400
    assert client.get("/api/fees/records/9000000001/abcd").status_code == 400


def test_notifications_and_feedback(client, anon_client):
    created = client.post("/api/notifications", json={"text": "School closed on Friday"})
    assert created.status_code == 201
    client.post("/api/notifications", json={"text": "Exams start Monday"})

    notices = anon_client.get("/api/notifications").json()
    assert [n["text"] for n in notices][0] == "Exams start Monday"

    assert client.delete(f"/api/notifications/{created.json()['id']}").status_code == 204
    assert client.delete(f"/api/notifications/{created.json()['id']}").status_code == 404

    feedback = anon_client.post("/api/feedback", json={"name": "Parent", "message": "Thank you"})
    assert feedback.status_code == 201
    assert [f["message"] for f in client.get("/api/feedback").json()] == ["Thank you"]


def test_upload_without_cloudinary_returns_data_url(client):
    response = client.post(
        "/api/uploads",
        files={"file": ("notice.png", b"png-bytes", "image/png")},
        data={"folder": "notifications"},
    )
    assert response.status_code == 200, response.text
    assert response.json()["url"].startswith("data:image/png;base64,")


def test_school_options(anon_client):
    options = anon_client.get("/api/config/school-options").json()
    assert options["classes"][0] == "Nursery"
    assert len(options["months"]) == 12
    assert options["subjects"][0] == {"name": "BENGALI", "max_marks": 100}
