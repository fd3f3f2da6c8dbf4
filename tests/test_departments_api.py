"""Tests for department endpoints."""

import math

import pytest
from fastapi.testclient import TestClient


class TestCreateDepartment:
    """POST /api/departments."""

    def test_create_then_fetch(self, test_client: TestClient):
        response = test_client.post(
            "/api/departments", json={"code": "CS", "name": "Computer Science"}
        )
        assert response.status_code == 201
        department_id = response.json()["data"]["id"]
        assert isinstance(department_id, int)

        response = test_client.get(f"/api/departments/{department_id}")
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["department"]["code"] == "CS"
        assert data["department"]["name"] == "Computer Science"
        assert data["totals"] == {"subjects": 0, "classes": 0, "enrolledStudents": 0}
        assert data["subjects"] == []
        assert data["classes"] == []
        assert data["enrolledStudents"] == []

    def test_missing_required_field_is_a_server_error(self, test_client: TestClient):
        response = test_client.post("/api/departments", json={"code": "EE"})
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to create department"}

    def test_duplicate_code_is_a_server_error(self, test_client: TestClient):
        body = {"code": "MATH", "name": "Mathematics"}
        assert test_client.post("/api/departments", json=body).status_code == 201
        response = test_client.post("/api/departments", json=body)
        assert response.status_code == 500
        assert "error" in response.json()

    def test_body_that_is_not_json_is_a_server_error(self, test_client: TestClient):
        response = test_client.post(
            "/api/departments",
            content="not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to create department"}

    def test_wrongly_typed_field_is_a_server_error(self, test_client: TestClient):
        response = test_client.post("/api/departments", json={"code": 7, "name": ["Physics"]})
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to create department"}


class TestListDepartments:
    """GET /api/departments."""

    def test_pagination_metadata(self, test_client: TestClient, factory):
        for i in range(5):
            factory.department(code=f"D{i}", name=f"Dept {i}")

        response = test_client.get("/api/departments", params={"page": 2, "limit": 2})
        assert response.status_code == 200
        body = response.json()
        assert len(body["data"]) == 2
        assert body["pagination"] == {
            "page": 2,
            "limit": 2,
            "total": 5,
            "totalPages": 3,
        }

        last = test_client.get("/api/departments", params={"page": 3, "limit": 2}).json()
        assert len(last["data"]) == 1

    def test_newest_first(self, test_client: TestClient, factory):
        factory.department(code="OLD", name="Old")
        factory.department(code="NEW", name="New")
        codes = [d["code"] for d in test_client.get("/api/departments").json()["data"]]
        assert codes == ["NEW", "OLD"]

    def test_search_matches_name_or_code(self, test_client: TestClient, factory):
        factory.department(code="PHY", name="Physics")
        factory.department(code="CHEM", name="Chemistry")
        factory.department(code="BIO", name="Biology")

        body = test_client.get("/api/departments", params={"search": "ph"}).json()
        assert [d["code"] for d in body["data"]] == ["PHY"]

        body = test_client.get("/api/departments", params={"search": "chem"}).json()
        assert [d["name"] for d in body["data"]] == ["Chemistry"]
        assert body["pagination"]["total"] == 1

    def test_empty_search_equals_no_search(self, test_client: TestClient, factory):
        for i in range(3):
            factory.department()
        without = test_client.get("/api/departments").json()["pagination"]["total"]
        empty = test_client.get("/api/departments", params={"search": ""}).json()
        assert empty["pagination"]["total"] == without == 3

    def test_total_subjects_does_not_inflate_total(self, test_client: TestClient, factory):
        department = factory.department(code="CS")
        for _ in range(4):
            factory.subject(department)
        factory.department(code="EMPTY")

        body = test_client.get("/api/departments").json()
        assert body["pagination"]["total"] == 2
        counts = {d["code"]: d["totalSubjects"] for d in body["data"]}
        assert counts == {"CS": 4, "EMPTY": 0}

    @pytest.mark.parametrize("page, limit", [("0", "0"), ("-1", "abc"), ("x", "-5")])
    def test_invalid_page_params_are_clamped(self, test_client: TestClient, factory, page, limit):
        factory.department()
        factory.department()
        response = test_client.get("/api/departments", params={"page": page, "limit": limit})
        assert response.status_code == 200
        pagination = response.json()["pagination"]
        assert pagination["page"] == 1
        assert pagination["limit"] == 1
        assert pagination["totalPages"] == math.ceil(pagination["total"] / 1)

    def test_huge_page_and_limit_are_capped(self, test_client: TestClient, factory):
        factory.department()
        huge = "99999999999999999999"

        response = test_client.get("/api/departments", params={"page": huge})
        assert response.status_code == 200
        body = response.json()
        assert body["data"] == []
        assert body["pagination"]["page"] == 2**31 - 1
        assert body["pagination"]["total"] == 1

        response = test_client.get("/api/departments", params={"limit": huge})
        assert response.status_code == 200
        body = response.json()
        assert len(body["data"]) == 1
        assert body["pagination"]["limit"] == 2**31 - 1
        assert body["pagination"]["totalPages"] == 1


class TestDepartmentDetails:
    """GET /api/departments/{id}."""

    def test_invalid_id(self, test_client: TestClient):
        response = test_client.get("/api/departments/abc")
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid department id"}

    @pytest.mark.parametrize("raw_id", ["1_0", "\u0661\u0662", "\uff11"])
    def test_id_must_be_ascii_digits(self, test_client: TestClient, factory, raw_id):
        factory.department()
        response = test_client.get(f"/api/departments/{raw_id}")
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid department id"}

    def test_unknown_id(self, test_client: TestClient):
        response = test_client.get("/api/departments/9999")
        assert response.status_code == 404
        assert response.json() == {"error": "Department not found"}

    def test_join_fan_out_does_not_inflate_subjects(self, test_client: TestClient, factory):
        department = factory.department(code="CS", name="Computer Science")
        teacher = factory.user(role="teacher", name="Prof. Knuth")
        subjects = [factory.subject(department) for _ in range(3)]
        classes = [
            factory.klass(subjects[0], teacher),
            factory.klass(subjects[0], teacher),
            factory.klass(subjects[1], teacher),
            factory.klass(subjects[1], teacher),
            factory.klass(subjects[2], teacher),
        ]

        other = factory.department(code="EE")
        factory.klass(factory.subject(other), teacher)

        data = test_client.get(f"/api/departments/{department.id}").json()["data"]
        assert len(data["subjects"]) == 3
        assert len(data["classes"]) == 5
        assert data["totals"]["subjects"] == 3
        assert data["totals"]["classes"] == 5

        class_counts = {s["id"]: s["totalClasses"] for s in data["subjects"]}
        assert class_counts == {subjects[0].id: 2, subjects[1].id: 2, subjects[2].id: 1}

        assert {c["id"] for c in data["classes"]} == {c.id for c in classes}
        first = data["classes"][0]
        assert first["subject"]["departmentId"] == department.id
        assert first["teacher"]["name"] == "Prof. Knuth"

    def test_enrolled_students_are_distinct(self, test_client: TestClient, factory):
        department = factory.department()
        teacher = factory.user(role="teacher")
        subject_a = factory.subject(department)
        subject_b = factory.subject(department)
        class_a = factory.klass(subject_a, teacher)
        class_b = factory.klass(subject_b, teacher)

        alice = factory.user(role="student", name="Alice")
        bob = factory.user(role="student", name="Bob")
        factory.enrollment(alice, class_a)
        factory.enrollment(alice, class_b)
        factory.enrollment(alice, class_b)
        factory.enrollment(bob, class_a)

        # Enrolled elsewhere only
        carol = factory.user(role="student", name="Carol")
        factory.enrollment(carol, factory.klass(factory.subject(factory.department()), teacher))

        data = test_client.get(f"/api/departments/{department.id}").json()["data"]
        names = sorted(s["name"] for s in data["enrolledStudents"])
        assert names == ["Alice", "Bob"]
        assert data["totals"]["enrolledStudents"] == 2
        assert set(data["enrolledStudents"][0]) == {"id", "name", "email", "image", "role"}

    def test_non_students_are_not_listed_as_enrolled(self, test_client: TestClient, factory):
        department = factory.department()
        teacher = factory.user(role="teacher")
        klass = factory.klass(factory.subject(department), teacher)
        factory.enrollment(factory.user(role="admin"), klass)

        data = test_client.get(f"/api/departments/{department.id}").json()["data"]
        assert data["enrolledStudents"] == []
