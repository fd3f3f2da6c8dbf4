"""Tests for user endpoints."""

from fastapi.testclient import TestClient


class TestListUsers:
    """GET /api/users."""

    def test_search_matches_name_or_email(self, test_client: TestClient, factory):
        factory.user(name="Ada Lovelace", email="ada@analytical.org")
        factory.user(name="Charles Babbage", email="charles@engine.org")
        factory.user(name="Alan Turing", email="alan@bletchley.uk")

        body = test_client.get("/api/users", params={"search": "ENGINE"}).json()
        assert [u["name"] for u in body["data"]] == ["Charles Babbage"]

        body = test_client.get("/api/users", params={"search": ".org"}).json()
        assert body["pagination"]["total"] == 2

    def test_role_is_exact(self, test_client: TestClient, factory):
        factory.user(role="student")
        factory.user(role="student")
        factory.user(role="teacher")
        factory.user(role="admin")

        body = test_client.get("/api/users", params={"role": "student"}).json()
        assert body["pagination"]["total"] == 2
        assert {u["role"] for u in body["data"]} == {"student"}

        body = test_client.get("/api/users", params={"role": "stud"}).json()
        assert body["pagination"]["total"] == 0
        assert body["pagination"]["totalPages"] == 0

    def test_camel_case_fields(self, test_client: TestClient, factory):
        factory.user(image="https://cdn.example/a.png")
        user = test_client.get("/api/users").json()["data"][0]
        assert user["emailVerified"] is True
        assert user["image"] == "https://cdn.example/a.png"
        assert "createdAt" in user and "updatedAt" in user
        assert "email_verified" not in user

    def test_every_page_but_the_last_is_full(self, test_client: TestClient, factory):
        for _ in range(7):
            factory.user()

        seen = []
        for page in (1, 2, 3):
            body = test_client.get("/api/users", params={"page": page, "limit": 3}).json()
            assert body["pagination"]["total"] == 7
            assert body["pagination"]["totalPages"] == 3
            seen.extend(u["id"] for u in body["data"])
            assert len(body["data"]) == (3 if page < 3 else 1)
        assert len(set(seen)) == 7


class TestUserDetails:
    """GET /api/users/{id}."""

    def test_unknown_user(self, test_client: TestClient):
        response = test_client.get("/api/users/does-not-exist")
        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}

    def test_admin_gets_bare_user(self, test_client: TestClient, factory):
        admin = factory.user(role="admin", name="Root")
        data = test_client.get(f"/api/users/{admin.id}").json()["data"]
        assert set(data) == {"user"}
        assert data["user"]["name"] == "Root"

    def test_teacher_details(self, test_client: TestClient, factory):
        teacher = factory.user(role="teacher", name="Dr. Hopper")
        cs = factory.department(code="CS")
        math = factory.department(code="MATH")
        compilers = factory.subject(cs, name="Compilers")
        algebra = factory.subject(math, name="Algebra")
        factory.klass(compilers, teacher, name="Compilers A")
        factory.klass(compilers, teacher, name="Compilers B")
        factory.klass(algebra, teacher, name="Algebra A")
        factory.klass(algebra, factory.user(role="teacher"), name="Someone else's")

        response = test_client.get(f"/api/users/{teacher.id}")
        assert response.status_code == 200
        data = response.json()["data"]

        assert set(data) == {"user", "classes", "subjects", "departments", "totals"}
        assert "enrollments" not in data
        assert data["totals"] == {"classes": 3, "subjects": 2, "departments": 2}
        assert sorted(c["name"] for c in data["classes"]) == [
            "Algebra A",
            "Compilers A",
            "Compilers B",
        ]
        assert sorted(s["name"] for s in data["subjects"]) == ["Algebra", "Compilers"]
        assert sorted(d["code"] for d in data["departments"]) == ["CS", "MATH"]

        first = data["classes"][0]
        assert first["name"] == "Algebra A"
        assert first["subject"]["name"] == "Algebra"
        assert first["department"]["code"] == "MATH"

    def test_teacher_without_classes(self, test_client: TestClient, factory):
        teacher = factory.user(role="teacher")
        data = test_client.get(f"/api/users/{teacher.id}").json()["data"]
        assert data["classes"] == []
        assert data["totals"] == {"classes": 0, "subjects": 0, "departments": 0}

    def test_student_details(self, test_client: TestClient, factory):
        teacher = factory.user(role="teacher", name="Prof. Noether")
        department = factory.department(code="MATH")
        algebra = factory.subject(department, name="Algebra")
        topology = factory.subject(department, name="Topology")
        algebra_a = factory.klass(algebra, teacher, name="Algebra A")
        algebra_b = factory.klass(algebra, teacher, name="Algebra B")
        topology_a = factory.klass(topology, teacher, name="Topology A")

        student = factory.user(role="student")
        factory.enrollment(student, algebra_a)
        factory.enrollment(student, algebra_b)
        factory.enrollment(student, topology_a)
        factory.enrollment(student, topology_a)

        response = test_client.get(f"/api/users/{student.id}")
        assert response.status_code == 200
        data = response.json()["data"]

        assert set(data) == {"user", "enrollments", "classes", "subjects", "totals"}
        assert "departments" not in data
        assert data["totals"] == {"enrollments": 4, "classes": 3, "subjects": 2}
        assert sorted(c["name"] for c in data["classes"]) == [
            "Algebra A",
            "Algebra B",
            "Topology A",
        ]

        enrollment = data["enrollments"][0]
        assert enrollment["studentId"] == student.id
        assert enrollment["class"]["name"] == "Topology A"
        assert enrollment["subject"]["name"] == "Topology"
        assert enrollment["department"]["code"] == "MATH"
        assert enrollment["teacher"]["name"] == "Prof. Noether"

    def test_student_without_enrollments(self, test_client: TestClient, factory):
        student = factory.user(role="student")
        data = test_client.get(f"/api/users/{student.id}").json()["data"]
        assert data["enrollments"] == []
        assert data["classes"] == []
        assert data["totals"] == {"enrollments": 0, "classes": 0, "subjects": 0}
