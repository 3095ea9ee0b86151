from fastapi.testclient import TestClient

from tests.helpers.asserts import API, api_call, assert_error
from training_engine.core.constants import AssignmentStatusEnum


def test_analytics_endpoints(client: TestClient, headers, material_factory, course_factory, assignment_factory):
    course = course_factory()
    material = material_factory()
    assignment_factory(material=material, user_id="admin-1", status=AssignmentStatusEnum.COMPLETED, progress_percentage=100)
    assignment_factory(course=course, user_id="admin-1")

    r = api_call(client, "GET", "/analytics/me", headers=headers)
    assert r.json()["data"]["total_assignments"] == 2
    assert r.json()["data"]["completion_rate"] == 50.0

    r = api_call(client, "GET", "/analytics/users/admin-1", headers=headers)
    assert r.json()["data"]["completed_assignments"] == 1

    r = api_call(client, "GET", f"/analytics/courses/{course.id}", headers=headers)
    assert r.json()["data"]["total_assignments"] == 1

    r = api_call(client, "GET", "/analytics/organization", headers=headers)
    data = r.json()["data"]
    assert (data["total_materials"], data["total_courses"], data["total_assignments"]) == (1, 1, 2)

    assert_error(client.get(f"{API}/analytics/courses/missing", headers=headers), 404, "NOT_FOUND")


def test_health(client: TestClient):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["data"]["status"] == "healthy"
    assert r.headers["X-Request-ID"]
