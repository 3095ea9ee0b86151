from fastapi.testclient import TestClient

from tests.helpers.asserts import API, api_call, assert_error


def test_course_with_materials(client: TestClient, headers, material_factory):
    first = material_factory(title="Part 1")
    second = material_factory(title="Part 2")

    course = api_call(client, "POST", "/courses/", headers=headers, json={"title": "Security Awareness"}).json()["data"]
    assert course["is_active"] is True

    api_call(client, "POST", f"/courses/{course['id']}/materials/{second.id}", headers=headers, json={"order_index": 2})
    api_call(client, "POST", f"/courses/{course['id']}/materials/{first.id}", headers=headers, json={"order_index": 1, "is_required": False})

    r = client.post(f"{API}/courses/{course['id']}/materials/{first.id}", headers=headers, json={})
    assert_error(r, 409, "CONFLICT")

    r = api_call(client, "GET", f"/courses/{course['id']}/materials", headers=headers)
    links = r.json()["data"]
    assert [link["material_id"] for link in links] == [first.id, second.id]
    assert links[0]["material"]["title"] == "Part 1"

    r = api_call(client, "GET", f"/courses/{course['id']}", headers=headers)
    assert len(r.json()["data"]["course_materials"]) == 2

    api_call(client, "DELETE", f"/courses/{course['id']}/materials/{first.id}", headers=headers)
    r = client.delete(f"{API}/courses/{course['id']}/materials/{first.id}", headers=headers)
    assert_error(r, 404, "NOT_FOUND")


def test_course_update_list_delete(client: TestClient, headers):
    course = api_call(client, "POST", "/courses/", headers=headers, json={"title": "Ethics"}).json()["data"]
    api_call(client, "POST", "/courses/", headers=headers, json={"title": "Archived", "is_active": False})

    r = api_call(client, "PUT", f"/courses/{course['id']}", headers=headers, json={"description": "Code of conduct"})
    assert r.json()["data"]["description"] == "Code of conduct"

    r = api_call(client, "GET", "/courses/", headers=headers, params={"is_active": True})
    assert [c["id"] for c in r.json()["data"]] == [course["id"]]

    api_call(client, "DELETE", f"/courses/{course['id']}", headers=headers)
    assert_error(client.get(f"{API}/courses/{course['id']}", headers=headers), 404, "NOT_FOUND")
