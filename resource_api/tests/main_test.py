import inspect

from fastapi.testclient import TestClient

from resource_api.infrastructure.response import JSONAPI_MEDIA_TYPE
from resource_api.main import app


def test_health_check():
    with TestClient(app) as client:
        response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "online"


def test_users_resource_is_mounted():
    with TestClient(app) as client:
        created = client.post(
            "/api/users",
            json={"data": {"type": "users", "name": "main", "email": "main@example.com"}},
            headers={"Content-Type": JSONAPI_MEDIA_TYPE},
        )
        assert created.status_code == 201
        user_id = created.json()["data"]["id"]

        listed = client.get("/api/users", params={"page[size]": "5"})
    assert listed.status_code == 200
    assert user_id in [user["id"] for user in listed.json()["data"]]
    assert listed.json()["links"]["first"] == "http://testserver/api/users?page[number]=1&page[size]=5"


def test_server_is_started_only_by_run_script():
    from resource_api import main

    assert "__main__" not in inspect.getsource(main)
