import pytest
from fastapi.testclient import TestClient

from staff_roster.main import create_app
from staff_roster.models.employee_schema import Employee
from staff_roster.repositories.employee_repository import EmployeeRepository
from staff_roster.repositories.kv_store import KeyValueStore
from staff_roster.repositories.settings_repository import SettingsRepository, default_settings


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "roster.db")


@pytest.fixture
def store(db_path):
    kv = KeyValueStore(db_path)
    yield kv
    kv.close()


@pytest.fixture
def employee_repository(store):
    return EmployeeRepository(store)


@pytest.fixture
def settings_repository(store):
    return SettingsRepository(store)


@pytest.fixture
def settings():
    return default_settings()


@pytest.fixture
def make_employee():
    def _make(employee_id="10234", **overrides):
        data = {
            "id": employee_id,
            "name": "John Doe",
            "designation": "Driver",
            "type": "Permanent",
            "status": "Working",
            "unitCode": "TVM",
            "phone": "9847012345",
            "email": "john@example.com",
            "joinedDate": "2024-01-15",
            "customFields": {"staffCategory": "Driver"},
        }
        data.update(overrides)
        return Employee.model_validate(data)

    return _make


@pytest.fixture
def client(db_path):
    app = create_app(db_path)
    with TestClient(app) as test_client:
        yield test_client


def _login(client, **payload):
    response = client.post("/login", json=payload)
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def admin_headers(client):
    return _login(client, mode="admin", username="admin", password="admin123")


@pytest.fixture
def unit_headers(client):
    return _login(client, mode="unit", unitCode="TVM", password="ksrtc")
