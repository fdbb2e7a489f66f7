"""Employee service tests: validation happens before any store call."""

import httpx
import pytest

from employee_api.exceptions import EmployeeNotFoundError, ValidationFailedError
from employee_api.repositories.employee_repository import EmployeeRepository
from employee_api.services.employee_service import EmployeeService
from tests.fakes import VALID_EMPLOYEE, FakeRecordStore


@pytest.fixture
def service(store_client: httpx.AsyncClient) -> EmployeeService:
    return EmployeeService(EmployeeRepository(store_client))


class TestListEmployees:
    async def test_pagination_metadata(self, service: EmployeeService, store: FakeRecordStore) -> None:
        for _ in range(25):
            store.add(VALID_EMPLOYEE)

        records, pagination = await service.list_employees(page=2, limit=10)

        assert len(records) == 10
        assert pagination.model_dump(by_alias=True) == {
            "currentPage": 2,
            "totalPages": 3,
            "totalCount": 25,
            "hasNext": True,
            "hasPrev": True,
        }

    async def test_empty_store(self, service: EmployeeService) -> None:
        records, pagination = await service.list_employees()

        assert records == []
        assert pagination.total_pages == 0
        assert pagination.has_next is False
        assert pagination.has_prev is False

    async def test_none_filters_not_sent(self, service: EmployeeService, store: FakeRecordStore) -> None:
        await service.list_employees({"department": None, "status": "active"})

        params = store.requests[-1].url.params
        assert "department" not in params
        assert params["status"] == "active"


class TestCreateEmployee:
    async def test_invalid_payload_never_reaches_store(
        self, service: EmployeeService, store: FakeRecordStore
    ) -> None:
        with pytest.raises(ValidationFailedError):
            await service.create_employee({"firstName": "J"})

        assert store.requests == []

    async def test_default_status_applied(self, service: EmployeeService, store: FakeRecordStore) -> None:
        payload = {k: v for k, v in VALID_EMPLOYEE.items() if k != "status"}

        created = await service.create_employee(payload)

        assert created["status"] == "active"
        assert store.records[str(created["id"])]["status"] == "active"


class TestSingleEmployee:
    async def test_get_missing_raises(self, service: EmployeeService) -> None:
        with pytest.raises(EmployeeNotFoundError) as exc_info:
            await service.get_employee("42")
        assert exc_info.value.message == "Employee not found"

    async def test_update_merges(self, service: EmployeeService, store: FakeRecordStore) -> None:
        stored = store.add(VALID_EMPLOYEE)

        updated = await service.update_employee(str(stored["id"]), {"position": "Staff Engineer"})

        assert updated["position"] == "Staff Engineer"
        assert updated["email"] == VALID_EMPLOYEE["email"]

    async def test_invalid_update_never_reaches_store(
        self, service: EmployeeService, store: FakeRecordStore
    ) -> None:
        stored = store.add(VALID_EMPLOYEE)

        with pytest.raises(ValidationFailedError):
            await service.update_employee(str(stored["id"]), {"salary": -1})

        assert store.requests == []
        assert store.records[str(stored["id"])]["salary"] == 75000

    async def test_update_missing_raises(self, service: EmployeeService) -> None:
        with pytest.raises(EmployeeNotFoundError):
            await service.update_employee("42", {"salary": 1})

    async def test_delete(self, service: EmployeeService, store: FakeRecordStore) -> None:
        stored = store.add(VALID_EMPLOYEE)

        await service.delete_employee(str(stored["id"]))

        assert store.records == {}
        with pytest.raises(EmployeeNotFoundError):
            await service.delete_employee(str(stored["id"]))
