"""Record store repository tests against the in-memory store."""

import json

import httpx
import pytest

from employee_api.config import Settings
from employee_api.exceptions import StoreError
from employee_api.repositories.employee_repository import (
    EmployeeRepository,
    create_store_client,
)
from tests.fakes import VALID_EMPLOYEE, FakeRecordStore


@pytest.fixture
def repository(store_client: httpx.AsyncClient) -> EmployeeRepository:
    return EmployeeRepository(store_client)


class TestList:
    async def test_sends_filters_and_paging_params(
        self, repository: EmployeeRepository, store: FakeRecordStore
    ) -> None:
        await repository.list({"department": "Engineering", "status": ""}, page=2, limit=5)

        request = store.requests[-1]
        assert request.method == "GET"
        assert request.url.path == "/employees"
        assert dict(request.url.params) == {
            "department": "Engineering",
            "_page": "2",
            "_limit": "5",
        }

    async def test_total_count_from_header(
        self, repository: EmployeeRepository, store: FakeRecordStore
    ) -> None:
        for _ in range(3):
            store.add(VALID_EMPLOYEE)

        page = await repository.list(page=1, limit=2)

        assert len(page.records) == 2
        assert page.total_count == 3

    async def test_total_count_falls_back_to_page_length(
        self, repository: EmployeeRepository, store: FakeRecordStore
    ) -> None:
        for _ in range(3):
            store.add(VALID_EMPLOYEE)
        store.omit_total_header = True

        page = await repository.list(page=1, limit=2)

        assert page.total_count == 2

    async def test_filters_records(self, repository: EmployeeRepository, store: FakeRecordStore) -> None:
        store.add(VALID_EMPLOYEE)
        store.add({**VALID_EMPLOYEE, "department": "Sales"})

        page = await repository.list({"department": "Sales"})

        assert [r["department"] for r in page.records] == ["Sales"]
        assert page.total_count == 1

    async def test_store_failure_raises_store_error(
        self, repository: EmployeeRepository, store: FakeRecordStore
    ) -> None:
        store.fail_status = 503

        with pytest.raises(StoreError) as exc_info:
            await repository.list()

        assert exc_info.value.message == "Failed to fetch employees: Request failed with status code 503"
        assert exc_info.value.status_code is None

    async def test_non_list_payload_rejected(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"oops": True}))
        async with httpx.AsyncClient(base_url="http://store.test", transport=transport) as client:
            with pytest.raises(StoreError, match="Failed to fetch employees"):
                await EmployeeRepository(client).list()


class TestSingleRecord:
    async def test_create_then_fetch(self, repository: EmployeeRepository, store: FakeRecordStore) -> None:
        created = await repository.create(VALID_EMPLOYEE)

        assert created["id"] == 1
        assert json.loads(store.requests[-1].content) == VALID_EMPLOYEE
        assert await repository.get_by_id(str(created["id"])) == created

    async def test_missing_record_is_none(self, repository: EmployeeRepository) -> None:
        assert await repository.get_by_id("999") is None

    async def test_update_uses_patch_and_keeps_other_fields(
        self, repository: EmployeeRepository, store: FakeRecordStore
    ) -> None:
        stored = store.add(VALID_EMPLOYEE)

        updated = await repository.update(str(stored["id"]), {"salary": 85000})

        assert store.requests[-1].method == "PATCH"
        assert updated is not None
        assert updated["salary"] == 85000
        assert updated["firstName"] == "John"

    async def test_update_missing_is_none(self, repository: EmployeeRepository) -> None:
        assert await repository.update("999", {"salary": 1}) is None

    async def test_remove(self, repository: EmployeeRepository, store: FakeRecordStore) -> None:
        stored = store.add(VALID_EMPLOYEE)

        assert await repository.remove(str(stored["id"])) is True
        assert store.records == {}
        assert await repository.remove(str(stored["id"])) is False

    @pytest.mark.parametrize(
        ("operation", "message"),
        [
            ("get", "Failed to fetch employee: Request failed with status code 500"),
            ("create", "Failed to create employee: Request failed with status code 500"),
            ("update", "Failed to update employee: Request failed with status code 500"),
            ("remove", "Failed to delete employee: Request failed with status code 500"),
        ],
    )
    async def test_store_failures_name_the_operation(
        self,
        repository: EmployeeRepository,
        store: FakeRecordStore,
        operation: str,
        message: str,
    ) -> None:
        store.fail_status = 500
        calls = {
            "get": lambda: repository.get_by_id("1"),
            "create": lambda: repository.create(VALID_EMPLOYEE),
            "update": lambda: repository.update("1", {"salary": 1}),
            "remove": lambda: repository.remove("1"),
        }

        with pytest.raises(StoreError) as exc_info:
            await calls[operation]()

        assert exc_info.value.message == message

    async def test_id_is_sent_as_one_path_segment(
        self, repository: EmployeeRepository, store: FakeRecordStore
    ) -> None:
        store.add(VALID_EMPLOYEE)

        assert await repository.get_by_id("1?_page=1#x") is None

        request = store.requests[-1]
        assert request.url.raw_path == b"/employees/1%3F_page%3D1%23x"
        assert request.url.query == b""

    @pytest.mark.parametrize(
        ("operation", "message"),
        [
            ("get", "Failed to fetch employee: Unexpected response payload"),
            ("create", "Failed to create employee: Unexpected response payload"),
            ("update", "Failed to update employee: Unexpected response payload"),
        ],
    )
    async def test_non_object_payload_rejected(self, operation: str, message: str) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=[1, 2]))
        async with httpx.AsyncClient(base_url="http://store.test", transport=transport) as client:
            repository = EmployeeRepository(client)
            calls = {
                "get": lambda: repository.get_by_id("1"),
                "create": lambda: repository.create(VALID_EMPLOYEE),
                "update": lambda: repository.update("1", {"salary": 1}),
            }

            with pytest.raises(StoreError) as exc_info:
                await calls[operation]()

        assert exc_info.value.message == message

    async def test_transport_error_message(
        self, repository: EmployeeRepository, store: FakeRecordStore
    ) -> None:
        store.fail_exception = httpx.ConnectError("connection refused")

        with pytest.raises(StoreError, match="Failed to create employee: connection refused"):
            await repository.create(VALID_EMPLOYEE)


class TestStoreClient:
    async def test_client_configuration(self) -> None:
        settings = Settings(_env_file=None, record_store_url="http://store.test:3001/")
        client = create_store_client(settings)
        try:
            assert settings.record_store_url == "http://store.test:3001"
            assert client.base_url.host == "store.test"
            assert client.headers["Accept"] == "application/json"
            assert client.timeout.connect == settings.record_store_connect_timeout_seconds
            assert client.timeout.read == settings.record_store_timeout_seconds
        finally:
            await client.aclose()
