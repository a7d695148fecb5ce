import json
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from todo_service.clock import FixedClock
from todo_service.id_generators import FixedIdGenerator
from todo_service.models import Todo
from todo_service.services import TodoService

DEFAULT_ID = "0001"
TODAY = FixedClock(datetime(2020, 12, 2, tzinfo=timezone.utc))

MOCK_DATABASE = [
    {
        "text": "I must meet Chaves da Silva",
        "when": datetime(2021, 1, 21, tzinfo=timezone.utc),
        "status": "late",
        "id": "fc46b981-334d-481f-afb1-fc66289118c3",
    }
]

MOCK_CREATE_RESULT = {
    "text": "I must plan my trip to Europe",
    "when": "2021-03-22T00:00:00.000Z",
    "status": "late",
    "id": "3b69f9c1-3c7a-40a8-96eb-9094ea957f83",
    "meta": {"revision": 0, "created": 1691176461051, "version": 0},
    "$loki": 3,
}


def make_service(repository, clock=TODAY):
    return TodoService(repository, clock=clock, id_generator=FixedIdGenerator(DEFAULT_ID))


class TestList:
    @pytest.mark.asyncio
    async def test_returns_items_with_uppercase_text(self):
        repository = AsyncMock()
        repository.list.return_value = MOCK_DATABASE
        service = make_service(repository)

        expected = [{**item, "text": item["text"].upper()} for item in MOCK_DATABASE]
        result = await service.list()

        assert result == expected
        assert repository.list.await_count == 1

    @pytest.mark.asyncio
    async def test_preserves_field_order_and_does_not_mutate_storage(self):
        repository = AsyncMock()
        repository.list.return_value = MOCK_DATABASE
        service = make_service(repository)

        result = await service.list()

        assert list(result[0].keys()) == ["text", "when", "status", "id"]
        assert MOCK_DATABASE[0]["text"] == "I must meet Chaves da Silva"

    @pytest.mark.asyncio
    async def test_repository_failure_propagates(self):
        repository = AsyncMock()
        repository.list.side_effect = RuntimeError("storage down")
        service = make_service(repository)

        with pytest.raises(RuntimeError, match="storage down"):
            await service.list()


class TestCreate:
    @pytest.mark.asyncio
    async def test_does_not_save_todo_with_invalid_data(self):
        repository = AsyncMock()
        service = make_service(repository)

        result = await service.create(Todo(text="", when=""))

        expected = {
            "error": {
                "message": "invalid data",
                "data": {"text": "", "when": "", "status": "", "id": DEFAULT_ID},
            }
        }
        assert json.dumps(result) == json.dumps(expected)
        repository.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_text_alone_is_invalid(self):
        repository = AsyncMock()
        service = make_service(repository)

        result = await service.create(Todo(text="", when="2021-12-01T12:00:00Z"))

        assert result["error"]["message"] == "invalid data"
        assert result["error"]["data"]["id"] == DEFAULT_ID
        repository.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unparseable_when_is_invalid(self):
        repository = AsyncMock()
        service = make_service(repository)

        result = await service.create(Todo(text="Walk the dog", when="next tuesday"))

        assert result["error"]["data"] == {
            "text": "Walk the dog",
            "when": "next tuesday",
            "status": "",
            "id": DEFAULT_ID,
        }
        repository.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_saves_pending_todo_when_due_date_is_in_the_future(self):
        repository = AsyncMock()
        repository.create.return_value = MOCK_CREATE_RESULT
        service = make_service(repository)
        when = datetime(2021, 12, 1, 12, 0, tzinfo=timezone.utc)

        result = await service.create(Todo(text="I must plan my trip to Europe", when=when))

        repository.create.assert_awaited_once_with(
            {
                "text": "I must plan my trip to Europe",
                "when": when,
                "status": "pending",
                "id": DEFAULT_ID,
            }
        )
        assert result == MOCK_CREATE_RESULT

    @pytest.mark.asyncio
    async def test_saves_late_todo_when_due_date_is_in_the_past(self):
        repository = AsyncMock()
        repository.create.return_value = MOCK_CREATE_RESULT
        service = make_service(repository)
        when = datetime(2020, 12, 1, 12, 0, tzinfo=timezone.utc)

        await service.create(Todo(text="I must plan my trip to Europe", when=when))

        assert repository.create.await_count == 1
        saved = repository.create.await_args.args[0]
        assert saved == {
            "text": "I must plan my trip to Europe",
            "when": when,
            "status": "late",
            "id": DEFAULT_ID,
        }

    @pytest.mark.asyncio
    async def test_due_date_equal_to_now_is_late(self):
        repository = AsyncMock()
        service = make_service(repository)

        await service.create(Todo(text="Right now", when=TODAY.now()))

        assert repository.create.await_args.args[0]["status"] == "late"

    @pytest.mark.asyncio
    async def test_string_and_date_only_due_dates(self):
        repository = AsyncMock()
        service = make_service(repository)

        await service.create(Todo(text="String", when="2021-03-22T00:00:00.000Z"))
        await service.create(Todo(text="Date only", when="2020-12-03"))
        await service.create(Todo(text="Naive", when=datetime(2020, 12, 1)))

        statuses = [call.args[0]["status"] for call in repository.create.await_args_list]
        assert statuses == ["pending", "pending", "late"]

    @pytest.mark.asyncio
    async def test_record_holds_exactly_the_four_todo_fields(self):
        repository = AsyncMock()
        service = make_service(repository)

        await service.create(Todo(text="Fields", when="2030-01-01"))

        saved = repository.create.await_args.args[0]
        assert list(saved.keys()) == ["text", "when", "status", "id"]

    @pytest.mark.asyncio
    async def test_repository_failure_propagates(self):
        repository = AsyncMock()
        repository.create.side_effect = RuntimeError("storage down")
        service = make_service(repository)

        with pytest.raises(RuntimeError, match="storage down"):
            await service.create(Todo(text="Boom", when="2030-01-01"))

    @pytest.mark.asyncio
    async def test_default_collaborators_assign_uuid_ids(self):
        repository = AsyncMock()
        service = TodoService(repository)

        await service.create(Todo(text="Real clock", when="2999-01-01"))

        saved = repository.create.await_args.args[0]
        assert saved["status"] == "pending"
        assert len(saved["id"]) == 36
