# tests/test_task_client.py
"""
TaskClient 测试 - 通过 ASGITransport 直接调用应用
"""
import httpx
import pytest

from taskmanager.client import SendResultKind, TaskClient
from taskmanager.schemas.enums.base_enums import CallerScopeEnum, TaskStatusEnum


def make_client(app, **kwargs) -> TaskClient:
    return TaskClient("http://testserver", transport=httpx.ASGITransport(app=app), **kwargs)


class TestTaskClient:
    """测试客户端调用"""

    @pytest.mark.asyncio
    async def test_full_round_trip(self, app):
        async with make_client(app, caller_scope=CallerScopeEnum.REMOTE) as client:
            created = await client.create_task("Write spec", "draft", assigned_to="alice")
            assert created.is_success
            task = created.unwrap().task
            assert task.status == "pending"
            assert task.assigned_to == "alice"

            fetched = (await client.get_task(task.id)).unwrap()
            assert fetched.success is True
            assert fetched.task.id == task.id

            updated = (await client.update_task_status(task.id, TaskStatusEnum.COMPLETED)).unwrap()
            assert updated.task.status == "completed"

            completed = (await client.get_tasks_by_status(TaskStatusEnum.COMPLETED)).unwrap()
            assert [item.id for item in completed] == [task.id]

            all_tasks = (await client.get_all_tasks()).unwrap()
            assert len(all_tasks) == 1

            stats = (await client.get_statistics()).unwrap()
            assert stats.total_tasks == 1
            assert stats.completed_tasks == 1
            assert stats.creation_count == 1

    @pytest.mark.asyncio
    async def test_missing_task_is_successful_call_with_failed_envelope(self, app):
        async with make_client(app) as client:
            result = await client.get_task("missing")

        assert result.kind == SendResultKind.SUCCESS
        assert result.value.success is False
        assert result.value.task is None

    @pytest.mark.asyncio
    async def test_timeout_result(self):
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        async with TaskClient("http://task-manager", transport=httpx.MockTransport(handler)) as client:
            result = await client.get_statistics()

        assert result.kind == SendResultKind.TIMEOUT
        assert result.value is None
        with pytest.raises(RuntimeError):
            result.unwrap()

    @pytest.mark.asyncio
    async def test_offline_result(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with TaskClient("http://task-manager", transport=httpx.MockTransport(handler)) as client:
            result = await client.get_all_tasks()

        assert result.kind == SendResultKind.OFFLINE

    @pytest.mark.asyncio
    async def test_deserialization_error_result(self):
        def handler(request):
            return httpx.Response(200, json={"unexpected": True})

        async with TaskClient("http://task-manager", transport=httpx.MockTransport(handler)) as client:
            result = await client.get_statistics()

        assert result.kind == SendResultKind.DESERIALIZATION_ERROR
        assert result.error

    @pytest.mark.asyncio
    async def test_rpc_calls_carry_caller_scope(self):
        seen = {}

        def handler(request):
            seen["scope"] = request.headers.get("X-Caller-Scope")
            seen["path"] = request.url.path
            return httpx.Response(200, json=[])

        async with TaskClient(
            "http://task-manager",
            caller_scope=CallerScopeEnum.REMOTE,
            transport=httpx.MockTransport(handler)
        ) as client:
            result = await client.get_tasks_by_status(TaskStatusEnum.PENDING)

        assert result.unwrap() == []
        assert seen == {"scope": "remote", "path": "/api/v1/rpc"}
