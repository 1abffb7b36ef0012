# tests/test_task_store.py
"""
TaskStore 与 StatsTracker 测试
"""
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from taskmanager.domain.exceptions.task_exceptions import (
    InvalidInputException,
    StorageFailureException,
    TaskNotFoundException,
)
from taskmanager.infrastructure.storage import StatsTracker, TaskStore
from taskmanager.schemas.enums.base_enums import TaskStatusEnum


class TestTaskStore:
    """测试任务存储"""

    def setup_method(self):
        self.store = TaskStore()

    def test_create_sets_pending_and_fields(self):
        task = self.store.create("Write spec", "draft it")

        assert task.status == TaskStatusEnum.PENDING
        assert task.title == "Write spec"
        assert task.description == "draft it"
        assert task.assigned_to is None
        assert task.created_at > 0
        assert task.id

    def test_get_returns_created_task(self):
        task = self.store.create("Write spec", "", assigned_to="alice")

        assert self.store.get(task.id) == task
        assert self.store.get(task.id).assigned_to == "alice"

    def test_ids_are_unique(self):
        ids = {self.store.create(f"task {i}", "").id for i in range(100)}
        assert len(ids) == 100

    def test_empty_title_rejected(self):
        with pytest.raises(InvalidInputException):
            self.store.create("", "description")
        with pytest.raises(InvalidInputException):
            self.store.create("   ", "description")
        assert self.store.list() == []

    def test_get_unknown_raises_not_found(self):
        with pytest.raises(TaskNotFoundException) as exc_info:
            self.store.get("missing")
        assert exc_info.value.details["entity_id"] == "missing"

    def test_list_preserves_insertion_order(self):
        titles = ["first", "second", "third"]
        for title in titles:
            self.store.create(title, "")

        assert [task.title for task in self.store.list()] == titles

    def test_update_status_any_transition_allowed(self):
        task = self.store.create("flip", "")

        for status in [
            TaskStatusEnum.COMPLETED,
            TaskStatusEnum.PENDING,
            TaskStatusEnum.CANCELLED,
            TaskStatusEnum.IN_PROGRESS,
        ]:
            updated = self.store.update_status(task.id, status)
            assert updated.status == status
            assert self.store.get(task.id).status == status

    def test_update_status_keeps_immutable_fields(self):
        task = self.store.create("keep", "me", assigned_to="bob")
        updated = self.store.update_status(task.id, "completed")

        assert updated.id == task.id
        assert updated.title == task.title
        assert updated.description == task.description
        assert updated.created_at == task.created_at
        assert updated.assigned_to == task.assigned_to
        # 之前返回的快照不受影响
        assert task.status == TaskStatusEnum.PENDING

    def test_repeated_update_is_idempotent(self):
        task = self.store.create("same", "")
        first = self.store.update_status(task.id, TaskStatusEnum.IN_PROGRESS)
        second = self.store.update_status(task.id, TaskStatusEnum.IN_PROGRESS)

        assert first == second
        assert self.store.get(task.id).status == TaskStatusEnum.IN_PROGRESS

    def test_update_unknown_raises_not_found(self):
        with pytest.raises(TaskNotFoundException):
            self.store.update_status("missing", TaskStatusEnum.COMPLETED)

    def test_update_with_unknown_status_rejected(self):
        task = self.store.create("bad status", "")
        with pytest.raises(InvalidInputException):
            self.store.update_status(task.id, "done")
        assert self.store.get(task.id).status == TaskStatusEnum.PENDING

    def test_list_by_status_is_exact_subset(self):
        tasks = [self.store.create(f"t{i}", "") for i in range(6)]
        self.store.update_status(tasks[1].id, TaskStatusEnum.COMPLETED)
        self.store.update_status(tasks[3].id, TaskStatusEnum.COMPLETED)
        self.store.update_status(tasks[4].id, TaskStatusEnum.CANCELLED)

        for status in TaskStatusEnum:
            expected = [task for task in self.store.list() if task.status == status]
            assert self.store.list_by_status(status) == expected

        assert self.store.list_by_status(TaskStatusEnum.IN_PROGRESS) == []

    def test_list_by_status_accepts_literal_names(self):
        task = self.store.create("literal", "")
        self.store.update_status(task.id, "in-progress")

        assert [t.id for t in self.store.list_by_status("in-progress")] == [task.id]

    def test_id_collision_is_storage_failure(self):
        store = TaskStore(id_factory=lambda: "fixed-id")
        store.create("one", "")

        with pytest.raises(StorageFailureException):
            store.create("two", "")
        assert store.count() == 1


class TestStatsTracker:
    """测试统计信息"""

    def setup_method(self):
        self.store = TaskStore()
        self.stats = StatsTracker(self.store)

    def test_empty_snapshot(self):
        snapshot = self.stats.snapshot()

        assert snapshot.total_tasks == 0
        assert snapshot.pending_tasks == 0
        assert snapshot.completed_tasks == 0
        assert snapshot.creation_count == 0
        assert snapshot.request_count == 0

    def test_snapshot_counts_live_population(self):
        a = self.store.create("a", "")
        self.store.create("b", "")
        self.store.update_status(a.id, TaskStatusEnum.COMPLETED)

        snapshot = self.stats.snapshot()
        assert snapshot.total_tasks == len(self.store.list())
        assert snapshot.pending_tasks == len(self.store.list_by_status(TaskStatusEnum.PENDING))
        assert snapshot.completed_tasks == 1

    def test_counters_are_monotonic(self):
        assert self.stats.record_creation() == 1
        assert self.stats.record_creation() == 2
        assert self.stats.record_request() == 1

        snapshot = self.stats.snapshot()
        assert snapshot.creation_count == 2
        assert snapshot.request_count == 1

    def test_concurrent_creates_and_counters(self):
        def create(i):
            task = self.store.create(f"task {i}", "")
            self.stats.record_creation()
            self.stats.record_request()
            return task.id

        with ThreadPoolExecutor(max_workers=8) as pool:
            ids = list(pool.map(create, range(200)))

        snapshot = self.stats.snapshot()
        assert len(set(ids)) == 200
        assert snapshot.total_tasks == 200
        assert snapshot.creation_count == 200
        assert snapshot.request_count == 200

    def test_snapshots_consistent_during_updates(self):
        tasks = [self.store.create(f"t{i}", "") for i in range(50)]
        stop = threading.Event()
        violations = []

        def flip():
            while not stop.is_set():
                for task in tasks:
                    self.store.update_status(task.id, TaskStatusEnum.COMPLETED)
                    self.store.update_status(task.id, TaskStatusEnum.PENDING)

        worker = threading.Thread(target=flip)
        worker.start()
        try:
            for _ in range(200):
                snapshot = self.stats.snapshot()
                if snapshot.pending_tasks + snapshot.completed_tasks != snapshot.total_tasks:
                    violations.append(snapshot)
        finally:
            stop.set()
            worker.join()

        assert violations == []
