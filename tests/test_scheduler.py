r"""
Tests for graph_vertex.engine.scheduler module.
"""

import threading

from graph_vertex.engine.scheduler import TaskScheduler


class TestTaskScheduler:
    def test_all_vertices_start_active(self):
        scheduler = TaskScheduler(5)
        assert scheduler.active_ids() == [0, 1, 2, 3, 4]
        assert len(scheduler) == 5

    def test_add_is_idempotent(self):
        scheduler = TaskScheduler(5)
        scheduler.clear()
        scheduler.add(3)
        scheduler.add(3)
        assert scheduler.active_ids() == [3]

    def test_remove_single_vertex(self):
        scheduler = TaskScheduler(5)
        scheduler.remove(2, 2)
        assert not scheduler.is_active(2)
        assert scheduler.is_active(1)

    def test_remove_range(self):
        scheduler = TaskScheduler(10)
        scheduler.remove(2, 7)
        assert scheduler.active_ids() == [0, 1, 8, 9]

    def test_remove_range_wider_than_active_set(self):
        scheduler = TaskScheduler(10)
        scheduler.remove(0, 8)
        scheduler.remove(0, 1_000_000)
        assert scheduler.active_ids() == []

    def test_empty_range_is_noop(self):
        scheduler = TaskScheduler(3)
        scheduler.remove(2, 1)
        assert len(scheduler) == 3

    def test_adds_survive_later_removes_within_iteration(self):
        scheduler = TaskScheduler(5)
        scheduler.begin_iteration()
        scheduler.remove(0, 4)
        scheduler.add(2)
        scheduler.remove(2, 2)
        assert not scheduler.is_active(2)
        assert len(scheduler) == 1
        scheduler.end_iteration()
        assert scheduler.active_ids() == [2]

    def test_begin_iteration_forgets_previous_adds(self):
        scheduler = TaskScheduler(5)
        scheduler.add(1)
        scheduler.begin_iteration()
        scheduler.remove(0, 4)
        scheduler.end_iteration()
        assert scheduler.active_ids() == []

    def test_disabled_scheduler_runs_everything(self):
        scheduler = TaskScheduler(4, enabled=False)
        scheduler.remove(0, 3)
        scheduler.add(9)
        assert scheduler.is_active(0)
        assert not scheduler.is_active(9)
        assert len(scheduler) == 4
        assert scheduler.active_ids() == [0, 1, 2, 3]

    def test_concurrent_adds(self):
        scheduler = TaskScheduler(1000)
        scheduler.clear()

        def worker(offset: int) -> None:
            for i in range(offset, 1000, 4):
                scheduler.add(i)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(scheduler) == 1000
