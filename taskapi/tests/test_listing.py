import math

import pytest

from taskapi.listing import filter_tasks, paginate
from taskapi.models import TaskPriority
from taskapi.store import InMemoryTaskStore, seed_tasks


@pytest.fixture(name="tasks")
def tasks_fixture():
    store = InMemoryTaskStore(seed_tasks())
    store.add(1, "Buy milk", "From the corner shop", TaskPriority.low)
    store.add(1, "Call plumber", "Kitchen sink QA", TaskPriority.high)
    return store.list_for_owner(1)


class TestFilterTasks:
    def test_no_filters(self, tasks):
        assert filter_tasks(tasks) == tasks

    def test_priority(self, tasks):
        assert [t.id for t in filter_tasks(tasks, priority="high")] == [1, 5]

    def test_completed_true(self, tasks):
        assert [t.id for t in filter_tasks(tasks, completed="true")] == [2]

    def test_completed_other_values_mean_open(self, tasks):
        assert [t.id for t in filter_tasks(tasks, completed="false")] == [1, 4, 5]
        assert [t.id for t in filter_tasks(tasks, completed="yes")] == [1, 4, 5]

    def test_search_title_or_description_case_insensitive(self, tasks):
        # "QA" is in task 1's title and task 5's description
        assert [t.id for t in filter_tasks(tasks, search="qa")] == [1, 5]

    def test_filters_combine(self, tasks):
        assert [t.id for t in filter_tasks(tasks, priority="high", search="sink")] == [5]


class TestPaginate:
    def test_metadata(self, tasks):
        page, meta = paginate(tasks, page=2, limit=3)
        assert [t.id for t in page] == [5]
        assert meta == {"total": 4, "page": 2, "limit": 3, "totalPages": 2}

    def test_page_past_end_is_empty(self, tasks):
        page, meta = paginate(tasks, page=5, limit=3)
        assert page == []
        assert meta["total"] == 4

    def test_empty_result(self):
        page, meta = paginate([], page=1, limit=10)
        assert page == []
        assert meta["totalPages"] == 0

    @pytest.mark.parametrize("limit", [1, 2, 3, 4, 10])
    def test_pages_concatenate_to_full_list(self, tasks, limit):
        _, meta = paginate(tasks, page=1, limit=limit)
        assert meta["totalPages"] == math.ceil(len(tasks) / limit)
        pages = [paginate(tasks, page=p, limit=limit)[0] for p in range(1, meta["totalPages"] + 1)]
        assert [t for page in pages for t in page] == tasks
