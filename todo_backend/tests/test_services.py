from datetime import datetime, timedelta, timezone

import pytest

from src.todo_api.errors import InvalidRequestError, NotFoundError
from src.todo_api.repositories import TodoSearchQuery, get_repository, seed_demo_data
from src.todo_api.services import TodoService


class TestGetTodo:
    def test_returns_todo_with_owner_summary(self, seeded):
        repo, todos = seeded
        service = TodoService(repo)
        run = todos["Run"]

        response = service.get_todo(run["id"])

        assert response.id == run["id"]
        assert response.title == "Run"
        assert response.contents == "morning run"
        assert response.weather == "sunny"
        assert response.user.id == run["user"]["id"]
        assert response.user.email == "bob@email.com"
        assert response.created_at == datetime(2024, 10, 2, 8, 30, 0)
        assert response.modified_at == response.created_at

    def test_missing_todo_raises_not_found(self, seeded):
        repo, _ = seeded
        service = TodoService(repo)

        with pytest.raises(NotFoundError) as excinfo:
            service.get_todo(999)
        assert excinfo.value.message == "Todo not found"
        assert excinfo.value.status_code == 400


class TestGetTodos:
    def test_lists_newest_first(self, seeded):
        repo, _ = seeded
        page = TodoService(repo).get_todos(page=1, size=10)

        titles = [t.title for t in page.content]
        assert titles == ["Swim", "Picnic", "Run", "Read", "Walk"]
        assert page.total_elements == 5
        assert page.total_pages == 1
        assert page.first and page.last and not page.empty

    def test_pages_are_one_indexed_and_bounded_by_size(self, seeded):
        repo, _ = seeded
        service = TodoService(repo)

        first = service.get_todos(page=1, size=2)
        second = service.get_todos(page=2, size=2)
        third = service.get_todos(page=3, size=2)

        assert [t.title for t in first.content] == ["Swim", "Picnic"]
        assert [t.title for t in second.content] == ["Run", "Read"]
        assert [t.title for t in third.content] == ["Walk"]
        for p in (first, second, third):
            assert len(p.content) <= 2
            assert p.total_elements == 5
            assert p.total_pages == 3
        assert first.first and not first.last
        assert third.last and not third.first

    def test_page_past_end_is_empty_not_error(self, seeded):
        repo, _ = seeded
        page = TodoService(repo).get_todos(page=10, size=10)

        assert page.content == []
        assert page.total_elements == 5
        assert page.empty

    def test_weather_filter_is_exact_and_case_sensitive(self, seeded):
        repo, _ = seeded
        page = TodoService(repo).get_todos(page=1, size=10, weather="sunny")

        assert {t.title for t in page.content} == {"Walk", "Run", "Swim"}
        assert all(t.weather == "sunny" for t in page.content)
        assert page.total_elements == 3

    def test_weather_filter_without_match_returns_empty_page(self, seeded):
        repo, _ = seeded
        page = TodoService(repo).get_todos(page=1, size=10, weather="sun")

        assert page.content == []
        assert page.total_elements == 0
        assert page.total_pages == 0

    def test_date_window_is_inclusive(self, seeded):
        repo, _ = seeded
        page = TodoService(repo).get_todos(
            page=1,
            size=10,
            start_date=datetime(2024, 10, 1, 12, 0, 0),
            end_date=datetime(2024, 10, 3, 17, 0, 0),
        )

        assert [t.title for t in page.content] == ["Picnic", "Run", "Read"]

    def test_single_date_bound_leaves_other_side_open(self, seeded):
        repo, _ = seeded
        service = TodoService(repo)

        since = service.get_todos(page=1, size=10, start_date=datetime(2024, 10, 3, 0, 0, 0))
        until = service.get_todos(page=1, size=10, end_date=datetime(2024, 10, 1, 12, 0, 0))

        assert [t.title for t in since.content] == ["Swim", "Picnic"]
        assert [t.title for t in until.content] == ["Read", "Walk"]

    def test_weather_and_dates_combine(self, seeded):
        repo, _ = seeded
        page = TodoService(repo).get_todos(
            page=1,
            size=10,
            weather="sunny",
            start_date=datetime(2024, 10, 1, 12, 0, 0),
            end_date=datetime(2024, 10, 3, 17, 0, 0),
        )

        assert [t.title for t in page.content] == ["Run"]

    def test_inverted_date_range_is_rejected(self, seeded):
        repo, _ = seeded
        with pytest.raises(InvalidRequestError, match="startDate"):
            TodoService(repo).get_todos(
                page=1,
                size=10,
                start_date=datetime(2024, 10, 3, 0, 0, 0),
                end_date=datetime(2024, 10, 1, 0, 0, 0),
            )

    @pytest.mark.parametrize(
        "start,end",
        [
            (datetime(2024, 10, 1, 12, 0, 0, tzinfo=timezone.utc), None),
            (None, datetime(2024, 10, 3, 17, 0, 0, tzinfo=timezone(timedelta(hours=9)))),
            (datetime(2024, 10, 1, 12, 0, 0, tzinfo=timezone.utc), datetime(2024, 10, 3, 17, 0, 0)),
        ],
    )
    def test_zoned_date_bounds_are_rejected(self, seeded, start, end):
        repo, _ = seeded
        with pytest.raises(InvalidRequestError, match="local date-times"):
            TodoService(repo).get_todos(page=1, size=10, start_date=start, end_date=end)

    @pytest.mark.parametrize("page,size", [(0, 10), (-1, 10), (1, 0), (1, -5)])
    def test_non_positive_page_or_size_is_rejected(self, seeded, page, size):
        repo, _ = seeded
        with pytest.raises(InvalidRequestError):
            TodoService(repo).get_todos(page=page, size=size)


class TestRepositories:
    def test_add_todo_for_unknown_user_raises(self, repo):
        with pytest.raises(NotFoundError, match="User not found"):
            repo.add_todo(42, "t", "c", "sunny")

    def test_ties_on_created_at_break_by_id_desc(self, repo):
        user = repo.add_user("tie@email.com", "tie")
        same = datetime(2024, 10, 1, 12, 0, 0)
        a = repo.add_todo(user["id"], "A", "c", "sunny", created_at=same)
        b = repo.add_todo(user["id"], "B", "c", "sunny", created_at=same)

        todos, total = repo.find_by_filters(TodoSearchQuery(limit=10, offset=0))

        assert total == 2
        assert [t["id"] for t in todos] == [b["id"], a["id"]]

    def test_lookup_joins_owner(self, seeded):
        repo, todos = seeded
        found = repo.find_by_id_with_user(todos["Picnic"]["id"])

        assert found is not None
        assert found["user"]["email"] == "bob@email.com"
        assert found["user"]["nickname"] == "bob"
        assert found["user"]["role"].value == "ROLE_ADMIN"

    def test_lookup_missing_returns_none(self, repo):
        assert repo.find_by_id_with_user(1) is None

    def test_lookup_beyond_64_bit_ids_returns_none(self, seeded):
        repo, _ = seeded
        assert repo.find_by_id_with_user(2**63) is None
        assert repo.find_by_id_with_user(-(2**63) - 1) is None

    def test_offset_beyond_64_bits_returns_empty_slice(self, seeded):
        repo, _ = seeded
        todos, total = repo.find_by_filters(TodoSearchQuery(limit=100, offset=10**20))

        assert todos == []
        assert total == 5


class TestDemoSeed:
    def test_seeds_empty_store_once(self, repo):
        assert seed_demo_data(repo) is True
        assert seed_demo_data(repo) is False

        page = TodoService(repo).get_todos(page=1, size=10)
        assert page.total_elements == 3
        assert page.content[0].title == "Picnic"
        assert page.content[0].user.email == "demo@email.com"

    def test_skips_store_that_already_has_todos(self, seeded):
        repo, _ = seeded
        assert seed_demo_data(repo) is False
        assert TodoService(repo).get_todos(page=1, size=10).total_elements == 5

    @pytest.mark.parametrize("flag,expected", [("true", 3), ("false", 0)])
    def test_get_repository_honours_seed_setting(self, monkeypatch, flag, expected):
        monkeypatch.setenv("PERSISTENCE_BACKEND", "memory")
        monkeypatch.setenv("SEED_DEMO_DATA", flag)
        get_repository.cache_clear()
        try:
            repo = get_repository()
            _, total = repo.find_by_filters(TodoSearchQuery(limit=10))
        finally:
            get_repository.cache_clear()

        assert total == expected
