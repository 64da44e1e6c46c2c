"""Tests for wren.routing.navigation — the in-memory history."""

import pytest

from wren.routing import MemoryHistory, NavigationEnvironment


class TestMemoryHistory:
    def test_initial_location(self) -> None:
        history = MemoryHistory("/task/42?tab=notes#top")
        assert history.location == "/task/42?tab=notes#top"
        assert history.entries == ("/task/42?tab=notes#top",)
        assert history.index == 0

    def test_default_location(self) -> None:
        assert MemoryHistory().location == "/"

    def test_is_navigation_environment(self) -> None:
        assert isinstance(MemoryHistory(), NavigationEnvironment)

    def test_push(self) -> None:
        history = MemoryHistory("/")
        history.push("/task")
        assert history.location == "/task"
        assert history.entries == ("/", "/task")
        assert history.index == 1

    def test_replace_keeps_entry_count(self) -> None:
        history = MemoryHistory("/")
        history.push("/task")
        history.replace("/settings")
        assert history.entries == ("/", "/settings")

    async def test_push_drops_forward_entries(self) -> None:
        history = MemoryHistory("/")
        history.push("/a")
        history.push("/b")
        await history.go(-2)
        history.push("/c")
        assert history.entries == ("/", "/c")

    def test_relative_urls(self) -> None:
        history = MemoryHistory("/task/42")
        history.push("43")
        assert history.location == "/task/43"
        history.push("?tab=notes")
        assert history.location == "/task/43?tab=notes"

    def test_same_origin_absolute_url(self) -> None:
        history = MemoryHistory("/", origin="https://tasks.example.com")
        history.push("https://tasks.example.com/settings#top")
        assert history.location == "/settings#top"

    def test_other_origin_rejected(self) -> None:
        history = MemoryHistory("/")
        with pytest.raises(ValueError, match="not on origin"):
            history.push("https://example.com/")

    def test_assign_records_without_moving(self) -> None:
        history = MemoryHistory("/")
        history.assign("https://example.com/")
        assert history.assigned == ["https://example.com/"]
        assert history.location == "/"

    def test_repr(self) -> None:
        history = MemoryHistory("/")
        history.push("/task")
        assert repr(history) == "<MemoryHistory '/task' (2/2)>"


class TestBackForward:
    async def test_back_and_forward(self) -> None:
        history = MemoryHistory("/")
        history.push("/task")
        assert await history.back() is True
        assert history.location == "/"
        assert await history.forward() is True
        assert history.location == "/task"

    async def test_out_of_range(self) -> None:
        history = MemoryHistory("/")
        assert await history.back() is False
        assert await history.forward() is False
        assert await history.go(0) is False
        assert history.location == "/"

    async def test_go(self) -> None:
        history = MemoryHistory("/")
        history.push("/a")
        history.push("/b")
        assert await history.go(-2) is True
        assert history.location == "/"

    async def test_listeners_notified(self) -> None:
        history = MemoryHistory("/")
        history.push("/task")
        seen: list[str] = []
        history.subscribe(lambda: seen.append(history.location))
        await history.back()
        assert seen == ["/"]

    async def test_async_listener_awaited(self) -> None:
        history = MemoryHistory("/")
        history.push("/task")
        seen: list[str] = []

        async def listener() -> None:
            seen.append(history.location)

        history.subscribe(listener)
        await history.back()
        assert seen == ["/"]

    async def test_push_and_replace_do_not_notify(self) -> None:
        history = MemoryHistory("/")
        seen: list[str] = []
        history.subscribe(lambda: seen.append(history.location))
        history.push("/task")
        history.replace("/settings")
        assert seen == []

    async def test_unsubscribe(self) -> None:
        history = MemoryHistory("/")
        history.push("/task")
        seen: list[str] = []
        unsubscribe = history.subscribe(lambda: seen.append(history.location))
        unsubscribe()
        unsubscribe()
        await history.back()
        assert seen == []
