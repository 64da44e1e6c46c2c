"""Tests for wren.routing.application — the client application."""

import pytest

from wren.routing import LINK_ATTRIBUTE, Application, Element, MemoryHistory


class TestSetup:
    async def test_accessors_none_before_run(self, client_app) -> None:
        assert client_app.route is None
        assert client_app.pathname is None
        assert client_app.search is None
        assert client_app.hash is None
        assert client_app.params is None
        assert client_app.queries is None

    async def test_views_built_on_run(self, client_app) -> None:
        assert client_app.views == {}
        await client_app.run()
        assert set(client_app.views) == {"dashboard", "task", "task-item", "settings", "login"}

    async def test_add_route(self, history, document, events) -> None:
        from conftest import Settings

        app = Application(MemoryHistory("/settings"), document)
        app.add_route("/settings", lambda a: Settings(a, events))
        await app.run()
        assert app.route.path == "/settings"

    async def test_add_route_after_run(self, client_app) -> None:
        await client_app.run()
        with pytest.raises(RuntimeError, match="after the application has started"):
            client_app.add_route("/late", lambda app: None)

    async def test_run_twice(self, client_app) -> None:
        await client_app.run()
        with pytest.raises(RuntimeError, match="already running"):
            await client_app.run()

    async def test_no_routes(self, document) -> None:
        app = Application(MemoryHistory("/x"), document)
        await app.run()
        assert app.route is None
        assert app.pathname == ""

    async def test_stop(self, client_app, history) -> None:
        await client_app.run()
        await client_app.navigate("/task")
        client_app.stop()
        await history.back()
        assert client_app.route.path == "/task"

    async def test_security_assigned_after_run(self, client_app) -> None:
        await client_app.run()
        client_app.security = lambda route: (True, "/login")
        await client_app.navigate("/task")
        assert client_app.route.path == "/login"

    async def test_repr(self, client_app) -> None:
        await client_app.run()
        assert repr(client_app) == "<Application routes=5 pathname='/'>"


class TestNavigate:
    async def test_pushes_history_entry(self, client_app, history) -> None:
        await client_app.run()
        await client_app.navigate("/task/3?tab=notes")
        assert history.entries == ("/", "/task/3?tab=notes")
        assert client_app.route.path == "/task/[id]"
        assert client_app.queries == {"tab": "notes"}

    async def test_relative_url(self, client_app, history) -> None:
        history.replace("/task/3")
        await client_app.run()
        await client_app.navigate("4")
        assert client_app.pathname == "/task/4"

    async def test_scrolls_to_fragment(self, client_app, document) -> None:
        await client_app.run()
        await client_app.navigate("/task#section-2")
        assert client_app.hash == "#section-2"
        assert document.get_element("section-2").scroll_count == 1

    async def test_missing_fragment_target(self, client_app) -> None:
        await client_app.run()
        await client_app.navigate("/task#nowhere")
        assert client_app.hash == "#nowhere"

    async def test_failing_scroll_keeps_the_transition(self, client_app, document) -> None:
        class Detached(Element):
            def scroll_into_view(self) -> None:
                raise RuntimeError("detached")

        document.add(Detached("anchor"))
        await client_app.run()
        await client_app.navigate("/task#anchor")

        assert client_app.route.path == "/task"
        assert client_app.hash == "#anchor"

    async def test_before_run_only_pushes(self, client_app, history, events) -> None:
        await client_app.navigate("/task")
        assert history.location == "/task"
        assert events == []

    async def test_redirect_is_hard_navigation(self, client_app, history) -> None:
        await client_app.run()
        client_app.redirect("https://example.com/")
        assert history.assigned == ["https://example.com/"]
        assert history.location == "/"


class TestScrollToHash:
    def test_scrolls(self, client_app, document) -> None:
        client_app.scroll_to_hash("#section-2")
        assert document.get_element("section-2").scroll_count == 1

    def test_accepts_bare_identifier(self, client_app, document) -> None:
        client_app.scroll_to_hash("section-2")
        assert document.get_element("section-2").scroll_count == 1

    @pytest.mark.parametrize("hash_", ["", "#"])
    def test_empty(self, client_app, document, hash_: str) -> None:
        client_app.scroll_to_hash(hash_)
        assert document.get_element("section-2").scroll_count == 0


class TestHandleClick:
    async def test_link_is_handled(self, client_app, history) -> None:
        await client_app.run()
        link = Element("nav-task", attributes={"href": "/task", LINK_ATTRIBUTE: ""})
        assert await client_app.handle_click(link) is True
        assert client_app.route.path == "/task"
        assert history.entries == ("/", "/task")

    async def test_same_origin_absolute_link(self, client_app) -> None:
        await client_app.run()
        link = Element("nav", attributes={"href": "http://localhost/settings", LINK_ATTRIBUTE: ""})
        assert await client_app.handle_click(link) is True
        assert client_app.pathname == "/settings"

    async def test_plain_anchor_is_ignored(self, client_app, history) -> None:
        await client_app.run()
        anchor = Element("external", attributes={"href": "/task"})
        assert await client_app.handle_click(anchor) is False
        assert history.entries == ("/",)

    async def test_link_without_href(self, client_app) -> None:
        await client_app.run()
        button = Element("button", attributes={LINK_ATTRIBUTE: ""})
        assert await client_app.handle_click(button) is False
