"""Shared fixtures: a small task-tracker SPA, on disk and in memory."""

import logging
from pathlib import Path

import pytest

from wren.app import App
from wren.config import AppConfig
from wren.routing import Application, Element, MemoryDocument, MemoryHistory, View

INDEX_HTML = "<!doctype html><title>Tasks</title><main id='app'></main>"
NOT_FOUND_HTML = "<h1>Nothing here</h1>"


# -- Server side --


@pytest.fixture
def public_dir(tmp_path: Path) -> Path:
    """A built SPA: shell, 404 page, assets, and a nested docs site."""
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text(INDEX_HTML)
    (public / "404.html").write_text(NOT_FOUND_HTML)
    (public / "app.js").write_text("console.log('tasks');")
    (public / "style.css").write_text("body { color: red; }")
    (public / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n")

    docs = public / "docs"
    docs.mkdir()
    (docs / "index.html").write_text("<h1>Docs</h1>")

    (tmp_path / "secret.txt").write_text("outside")
    return public


@pytest.fixture
def config(public_dir: Path) -> AppConfig:
    return AppConfig(public_dir=public_dir, log_file=None)


@pytest.fixture
def app(config: AppConfig) -> App:
    return App(config)


@pytest.fixture(autouse=True)
def _reset_wren_logging():
    """Remove handlers installed by configure_logging() during a test."""
    yield
    root = logging.getLogger("wren")
    for handler in list(root.handlers):
        if getattr(handler, "_wren_handler", False):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(logging.NOTSET)


# -- Client side --


class Recording(View):
    """A view that appends ``enter:<id>`` / ``exit:<id>`` to a shared list."""

    def __init__(self, app: Application, events: list[str], **kwargs: str) -> None:
        self.events = events
        super().__init__(app, **kwargs)

    def on_enter(self) -> None:
        self.events.append(f"enter:{self.identifier}")

    def on_exit(self) -> None:
        self.events.append(f"exit:{self.identifier}")


class Dashboard(Recording):
    identifier = "dashboard"
    title = "Dashboard"


class Task(Recording):
    identifier = "task"
    title = "Task"


class TaskItem(Recording):
    identifier = "task-item"
    title = "Task Item"

    def on_enter(self) -> None:
        super().on_enter()
        label = self.app.document.get_element("task-item__id")
        label.text = self.app.params["id"]


class Settings(Recording):
    identifier = "settings"


class Login(Recording):
    identifier = "login"
    title = "Login"


def make_routes(events: list[str]) -> list[tuple[str, object]]:
    def bind(view: type[Recording]):
        return lambda app: view(app, events)

    return [
        ("/", bind(Dashboard)),
        ("/task", bind(Task)),
        ("/task/[id]", bind(TaskItem)),
        ("/settings", bind(Settings)),
        ("/login", bind(Login)),
    ]


@pytest.fixture
def document() -> MemoryDocument:
    return MemoryDocument(
        "Tasks",
        elements=(
            Element("dashboard"),
            Element("task"),
            Element("task-item"),
            Element("task-item__id"),
            Element("settings"),
            Element("login"),
            Element("section-2"),
        ),
    )


@pytest.fixture
def events() -> list[str]:
    return []


@pytest.fixture
def history() -> MemoryHistory:
    return MemoryHistory("/")


@pytest.fixture
def client_app(history: MemoryHistory, document: MemoryDocument, events: list[str]) -> Application:
    return Application(history, document, make_routes(events))
