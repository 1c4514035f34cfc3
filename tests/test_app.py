"""Tests for waypoint.app — dispatch pipeline and request sources."""

import logging

import pytest

from waypoint.app import App, DispatchResult, Status
from waypoint.config import AppConfig
from waypoint.errors import RouteNotFound
from waypoint.http.request import Request
from waypoint.location import MemoryLocation


@pytest.fixture
def app() -> App:
    return App()


class TestDispatchOrder:
    def test_before_route_after(self, app: App) -> None:
        calls: list[str] = []
        app.router.after(lambda r: calls.append("after"))
        app.router.get("/foo/:id", lambda r: calls.append(f"route {r.params['id']}"))
        app.router.before(lambda r: calls.append("before"))

        result = app.navigate("/foo/7")

        assert calls == ["before", "route 7", "after"]
        assert result is not None
        assert result.status is Status.COMPLETED

    def test_handler_value_returned(self, app: App) -> None:
        route = app.router.get("/", lambda r: "home")
        result = app.navigate("/")
        assert result == DispatchResult(
            result.request, Status.COMPLETED, route=route, value="home"  # type: ignore[union-attr]
        )

    def test_filters_see_path_params(self, app: App) -> None:
        seen: list[dict[str, str]] = []
        app.router.before(lambda r: seen.append(dict(r.path_params)), path="/foo/:id")
        app.router.get("/foo/:id", lambda r: None)
        app.navigate("/foo/3")
        assert seen == [{"id": "3"}]

    def test_only_first_route_runs(self, app: App) -> None:
        calls: list[str] = []
        app.router.get("/foo/:id", lambda r: calls.append("first"))
        app.router.get("/foo/:id", lambda r: calls.append("second"))
        app.navigate("/foo/1")
        assert calls == ["first"]

    def test_every_matching_filter_runs(self, app: App) -> None:
        calls: list[str] = []
        app.router.before(lambda r: calls.append("global"))
        app.router.before(lambda r: calls.append("scoped"), path="/foo/:id")
        app.router.before(lambda r: calls.append("elsewhere"), path="/bar")
        app.router.get("/foo/:id", lambda r: None)
        app.navigate("/foo/1")
        assert calls == ["global", "scoped"]


class TestHalting:
    def test_false_halts(self, app: App) -> None:
        calls: list[str] = []
        guard = app.router.before(lambda r: False)
        app.router.before(lambda r: calls.append("later filter"))
        app.router.get("/", lambda r: calls.append("route"))
        app.router.after(lambda r: calls.append("after"))

        result = app.navigate("/")

        assert calls == []
        assert result is not None
        assert result.status is Status.HALTED
        assert result.route is guard

    @pytest.mark.parametrize("value", [False, 0, "", [], {}])
    def test_falsy_values_halt(self, app: App, value: object) -> None:
        calls: list[str] = []
        app.router.before(lambda r: value)
        app.router.get("/", lambda r: calls.append("route"))
        result = app.navigate("/")
        assert result is not None
        assert result.status is Status.HALTED
        assert calls == []

    @pytest.mark.parametrize("value", [None, True, 1, "yes", [0]])
    def test_none_and_truthy_values_continue(self, app: App, value: object) -> None:
        app.router.before(lambda r: value)
        app.router.get("/", lambda r: "ran")
        result = app.navigate("/")
        assert result is not None
        assert result.value == "ran"


class TestNotFound:
    def test_not_found_status(self, app: App) -> None:
        calls: list[str] = []
        app.router.before(lambda r: calls.append("before"))
        app.router.after(lambda r: calls.append("after"))
        result = app.navigate("/missing")
        assert result is not None
        assert result.status is Status.NOT_FOUND
        assert calls == ["before"]

    def test_raise_on_not_found(self) -> None:
        app = App(AppConfig(raise_on_not_found=True))
        with pytest.raises(RouteNotFound) as exc_info:
            app.navigate("/missing")
        assert exc_info.value.method == "get"
        assert exc_info.value.path == "/missing"

    def test_raise_on_not_found_ignores_raise_errors(self) -> None:
        app = App(AppConfig(raise_on_not_found=True, raise_errors=False))
        with pytest.raises(RouteNotFound):
            app.navigate("/missing")


class TestErrors:
    def test_errors_propagate_by_default(self, app: App) -> None:
        def boom(request: Request) -> None:
            raise ValueError("boom")

        app.router.get("/", boom)
        with pytest.raises(ValueError, match="boom"):
            app.navigate("/")

    def test_errors_logged_when_not_raised(self, caplog: pytest.LogCaptureFixture) -> None:
        app = App(AppConfig(raise_errors=False))

        def boom(request: Request) -> None:
            raise ValueError("boom")

        app.router.get("/", boom)
        with caplog.at_level(logging.ERROR, logger="waypoint.dispatch"):
            result = app.navigate("/")

        assert result is not None
        assert result.status is Status.FAILED
        assert isinstance(result.error, ValueError)
        assert "Handler failed for get /" in caplog.text


class TestRequestSources:
    def test_navigate_sends_get_with_data(self, app: App) -> None:
        app.router.get("/search", lambda r: r.params["q"])
        result = app.navigate("/search", {"q": "notes"})
        assert result is not None
        assert result.value == "notes"
        assert app.location.current_url == "/search?q=notes"  # type: ignore[attr-defined]

    def test_submit_posts(self, app: App) -> None:
        app.router.post("/notes", lambda r: r.params["title"])
        result = app.submit("/notes", data={"title": "hi"})
        assert result is not None
        assert result.value == "hi"

    def test_submit_method_override(self, app: App) -> None:
        app.router.delete("/notes/:id", lambda r: f"deleted {r.params['id']}")
        result = app.submit("/notes/4", "post", {"_method": "delete"})
        assert result is not None
        assert result.value == "deleted 4"

    def test_trans_runs_state_route(self, app: App) -> None:
        app.router.state("/modal/:name", lambda r: (r.params["name"], r.params["step"]))
        app.navigate("/")
        result = app.trans("/modal/signup", {"step": "2"})
        assert result is not None
        assert result.value == ("signup", "2")
        assert result.request.is_state

    def test_trans_keeps_url(self, app: App) -> None:
        app.router.get("/page", lambda r: None)
        app.router.state("/modal", lambda r: None)
        app.navigate("/page")
        app.trans("/modal")
        assert app.location.current_url == "/page"  # type: ignore[attr-defined]

    def test_state_routes_ignore_get(self, app: App) -> None:
        app.router.state("/modal", lambda r: "state")
        result = app.navigate("/modal")
        assert result is not None
        assert result.status is Status.NOT_FOUND

    def test_back_redispatches(self, app: App) -> None:
        visits: list[str] = []
        app.router.get("/:page", lambda r: visits.append(r.params["page"]))
        app.navigate("/a")
        app.navigate("/b")
        app.location.back()  # type: ignore[attr-defined]
        assert visits == ["a", "b", "a"]
        assert app.last_result is not None
        assert app.last_result.request.path == "/a"

    def test_nested_transition_from_handler(self, app: App) -> None:
        calls: list[str] = []

        def open_page(request: Request) -> str:
            app.trans("/panel")
            return "page"

        app.router.get("/page", open_page)
        app.router.state("/panel", lambda r: calls.append("panel"))
        result = app.navigate("/page")
        assert calls == ["panel"]
        assert result is not None
        assert result.value == "page"


class _DeferredLocation(MemoryLocation):
    """Queues requests instead of dispatching them straight away."""

    __slots__ = ("pending",)

    def __init__(self) -> None:
        super().__init__()
        self.pending: list[Request] = []

    def assign(self, request: Request) -> None:
        self.pending.append(request)


class TestDeferredLocation:
    def test_no_result_until_dispatched(self) -> None:
        location = _DeferredLocation()
        app = App(location=location)
        app.router.get("/", lambda r: "home")
        assert app.navigate("/") is None
        assert app.dispatch(location.pending[0]).value == "home"


class TestStart:
    def test_disabled_by_default(self, app: App) -> None:
        app.router.get("/", lambda r: "home")
        assert app.start("/") is None

    def test_page_load_request(self) -> None:
        app = App(AppConfig(generate_request_on_page_load=True))
        app.router.get("/inbox", lambda r: "inbox")
        result = app.start("/inbox")
        assert result is not None
        assert result.value == "inbox"
        assert len(app.location.history) == 1  # type: ignore[attr-defined]


class TestLogLevel:
    def test_log_level_applied(self) -> None:
        logger = logging.getLogger("waypoint")
        previous = logger.level
        try:
            App(AppConfig(log_level="debug"))
            assert logger.level == logging.DEBUG
        finally:
            logger.setLevel(previous)
