import re

from testfixtures import LogCapture

from fakexhr.router import Route, Router
from fakexhr.settings import Settings
from fakexhr.xhr import ReadyState, XMLHttpRequest


class RecordingRequest:
    method = "GET"
    url = "http://example.com/"

    def respond(self, *response):
        self.response = response


def make_xhr(router, method="GET", url="http://example.com/items"):
    xhr = XMLHttpRequest(router)
    xhr.open(method, url)
    return xhr


class TestRoute:
    def test_method_is_uppercased(self):
        route = Route("get", "http://example.com/", (200, {}, ""))
        assert route.method == "GET"
        assert repr(route) == "<Route GET http://example.com/>"

    def test_any_method(self):
        route = Route(None, "http://example.com/", (200, {}, ""))
        xhr = XMLHttpRequest()
        for method in ("GET", "post", "DELETE"):
            xhr.open(method, "http://example.com/")
            assert route.matches(xhr)
        assert repr(route) == "<Route * http://example.com/>"

    def test_method_mismatch(self):
        route = Route("POST", "http://example.com/", (200, {}, ""))
        xhr = XMLHttpRequest()
        xhr.open("GET", "http://example.com/")
        assert not route.matches(xhr)
        xhr.open("post", "http://example.com/")
        assert route.matches(xhr)

    def test_url_canonicalization(self):
        route = Route("GET", "http://example.com/search?b=2&a=1", (200, {}, ""))
        xhr = XMLHttpRequest()
        xhr.open("GET", "http://example.com/search?a=1&b=2")
        assert route.matches(xhr)
        xhr.open("GET", "http://example.com/search?a=1")
        assert not route.matches(xhr)

    def test_pattern(self):
        route = Route("GET", re.compile(r"http://example\.com/items/\d+"), None)
        xhr = XMLHttpRequest()
        xhr.open("GET", "http://example.com/items/12")
        assert route.matches(xhr)
        xhr.open("GET", "http://example.com/items/12/comments")
        assert not route.matches(xhr)
        assert repr(route) == r"<Route GET http://example\.com/items/\d+>"


class TestRouter:
    def setup_method(self):
        self.router = Router()

    def test_static_response(self):
        self.router.add(
            "GET",
            "http://example.com/items",
            (200, {"Content-Type": "application/json"}, "[]"),
        )
        xhr = make_xhr(self.router)
        xhr.send()
        assert xhr.ready_state == ReadyState.DONE
        assert xhr.status == 200
        assert xhr.response_text == "[]"
        assert xhr.get_response_header("content-type") == "application/json"
        assert self.router.requests == [xhr]
        assert self.router.queue == []

    def test_first_matching_route_wins(self):
        self.router.add(None, "http://example.com/items", (201, {}, "first"))
        self.router.add("GET", "http://example.com/items", (202, {}, "second"))
        xhr = make_xhr(self.router)
        xhr.send()
        assert xhr.status == 201
        assert xhr.response_text == "first"

    def test_default_response(self):
        with LogCapture("fakexhr.router") as log:
            xhr = make_xhr(self.router)
            xhr.send()
        assert xhr.status == 404
        assert xhr.status_text == "Not Found"
        assert xhr.response_text == ""
        assert len(log.records) == 1
        assert log.records[0].levelname == "DEBUG"
        assert log.records[0].getMessage().startswith(
            "No route for <XMLHttpRequest GET http://example.com/items"
        )

    def test_default_response_headers_are_not_shared(self):
        assert Router().default_response[1] is not self.router.default_response[1]

        first = RecordingRequest()
        second = RecordingRequest()
        self.router.process(first)
        self.router.process(second)
        first.response[1]["X-Touched"] = "1"
        assert second.response == (404, {}, "")
        assert self.router.default_response == (404, {}, "")

    def test_custom_default_response(self):
        router = Router(default_response=(503, {}, "down"))
        xhr = make_xhr(router)
        xhr.send()
        assert xhr.status == 503
        assert xhr.response_text == "down"

    def test_callable_response(self):
        seen = []

        def respond(xhr):
            seen.append(xhr.request_body)
            return 201, {}, "created"

        self.router.add("POST", "http://example.com/items", respond)
        xhr = make_xhr(self.router, "POST")
        xhr.send("payload")
        assert seen == ["payload"]
        assert xhr.status == 201
        assert xhr.response_text == "created"

    def test_callable_returning_none_leaves_request_pending(self):
        pending = []
        self.router.add("GET", "http://example.com/items", pending.append)
        xhr = make_xhr(self.router)
        xhr.send()
        assert pending == [xhr]
        assert xhr.ready_state == ReadyState.OPENED
        assert xhr.send_flag is True
        xhr.respond(200, {}, "late")
        assert xhr.ready_state == ReadyState.DONE
        assert xhr.response_text == "late"

    def test_match(self):
        route = self.router.add("GET", "http://example.com/items", (200, {}, ""))
        xhr = make_xhr(self.router)
        assert self.router.match(xhr) is route
        xhr.open("GET", "http://example.com/other")
        assert self.router.match(xhr) is None


class TestRouterQueue:
    def setup_method(self):
        self.router = Router(autorespond=False)
        self.router.add("GET", "http://example.com/items", (200, {}, "items"))

    def test_requests_are_queued(self):
        xhr = make_xhr(self.router)
        xhr.send()
        assert xhr.ready_state == ReadyState.OPENED
        assert self.router.queue == [xhr]
        assert self.router.respond_next() is xhr
        assert xhr.ready_state == ReadyState.DONE
        assert xhr.response_text == "items"
        assert self.router.queue == []
        assert self.router.respond_next() is None

    def test_respond_all(self):
        first = make_xhr(self.router)
        second = make_xhr(self.router, url="http://example.com/missing")
        first.send()
        second.send()
        self.router.respond_all()
        assert first.status == 200
        assert second.status == 404
        assert self.router.requests == [first, second]
        assert self.router.queue == []

    def test_aborted_requests_are_skipped(self):
        first = make_xhr(self.router)
        second = make_xhr(self.router)
        first.send()
        second.send()
        first.abort()
        assert self.router.respond_next() is second
        assert first.ready_state == ReadyState.UNSENT
        assert first.response_text is None
        assert second.response_text == "items"

    def test_requests_answered_by_hand_are_skipped(self):
        first = make_xhr(self.router)
        second = make_xhr(self.router)
        first.send()
        second.send()
        first.respond(202, {}, "by hand")
        self.router.respond_all()
        assert first.status == 202
        assert first.response_text == "by hand"
        assert second.response_text == "items"
        assert self.router.queue == []


class TestRouterFromSettings:
    def test_defaults(self):
        router = Router.from_settings(Settings())
        assert router.default_response == (404, {}, "")
        assert router.autorespond is True

    def test_overrides(self):
        settings = Settings(
            {
                "ROUTER_DEFAULT_RESPONSE": [500, {}, "boom"],
                "ROUTER_AUTORESPOND": "False",
            }
        )
        router = Router.from_settings(settings)
        assert router.default_response == (500, {}, "boom")
        assert router.autorespond is False


def test_json_api(router, xhr):
    router.add(
        "POST",
        "http://example.com/api/items",
        lambda request: (201, {"Location": "/api/items/1"}, request.request_body),
    )
    xhr.open("POST", "http://example.com/api/items")
    xhr.set_request_header("Content-Type", "application/json")
    xhr.send('{"name": "item"}')
    assert xhr.request_headers["content-type"] == "application/json;charset=utf-8"
    assert xhr.status == 201
    assert xhr.status_text == "Created"
    assert xhr.get_response_header("location") == "/api/items/1"
    assert xhr.response_text == '{"name": "item"}'
    assert xhr.response_xml is None
    assert router.requests == [xhr]
