from twisted.internet import defer
from twisted.trial import unittest

from fakexhr.exceptions import RequestAborted
from fakexhr.utils.defer import deferred_from_xhr
from fakexhr.xhr import XMLHttpRequest


class TestDeferredFromXhr(unittest.TestCase):
    def setUp(self):
        self.xhr = XMLHttpRequest()
        self.xhr.open("GET", "/items")
        self.listener_count = {
            event_type: len(listeners)
            for event_type, listeners in self.xhr._event_listeners.items()
        }

    def assertListenersRemoved(self):
        for event_type in ("loadstart", "load", "abort"):
            self.assertEqual(
                len(self.xhr._event_listeners[event_type]),
                self.listener_count[event_type],
            )

    @defer.inlineCallbacks
    def test_load(self):
        d = deferred_from_xhr(self.xhr)
        self.xhr.send()
        self.assertNoResult(d)
        self.xhr.respond(200, {}, "[]")
        xhr = yield d
        self.assertIs(xhr, self.xhr)
        self.assertEqual(xhr.response_text, "[]")
        self.assertListenersRemoved()

    def test_abort(self):
        d = deferred_from_xhr(self.xhr)
        self.xhr.send()
        self.xhr.abort()
        failure = self.failureResultOf(d, RequestAborted)
        self.assertIs(failure.value.xhr, self.xhr)
        self.assertListenersRemoved()

    def test_synchronous_request(self):
        self.xhr.open("GET", "/items", False)
        with self.assertRaises(ValueError):
            deferred_from_xhr(self.xhr)

    def test_opened_as_synchronous_later(self):
        d = deferred_from_xhr(self.xhr)
        self.xhr.open("GET", "/items", False)
        self.xhr.send()
        failure = self.failureResultOf(d, ValueError)
        self.assertIn("synchronous", str(failure.value))
        self.assertListenersRemoved()
        self.xhr.respond(200, {}, "sync")
        self.assertEqual(self.xhr.response_text, "sync")

    def test_fires_once(self):
        d = deferred_from_xhr(self.xhr)
        self.xhr.send()
        self.xhr.respond(200, {}, "")
        self.assertIs(self.successResultOf(d), self.xhr)
        # a late abort must not fire the deferred again
        self.xhr.abort()
