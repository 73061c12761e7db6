#!/usr/bin/env python3
"""Tests for deadline-bound generation tasks and backend warmup."""

import threading
import time
import unittest

from backends import BackendDescriptor
from errors import BackendInitError, GenerationError, GenerationErrorKind
from generation import CallAborted, DeadlineExceeded, GenerationTask, call_with_deadline, warmup_backend
from naming import NameKind, NameRequest, NamingStyle
from tui_models import Failure, Success

REQUEST = NameRequest(
    description="user profile",
    kind=NameKind.FUNCTION,
    count=3,
    naming_style=NamingStyle.LOWER_CAMEL,
)


def make_backend(generate, warmup=None):
    return BackendDescriptor(
        name="fake",
        type="mock",
        display_name="Fake",
        generate_names=generate,
        warmup=warmup,
    )


class TestCallWithDeadline(unittest.TestCase):
    def test_returns_result(self):
        self.assertEqual(call_with_deadline(lambda: 42, 1.0), 42)

    def test_reraises_exception(self):
        def boom():
            raise KeyError("missing")

        with self.assertRaises(KeyError):
            call_with_deadline(boom, 1.0)

    def test_deadline(self):
        release = threading.Event()
        self.addCleanup(release.set)
        with self.assertRaises(DeadlineExceeded):
            call_with_deadline(lambda: release.wait(5), 0.05)

    def test_abort(self):
        release = threading.Event()
        self.addCleanup(release.set)
        started = time.monotonic()
        with self.assertRaises(CallAborted):
            call_with_deadline(lambda: release.wait(5), 5.0, should_abort=lambda: True)
        self.assertLess(time.monotonic() - started, 1.0)


class TestGenerationTask(unittest.TestCase):
    def test_success_is_sanitized(self):
        backend = make_backend(lambda req, deadline: ["getUser", " getUser ", "", "loadUser"])
        outcome = GenerationTask(backend, REQUEST, timeout=1.0).run()
        self.assertEqual(outcome, Success(("getUser", "loadUser")))

    def test_empty_list_is_success(self):
        outcome = GenerationTask(make_backend(lambda req, deadline: []), REQUEST, timeout=1.0).run()
        self.assertEqual(outcome, Success(()))

    def test_generation_error_keeps_kind(self):
        def reject(req, deadline):
            raise GenerationError(GenerationErrorKind.BACKEND_REJECTED, "blocked: SAFETY")

        outcome = GenerationTask(make_backend(reject), REQUEST, timeout=1.0).run()
        self.assertEqual(outcome, Failure(GenerationErrorKind.BACKEND_REJECTED, "blocked: SAFETY"))

    def test_unexpected_exception_is_transport_error(self):
        def explode(req, deadline):
            raise ConnectionError("reset by peer")

        outcome = GenerationTask(make_backend(explode), REQUEST, timeout=1.0).run()
        self.assertIsInstance(outcome, Failure)
        self.assertIs(outcome.kind, GenerationErrorKind.TRANSPORT_ERROR)
        self.assertIn("reset by peer", outcome.message)

    def test_non_list_result_is_malformed(self):
        outcome = GenerationTask(make_backend(lambda req, deadline: "getUser"), REQUEST, timeout=1.0).run()
        self.assertIsInstance(outcome, Failure)
        self.assertIs(outcome.kind, GenerationErrorKind.MALFORMED_RESPONSE)

    def test_slow_backend_times_out(self):
        release = threading.Event()
        self.addCleanup(release.set)

        def slow(req, deadline):
            release.wait(5)
            return ["late"]

        outcome = GenerationTask(make_backend(slow), REQUEST, timeout=0.05).run()
        self.assertIsInstance(outcome, Failure)
        self.assertIs(outcome.kind, GenerationErrorKind.TIMEOUT)

    def test_backend_receives_timeout_as_deadline(self):
        seen = []

        def record(req, deadline):
            seen.append((req, deadline))
            return ["a"]

        GenerationTask(make_backend(record), REQUEST, timeout=2.5).run()
        self.assertEqual(seen, [(REQUEST, 2.5)])

    def test_run_produces_one_outcome(self):
        calls = []

        def count(req, deadline):
            calls.append(1)
            return ["a"]

        task = GenerationTask(make_backend(count), REQUEST, timeout=1.0)
        first = task.run()
        second = task.run()
        self.assertIs(first, second)
        self.assertEqual(len(calls), 1)


class TestWarmupBackend(unittest.TestCase):
    def test_no_warmup_is_noop(self):
        warmup_backend(make_backend(lambda req, deadline: []))

    def test_warmup_failure_raises_init_error(self):
        def warmup(deadline):
            raise RuntimeError("no network")

        with self.assertRaises(BackendInitError) as ctx:
            warmup_backend(make_backend(lambda req, deadline: [], warmup=warmup))
        self.assertIn("no network", str(ctx.exception))

    def test_warmup_timeout(self):
        release = threading.Event()
        self.addCleanup(release.set)
        backend = make_backend(lambda req, deadline: [], warmup=lambda deadline: release.wait(5))
        with self.assertRaises(BackendInitError):
            warmup_backend(backend, timeout=0.05)


if __name__ == "__main__":
    unittest.main()
