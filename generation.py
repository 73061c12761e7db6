"""
Generation Task
===============

Runs one backend call under a hard deadline and folds its result into a
single Outcome. The call itself happens on a daemon thread; the caller waits
on a queue, so a result arriving after the deadline is simply never read.
"""

from __future__ import annotations

import queue
import threading
import time
from typing import Any, Callable

from backends import BackendDescriptor
from errors import BackendInitError, GenerationError, GenerationErrorKind
from name_parsing import sanitize_names
from naming import NameRequest
from tui_models import Failure, Outcome, Success

GENERATION_TIMEOUT = 45.0
WARMUP_TIMEOUT = 8.0
POLL_INTERVAL = 0.1


class DeadlineExceeded(Exception):
    """The wrapped call did not finish before its deadline."""


class CallAborted(Exception):
    """The caller gave up waiting before the deadline."""


def call_with_deadline(
    fn: Callable[[], Any],
    timeout: float,
    should_abort: Callable[[], bool] | None = None,
) -> Any:
    """
    Run `fn` on a daemon thread and return its result.

    Raises DeadlineExceeded after `timeout` seconds, CallAborted as soon as
    `should_abort()` turns true, or whatever `fn` raised.
    """
    results: queue.Queue[tuple[bool, Any]] = queue.Queue(maxsize=1)

    def _runner() -> None:
        try:
            results.put((True, fn()))
        except Exception as exc:
            results.put((False, exc))

    threading.Thread(target=_runner, name="namesprout-backend", daemon=True).start()
    deadline = time.monotonic() + timeout
    while True:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise DeadlineExceeded(f"no result within {timeout:g}s")
        wait = remaining if should_abort is None else min(remaining, POLL_INTERVAL)
        try:
            ok, payload = results.get(timeout=wait)
            break
        except queue.Empty:
            if should_abort is not None and should_abort():
                raise CallAborted("caller stopped waiting") from None
    if not ok:
        raise payload
    return payload


class GenerationTask:
    """Single-use wrapper around one backend generation call."""

    def __init__(
        self,
        backend: BackendDescriptor,
        request: NameRequest,
        timeout: float = GENERATION_TIMEOUT,
    ) -> None:
        self.backend = backend
        self.request = request
        self.timeout = timeout
        self._outcome: Outcome | None = None

    def run(self, should_abort: Callable[[], bool] | None = None) -> Outcome:
        """Block until the backend answers or the deadline passes. Never raises."""
        if self._outcome is not None:
            return self._outcome
        try:
            names = call_with_deadline(
                lambda: self.backend.generate_names(self.request, self.timeout),
                self.timeout,
                should_abort=should_abort,
            )
        except CallAborted:
            outcome: Outcome = Failure(GenerationErrorKind.TIMEOUT, "generation cancelled")
        except DeadlineExceeded:
            outcome = Failure(
                GenerationErrorKind.TIMEOUT,
                f"{self.backend.name} did not answer within {self.timeout:g} seconds",
            )
        except GenerationError as exc:
            outcome = Failure(exc.kind, exc.message)
        except Exception as exc:
            outcome = Failure(GenerationErrorKind.TRANSPORT_ERROR, str(exc) or type(exc).__name__)
        else:
            if names is None or not isinstance(names, (list, tuple)):
                outcome = Failure(
                    GenerationErrorKind.MALFORMED_RESPONSE,
                    f"{self.backend.name} returned {type(names).__name__}, expected a list of names",
                )
            else:
                outcome = Success(tuple(sanitize_names(names)))
        self._outcome = outcome
        return outcome


def warmup_backend(backend: BackendDescriptor, timeout: float = WARMUP_TIMEOUT) -> None:
    """
    Run the backend's optional warmup under the init deadline.

    Raises:
        BackendInitError: warmup failed or timed out.
    """
    if backend.warmup is None:
        return
    warmup = backend.warmup
    try:
        call_with_deadline(lambda: warmup(timeout), timeout)
    except DeadlineExceeded as exc:
        raise BackendInitError(f"Backend {backend.name!r} warmup timed out: {exc}") from exc
    except BackendInitError:
        raise
    except Exception as exc:
        raise BackendInitError(f"Backend {backend.name!r} failed to initialize: {exc}") from exc
