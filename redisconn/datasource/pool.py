"""Bounded pool of command handles with borrow/return semantics."""

import threading
import time
from collections import deque
from contextlib import contextmanager
from typing import Callable, Generic, Iterator, TypeVar

import structlog

from redisconn.config.models import ConnectionPoolConfig
from redisconn.errors import ConnectionFailedError, PoolClosedError, PoolExhaustedError

logger = structlog.get_logger()

T = TypeVar("T")


class HandlePool(Generic[T]):
    """Thread-safe reservoir of reusable handles.

    Handles are created lazily up to ``max_total``. Idle handles are reused
    most-recently-returned first. When every handle is in use, ``borrow``
    either fails at once or waits for a return, bounded by
    ``max_wait_millis`` (negative waits indefinitely).

    Closing the pool destroys idle handles immediately and in-use handles as
    soon as they are returned.
    """

    def __init__(
        self,
        create: Callable[[], T],
        destroy: Callable[[T], None],
        validate: Callable[[T], bool],
        config: ConnectionPoolConfig,
        name: str = "pool",
    ) -> None:
        """Initialize handle pool.

        Args:
            create: Builds a new live handle.
            destroy: Releases a handle's connections.
            validate: Returns True if a handle is still usable.
            config: Pool bounds and checks.
            name: Pool name used in log events.
        """
        self._create = create
        self._destroy = destroy
        self._validate = validate
        self.config = config
        self._idle: deque[T] = deque()
        self._active: dict[int, T] = {}
        self._created = 0
        self._closed = False
        self._cond = threading.Condition()
        self.logger = logger.bind(component="handle_pool", pool=name)

    @property
    def num_active(self) -> int:
        """Number of handles currently borrowed."""
        with self._cond:
            return len(self._active)

    @property
    def num_idle(self) -> int:
        """Number of handles waiting in the pool."""
        with self._cond:
            return len(self._idle)

    @property
    def closed(self) -> bool:
        """Whether the pool has been closed."""
        return self._closed

    def prepare(self) -> None:
        """Create idle handles until ``min_idle`` is reached."""
        target = min(self.config.min_idle, self.config.max_total)
        while True:
            with self._cond:
                if self._closed or self._created >= target:
                    return
                self._created += 1
            handle = self._make()
            with self._cond:
                self._idle.append(handle)
                self._cond.notify()

    def borrow(self) -> T:
        """Borrow a handle, creating or waiting for one as needed.

        Returns:
            A handle owned by the caller until :meth:`give_back`.

        Raises:
            PoolClosedError: If the pool is closed.
            PoolExhaustedError: If no handle became available in time.
            ConnectionFailedError: If a newly created handle fails validation.
        """
        max_wait = self.config.max_wait_millis
        deadline = None if max_wait < 0 else time.monotonic() + max_wait / 1000.0

        while True:
            handle, fresh = self._take(deadline)
            if not self.config.test_on_borrow or self._is_valid(handle):
                return handle
            self.logger.info("pool_handle_invalid", phase="borrow", fresh=fresh)
            self._discard(handle, active=True)
            if fresh:
                raise ConnectionFailedError("Unable to validate a new handle")
            if deadline is not None and time.monotonic() >= deadline:
                self.logger.warning(
                    "pool_exhausted",
                    max_total=self.config.max_total,
                    waited_ms=self.config.max_wait_millis,
                )
                raise PoolExhaustedError(
                    f"Timeout waiting for a valid handle after {self.config.max_wait_millis}ms"
                )

    def _take(self, deadline: float | None) -> tuple[T, bool]:
        with self._cond:
            while True:
                if self._closed:
                    raise PoolClosedError("Pool is closed")
                if self._idle:
                    handle = self._idle.pop()
                    self._active[id(handle)] = handle
                    return handle, False
                if self._created < self.config.max_total:
                    self._created += 1
                    break
                if not self.config.block_when_exhausted:
                    self.logger.warning("pool_exhausted", max_total=self.config.max_total)
                    raise PoolExhaustedError(
                        f"Pool exhausted: all {self.config.max_total} handles are in use"
                    )
                if deadline is None:
                    self._cond.wait()
                    continue
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    self.logger.warning(
                        "pool_exhausted",
                        max_total=self.config.max_total,
                        waited_ms=self.config.max_wait_millis,
                    )
                    raise PoolExhaustedError(
                        f"Timeout waiting for idle handle after {self.config.max_wait_millis}ms"
                    )
                self._cond.wait(remaining)

        handle = self._make()
        with self._cond:
            self._active[id(handle)] = handle
        return handle, True

    def _make(self) -> T:
        # The slot is reserved by the caller; give it back if creation fails.
        try:
            handle = self._create()
        except BaseException:
            with self._cond:
                self._created -= 1
                self._cond.notify()
            raise
        self.logger.debug("pool_handle_created")
        return handle

    def give_back(self, handle: T) -> None:
        """Return a borrowed handle to the pool.

        Args:
            handle: Handle obtained from :meth:`borrow`.
        """
        with self._cond:
            if self._active.get(id(handle)) is not handle:
                self.logger.warning("pool_unknown_handle_returned")
                return

        if self.config.test_on_return and not self._closed and not self._is_valid(handle):
            self.logger.info("pool_handle_invalid", phase="return")
            self._discard(handle, active=True)
            return

        with self._cond:
            del self._active[id(handle)]
            if not self._closed and len(self._idle) < self.config.max_idle:
                self._idle.append(handle)
                self._cond.notify()
                return
            self._created -= 1
            self._cond.notify()
        self._close_handle(handle)

    @contextmanager
    def lease(self) -> Iterator[T]:
        """Borrow a handle for the duration of a ``with`` block."""
        handle = self.borrow()
        try:
            yield handle
        finally:
            self.give_back(handle)

    def close(self) -> None:
        """Close the pool. Safe to call more than once."""
        with self._cond:
            if self._closed:
                return
            self._closed = True
            idle = list(self._idle)
            self._idle.clear()
            self._created -= len(idle)
            in_use = len(self._active)
            self._cond.notify_all()

        for handle in idle:
            self._close_handle(handle)
        self.logger.info("pool_closed", destroyed_idle=len(idle), in_use=in_use)

    def _is_valid(self, handle: T) -> bool:
        try:
            return bool(self._validate(handle))
        except Exception as e:
            self.logger.debug("pool_validation_failed", error=str(e))
            return False

    def _discard(self, handle: T, active: bool) -> None:
        with self._cond:
            if active:
                self._active.pop(id(handle), None)
            self._created -= 1
            self._cond.notify()
        self._close_handle(handle)

    def _close_handle(self, handle: T) -> None:
        try:
            self._destroy(handle)
        except Exception as e:
            self.logger.warning("pool_handle_destroy_failed", error=str(e))
        else:
            self.logger.debug("pool_handle_destroyed")
