from __future__ import annotations

import logging
import threading
from typing import Callable, Generic, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LiveValue(Generic[T]):
    """
    Observable holder for the result of one request.

    A value is published at most once. Observers registered before publication
    are called on the publishing thread; observers registered afterwards are
    called immediately with the current value.

    Failures never touch the value channel: a caller that only observes values
    sees nothing at all when a request fails. Callers that care can read
    `error`, register `observe_error`, or block on `wait_settled`.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value: Optional[T] = None
        self._has_value = False
        self._error: Optional[BaseException] = None
        self._observers: List[Callable[[T], None]] = []
        self._error_observers: List[Callable[[BaseException], None]] = []
        self._value_set = threading.Event()
        self._settled = threading.Event()

    @property
    def value(self) -> Optional[T]:
        return self._value

    @property
    def has_value(self) -> bool:
        return self._has_value

    @property
    def error(self) -> Optional[BaseException]:
        return self._error

    @property
    def settled(self) -> bool:
        return self._settled.is_set()

    def observe(self, observer: Callable[[T], None]) -> None:
        with self._lock:
            if not self._has_value:
                self._observers.append(observer)
                return
            value = self._value
        observer(value)

    def remove_observer(self, observer: Callable[[T], None]) -> None:
        with self._lock:
            if observer in self._observers:
                self._observers.remove(observer)

    def observe_error(self, observer: Callable[[BaseException], None]) -> None:
        with self._lock:
            if self._error is None:
                self._error_observers.append(observer)
                return
            error = self._error
        observer(error)

    def post_value(self, value: T) -> None:
        with self._lock:
            if self._settled.is_set():
                logger.warning("Ignoring second publication on a settled LiveValue")
                return
            self._value = value
            self._has_value = True
            observers = list(self._observers)
            self._observers.clear()
            self._value_set.set()
            self._settled.set()
        for observer in observers:
            observer(value)

    def post_error(self, error: BaseException) -> None:
        with self._lock:
            if self._settled.is_set():
                logger.warning("Ignoring error on a settled LiveValue: %s", error)
                return
            self._error = error
            observers = list(self._error_observers)
            self._error_observers.clear()
            self._settled.set()
        for observer in observers:
            observer(error)

    def wait(self, timeout: Optional[float] = None) -> Optional[T]:
        """Block until a value is published or `timeout` elapses; return the value or None."""
        self._value_set.wait(timeout)
        return self._value

    def wait_settled(self, timeout: Optional[float] = None) -> bool:
        """Block until the request has either published a value or failed."""
        return self._settled.wait(timeout)
