"""Primarily for singleton resources that you want to lazily load on usage."""
import typing as ty
from threading import Lock
from typing import Generic, TypeVar

L = TypeVar("L")


class Lazy(Generic[L]):
    """A Lazy resource pattern.

    Encapsulates a single instance of the resource that can be accessed
    with (). The loader runs at most once, even if the first calls
    race on different threads.
    """

    def __init__(self, loader_func: ty.Callable[[], L]):
        self.loader_func = loader_func
        self._lock = Lock()
        self._loaded = False
        self._value: ty.Optional[L] = None

    def __call__(self) -> L:
        if not self._loaded:
            with self._lock:
                if not self._loaded:
                    self._value = self.loader_func()
                    self._loaded = True
        return ty.cast(L, self._value)

    @property
    def loaded(self) -> bool:
        return self._loaded
