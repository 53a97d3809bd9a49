# gridsearch/sticky.py
from typing import Any, Generic, Iterable, Iterator, Optional, TypeVar

T = TypeVar("T")


class StickyRepeat(Generic[T]):
    """Iterator that keeps yielding the last value once its source runs dry.

    An empty source yields ``default`` forever.  The iterator never raises
    ``StopIteration``, so it is only meant to be zipped against a finite
    sequence.
    """

    def __init__(self, source: Iterable[T], default: Optional[T] = None):
        self._it: Iterator[T] = iter(source)
        self._last: Optional[T] = default
        self._latched = False

    def __iter__(self) -> "StickyRepeat[T]":
        return self

    def __next__(self) -> Optional[T]:
        if not self._latched:
            try:
                self._last = next(self._it)
            except StopIteration:
                self._latched = True
        return self._last

    @property
    def latched(self) -> bool:
        return self._latched


__all__ = ["StickyRepeat"]
