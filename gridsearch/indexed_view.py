# gridsearch/indexed_view.py
from typing import Iterable, Iterator, List, Sequence, Tuple


class IndexedView:
    """Dense, mutable view over selected positions of an owned buffer.

    Logical index ``i`` maps to physical index ``physical(i)`` of the
    buffer.  The translation table is sorted, deduplicated and fixed at
    construction; only the values behind it change.
    """

    __slots__ = ("_elements", "_index")

    def __init__(self, elements: List[int], valid_indices: Iterable[int]):
        index: Tuple[int, ...] = tuple(sorted(set(int(i) for i in valid_indices)))
        size = len(elements)
        for i in index:
            if i < 0 or i >= size:
                raise IndexError(f"physical index {i} outside buffer of length {size}")
        self._elements = elements
        self._index = index

    def __len__(self) -> int:
        return len(self._index)

    def __getitem__(self, i: int) -> int:
        return self._elements[self._index[i]]

    def __setitem__(self, i: int, value: int) -> None:
        self._elements[self._index[i]] = value

    def __iter__(self) -> Iterator[int]:
        for p in self._index:
            yield self._elements[p]

    def __repr__(self) -> str:
        return f"IndexedView({list(self)!r} @ {list(self._index)!r})"

    def physical(self, i: int) -> int:
        return self._index[i]

    @property
    def indices(self) -> Tuple[int, ...]:
        return self._index

    @property
    def raw(self) -> Sequence[int]:
        """The whole backing buffer, fixed positions included."""
        return self._elements


__all__ = ["IndexedView"]
