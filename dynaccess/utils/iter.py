import typing as ty

T = ty.TypeVar("T")


def chunked(n: int, items: ty.Sequence[T]) -> ty.Iterator[ty.List[T]]:
    """Consecutive slices of at most n, in order. Nothing is deduplicated."""
    assert n > 0, "Chunk size must be positive"
    for i in range(0, len(items), n):
        yield list(items[i : i + n])


def unique_by(key: ty.Callable[[T], ty.Hashable], items: ty.Iterable[T]) -> ty.List[T]:
    """Drops later repeats, keeping the first of each in its original position."""
    seen: ty.Set[ty.Hashable] = set()
    uniques = list()
    for item in items:
        identity = key(item)
        if identity not in seen:
            seen.add(identity)
            uniques.append(item)
    return uniques
