from __future__ import annotations

from typing import Any, Callable, Iterable, TypeVar

from jsondts.invariants import never


T = TypeVar("T")


def sort_once(
    values: Iterable[T],
    *,
    source: str,
    key: Callable[[T], Any] | None = None,
    reverse: bool = False,
) -> list[T]:
    """Sort ``values`` once at the point where output order is fixed.

    ``source`` names the call site and is reported when the keys turn out not
    to be comparable with each other.
    """
    items = list(values)
    try:
        return sorted(items, key=key, reverse=reverse)
    except TypeError as exc:
        never("sort keys are not comparable", source=source, detail=str(exc))
