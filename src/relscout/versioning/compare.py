"""Natural ("numeric-aware") ordering of version tokens.

A token is split into maximal runs of digits and non-digits:

* numeric runs compare by integer value;
* a numeric run is greater than a non-numeric run at the same position;
* non-numeric runs compare character by character, letters before any
  other character, so ``2.0.0a < 2.0.0.1``;
* a token with extra trailing components is greater than its strict prefix,
  so ``2.0.0 < 2.0.0a`` and ``2.0 < 2.0.1``.
"""

import re
from typing import Callable, Iterable, List, Optional, Tuple, TypeVar

T = TypeVar("T")

_RUNS = re.compile(r"\d+|\D+")

VersionKey = Tuple[Tuple[int, object], ...]


def _text_key(run: str) -> Tuple[Tuple[int, str], ...]:
    return tuple((0 if ch.isalpha() else 1, ch) for ch in run)


def version_key(token: str) -> VersionKey:
    """Return a sort key implementing the natural version order."""
    key = []
    for run in _RUNS.findall(token):
        if run.isdigit():
            key.append((1, int(run)))
        else:
            key.append((0, _text_key(run)))
    return tuple(key)


def compare(left: str, right: str) -> int:
    """Three-way comparison: -1, 0 or 1."""
    lk, rk = version_key(left), version_key(right)
    return (lk > rk) - (lk < rk)


def max_version(tokens: Iterable[str]) -> Optional[str]:
    """Return the greatest token, or None for an empty input."""
    best: Optional[str] = None
    best_key: Optional[VersionKey] = None
    for token in tokens:
        key = version_key(token)
        if best_key is None or key > best_key:
            best, best_key = token, key
    return best


def natural_sorted(items: Iterable[T], key: Optional[Callable[[T], str]] = None) -> List[T]:
    """Sort ``items`` under natural order, optionally through ``key``."""
    if key is None:
        return sorted(items, key=lambda item: version_key(str(item)))
    return sorted(items, key=lambda item: version_key(key(item)))
