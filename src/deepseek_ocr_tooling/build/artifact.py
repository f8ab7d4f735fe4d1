"""Locate the built shared library: explicit candidates first, then a recursive search.

The locator is an ordered chain of lookups, each returning a Path or None. The first
non-None result wins; None from every lookup means the artifact was not found.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from deepseek_ocr_tooling.helpers import iter_named_files

log = logging.getLogger(__name__)

Lookup = Callable[[], "Path | None"]


def first_existing(candidates: Iterable[Path]) -> Path | None:
    """First candidate that is an existing file, checked in order."""
    for p in candidates:
        log.debug("probing %s", p)
        if p.is_file():
            return p
    return None


def search_tree(root: Path, name: str) -> Path | None:
    """First file called name under root. Sibling order is whatever the filesystem yields."""
    log.debug("searching %s for %s", root, name)
    return next(iter_named_files(root, name), None)


def candidate_lookup(candidates: Sequence[Path]) -> Lookup:
    return lambda: first_existing(candidates)


def search_lookup(root: Path, name: str) -> Lookup:
    return lambda: search_tree(root, name)


def locate(lookups: Iterable[Lookup]) -> Path | None:
    """Run lookups in order; return the first path found, or None."""
    for lookup in lookups:
        found = lookup()
        if found is not None:
            return found
    return None


def find_artifact(
    candidates: Sequence[Path],
    search_roots: Sequence[Path],
    name: str,
) -> Path | None:
    """Explicit candidates, then each search root in turn (duplicate roots searched once)."""
    lookups: list[Lookup] = [candidate_lookup(candidates)]
    seen: set[Path] = set()
    for root in search_roots:
        key = root.resolve()
        if key in seen:
            continue
        seen.add(key)
        lookups.append(search_lookup(root, name))
    return locate(lookups)
