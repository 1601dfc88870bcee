"""Transitive closure over "requires" edges.

``reachable`` is the reference semantics every graph store must match:
the result holds each node reachable from any seed by a path of one or
more edges. Seeds are not part of the result unless some seed (possibly
itself, via a cycle) requires them.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterable, Sequence


def reachable(seeds: Iterable[str], requires: Callable[[str], Sequence[str]]) -> list[str]:
    """Return every node reachable from *seeds* in at least one hop.

    Breadth-first; each node is expanded at most once so cycles and self
    loops terminate. Order is discovery order, which is deterministic for a
    fixed seed order and adjacency order. Seeds unknown to *requires* should
    map to an empty sequence and simply contribute nothing.
    """
    frontier: deque[str] = deque()
    expanded: set[str] = set()
    for seed in seeds:
        if seed not in expanded:
            expanded.add(seed)
            frontier.append(seed)

    found: dict[str, None] = {}
    while frontier:
        node = frontier.popleft()
        for required in requires(node):
            if required in found:
                continue
            found[required] = None
            if required not in expanded:
                expanded.add(required)
                frontier.append(required)

    return list(found)
