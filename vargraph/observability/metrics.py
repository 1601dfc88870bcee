"""Prometheus metrics for closure resolution."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

closure_requests_total = Counter(
    "vargraph_closure_requests_total",
    "Closure resolutions performed against the graph store",
    ["backend", "outcome"],  # outcome: success | error | skipped
)

closure_duration_seconds = Histogram(
    "vargraph_closure_duration_seconds",
    "Time spent waiting on the graph store for one closure",
    ["backend"],
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

required_variables_added_total = Counter(
    "vargraph_required_variables_added_total",
    "Required variables appended to requests by augmentation",
)
