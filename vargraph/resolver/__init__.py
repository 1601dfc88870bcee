"""Required-variable resolution.

Submodules:
    closure -- ClosureResolver: drives a GraphStore to find required variables.
    augment -- Merge policy and the request-level add_required_variables.
"""

from vargraph.resolver.augment import add_required_variables, augment, validate_request
from vargraph.resolver.closure import ClosureResolver

__all__ = [
    "ClosureResolver",
    "add_required_variables",
    "augment",
    "validate_request",
]
