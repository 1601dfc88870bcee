"""Merge policy: append transitively required variables to a request.

augment                -- Pure merge of one requested set and its closure.
add_required_variables -- Resolves and merges every collection in a request.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Sequence

import structlog

from vargraph.errors import InvalidRequestError
from vargraph.models.catalog import Variable
from vargraph.models.requests import VariableDescriptor, VariableInfo
from vargraph.observability.metrics import required_variables_added_total
from vargraph.resolver.closure import ClosureResolver

_log = structlog.get_logger(component="resolver.augment")


def augment(original_ids: Collection[str], closure_variables: Iterable[Variable]) -> list[Variable]:
    """Return the closure variables that are not already requested.

    Order follows *closure_variables*; each id appears at most once. Neither
    input is modified.
    """
    present = set(original_ids)
    additions: list[Variable] = []
    for variable in closure_variables:
        if variable.id in present:
            continue
        present.add(variable.id)
        additions.append(variable)
    return additions


def validate_request(var_infos: Sequence[VariableInfo]) -> None:
    """Reject requests with a missing collection id or variable identifier."""
    for var_info in var_infos:
        if not var_info.collection_id:
            raise InvalidRequestError("requested collection is missing a collection id")
        for descriptor in var_info.variables or ():
            if not descriptor.id:
                raise InvalidRequestError(
                    f"requested variable {descriptor.name or '<unnamed>'!r} in collection "
                    f"{var_info.collection_id} is missing an identifier"
                )


async def add_required_variables(
    var_infos: Sequence[VariableInfo],
    resolver: ClosureResolver,
) -> list[VariableInfo]:
    """Return *var_infos* with each collection's required variables appended.

    Whole-collection requests (``variables is None``) pass through unchanged.
    Every collection is resolved before any result is assembled, so a
    failure raises without producing a partially augmented request; the
    input objects are never modified.

    Raises:
        InvalidRequestError:   before any store call, for malformed input.
        StoreUnavailableError: if any closure query fails.
    """
    validate_request(var_infos)

    additions: list[list[Variable]] = []
    for var_info in var_infos:
        if var_info.variables is None:
            additions.append([])
            continue
        closure = await resolver.resolve(var_info.variable_ids)
        additions.append(augment(var_info.variable_ids, closure.variables))

    augmented: list[VariableInfo] = []
    for var_info, added in zip(var_infos, additions, strict=True):
        if not added:
            augmented.append(var_info)
            continue
        required_variables_added_total.inc(len(added))
        _log.info(
            "required_variables_added",
            collection_id=var_info.collection_id,
            requested=len(var_info.variables or ()),
            added=[variable.id for variable in added],
        )
        augmented.append(
            VariableInfo(
                collection_id=var_info.collection_id,
                variables=(
                    *(var_info.variables or ()),
                    *(VariableDescriptor(id=variable.id, name=variable.name) for variable in added),
                ),
            )
        )
    return augmented
