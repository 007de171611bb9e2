from __future__ import annotations

from typing import List, Optional, Set

from lpsolver.core.errors import DomainError
from lpsolver.domain.schema import LPModel


def validate_model(model: LPModel) -> None:
    # Unique row names (unnamed rows are allowed)
    names = [c.name for c in model.subject_to if c.name]
    if len(set(names)) != len(names):
        raise DomainError("Duplicate constraint names found.")

    bound_names = [b.name for b in model.bounds or []]
    if len(set(bound_names)) != len(bound_names):
        raise DomainError("Duplicate variable bounds found.")

    used = _used_variables(model)
    _integer_names_are_used("generals", model.generals, used)
    _integer_names_are_used("binaries", model.binaries, used)


def validate_precision(precision: Optional[int]) -> None:
    if precision is None:
        return
    if isinstance(precision, bool) or not isinstance(precision, int) or precision < 0:
        raise DomainError(
            f"precision must be a non-negative integer, got {precision!r}."
        )


def _used_variables(model: LPModel) -> Set[str]:
    used = {t.name for t in model.objective.vars}
    for c in model.subject_to:
        used.update(t.name for t in c.vars)
    used.update(b.name for b in model.bounds or [])
    return used


def _integer_names_are_used(
    field: str, names: Optional[List[str]], used: Set[str]
) -> None:
    missing = [n for n in names or [] if n not in used]
    if missing:
        raise DomainError(
            f"'{field}' references variables not present in the model: {missing}."
        )
