from __future__ import annotations

from typing import List, Optional, Sequence

from lpsolver.core.errors import MissingBoundsError
from lpsolver.domain.schema import BoundSpec, BoundType, Direction, LPModel, Term
from lpsolver.numerics.decimal import compare, is_negative, is_unit


def create_lp(model: LPModel) -> str:
    lines: List[str] = []

    lines.append("Maximize" if model.objective.direction == Direction.MAXIMIZE else "Minimize")
    lines.append(_named(model.objective.name, expression(model.objective.vars)))

    lines.append("Subject To")
    for c in model.subject_to:
        # The row name labels the whole relation, including the double form.
        lines.append(_named(c.name, bounded_expression(expression(c.vars), c.bnds)))

    if model.bounds:
        lines.append("Bounds")
        for b in model.bounds:
            lines.append(bounded_expression(b.name, b, is_column=True))

    if model.generals:
        lines.append("Generals")
        lines.append(" ".join(model.generals))
    if model.binaries:
        lines.append("Binaries")
        lines.append(" ".join(model.binaries))

    lines.append("End")
    return "\n".join(lines) + "\n"


def _named(name: Optional[str], expr: str) -> str:
    return f"{name}: {expr}" if name else expr


def term(t: Term, first: bool) -> str:
    coef = t.coef
    if is_unit(coef):
        if not is_negative(coef):
            return t.name if first else f"+ {t.name}"
        return f"- {t.name}"
    if first:
        return f"{coef.lstrip('+')} {t.name}"
    if coef.startswith(("+", "-")):
        return f"{coef} {t.name}"
    return f"+{coef} {t.name}"


def expression(terms: Sequence[Term]) -> str:
    return " ".join(term(t, first=(i == 0)) for i, t in enumerate(terms))


def infer_bound_type(bnds: BoundSpec) -> BoundType:
    if bnds.type is not None:
        return bnds.type
    if bnds.lb is not None and bnds.ub is not None:
        if compare(bnds.lb, bnds.ub) == 0:
            return BoundType.FIXED
        return BoundType.DOUBLE
    if bnds.lb is not None:
        return BoundType.LOWER
    if bnds.ub is not None:
        return BoundType.UPPER
    raise MissingBoundsError("No bounds were specified.")


def bounded_expression(expr: str, bnds: BoundSpec, is_column: bool = False) -> str:
    kind = infer_bound_type(bnds)

    if kind == BoundType.FREE:
        return f"{expr} free" if is_column else f"-inf <= {expr} <= +inf"
    if kind == BoundType.FIXED:
        value = bnds.ub if bnds.ub is not None else bnds.lb
        if value is None:
            raise MissingBoundsError(f"Fixed bound on '{expr}' needs 'lb' or 'ub'.")
        return f"{expr} = {value}"
    if kind == BoundType.LOWER:
        _require(bnds.lb, "lb", kind, expr)
        return f"{expr} >= {bnds.lb}"
    if kind == BoundType.UPPER:
        _require(bnds.ub, "ub", kind, expr)
        return f"{expr} <= {bnds.ub}"

    _require(bnds.lb, "lb", kind, expr)
    _require(bnds.ub, "ub", kind, expr)
    return f"{bnds.lb} <= {expr} <= {bnds.ub}"


def _require(value: Optional[str], field: str, kind: BoundType, expr: str) -> None:
    if value is None:
        raise MissingBoundsError(
            f"Bound type '{kind.value}' on '{expr}' requires '{field}'."
        )
