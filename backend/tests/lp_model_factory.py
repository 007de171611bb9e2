from typing import Any, Dict, List

from lpsolver.domain.schema import (
    BoundSpec,
    Constraint,
    LPModel,
    Objective,
    Term,
    VariableBound,
)

JsonPayload = Dict[str, Any]


def _terms(coefs: Dict[str, Any]) -> List[Term]:
    return [Term(name=n, coef=c) for n, c in coefs.items()]


class LPModelFactory:
    """Model-first factory.

    - Scenario methods return LPModel objects (strong typing).
    - Use to_json(model) when you need the HTTP payload.
    - `*_lp` methods return hand-written LP text.
    """

    @staticmethod
    def to_json(model: LPModel) -> JsonPayload:
        return model.model_dump(mode="json", by_alias=True, exclude_none=True)

    # ----------------------------
    # Models
    # ----------------------------

    @staticmethod
    def tinlake(integer: bool = True) -> LPModel:
        """Reserve/redemption model whose relaxation is integral at its upper bounds."""
        names = ["tinInvest", "dropInvest", "tinRedeem", "dropRedeem"]
        return LPModel(
            name="tinlake",
            objective=Objective(
                direction="maximize",
                name="obj",
                vars=_terms(dict(zip(names, [10000, 1000, 100000, 1000000]))),
            ),
            subject_to=[
                Constraint(
                    name="reserve_min",
                    vars=_terms(dict(zip(names, [1, 1, -1, -1]))),
                    bnds=BoundSpec(lb=-200),
                ),
                Constraint(
                    name="min_drop_ratio",
                    vars=_terms(dict(zip(names, ["0.85", "-0.15", "-0.85", "0.15"]))),
                    bnds=BoundSpec(lb=-50),
                ),
                Constraint(
                    name="max_drop_ratio",
                    vars=_terms(dict(zip(names, ["-0.80", "0.20", "0.80", "-0.20"]))),
                    bnds=BoundSpec(lb=0),
                ),
                Constraint(
                    name="reserve_max",
                    vars=_terms(dict(zip(names, [1, 1, -1, -1]))),
                    bnds=BoundSpec(ub=9800),
                ),
            ],
            bounds=[
                VariableBound(name=n, lb=0, ub=ub)
                for n, ub in zip(names, [124, 400, 100, 300])
            ],
            generals=names if integer else None,
        )

    @staticmethod
    def two_var_knapsack() -> LPModel:
        """max x + y s.t. 2x + 2y <= 5, x, y general in [0, 10]: relaxation 2.5, integer 2."""
        return LPModel(
            objective=Objective(direction="maximize", vars=_terms({"x": 1, "y": 1})),
            subject_to=[
                Constraint(name="cap", vars=_terms({"x": 2, "y": 2}), bnds=BoundSpec(ub=5))
            ],
            bounds=[
                VariableBound(name="x", lb=0, ub=10),
                VariableBound(name="y", lb=0, ub=10),
            ],
            generals=["x", "y"],
        )

    @staticmethod
    def half_only() -> LPModel:
        """2x = 1 with x general: no integer rounding exists."""
        return LPModel(
            objective=Objective(direction="minimize", vars=_terms({"x": 1})),
            subject_to=[
                Constraint(name="half", vars=_terms({"x": 2}), bnds=BoundSpec(lb=1, ub=1))
            ],
            generals=["x"],
        )

    @staticmethod
    def infeasible() -> LPModel:
        return LPModel(
            objective=Objective(direction="minimize", vars=_terms({"x": 1})),
            subject_to=[
                Constraint(name="low", vars=_terms({"x": 1}), bnds=BoundSpec(ub=-1)),
            ],
        )

    @staticmethod
    def unbounded() -> LPModel:
        return LPModel(
            objective=Objective(direction="maximize", vars=_terms({"x": 1})),
            subject_to=[
                Constraint(name="floor", vars=_terms({"x": 1}), bnds=BoundSpec(lb=1)),
            ],
        )

    # ----------------------------
    # LP text
    # ----------------------------

    @staticmethod
    def small_lp() -> str:
        """max 0.6x + 0.5y s.t. x + 2y <= 1, 3x + y <= 2 -> x=0.6, y=0.2, obj=0.46."""
        return (
            "Maximize\n"
            " obj: 0.6 x + 0.5 y\n"
            "Subject To\n"
            " c1: x + 2 y <= 1\n"
            " c2: 3 x + y <= 2\n"
            "End\n"
        )

    @staticmethod
    def json_tinlake() -> JsonPayload:
        return LPModelFactory.to_json(LPModelFactory.tinlake())
