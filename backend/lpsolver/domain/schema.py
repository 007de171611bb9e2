from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, List, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from lpsolver.lpformat.read import is_lp_name
from lpsolver.numerics.decimal import normalize_numeral


class Direction(str, Enum):
    MINIMIZE = "minimize"
    MAXIMIZE = "maximize"


class BoundType(str, Enum):
    FREE = "free"
    LOWER = "lower"
    UPPER = "upper"
    DOUBLE = "double"
    FIXED = "fixed"


# GLPK-style numeric codes accepted in model JSON.
GLP_MIN = 1
GLP_MAX = 2
GLP_FR = 1
GLP_LO = 2
GLP_UP = 3
GLP_DB = 4
GLP_FX = 5

_DIRECTION_CODES = {GLP_MIN: Direction.MINIMIZE, GLP_MAX: Direction.MAXIMIZE}
_BOUND_TYPE_CODES = {
    GLP_FR: BoundType.FREE,
    GLP_LO: BoundType.LOWER,
    GLP_UP: BoundType.UPPER,
    GLP_DB: BoundType.DOUBLE,
    GLP_FX: BoundType.FIXED,
}


def _from_code(value: Any, codes: dict) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        if value not in codes:
            raise ValueError(f"Unknown code {value}; expected one of {sorted(codes)}.")
        return codes[value]
    return value


def _numeral(value: Any) -> Optional[str]:
    if value is None:
        return None
    # InvalidDecimalFormat is a ValueError, pydantic reports it as a validation error.
    return normalize_numeral(value)


def _lp_name(value: str) -> str:
    if not is_lp_name(value):
        raise ValueError(
            f"'{value}' cannot be written as a name in LP text "
            "(it must start with a letter or symbol and contain no spaces or ':<>=+-\\')."
        )
    return value


# Variable and row names, restricted to what the LP text dialect reads back.
LPName = Annotated[str, AfterValidator(_lp_name)]


class StrictBaseModel(BaseModel):
    model_config = ConfigDict(
        extra="forbid", alias_generator=to_camel, populate_by_name=True
    )


class Term(StrictBaseModel):
    name: LPName
    coef: str

    @field_validator("coef", mode="before")
    @classmethod
    def _normalize_coef(cls, v: Any) -> str:
        return _numeral(v)


class BoundSpec(StrictBaseModel):
    lb: Optional[str] = None
    ub: Optional[str] = None
    type: Optional[BoundType] = None

    @field_validator("lb", "ub", mode="before")
    @classmethod
    def _normalize_bound(cls, v: Any) -> Optional[str]:
        return _numeral(v)

    @field_validator("type", mode="before")
    @classmethod
    def _bound_type_code(cls, v: Any) -> Any:
        return _from_code(v, _BOUND_TYPE_CODES)


class VariableBound(BoundSpec):
    name: LPName


class Objective(StrictBaseModel):
    direction: Direction
    name: Optional[LPName] = None
    vars: List[Term] = Field(default_factory=list)

    @field_validator("direction", mode="before")
    @classmethod
    def _direction_code(cls, v: Any) -> Any:
        return _from_code(v, _DIRECTION_CODES)


class Constraint(StrictBaseModel):
    name: Optional[LPName] = None
    vars: List[Term] = Field(min_length=1)
    bnds: BoundSpec


class LPModel(StrictBaseModel):
    name: Optional[str] = None
    objective: Objective
    subject_to: List[Constraint] = Field(default_factory=list)
    bounds: Optional[List[VariableBound]] = None
    binaries: Optional[List[LPName]] = None
    generals: Optional[List[LPName]] = None


class SolveRequest(StrictBaseModel):
    model: Optional[LPModel] = None
    lp: Optional[str] = None
    precision: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _exactly_one_problem(self) -> "SolveRequest":
        if (self.model is None) == (self.lp is None):
            raise ValueError("Provide exactly one of 'model' or 'lp'.")
        return self


class SolveResult(StrictBaseModel):
    objective_value: str
    variables: List[str] = Field(default_factory=list)
    solution: List[str] = Field(default_factory=list)
    unbounded_ray: List[str] = Field(default_factory=list)
    infeasibility_ray: List[str] = Field(default_factory=list)
    integer_solution: bool = False
