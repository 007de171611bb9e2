from __future__ import annotations

from enum import Enum
from typing import List, Optional, Protocol, Sequence, Tuple, Union

NumericType = Union[str, int, float]


class SolveStatus(str, Enum):
    OPTIMAL = "optimal"
    FEASIBLE = "feasible"
    INFEASIBLE = "infeasible"
    UNBOUNDED = "unbounded"
    ERROR = "error"
    NOT_SOLVED = "not_solved"


class ContinuousSolver(Protocol):
    """Operations the rest of the package needs from a continuous LP engine.

    One instance is one handle: load a problem, solve it (possibly several
    times with modified column bounds), read the results, release it once.
    """

    def __enter__(self) -> "ContinuousSolver": ...

    def __exit__(self, exc_type, exc, tb) -> None: ...

    def load_lp(self, text: str) -> None: ...

    def load_problem(
        self,
        objective: Sequence[NumericType],
        col_lb: Sequence[NumericType],
        col_ub: Sequence[NumericType],
        row_lb: Sequence[NumericType],
        row_ub: Sequence[NumericType],
        matrix: Sequence[NumericType],
        names: Optional[Sequence[str]] = None,
        maximize: bool = False,
    ) -> None: ...

    def primal(self) -> SolveStatus: ...

    def dual(self) -> SolveStatus: ...

    @property
    def column_names(self) -> List[str]: ...

    @property
    def integer_columns(self) -> List[int]: ...

    def objective_coefficients(self) -> List[float]: ...

    def is_maximization(self) -> bool: ...

    def column_bounds(self, index: int) -> Tuple[float, float]: ...

    def set_column_bounds(self, index: int, lb: float, ub: float) -> None: ...

    def solution(self) -> List[float]: ...

    def unbounded_ray(self) -> List[float]: ...

    def infeasibility_ray(self) -> List[float]: ...

    def objective_value(self) -> float: ...

    def release(self) -> None: ...
