from typing import Callable, Dict

from fastapi import APIRouter, HTTPException

from lpsolver.domain.schema import StrictBaseModel
from lpsolver.numerics.decimal import bn_ceil, bn_floor, bn_round

router = APIRouter(prefix="/numerics", tags=["numerics"])

_OPS: Dict[str, Callable[[str], str]] = {
    "round": bn_round,
    "ceil": bn_ceil,
    "floor": bn_floor,
}


class Numeral(StrictBaseModel):
    value: str


@router.post("/{op}", response_model=Numeral)
def apply(op: str, body: Numeral) -> Numeral:
    fn = _OPS.get(op)
    if fn is None:
        raise HTTPException(status_code=404, detail=f"Unknown operation '{op}'.")
    # InvalidDecimalFormat is a DomainError -> 400 via the app handler.
    return Numeral(value=fn(body.value))
