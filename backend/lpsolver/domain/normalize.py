from __future__ import annotations

from typing import List, Optional

from lpsolver.domain.schema import LPModel


def normalize_model(model: LPModel) -> LPModel:
    """
    normalization:
    - integer name lists keep first occurrence only
    - a name listed as binary is dropped from generals (binary implies integer)
    - the caller's model is never mutated
    """
    binaries = _dedupe(model.binaries)
    generals = _dedupe(model.generals)
    if generals is not None and binaries:
        generals = [n for n in generals if n not in binaries]

    if binaries == model.binaries and generals == model.generals:
        return model
    return model.model_copy(update={"binaries": binaries, "generals": generals})


def _dedupe(names: Optional[List[str]]) -> Optional[List[str]]:
    if names is None:
        return None
    return list(dict.fromkeys(names))
