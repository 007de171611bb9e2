"""
Reader for the LP text dialect written by :mod:`lpsolver.lpformat.write`.

Covers the CPLEX-LP subset the writer emits plus the common spellings found
in hand-written files: objective sense aliases, multi-line constraints,
reversed relations (``3 <= x``), ``free`` bounds, ``inf`` numerals,
Generals/Binaries sections and ``\\`` comments.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from lpsolver.core.errors import LpFormatError

INF = math.inf


@dataclass
class LPRow:
    name: str
    coefs: Dict[str, float]
    lb: float
    ub: float


@dataclass
class LPProblem:
    """Dense, solver-neutral view of an LP file."""

    maximize: bool = False
    objective_name: Optional[str] = None
    objective: Dict[str, float] = field(default_factory=dict)
    objective_offset: float = 0.0
    columns: List[str] = field(default_factory=list)
    rows: List[LPRow] = field(default_factory=list)
    col_lb: Dict[str, float] = field(default_factory=dict)
    col_ub: Dict[str, float] = field(default_factory=dict)
    integer_columns: List[str] = field(default_factory=list)

    def add_column(self, name: str) -> None:
        if name not in self.col_lb:
            self.columns.append(name)
            self.col_lb[name] = 0.0
            self.col_ub[name] = INF


_SECTIONS = {
    "maximize": "max", "maximise": "max", "maximum": "max", "max": "max",
    "minimize": "min", "minimise": "min", "minimum": "min", "min": "min",
    "subject to": "st", "such that": "st", "st": "st", "s.t.": "st",
    "bounds": "bounds", "bound": "bounds",
    "generals": "general", "general": "general", "gen": "general",
    "binaries": "binary", "binary": "binary", "bin": "binary",
    "end": "end",
}

_TOKEN_RE = re.compile(
    r"""
    (?P<op><=|>=|=<|=>|<|>|=)
    |(?P<num>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)
    |(?P<sign>[+-])
    |(?P<colon>:)
    |(?P<name>[A-Za-z_!"#$%&()/,;?@'{}~|\[\]][^\s:<>=+\-]*)
    |(?P<space>\s+)
    |(?P<bad>.)
    """,
    re.VERBOSE,
)

_INFINITY_NAMES = {"inf", "infinity"}

# A whole name token as the tokenizer reads it.
_NAME_RE = re.compile(r"""[A-Za-z_!"#$%&()/,;?@'{}~|\[\]][^\s:<>=+\-\\]*""")

# Words that would read back as a section header, infinity or a free bound.
RESERVED_NAMES = frozenset(
    {k for k in _SECTIONS if " " not in k} | _INFINITY_NAMES | {"free"}
)


def is_lp_name(name: str) -> bool:
    """Whether `name` survives a write/read round trip as a single name."""
    return _NAME_RE.fullmatch(name) is not None and name.lower() not in RESERVED_NAMES


_OP_NORMAL = {"<": "<=", "=<": "<=", "<=": "<=", ">": ">=", "=>": ">=", ">=": ">=", "=": "="}

Token = Tuple[str, str]


def _tokenize(text: str) -> List[Token]:
    tokens: List[Token] = []
    for m in _TOKEN_RE.finditer(text):
        kind = m.lastgroup
        if kind == "space":
            continue
        if kind == "bad":
            raise LpFormatError(f"Unexpected character {m.group()!r} in '{text.strip()}'.")
        value = m.group()
        if kind == "op":
            value = _OP_NORMAL[value]
        tokens.append((kind, value))
    return tokens


def _section_of(line: str) -> Optional[str]:
    return _SECTIONS.get(" ".join(line.lower().split()))


class _Expr:
    """Linear expression side: variable coefficients plus a constant."""

    def __init__(self) -> None:
        self.coefs: Dict[str, float] = {}
        self.constant = 0.0

    @property
    def is_constant(self) -> bool:
        return not self.coefs


def _parse_side(tokens: List[Token], pos: int) -> Tuple[_Expr, int]:
    expr = _Expr()
    consumed_any = False
    while pos < len(tokens) and tokens[pos][0] != "op":
        sign = 1.0
        while pos < len(tokens) and tokens[pos][0] == "sign":
            if tokens[pos][1] == "-":
                sign = -sign
            pos += 1
        coef: Optional[float] = None
        if pos < len(tokens) and tokens[pos][0] == "num":
            coef = float(tokens[pos][1])
            pos += 1
        if pos < len(tokens) and tokens[pos][0] == "name":
            name = tokens[pos][1]
            pos += 1
            if name.lower() in _INFINITY_NAMES and coef is None:
                expr.constant += sign * INF
            else:
                value = sign * (1.0 if coef is None else coef)
                expr.coefs[name] = expr.coefs.get(name, 0.0) + value
        elif coef is not None:
            expr.constant += sign * coef
        else:
            raise LpFormatError("Expected a coefficient or variable name.")
        consumed_any = True
    if not consumed_any:
        raise LpFormatError("Empty expression side.")
    return expr, pos


def _parse_relation(tokens: List[Token]) -> Tuple[List[_Expr], List[str]]:
    sides: List[_Expr] = []
    ops: List[str] = []
    side, pos = _parse_side(tokens, 0)
    sides.append(side)
    while pos < len(tokens):
        ops.append(tokens[pos][1])
        side, pos = _parse_side(tokens, pos + 1)
        sides.append(side)
    return sides, ops


def _split_name(tokens: List[Token]) -> Tuple[Optional[str], List[Token]]:
    if len(tokens) >= 2 and tokens[0][0] == "name" and tokens[1][0] == "colon":
        return tokens[0][1], tokens[2:]
    return None, tokens


def _limits(
    sides: List[_Expr], ops: List[str], what: str
) -> Tuple[Dict[str, float], float, float, str]:
    """Return (coefs, lb, ub, op) with `op` oriented as 'expr op rhs' ('range' for ranged rows)."""
    if len(sides) == 2:
        left, right = sides
        op = ops[0]
        if left.is_constant and not right.is_constant:
            left, right = right, left
            op = {"<=": ">=", ">=": "<=", "=": "="}[op]
        if not right.is_constant:
            raise LpFormatError(f"{what}: right-hand side must be a constant.")
        rhs = right.constant - left.constant
        if op == "<=":
            return left.coefs, -INF, rhs, op
        if op == ">=":
            return left.coefs, rhs, INF, op
        return left.coefs, rhs, rhs, op

    if len(sides) == 3:
        low, mid, high = sides
        if not (low.is_constant and high.is_constant) or mid.is_constant:
            raise LpFormatError(f"{what}: ranged form must be 'value op expr op value'.")
        if ops[0] != ops[1] or ops[0] == "=":
            raise LpFormatError(f"{what}: ranged form needs matching '<=' or '>=' operators.")
        a = low.constant - mid.constant
        b = high.constant - mid.constant
        if ops[0] == ">=":
            a, b = b, a
        return mid.coefs, a, b, "range"

    raise LpFormatError(f"{what}: expected one relational operator or a ranged form.")


def _is_complete(tokens: List[Token]) -> bool:
    ops = [i for i, t in enumerate(tokens) if t[0] == "op"]
    if not ops or ops[-1] == len(tokens) - 1:
        return False
    return tokens[-1][0] in ("num", "name")


def _read_objective(problem: LPProblem, lines: List[str]) -> None:
    tokens = _tokenize(" ".join(lines))
    name, tokens = _split_name(tokens)
    problem.objective_name = name
    if not tokens:
        return
    expr, pos = _parse_side(tokens, 0)
    if pos != len(tokens):
        raise LpFormatError("Objective must not contain relational operators.")
    for var, coef in expr.coefs.items():
        problem.add_column(var)
        problem.objective[var] = coef
    problem.objective_offset = expr.constant


def _continues(lines: List[str], i: int) -> bool:
    """Whether the line after `i` carries on a ranged row (``<= 5``)."""
    if i + 1 >= len(lines):
        return False
    tokens = _tokenize(lines[i + 1])
    return bool(tokens) and tokens[0][0] == "op"


def _read_constraints(problem: LPProblem, lines: List[str]) -> None:
    pending: List[Token] = []
    for i, line in enumerate(lines):
        pending.extend(_tokenize(line))
        if not _is_complete(pending) or _continues(lines, i):
            continue
        name, tokens = _split_name(pending)
        name = name or f"R{len(problem.rows) + 1}"
        sides, ops = _parse_relation(tokens)
        coefs, lb, ub, _ = _limits(sides, ops, f"constraint '{name}'")
        for var in coefs:
            problem.add_column(var)
        problem.rows.append(LPRow(name=name, coefs=coefs, lb=lb, ub=ub))
        pending = []
    if pending:
        raise LpFormatError("Incomplete constraint at end of 'Subject To' section.")


def _read_bounds(problem: LPProblem, lines: List[str]) -> None:
    for line in lines:
        tokens = _tokenize(line)
        if len(tokens) == 2 and tokens[0][0] == "name" and tokens[1][1].lower() == "free":
            var = tokens[0][1]
            problem.add_column(var)
            problem.col_lb[var], problem.col_ub[var] = -INF, INF
            continue

        sides, ops = _parse_relation(tokens)
        coefs, lb, ub, op = _limits(sides, ops, f"bound '{line.strip()}'")
        if len(coefs) != 1 or next(iter(coefs.values())) != 1.0:
            raise LpFormatError(f"Bound '{line.strip()}' must reference a single variable.")
        var = next(iter(coefs))
        problem.add_column(var)
        if op == ">=":
            problem.col_lb[var] = lb
        elif op == "<=":
            problem.col_ub[var] = ub
        else:
            problem.col_lb[var], problem.col_ub[var] = lb, ub


def _read_integers(problem: LPProblem, lines: List[str], binary: bool) -> None:
    for line in lines:
        for var in line.split():
            problem.add_column(var)
            if binary:
                problem.col_lb[var] = max(problem.col_lb[var], 0.0)
                problem.col_ub[var] = min(problem.col_ub[var], 1.0)
            if var not in problem.integer_columns:
                problem.integer_columns.append(var)


def read_lp(text: str) -> LPProblem:
    blocks: List[Tuple[str, List[str]]] = []
    for raw in text.splitlines():
        line = raw.split("\\", 1)[0].strip()
        if not line:
            continue
        section = _section_of(line)
        if section == "end":
            break
        if section is not None:
            blocks.append((section, []))
        elif not blocks:
            raise LpFormatError(f"Content before objective sense: '{line}'.")
        else:
            blocks[-1][1].append(line)

    if not blocks or blocks[0][0] not in ("max", "min"):
        raise LpFormatError("LP text must start with 'Maximize' or 'Minimize'.")

    problem = LPProblem(maximize=blocks[0][0] == "max")
    _read_objective(problem, blocks[0][1])

    for section, lines in blocks[1:]:
        if section == "st":
            _read_constraints(problem, lines)
        elif section == "bounds":
            _read_bounds(problem, lines)
        elif section in ("general", "binary"):
            _read_integers(problem, lines, binary=section == "binary")
        else:
            raise LpFormatError(f"Unexpected '{section}' section.")
    return problem
