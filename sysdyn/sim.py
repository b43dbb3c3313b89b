"""Compilation and Euler integration of system dynamics models."""

from __future__ import annotations

import math
import operator
import re
from dataclasses import dataclass, field
from typing import Callable, Iterator, Sequence

from sysdyn.parse import Node, NodeType, ParseError, Walker, node_walk, parse_equation
from sysdyn.project import ErrorCode, Model, Project, SDError, SimSpecs, Var, VarType
from sysdyn.util import lookup

TIME = 0
"""Offset of the time value within every row of results."""

_FLOAT_PREFIX = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _atof(text: str | None) -> float:
    """Parse the longest leading floating-point number of ``text``, else 0."""
    if not text:
        return 0.0
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        return 0.0
    return float(match.group())


@dataclass(eq=False)
class AVar:
    """A variable bound into a simulation; modules hold child variables."""

    v: Var | None
    parent: AVar | None = field(default=None, repr=False)
    model: Model | None = field(default=None, repr=False)
    node: Node | None = field(default=None, repr=False)
    is_const: bool = False
    offset: int = 0
    src: AVar | None = field(default=None, repr=False)
    direct_deps: list[AVar] = field(default_factory=list, repr=False)
    inflows: list[AVar] = field(default_factory=list, repr=False)
    outflows: list[AVar] = field(default_factory=list, repr=False)
    avars: list[AVar] = field(default_factory=list, repr=False)
    initials: list[AVar] = field(default_factory=list, repr=False)
    flows: list[AVar] = field(default_factory=list, repr=False)
    stocks: list[AVar] = field(default_factory=list, repr=False)
    visited: bool = field(default=False, repr=False)
    visiting: bool = field(default=False, repr=False)
    _qual_name: str | None = field(default=None, repr=False)

    def qual_name(self) -> str:
        """Return the dotted name of this variable, relative to the root model."""
        if self._qual_name is not None:
            return self._qual_name
        if self.parent is None:
            return "<main>"
        if self.parent.parent is None:
            return self.v.name
        self._qual_name = f"{self.parent.qual_name()}.{self.v.name}"
        return self._qual_name


def _offset(av: AVar) -> int:
    while av.src is not None:
        av = av.src
    return av.offset


def resolve(module: AVar | None, name: str | None) -> AVar | None:
    """Find the variable called ``name`` in ``module``; dotted names descend."""
    if module is None or not name:
        return None
    if name[0] == ".":
        name = name[1:]
    head, dot, subvar = name.partition(".")
    for av in module.avars:
        if dot and av.v.type is VarType.MODULE and av.v.name.startswith(head):
            return resolve(av, subvar)
        if av.v.name == name:
            return av
    return None


def _div(l: float, r: float) -> float:
    try:
        return l / r
    except ZeroDivisionError:
        if l == 0 or math.isnan(l):
            return math.nan
        return math.copysign(math.inf, l) * math.copysign(1.0, r)


def _pow(l: float, r: float) -> float:
    try:
        return math.pow(l, r)
    except ValueError:
        return math.inf if l == 0 else math.nan
    except OverflowError:
        return math.inf


def rt_pulse(dt: float, time: float, args: Sequence[float]) -> float:
    """Return magnitude/dt during each pulse step, 0 otherwise."""
    magnitude = args[0] if len(args) > 0 else 0.0
    first_pulse = args[1] if len(args) > 1 else 0.0
    interval = args[2] if len(args) > 2 else 0.0

    if time < first_pulse:
        return 0.0
    next_pulse = first_pulse
    while time >= next_pulse:
        if time < next_pulse + dt:
            return _div(magnitude, dt)
        if interval <= 0:
            break
        next_pulse += interval
    return 0.0


def rt_min(dt: float, time: float, args: Sequence[float]) -> float:
    """Return the smaller of exactly two arguments, NaN otherwise."""
    if len(args) != 2:
        return math.nan
    a, b = args
    return a if a < b else b


def rt_max(dt: float, time: float, args: Sequence[float]) -> float:
    """Return the larger of exactly two arguments, NaN otherwise."""
    if len(args) != 2:
        return math.nan
    a, b = args
    return a if a > b else b


_RT_FNS: dict[str, Callable[[float, float, Sequence[float]], float]] = {
    "pulse": rt_pulse,
    "min": rt_min,
    "max": rt_max,
}

_UNARY_OPS: dict[str, Callable[[float], float]] = {
    "+": lambda l: l,
    "-": operator.neg,
    "!": lambda l: 1.0 if l == 0 else 0.0,
}

_BINARY_OPS: dict[str, Callable[[float, float], float]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": _div,
    "<": lambda l, r: 1.0 if l < r else 0.0,
    ">": lambda l, r: 1.0 if l > r else 0.0,
    "&": lambda l, r: 1.0 if l == 1 and r == 1 else 0.0,
    "|": lambda l, r: 1.0 if l == 1 or r == 1 else 0.0,
    "=": lambda l, r: 1.0 if l == r else 0.0,
    "≠": lambda l, r: 1.0 if l != r else 0.0,
    "≤": lambda l, r: 1.0 if l <= r else 0.0,
    "≥": lambda l, r: 1.0 if l >= r else 0.0,
    "^": _pow,
}


class _DependencyWalker(Walker):
    """Binds identifiers, literals and calls of one variable's equation."""

    def __init__(self, module: AVar, av: AVar) -> None:
        self.module = module
        self.av = av
        self.curr: Node | None = None

    def start(self, node: Node) -> None:
        self.curr = node
        if node.type is NodeType.IDENT:
            dep = resolve(self.module, node.sval)
            if dep is None:
                raise SDError(ErrorCode.UNSPECIFIED, f"resolve failed for {node.sval}")
            node.av = dep
            self.av.direct_deps.append(dep)
        elif node.type is NodeType.FLOATLIT:
            node.fval = _atof(node.sval)
        elif node.type is NodeType.CALL:
            name = node.left.sval if node.left is not None else None
            fn = _RT_FNS.get(name)
            if fn is None:
                raise SDError(ErrorCode.UNSPECIFIED, f"unknown fn '{name}' for call")
            node.fn = fn

    def start_child(self, node: Node) -> Walker | None:
        # the function name of a call was already handled in start
        curr = self.curr
        if curr is not None and curr.type is NodeType.CALL and node is curr.left:
            return None
        return self


def _build_avar(project: Project, parent: AVar, v: Var) -> AVar:
    if v.type is VarType.MODULE:
        model = project.get_model(v.name)
        if model is None:
            raise SDError(ErrorCode.UNSPECIFIED, f"no model named {v.name!r}")
        return _build_module(project, parent, model, v)

    av = AVar(v=v, parent=parent)
    if v.eqn is not None:
        try:
            av.node = parse_equation(v.eqn)
        except ParseError as exc:
            raise SDError(ErrorCode.UNSPECIFIED, f"eqn parse failed for {v.name}") from exc
    av.is_const = av.node is not None and av.node.type is NodeType.FLOATLIT
    return av


def _build_module(
    project: Project, parent: AVar | None, model: Model, vmodule: Var | None
) -> AVar:
    module = AVar(v=vmodule, parent=parent, model=model)
    if parent is None:
        time = Var(name="time", type=VarType.AUX)
        module.avars.append(AVar(v=time, parent=module))

    conns = vmodule.conns if vmodule is not None else []
    for v in model.vars:
        chosen = next((conn for conn in conns if conn.name == v.name), v)
        module.avars.append(_build_avar(project, module, chosen))
    return module


def _init_avar(av: AVar, module: AVar | None) -> None:
    if av.model is not None:
        _compile_module(av)
        return
    if av.v.type is VarType.REF and module is not None:
        src = resolve(module.parent, av.v.src)
        if src is None:
            raise SDError(ErrorCode.UNSPECIFIED, f"cannot resolve reference {av.v.src!r}")
        av.src = src
        return
    if av.v.eqn is None and av.v.name == "time":
        return

    walker = _DependencyWalker(module, av)
    if not node_walk(walker, av.node):
        raise SDError(ErrorCode.UNSPECIFIED, f"cannot compile equation of {av.v.name}")

    for names, targets in ((av.v.inflows, av.inflows), (av.v.outflows, av.outflows)):
        for name in names:
            flow = resolve(module, name)
            if flow is None:
                raise SDError(ErrorCode.UNSPECIFIED, f"unknown flow {name!r}")
            targets.append(flow)


def _compile_module(module: AVar) -> None:
    for av in module.avars:
        _init_avar(av, module)


def _assign_offsets(module: AVar, offset: int) -> int:
    for av in module.avars:
        if av.model is not None:
            offset = _assign_offsets(av, offset)
        elif av.src is None:
            av.offset = offset
            offset += 1
    return offset


def _add_to_runlists(module: AVar, av: AVar) -> None:
    if av.visited:
        return
    if av.visiting:
        raise SDError(ErrorCode.CIRCULAR, av.qual_name())
    av.visiting = True

    for dep in av.direct_deps:
        if not dep.visited:
            _add_to_runlists(module, dep)

    kind = av.v.type
    if kind is VarType.MODULE:
        module.initials.append(av)
        module.flows.append(av)
        module.stocks.append(av)
    elif kind is VarType.STOCK:
        module.initials.append(av)
        module.stocks.append(av)
    elif kind is not VarType.REF:
        module.initials.append(av)
        (module.stocks if av.is_const else module.flows).append(av)

    av.visited = True
    av.visiting = False


def _clear_visited(module: AVar) -> None:
    for av in module.avars:
        if av.model is not None:
            _clear_visited(av)
        else:
            av.visited = False
            av.visiting = False
    module.visited = False
    module.visiting = False


def _sort_runlists(module: AVar) -> None:
    _clear_visited(module)
    module.visiting = True
    first = 1 if module.parent is None else 0
    for sub in module.avars[first:]:
        if sub.visited:
            continue
        if sub.v.type is VarType.MODULE:
            _sort_runlists(sub)
        _add_to_runlists(module, sub)
    module.visiting = False


def _var_names(module: AVar) -> Iterator[str]:
    for av in module.avars:
        if av.model is not None:
            yield from _var_names(av)
        elif av.src is None:
            yield av.qual_name()


class Sim:
    """A simulation of one model of a project."""

    def __init__(self, project: Project, model_name: str | None = None) -> None:
        model = project.get_model(model_name)
        if model is None:
            raise SDError(ErrorCode.UNSPECIFIED, f"no model named {model_name!r}")
        if model.file is None:
            raise SDError(ErrorCode.UNSPECIFIED, "model does not belong to a file")

        self.project = project
        self.module = _build_module(project, None, model, None)
        _init_avar(self.module, None)
        self.nvars = _assign_offsets(self.module, 0)
        _sort_runlists(self.module)
        self.reset()

    def reset(self) -> None:
        """Return to the start time and recompute initial values."""
        spec: SimSpecs = self.module.model.file.sim_specs
        if spec.dt == 0:
            raise SDError(ErrorCode.UNSPECIFIED, "dt must not be zero")
        self.spec = spec
        self.step = 0
        self.save_step = 0
        self.nsteps = max(int((spec.stop - spec.start) / spec.dt + 1), 0)
        self.save_every = max(int(spec.savestep / spec.dt + 0.5), 1)
        self.nsaves = -(-self.nsteps // self.save_every)

        width = max(self.nvars, 1)
        # one spare row beyond the saved ones holds the step being computed
        self._rows = [[0.0] * width for _ in range(self.nsaves + 2)]
        self._curr = self._rows[0]
        self._next = self._rows[1]
        self._curr[TIME] = spec.start
        self._calc(self._curr, self.module.initials, initial=True)

    def _eval(self, node: Node | None, dt: float, time: float) -> float:
        if node is None:
            return math.nan
        kind = node.type
        if kind is NodeType.PAREN:
            return self._eval(node.left, dt, time)
        if kind is NodeType.FLOATLIT:
            return node.fval
        if kind is NodeType.IDENT:
            return self._curr[_offset(node.av)]
        if kind is NodeType.CALL:
            args = [self._eval(arg, dt, time) for arg in node.args]
            return node.fn(dt, time, args)
        if kind is NodeType.IF:
            if self._eval(node.cond, dt, time) != 0:
                return self._eval(node.left, dt, time)
            return self._eval(node.right, dt, time)
        if kind is NodeType.UNARY:
            fn = _UNARY_OPS.get(node.op)
            value = self._eval(node.left, dt, time)
            return fn(value) if fn is not None else math.nan
        if kind is NodeType.BINARY:
            l = self._eval(node.left, dt, time)
            r = self._eval(node.right, dt, time)
            fn = _BINARY_OPS.get(node.op)
            return fn(l, r) if fn is not None else math.nan
        return math.nan

    def _calc(self, data: list[float], avars: list[AVar], initial: bool) -> None:
        dt = self.spec.dt
        for av in avars:
            if av.node is None:
                self._calc(data, av.initials if initial else av.flows, initial)
                continue
            value = self._eval(av.node, dt, data[TIME])
            if av.v.gf is not None:
                value = lookup(av.v.gf, value)
            data[av.offset] = value

    def _calc_stocks(self, data: list[float], avars: list[AVar]) -> None:
        dt = self.spec.dt
        curr = self._curr
        for av in avars:
            kind = av.v.type
            if kind is VarType.STOCK:
                change = sum(curr[_offset(flow)] for flow in av.inflows)
                change -= sum(curr[_offset(flow)] for flow in av.outflows)
                data[av.offset] = curr[av.offset] + change * dt
            elif kind is VarType.MODULE:
                self._calc_stocks(data, av.stocks)
            else:
                data[av.offset] = self._eval(av.node, dt, curr[TIME])

    def run_to(self, end: float) -> None:
        """Advance the simulation until its time passes ``end``."""
        spec = self.spec
        dt = spec.dt
        self._curr = self._rows[self.save_step]
        self._next = self._rows[self.save_step + 1]

        while self.step < self.nsteps and self._curr[TIME] <= end:
            self._calc(self._curr, self.module.flows, initial=False)
            self._calc_stocks(self._next, self.module.stocks)

            if self.step + 1 == self.nsteps:
                break

            # computed from the step count to avoid accumulating rounding errors
            self._next[TIME] = spec.start + (self.step + 1) * dt

            saving = self.step % self.save_every == 0
            self.step += 1
            if not saving:
                self._curr[:] = self._next
            else:
                self.save_step += 1
                self._curr = self._rows[self.save_step]
                self._next = self._rows[self.save_step + 1]

    def run_to_end(self) -> None:
        """Run the simulation through its stop time."""
        self.run_to(self.spec.stop + 1)

    def _lookup_offset(self, name: str) -> int:
        if name == "time":
            return TIME
        av = resolve(self.module, name)
        if av is None:
            raise SDError(ErrorCode.UNSPECIFIED, f"unknown variable {name!r}")
        return _offset(av)

    def value(self, name: str) -> float:
        """Return the current value of the variable ``name``."""
        return self._curr[self._lookup_offset(name)]

    def series(self, name: str) -> list[float]:
        """Return the saved values of the variable ``name``, one per saved step."""
        offset = self._lookup_offset(name)
        return [row[offset] for row in self._rows[: self.nsaves]]

    def step_count(self) -> int:
        """Return the number of saved steps."""
        return self.nsaves

    def var_count(self) -> int:
        """Return the number of simulated variables, time included."""
        return self.nvars

    def var_names(self) -> list[str]:
        """Return the qualified names of all simulated variables in offset order."""
        return list(_var_names(self.module))