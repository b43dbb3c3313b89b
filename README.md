# sysdyn

A small engine for system dynamics models. It parses variable equations,
binds identifiers to variables (including variables inside nested
modules), orders the calculations by dependency, and integrates stocks
over time with Euler's method.

It needs nothing beyond the Python standard library (Python 3.10 or
later).

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## A first model

Models are built in code from the classes in `sysdyn.project`, then run
with `sysdyn.sim.Sim`:

```python
from sysdyn.project import File, Model, Project, SimSpecs, Var, VarType
from sysdyn.sim import Sim

model = Model(vars=[
    Var("population", VarType.STOCK, eqn="100", inflows=["births"]),
    Var("births", VarType.FLOW, eqn="population * birth_rate"),
    Var("birth_rate", VarType.AUX, eqn="0.1"),
])

project = Project()
project.add_file(File(sim_specs=SimSpecs(start=0, stop=10, dt=1), models=[model]))

sim = Sim(project)          # no model name selects the root (unnamed) model
sim.run_to_end()

for name in sim.var_names():            # ["time", "population", ...]
    print(name, sim.series(name))
```

A stock's equation gives its initial value; each step it changes by the
sum of its inflows minus the sum of its outflows, times `dt`.

`Sim` also offers:

- `run_to(end)` – advance until the simulation time passes `end`
- `reset()` – go back to the start time and recompute initial values
- `value(name)` – the current value of a variable (`"time"` included)
- `series(name)` – the saved values of a variable, one per saved step
- `step_count()` – the number of saved steps
- `var_count()` – the number of simulated variables, time included
- `var_names()` – qualified names of the simulated variables in order

`SimSpecs.savestep` controls how often a step is saved; with the default
of 0 every step is saved.

## Modules

A `Var` of type `VarType.MODULE` instantiates the project's model whose
name equals the variable's name. Entries in its `conns` list replace the
model's variables of the same name; a `VarType.REF` variable there takes
its value from the variable named by its `src` in the enclosing model.
Variables inside modules are addressed with dotted names such as
`"module.stock"`, both in equations' resolution and in `Sim.value` and
`Sim.series`.

## Graphical functions

Give a variable a `gf=Table(x, y)` (from `sysdyn.util`) and the value of
its equation is passed through the table: linear interpolation between
points, clamped to the first or last `y` outside the range of `x`.
`sysdyn.util.lookup(table, index)` does the same lookup directly.

## Equations

Equations are case-insensitive. They may contain:

- numbers such as `3`, `.5`, `1e3`
- identifiers, optionally in double quotes: `"Birth Rate"` becomes
  `birth_rate` (see `sysdyn.util.canonicalize`)
- arithmetic `+ - * / ^`, comparisons `< > <= >= = <>`, logic `and`,
  `or`, `not`; comparisons and logic give 1 or 0, and `and`/`or` treat
  only exactly 1 as true
- `if cond then a else b` (any non-zero condition is true)
- the functions `pulse(magnitude, first[, interval])`, `min(a, b)` and
  `max(a, b)`; `min` and `max` give NaN unless called with two arguments
- comments in braces: `{ like this }`

`mod` is accepted by the parser but has no arithmetic behind it; it
evaluates to NaN.

`sysdyn.parse` exposes the pieces directly: `Lexer` (with `peek`,
`next_token` and iteration over `Token`s), `parse_equation` returning a
`Node` tree (or `None` for an empty equation), and a `Walker` visitor
run by `node_walk`. Unparsable equations raise `ParseError`.

```python
from sysdyn.parse import parse_equation

node = parse_equation("if time > 5 then min(a, 3) else 0")
```

## Errors

Failures raise `sysdyn.project.SDError`, whose `code` is an `ErrorCode`
(for example `ErrorCode.CIRCULAR` for a dependency cycle);
`error_str(code)` gives the message for a code.

## Supporting modules

- `sysdyn.hashtable` – `HashTable`, an open-addressing table keyed by
  integers (`KeyType.LONG`; other key types raise `ValueError`), with
  `insert`, `lookup` (raises `KeyError`), `remove`, `in`, `len`,
  iteration and `items()`, and optional callbacks on removal.
- `sysdyn.siphash` – `siphash(data, key, outlen)`, SipHash-2-4 with a
  16-byte key and 8- or 16-byte output.
- `sysdyn.runes` – UTF-8 coding of single code points: `decode_rune`,
  `encode_rune`, `rune_len`, `full_rune`.
- `sysdyn.casemap` and `sysdyn.chartype` – table-driven case mapping and
  classification: `to_lower`, `to_upper`, `to_title`, `is_lower`,
  `is_upper`, `is_title`, `is_alpha`, `is_space`.
- `sysdyn.util` – `str_replace`, `str_trim`, `utf8_tolower`, `round_up`,
  `lookup`, `canonicalize` and `Table`.

## What it does not do

- It does not read model files from disk: there is no loader for any
  model file format, so projects are assembled in code as shown above.
- It has no command-line program; run simulations from Python and print
  or store the results yourself.
- Only Euler integration is performed; `SimSpecs.method` is kept but not
  consulted.