"""Projects, files, models and variables that make up a simulation."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from sysdyn.util import Table


class ErrorCode(enum.IntEnum):
    """Error codes reported by the library."""

    NO_ERROR = 0
    NOMEM = -1
    BAD_FILE = -2
    UNSPECIFIED = -3
    BAD_XML = -4
    BAD_LEX = -5
    EOF = -6
    CIRCULAR = -7


_ERR_MIN = -8

_ERROR_MSGS = {
    ErrorCode.NO_ERROR: "no error",
    ErrorCode.NOMEM: "no memory",
    ErrorCode.BAD_FILE: "bad file",
    ErrorCode.UNSPECIFIED: "unspecified error",
    ErrorCode.BAD_XML: "bad XML",
    ErrorCode.BAD_LEX: "bad equation lex",
    ErrorCode.EOF: "EOF",
    ErrorCode.CIRCULAR: "circularity error",
}


def error_str(code: int) -> str:
    """Return the message for a negative error ``code``."""
    if _ERR_MIN < code < ErrorCode.NO_ERROR:
        return _ERROR_MSGS[ErrorCode(code)]
    return "unknown error"


class SDError(Exception):
    """An error carrying one of the library's error codes."""

    def __init__(self, code: int, detail: str | None = None) -> None:
        self.code = code
        message = error_str(code)
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class VarType(enum.Enum):
    """Kinds of model variable."""

    STOCK = enum.auto()
    FLOW = enum.auto()
    AUX = enum.auto()
    MODULE = enum.auto()
    REF = enum.auto()


@dataclass
class Var:
    """A variable as declared in a model."""

    name: str
    type: VarType = VarType.AUX
    eqn: str | None = None
    gf: Table | None = None
    src: str | None = None
    inflows: list[str] = field(default_factory=list)
    outflows: list[str] = field(default_factory=list)
    conns: list[Var] = field(default_factory=list)


@dataclass
class SimSpecs:
    """Time settings of a simulation."""

    start: float = 0.0
    stop: float = 0.0
    dt: float = 1.0
    savestep: float = 0.0
    method: str | None = None
    time_units: str | None = None


@dataclass
class Model:
    """A named model; the root model has no name."""

    name: str | None = None
    vars: list[Var] = field(default_factory=list)
    file: File | None = field(default=None, repr=False, compare=False)


@dataclass
class File:
    """One model file: header information, simulation specs and models."""

    version: str | None = None
    smile_version: str | None = None
    smile_namespace: str | None = None
    name: str | None = None
    uuid: str | None = None
    vendor: str | None = None
    product_name: str | None = None
    product_version: str | None = None
    product_lang: str | None = None
    sim_specs: SimSpecs = field(default_factory=SimSpecs)
    models: list[Model] = field(default_factory=list)
    project: Project | None = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        for model in self.models:
            model.file = self


class Project:
    """A collection of files whose models can refer to one another."""

    def __init__(self, dir_path: str = ".") -> None:
        self.dir_path = dir_path
        self.files: list[File] = []

    def add_file(self, file: File) -> None:
        """Add ``file`` to the project and link it and its models back."""
        file.project = self
        for model in file.models:
            model.file = file
        self.files.append(file)

    def get_model(self, name: str | None = None) -> Model | None:
        """Return the model called ``name``, the root model for None, or None."""
        for file in self.files:
            for model in file.models:
                if model.name is None and name is None:
                    return model
                if model.name is not None and name is not None and model.name == name:
                    return model
        return None