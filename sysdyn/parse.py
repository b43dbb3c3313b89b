"""Lexing and parsing of model equations into expression trees."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator

from sysdyn.chartype import is_alpha, is_space
from sysdyn.project import ErrorCode, SDError
from sysdyn.util import canonicalize, utf8_tolower

_RESERVED = frozenset({"if", "then", "else"})

_OP_WORDS = {
    "not": "!",
    "and": "&",
    "or": "|",
    "mod": "%",
}

_MULTI_RUNE_OPS = {
    ">=": "≥",
    "<=": "≤",
    "<>": "≠",
}

_UNARY = "+-!"

# Operator runes by parse level; level 0 is parsed outermost.
_BINARY = (
    "^",
    "!",
    "*/%",
    "+-",
    "><≥≤",
    "=≠",
    "&",
    "|",
)
_MAX_BINARY = len(_BINARY)


class ParseError(SDError):
    """An equation could not be parsed."""

    def __init__(self, detail: str) -> None:
        super().__init__(ErrorCode.UNSPECIFIED, detail)
        self.detail = detail


class TokenType(enum.Enum):
    """Kinds of lexical token."""

    TOKEN = enum.auto()
    NUMBER = enum.auto()
    IDENT = enum.auto()
    RESERVED = enum.auto()


@dataclass(frozen=True)
class Token:
    """A lexical token with its line and position within that line."""

    type: TokenType
    text: str
    line: int = 0
    pos: int = 0


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def _num_start(c: str) -> bool:
    return _is_digit(c) or c == "."


def _ident_start(c: str) -> bool:
    return not _num_start(c) and (is_alpha(ord(c)) or c == "_" or c == '"')


class Lexer:
    """Splits an equation, lower-cased, into tokens."""

    def __init__(self, src: str) -> None:
        self.orig = src
        self.src = utf8_tolower(src)
        self._pos = 0
        self._line = 0
        self._lstart = 0
        self._char = self._char_at(0)
        self._peeked: Token | None = None

    def _char_at(self, i: int) -> str:
        if i < len(self.src):
            c = self.src[i]
            return "" if c == "\0" else c
        return ""

    def _next_char(self) -> str:
        if self._pos < len(self.src):
            self._pos += 1
            self._char = self._char_at(self._pos)
        else:
            self._char = ""
        return self._char

    def _skip_whitespace(self) -> None:
        in_comment = False
        while True:
            c = self._char
            if c == "\n":
                self._line += 1
                self._lstart = self._pos + 1
            if in_comment:
                if c == "}":
                    in_comment = False
            elif c == "{":
                in_comment = True
            elif not (c and is_space(ord(c))):
                break
            if not self._next_char():
                break

    def _token(self, kind: TokenType, text: str, start: int) -> Token:
        return Token(kind, text, self._line, start - self._lstart)

    def _lex_number(self) -> Token:
        start = self._pos
        have_e = have_dot1 = have_dot2 = False
        while r := self._next_char():
            if _is_digit(r):
                continue
            if r == ".":
                if not have_e and not have_dot1:
                    have_dot1 = True
                    continue
                if have_e and not have_dot2:
                    have_dot2 = True
                    continue
                break
            if r == "e" and not have_e:
                have_e = True
                continue
            break
        return self._token(TokenType.NUMBER, self.src[start:self._pos], start)

    def _lex_ident(self) -> Token:
        quoted = self._char == '"'
        start = self._pos
        if quoted:
            self._next_char()
        while r := self._next_char():
            if is_alpha(ord(r)) or r == "_" or _is_digit(r):
                continue
            if quoted:
                if r == '"':
                    self._next_char()
                    break
                if is_space(ord(r)):
                    continue
            break

        text = self.src[start:self._pos]
        if text in _OP_WORDS:
            return self._token(TokenType.TOKEN, _OP_WORDS[text], start)
        kind = TokenType.RESERVED if text in _RESERVED else TokenType.IDENT
        return self._token(kind, text, start)

    def next_token(self) -> Token | None:
        """Consume and return the next token, or None at the end of input."""
        if self._peeked is not None:
            tok, self._peeked = self._peeked, None
            return tok

        self._skip_whitespace()
        c = self._char
        if not c:
            return None
        if _num_start(c):
            return self._lex_number()
        if _ident_start(c):
            return self._lex_ident()

        start = self._pos
        self._next_char()
        text = c
        nxt = self._char
        if (
            (c == "=" and nxt == "=")
            or (c == "<" and nxt in ("=", ">"))
            or (c == ">" and nxt == "=")
        ):
            text += nxt
            self._next_char()
        text = _MULTI_RUNE_OPS.get(text, text)
        return self._token(TokenType.TOKEN, text, start)

    def peek(self) -> Token | None:
        """Return the next token without consuming it, or None at the end."""
        if self._peeked is None:
            self._peeked = self.next_token()
        return self._peeked

    def __iter__(self) -> Iterator[Token]:
        while (tok := self.next_token()) is not None:
            yield tok


class NodeType(enum.Enum):
    """Kinds of expression node."""

    UNKNOWN = enum.auto()
    PAREN = enum.auto()
    FLOATLIT = enum.auto()
    IDENT = enum.auto()
    CALL = enum.auto()
    IF = enum.auto()
    UNARY = enum.auto()
    BINARY = enum.auto()


@dataclass
class Node:
    """A node of an equation's expression tree."""

    type: NodeType = NodeType.UNKNOWN
    op: str = ""
    left: Node | None = None
    right: Node | None = None
    cond: Node | None = None
    sval: str | None = None
    args: list[Node] = field(default_factory=list)
    # Filled in when the equation is bound to a simulation.
    av: Any = field(default=None, repr=False, compare=False)
    fval: float = field(default=0.0, compare=False)
    fn: Callable[..., float] | None = field(default=None, repr=False, compare=False)


class _Parser:
    def __init__(self, src: str) -> None:
        self.lexer = Lexer(src)

    def consume_tok(self, rune: str) -> bool:
        tok = self.lexer.peek()
        if tok is not None and tok.type is TokenType.TOKEN and tok.text[:1] == rune:
            self.lexer.next_token()
            return True
        return False

    def consume_any(self, ops: str) -> str | None:
        for rune in ops:
            if self.consume_tok(rune):
                return rune
        return None

    def consume_reserved(self, word: str) -> bool:
        tok = self.lexer.peek()
        if tok is not None and tok.type is TokenType.RESERVED and tok.text == word:
            self.lexer.next_token()
            return True
        return False

    def _take(self, kind: TokenType) -> Token | None:
        tok = self.lexer.peek()
        if tok is None or tok.type is not kind:
            return None
        self.lexer.next_token()
        return tok

    def _operand(self, level: int) -> Node:
        node = self.fact() if level + 1 == _MAX_BINARY else self.expr(level + 1)
        if node is None:
            raise ParseError("expected operand")
        return node

    def _required(self, detail: str) -> Node:
        node = self.expr(0)
        if node is None:
            raise ParseError(detail)
        return node

    def expr(self, level: int) -> Node | None:
        if self.lexer.peek() is None:
            return None
        lhs = self._operand(level)
        while (op := self.consume_any(_BINARY[level])) is not None:
            rhs = self._operand(level)
            lhs = Node(NodeType.BINARY, op=op, left=lhs, right=rhs)
        return lhs

    def fact(self) -> Node:
        if self.consume_tok("("):
            inner = self.expr(0)
            if not self.consume_tok(")"):
                raise ParseError("expected ')'")
            return Node(NodeType.PAREN, left=inner)

        op = self.consume_any(_UNARY)
        if op is not None:
            operand = self._required("expected operand")
            return Node(NodeType.UNARY, op=op, left=operand)

        tok = self._take(TokenType.NUMBER)
        if tok is not None:
            return Node(NodeType.FLOATLIT, sval=tok.text)

        if self.consume_reserved("if"):
            cond = self.expr(0)
            if not self.consume_reserved("then"):
                raise ParseError("expected 'then'")
            left = self._required("expected expression after 'then'")
            right = None
            if self.consume_reserved("else"):
                right = self._required("expected expression after 'else'")
            return Node(NodeType.IF, cond=cond, left=left, right=right)

        tok = self._take(TokenType.IDENT)
        if tok is not None:
            ident = Node(NodeType.IDENT, sval=canonicalize(tok.text))
            if self.consume_tok("("):
                return self.call(ident)
            return ident

        raise ParseError("expected expression")

    def call(self, fn: Node) -> Node:
        node = Node(NodeType.CALL, left=fn)
        if self.consume_tok(")"):
            return node
        while True:
            node.args.append(self._required("call: expected expr arg"))
            if self.consume_tok(","):
                continue
            if self.consume_tok(")"):
                return node
            raise ParseError("call: expected ',' or ')'")


def parse_equation(eqn: str) -> Node | None:
    """Parse ``eqn`` into an expression tree; an empty equation gives None.

    Tokens left over after a complete expression are ignored.
    """
    if eqn is None:
        raise ParseError("no equation")
    return _Parser(eqn).expr(0)


class Walker:
    """Visitor over an expression tree; subclass and override the hooks.

    The base hooks keep track of the nodes currently entered and of the
    child walked last, so subclasses can consult ``current`` and
    ``last_child``.
    """

    def _entered(self) -> list[Node]:
        return self.__dict__.setdefault("_entered_nodes", [])

    @property
    def current(self) -> Node | None:
        """The innermost node entered and not yet left, if any."""
        entered = self._entered()
        return entered[-1] if entered else None

    @property
    def last_child(self) -> Node | None:
        """The child node whose walk finished most recently, if any."""
        return self.__dict__.get("_last_child")

    def start(self, node: Node) -> None:
        """Called when ``node`` is entered."""
        self._entered().append(node)

    def start_child(self, node: Node) -> Walker | None:
        """Return the walker for child ``node``, or None to skip it."""
        return self

    def end_child(self, node: Node) -> None:
        """Called after child ``node`` has been walked."""
        self.__dict__["_last_child"] = node

    def end(self) -> None:
        """Called when the node entered last by this walker is left."""
        entered = self._entered()
        if entered:
            entered.pop()


def _visit_child(walker: Walker, child: Node | None) -> bool:
    if child is None:
        return True
    sub = walker.start_child(child)
    if sub is None:
        return True
    ok = _visit(sub, child)
    walker.end_child(child)
    return ok


def _visit(walker: Walker, node: Node) -> bool:
    walker.start(node)
    kind = node.type
    if kind in (NodeType.PAREN, NodeType.UNARY):
        ok = _visit_child(walker, node.left)
    elif kind in (NodeType.FLOATLIT, NodeType.IDENT):
        ok = True
    elif kind is NodeType.CALL:
        ok = _visit_child(walker, node.left)
        if ok:
            ok = all(_visit_child(walker, arg) for arg in node.args)
    elif kind is NodeType.IF:
        ok = (
            _visit_child(walker, node.cond)
            and _visit_child(walker, node.left)
            and _visit_child(walker, node.right)
        )
    elif kind is NodeType.BINARY:
        ok = _visit_child(walker, node.left) and _visit_child(walker, node.right)
    else:
        ok = False
    walker.end()
    return ok


def node_walk(walker: Walker | None, node: Node | None) -> bool:
    """Walk ``node`` depth first with ``walker``; report whether it succeeded."""
    if walker is None or node is None:
        return False
    return _visit(walker, node)