import pytest

from sysdyn.parse import (
    Lexer,
    Node,
    NodeType,
    ParseError,
    TokenType,
    Walker,
    node_walk,
    parse_equation,
)
from sysdyn.project import ErrorCode, SDError


def texts(src):
    return [tok.text for tok in Lexer(src)]


class Recorder(Walker):
    def __init__(self):
        self.started = []
        self.ends = 0

    def start(self, node):
        self.started.append(node.type)

    def end(self):
        self.ends += 1


class SkipAll(Recorder):
    def start_child(self, node):
        return None


def test_multi_rune_operators_are_replaced():
    assert texts("a >= b") == ["a", "≥", "b"]
    assert texts("a <= b") == ["a", "≤", "b"]
    assert texts("a <> b") == ["a", "≠", "b"]
    assert texts("a == b") == ["a", "==", "b"]


def test_operator_words_become_short_tokens():
    toks = list(Lexer("x and y or not z mod w"))
    ops = [t.text for t in toks if t.type is TokenType.TOKEN]
    assert ops == ["&", "|", "!", "%"]


def test_reserved_words():
    toks = list(Lexer("if x then y else z"))
    reserved = [t.text for t in toks if t.type is TokenType.RESERVED]
    assert reserved == ["if", "then", "else"]


def test_number_token():
    toks = list(Lexer("1.5e3"))
    assert [(t.type, t.text) for t in toks] == [(TokenType.NUMBER, "1.5e3")]


def test_exponent_sign_not_part_of_number():
    assert texts("1e-5") == ["1e", "-", "5"]


def test_source_is_lowercased():
    toks = list(Lexer("Foo"))
    assert [(t.type, t.text) for t in toks] == [(TokenType.IDENT, "foo")]


def test_comments_are_skipped():
    assert texts("{a comment} a {another}") == ["a"]


def test_quoted_identifier_keeps_spaces():
    toks = list(Lexer('"hello world" + 1'))
    assert toks[0].type is TokenType.IDENT
    assert toks[0].text == '"hello world"'


def test_token_location_tracks_lines():
    toks = list(Lexer("a\n  b"))
    assert (toks[0].line, toks[0].pos) == (0, 0)
    assert (toks[1].line, toks[1].pos) == (1, 2)


def test_peek_does_not_consume():
    lexer = Lexer("a + b")
    first = lexer.peek()
    assert lexer.peek() == first
    assert lexer.next_token() == first
    assert lexer.next_token().text == "+"


def test_blank_input_has_no_tokens():
    lexer = Lexer("   ")
    assert lexer.peek() is None
    assert lexer.next_token() is None


def test_empty_equation():
    assert parse_equation("") is None


def test_number_literal():
    assert parse_equation("3.25") == Node(NodeType.FLOATLIT, sval="3.25")


def test_identifier_is_canonicalized():
    node = parse_equation('"Birth Rate"')
    assert node.type is NodeType.IDENT
    assert node.sval == "birth_rate"


def test_operator_levels_follow_table_order():
    node = parse_equation("1+2*3")
    assert node.type is NodeType.BINARY
    assert node.op == "*"
    assert node.left.op == "+"
    assert node.right.sval == "3"


def test_binary_is_left_associative():
    node = parse_equation("a - b - c")
    assert node.op == "-"
    assert node.left.op == "-"
    assert node.left.left.sval == "a"
    assert node.right.sval == "c"


def test_mod_word_parses_as_percent():
    node = parse_equation("x mod 2")
    assert node.op == "%"


def test_unary_and_paren():
    node = parse_equation("-(x)")
    assert node.type is NodeType.UNARY
    assert node.op == "-"
    assert node.left.type is NodeType.PAREN
    assert node.left.left.sval == "x"


def test_call_with_args():
    node = parse_equation("MAX(1, x)")
    assert node.type is NodeType.CALL
    assert node.left.sval == "max"
    assert [a.sval for a in node.args] == ["1", "x"]


def test_call_without_args():
    node = parse_equation("f()")
    assert node.type is NodeType.CALL
    assert node.args == []


def test_if_then_else():
    node = parse_equation("if a then b else c")
    assert node.type is NodeType.IF
    assert (node.cond.sval, node.left.sval, node.right.sval) == ("a", "b", "c")


def test_if_without_else():
    node = parse_equation("if a then b")
    assert node.right is None
    assert node.left.sval == "b"


def test_trailing_tokens_are_ignored():
    assert parse_equation("1 2") == Node(NodeType.FLOATLIT, sval="1")


@pytest.mark.parametrize(
    "eqn", ["(1", "f(1", "f(1 2)", "if a b", "1 +", "if a then", "-", ")"]
)
def test_malformed_equations_raise(eqn):
    with pytest.raises(ParseError):
        parse_equation(eqn)


def test_parse_error_is_sd_error():
    with pytest.raises(SDError) as info:
        parse_equation("(1")
    assert info.value.code == ErrorCode.UNSPECIFIED


def test_walk_visits_depth_first():
    rec = Recorder()
    assert node_walk(rec, parse_equation("1+x"))
    assert rec.started == [NodeType.BINARY, NodeType.FLOATLIT, NodeType.IDENT]
    assert rec.ends == len(rec.started)


def test_walk_call_visits_name_and_args():
    rec = Recorder()
    assert node_walk(rec, parse_equation("f(a)"))
    assert rec.started == [NodeType.CALL, NodeType.IDENT, NodeType.IDENT]


def test_walk_skips_children_when_asked():
    rec = SkipAll()
    assert node_walk(rec, parse_equation("if a then b else c"))
    assert rec.started == [NodeType.IF]


def test_walk_fails_on_unknown_node():
    rec = Recorder()
    bad = Node(NodeType.BINARY, op="+", left=Node(), right=Node(NodeType.FLOATLIT, sval="1"))
    assert node_walk(rec, bad) is False
    assert NodeType.FLOATLIT not in rec.started


def test_walk_without_walker_or_node():
    assert node_walk(None, parse_equation("1")) is False
    assert node_walk(Recorder(), None) is False