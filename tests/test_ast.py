import pytest

from bl.bl_ast import Program, Statement


def test_statement_repr() -> None:
    assert repr(Statement.call("move")) == "Statement(CALL, value='move')"


def test_block_repr_truncates_children() -> None:
    block = Statement.block([Statement.call(n) for n in ("a", "b", "c", "d")])
    assert repr(block).endswith(", ...])")


def test_unknown_kind_raises() -> None:
    with pytest.raises(ValueError, match="Unknown statement kind"):
        Statement("FOR")


def test_assemble_call_appends_in_order() -> None:
    block = Statement.block()
    block.assemble_call("move")
    block.assemble_call("turn-right")
    assert block.calls() == ["move", "turn-right"]
    assert len(block) == 2


def test_blocks_built_from_one_list_stay_independent() -> None:
    kids = [Statement.call("move")]
    a = Statement.block(kids)
    b = Statement.block(kids)
    a.assemble_call("skip")
    assert a.calls() == ["move", "skip"]
    assert b.calls() == ["move"]
    assert len(kids) == 1


def test_assemble_call_requires_block() -> None:
    with pytest.raises(TypeError):
        Statement.call("move").assemble_call("skip")


def test_statement_equality() -> None:
    a = Statement.while_("true", Statement.block([Statement.call("move")]))
    b = Statement.while_("true", Statement.block([Statement.call("move")]))
    c = Statement.if_("true", Statement.block([Statement.call("move")]))
    assert a == b
    assert a != c
    assert a != "WHILE"


def test_if_else_children() -> None:
    node = Statement.if_else(
        "random", Statement.block([Statement.call("move")]), Statement.block()
    )
    assert node.kind == "IF_ELSE"
    assert node.value == "random"
    assert len(node.children) == 2


def test_statement_to_dict() -> None:
    node = Statement.if_("next-is-wall", Statement.block([Statement.call("turnleft")]))
    assert node.to_dict() == {
        "kind": "IF",
        "value": "next-is-wall",
        "children": [
            {
                "kind": "BLOCK",
                "value": None,
                "children": [{"kind": "CALL", "value": "turnleft", "children": []}],
            }
        ],
    }


def test_default_program() -> None:
    program = Program()
    assert program.name == "Unnamed"
    assert program.body.is_empty()
    assert program.instructions == {}


def test_program_equality_ignores_instruction_order() -> None:
    one = Statement.block([Statement.call("move")])
    two = Statement.block([Statement.call("skip")])
    p1 = Program("p", Statement.block(), {"a": one, "b": two})
    p2 = Program("p", Statement.block(), {"b": two, "a": one})
    assert p1 == p2
    assert p1 != Program("q", Statement.block(), {"a": one, "b": two})


def test_program_to_dict() -> None:
    program = Program("p", Statement.block([Statement.call("move")]))
    d = program.to_dict()
    assert d["name"] == "p"
    assert d["body"]["children"][0]["value"] == "move"
    assert d["instructions"] == {}


def test_program_parse_classmethods() -> None:
    tokens = ["PROGRAM", "p", "IS", "BEGIN", "move", "END", "p", "<EOF>"]
    program = Program.parse(tokens, end_of_input="<EOF>")
    assert program == Program.parse_source("PROGRAM p IS BEGIN move END p")
