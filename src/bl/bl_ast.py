"""
Defines the in-memory structure of a parsed BL program.

Classes:
    Statement:
        A recursive node for one unit of program behavior: a BLOCK of statements,
        an IF / IF_ELSE / WHILE construct guarded by a condition, or a CALL to a
        primitive or user-defined instruction.

    Program:
        A program name, a main body (a BLOCK Statement), and a mapping from
        instruction names to their BLOCK bodies.

    StatementDict, ProgramDict:
        TypedDict shapes produced by `to_dict()`, suitable for JSON output.

Statement kinds and their fields:
    BLOCK    children = the statements in order
    CALL     value = instruction name
    IF       value = condition, children = [block]
    IF_ELSE  value = condition, children = [then_block, else_block]
    WHILE    value = condition, children = [block]

Equality is structural and ignores source positions, so a program rebuilt from its
own pretty-printed text compares equal to the original.

Example:
    body = Statement.block()
    body.assemble_call("move")
    program = Program("hop", body)
"""

from typing import Any, TypedDict

STATEMENT_KINDS = ("BLOCK", "IF", "IF_ELSE", "WHILE", "CALL")


class StatementDict(TypedDict, total=False):
    kind: str
    value: str | None
    children: list["StatementDict"]


class ProgramDict(TypedDict):
    name: str
    body: StatementDict
    instructions: dict[str, StatementDict]


class Statement:
    """
    Represents a node in a BL statement tree.

    Args:
        kind (str): One of BLOCK, IF, IF_ELSE, WHILE, CALL.
        value (str, optional): The called instruction name, or the guarding condition.
        children (list[Statement], optional): Nested statements.

    Raises:
        ValueError: If `kind` is not a known statement kind.
    """

    def __init__(
        self,
        kind: str,
        value: str | None = None,
        children: list["Statement"] | None = None,
    ):
        if kind not in STATEMENT_KINDS:
            raise ValueError(f"Unknown statement kind: {kind!r}")
        self.kind = kind
        self.value = value
        self.children: list["Statement"] = list(children) if children else []

    @classmethod
    def block(cls, children: list["Statement"] | None = None) -> "Statement":
        return cls("BLOCK", children=children)

    @classmethod
    def call(cls, name: str) -> "Statement":
        return cls("CALL", value=name)

    @classmethod
    def if_(cls, condition: str, block: "Statement") -> "Statement":
        return cls("IF", value=condition, children=[block])

    @classmethod
    def if_else(
        cls, condition: str, then_block: "Statement", else_block: "Statement"
    ) -> "Statement":
        return cls("IF_ELSE", value=condition, children=[then_block, else_block])

    @classmethod
    def while_(cls, condition: str, block: "Statement") -> "Statement":
        return cls("WHILE", value=condition, children=[block])

    def assemble_call(self, name: str) -> None:
        """Appends a CALL to `name` at the end of this BLOCK."""
        if self.kind != "BLOCK":
            raise TypeError(f"Cannot append a call to a {self.kind} statement")
        self.children.append(Statement.call(name))

    def calls(self) -> list[str]:
        """Returns the names called directly by this BLOCK, in order."""
        return [c.value for c in self.children if c.kind == "CALL" and c.value]

    def is_empty(self) -> bool:
        return self.kind == "BLOCK" and not self.children

    def __len__(self) -> int:
        return len(self.children)

    def __repr__(self) -> str:
        parts = [self.kind]
        if self.value is not None:
            parts.append(f"value={self.value!r}")
        if self.children:
            preview = ", ".join(repr(c) for c in self.children[:3])
            if len(self.children) > 3:
                preview += ", ..."
            parts.append(f"children=[{preview}]")
        return f"Statement({', '.join(parts)})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Statement):
            return False
        return (
            self.kind == other.kind
            and self.value == other.value
            and self.children == other.children
        )

    def to_dict(self) -> StatementDict:
        return {
            "kind": self.kind,
            "value": self.value,
            "children": [c.to_dict() for c in self.children],
        }


class Program:
    """
    A parsed BL program.

    Attributes:
        name (str): The program name declared after PROGRAM (and repeated after END).
        body (Statement): The main BLOCK between BEGIN and END.
        instructions (dict[str, Statement]): User-defined instruction bodies by name,
            in definition order.
    """

    def __init__(
        self,
        name: str = "Unnamed",
        body: Statement | None = None,
        instructions: dict[str, Statement] | None = None,
    ):
        self.name = name
        self.body = body if body is not None else Statement.block()
        self.instructions: dict[str, Statement] = dict(instructions or {})

    @classmethod
    def parse(cls, tokens: Any, **options: Any) -> "Program":
        """Parses a token sequence into a new Program. See `bl.bl_parser.Parser`."""
        from bl.bl_parser import parse_tokens

        return parse_tokens(tokens, **options)

    @classmethod
    def parse_source(cls, source: str, **options: Any) -> "Program":
        """Tokenizes and parses BL source text into a new Program."""
        from bl.bl_parser import parse_source

        return parse_source(source, **options)

    def __repr__(self) -> str:
        return (
            f"Program(name={self.name!r}, body={self.body!r}, "
            f"instructions={sorted(self.instructions)!r})"
        )

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Program):
            return False
        return (
            self.name == other.name
            and self.body == other.body
            and self.instructions == other.instructions
        )

    def to_dict(self) -> ProgramDict:
        return {
            "name": self.name,
            "body": self.body.to_dict(),
            "instructions": {k: v.to_dict() for k, v in self.instructions.items()},
        }


__all__ = ["Program", "ProgramDict", "Statement", "StatementDict"]
