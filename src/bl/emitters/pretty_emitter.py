"""
Pretty-prints parsed BL programs back to canonical BL source text.

This module defines the `PrettyEmitter` class, which walks a `Program` and its
`Statement` trees and writes indented BL text. Its output re-tokenizes and re-parses
to a Program equal to the one it was produced from.

Layout:
    - Two spaces per indentation level.
    - A blank line after the program header and after each instruction.
    - IF / IF_ELSE / WHILE blocks close with `END IF` / `END WHILE`.

Example output:
    PROGRAM hop IS

      INSTRUCTION twice IS
        move
        move
      END twice

    BEGIN
      twice
    END hop

Raises:
    NotImplementedError: If a statement kind has no `emit_*` method.
"""

from bl.bl_ast import Program, Statement

INDENT = "  "


class PrettyEmitter:
    """Emits BL source text from a Program.

    Attributes:
        lines (list[str]): Accumulated output lines.
        indent (int): Current indentation level.
    """

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.indent = 0

    def indent_str(self) -> str:
        return INDENT * self.indent

    def get_output(self) -> str:
        return "\n".join(self.lines) + "\n"

    def emit_program(self, program: Program) -> None:
        self.lines.append(f"PROGRAM {program.name} IS")
        self.lines.append("")
        self.indent += 1
        for name, body in program.instructions.items():
            self.lines.append(f"{self.indent_str()}INSTRUCTION {name} IS")
            self._emit_nested(body)
            self.lines.append(f"{self.indent_str()}END {name}")
            self.lines.append("")
        self.indent -= 1
        self.lines.append("BEGIN")
        self._emit_nested(program.body)
        self.lines.append(f"END {program.name}")

    def _emit_nested(self, block: Statement) -> None:
        self.indent += 1
        self._visit(block)
        self.indent -= 1

    def _visit(self, node: Statement) -> None:
        method_name = f"emit_{node.kind.lower()}"
        if not hasattr(self, method_name):
            raise NotImplementedError(f"No emitter method for statement kind '{node.kind}'")
        getattr(self, method_name)(node)

    def emit_block(self, node: Statement) -> None:
        for child in node.children:
            self._visit(child)

    def emit_call(self, node: Statement) -> None:
        self.lines.append(f"{self.indent_str()}{node.value}")

    def emit_if(self, node: Statement) -> None:
        self.lines.append(f"{self.indent_str()}IF {node.value} THEN")
        self._emit_nested(node.children[0])
        self.lines.append(f"{self.indent_str()}END IF")

    def emit_if_else(self, node: Statement) -> None:
        self.lines.append(f"{self.indent_str()}IF {node.value} THEN")
        self._emit_nested(node.children[0])
        self.lines.append(f"{self.indent_str()}ELSE")
        self._emit_nested(node.children[1])
        self.lines.append(f"{self.indent_str()}END IF")

    def emit_while(self, node: Statement) -> None:
        self.lines.append(f"{self.indent_str()}WHILE {node.value} DO")
        self._emit_nested(node.children[0])
        self.lines.append(f"{self.indent_str()}END WHILE")


def pretty_print(program: Program) -> str:
    """Returns `program` as canonical BL source text."""
    emitter = PrettyEmitter()
    emitter.emit_program(program)
    return emitter.get_output()


__all__ = ["PrettyEmitter", "pretty_print"]
