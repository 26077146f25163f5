"""
BL Program Parser

Parses a BL token sequence into a `Program`: a name, a main body, and a mapping of
user-defined instructions.

Grammar
-------
    program      := PROGRAM name IS instruction* BEGIN body END name <end-of-input>
    instruction  := INSTRUCTION name IS body END name
    body         := call*                          (default scanning)
                  | statement*                     (nested=True)
    statement    := IF condition THEN body [ELSE body] END IF
                  | WHILE condition DO body END WHILE
                  | call

Parser Behavior
---------------
- Single pass, front to back, one token of lookahead, no backtracking.
- By default an instruction or main body is scanned as a flat run of calls that
  stops at `IF`, `WHILE`, or `END`. Scanning that stops on `IF`/`WHILE` leaves the
  construct and the closing `END <name>` unconsumed, so such programs are rejected
  later by the structural checks. Pass `nested=True` to parse the full statement
  grammar instead.
- The `IS` after an instruction name and the instruction's closing name are only
  validated with `strict=True` (or `nested=True` for the closing name).
- A second definition of the same instruction name replaces the first unless
  `on_duplicate="error"`.

Entry Points
------------
- `Parser(tokens).parse()`: parse a full program.
- `parse_tokens(tokens)`: same, as a function.
- `parse_source(text)`: tokenize with `bl.bl_lexer.tokenize` and parse.

Raises
------
ParseError
    On any grammar violation or when the token stream runs out. No partial
    Program is ever returned.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from bl.bl_ast import Program, Statement
from bl.bl_constants import END_OF_INPUT, PRIMITIVE_INSTRUCTIONS
from bl.bl_lexer import Token, classify, tokenize

logger = logging.getLogger(__name__)

DUPLICATE_POLICIES = ("overwrite", "error")

# Tokens that end a flat run of calls.
BODY_STOPS = frozenset({"IF", "WHILE", "END"})


class ParseError(SyntaxError):
    """Raised when a BL token sequence does not form a valid program.

    Attributes:
        token (Token | None): The offending token, when there is one.
        line (int): Line of the offending token (0 when unknown).
        col (int): Column of the offending token (0 when unknown).
    """

    def __init__(self, message: str, token: Token | None = None):
        self.token = token
        self.line = token.line if token is not None else 0
        self.col = token.col if token is not None else 0
        if self.line:
            message = f"line {self.line} col {self.col}: {message}"
        super().__init__(message)


class TokenStream:
    """
    A read-and-advance cursor over an immutable token sequence.

    Plain strings are accepted and wrapped into `Token` objects. The string equal to
    `end_of_input` is typed as the END_OF_INPUT sentinel.

    Attributes:
        tokens (tuple[Token, ...]): The full token sequence.
        position (int): Index of the front token.
        end_of_input (str): Spelling of the sentinel token.
    """

    def __init__(
        self, tokens: Sequence[Token | str], end_of_input: str = END_OF_INPUT
    ) -> None:
        self.end_of_input = end_of_input
        self.tokens: tuple[Token, ...] = tuple(
            tok if isinstance(tok, Token) else self._wrap(tok) for tok in tokens
        )
        self.position = 0

    def _wrap(self, text: str) -> Token:
        if text == self.end_of_input:
            return Token("END_OF_INPUT", text)
        return Token(classify(text), text)

    def front(self) -> Token:
        """Returns the front token without consuming it.

        Raises:
            ParseError: If the stream is exhausted.
        """
        if self.position >= len(self.tokens):
            last = self.tokens[-1] if self.tokens else None
            raise ParseError("Unexpected end of token stream", last)
        return self.tokens[self.position]

    def dequeue(self) -> Token:
        """Returns the front token and advances past it."""
        tok = self.front()
        self.position += 1
        return tok

    def at_end_of_input(self) -> bool:
        return self.front().value == self.end_of_input

    def __len__(self) -> int:
        return len(self.tokens) - self.position


class StatementParser:
    """
    Parses nested statement blocks (IF / IF-ELSE / WHILE / calls) from a TokenStream.

    Attributes:
        stream (TokenStream): The shared token cursor.
    """

    def __init__(self, stream: TokenStream) -> None:
        self.stream = stream

    def expect(self, value: str) -> Token:
        tok = self.stream.dequeue()
        if tok.value != value:
            raise ParseError(f"Expected {value!r}, got {tok.value!r}", tok)
        return tok

    def parse_condition(self) -> str:
        tok = self.stream.dequeue()
        if tok.type != "CONDITION":
            raise ParseError(f"Expected condition, got {tok.value!r}", tok)
        return tok.value

    def parse_block(self, block: Statement | None = None) -> Statement:
        """Parse statements up to (not including) the next END, ELSE, or end of input."""
        block = block if block is not None else Statement.block()
        while (
            self.stream.front().value not in ("END", "ELSE")
            and not self.stream.at_end_of_input()
        ):
            block.children.append(self.parse_statement())
        return block

    def parse_statement(self) -> Statement:
        tok = self.stream.front()
        if tok.value == "IF":
            return self.parse_if()
        if tok.value == "WHILE":
            return self.parse_while()
        if tok.type == "IDENTIFIER":
            self.stream.dequeue()
            return Statement.call(tok.value)
        raise ParseError(f"Expected statement, got {tok.value!r}", tok)

    def parse_if(self) -> Statement:
        self.expect("IF")
        condition = self.parse_condition()
        self.expect("THEN")
        then_block = self.parse_block()
        if self.stream.front().value == "ELSE":
            self.stream.dequeue()
            else_block = self.parse_block()
            self.expect("END")
            self.expect("IF")
            return Statement.if_else(condition, then_block, else_block)
        self.expect("END")
        self.expect("IF")
        return Statement.if_(condition, then_block)

    def parse_while(self) -> Statement:
        self.expect("WHILE")
        condition = self.parse_condition()
        self.expect("DO")
        block = self.parse_block()
        self.expect("END")
        self.expect("WHILE")
        return Statement.while_(condition, block)


class Parser:
    """
    BL Program Parser

    Args:
        tokens (Sequence[Token | str]): The token sequence, ending with the sentinel.
        strict (bool): Validate the `IS` and closing name of each instruction, require
            identifier names and calls, and reject instruction names that shadow a
            primitive instruction.
        nested (bool): Parse bodies with the full IF / WHILE statement grammar.
        on_duplicate (str): "overwrite" (default) or "error" when an instruction
            name is defined twice.
        end_of_input (str): Spelling of the end-of-input sentinel. Callers passing plain
            string tokens must give the sentinel spelling their sequence ends with
            (e.g. end_of_input="<EOF>"); the default matches `bl.bl_lexer.tokenize`.

    Raises:
        ValueError: If `on_duplicate` is not a known policy.
    """

    def __init__(
        self,
        tokens: Sequence[Token | str],
        *,
        strict: bool = False,
        nested: bool = False,
        on_duplicate: str = "overwrite",
        end_of_input: str = END_OF_INPUT,
    ) -> None:
        if on_duplicate not in DUPLICATE_POLICIES:
            raise ValueError(f"Unknown duplicate policy: {on_duplicate!r}")
        self.stream = TokenStream(tokens, end_of_input)
        self.statements = StatementParser(self.stream)
        self.strict = strict
        self.nested = nested
        self.on_duplicate = on_duplicate

    def current(self) -> Token:
        return self.stream.front()

    def advance(self) -> Token:
        return self.stream.dequeue()

    def match(self, value: str, message: str) -> Token:
        tok = self.advance()
        if tok.value != value:
            raise ParseError(f"{message}, got {tok.value!r}", tok)
        return tok

    def parse_name(self, what: str) -> str:
        tok = self.advance()
        if self.strict and tok.type != "IDENTIFIER":
            raise ParseError(f"Expected {what} name, got {tok.value!r}", tok)
        return tok.value

    def parse(self) -> Program:
        """Parse a full BL program.

        Returns:
            Program: The program name, main body, and instruction mapping.

        Raises:
            ParseError: On any grammar violation.
        """
        if len(self.stream) == 0:
            raise ParseError("Empty token stream")

        name = self.parse_header()
        instructions = self.parse_instructions()

        body = Statement.block()
        if self.current().value == "BEGIN":
            self.advance()
            self.parse_body(body)

        self.parse_trailer(name)
        logger.debug(
            "Parsed program %s with %d instruction(s)", name, len(instructions)
        )
        return Program(name, body, instructions)

    def parse_header(self) -> str:
        tok = self.current()
        if tok.value != "PROGRAM":
            raise ParseError(f"Expected 'PROGRAM' at the beginning, got {tok.value!r}", tok)
        self.advance()
        name_tok = self.current()
        name = self.parse_name("program")
        if not name:
            raise ParseError("Expected program name", name_tok)
        self.match("IS", "Expected 'IS' after program name")
        logger.debug("Program header: %s", name)
        return name

    def parse_instructions(self) -> dict[str, Statement]:
        instructions: dict[str, Statement] = {}
        while self.current().value != "BEGIN" and not self.stream.at_end_of_input():
            tok = self.current()
            if tok.value != "INSTRUCTION":
                raise ParseError(f"Unexpected token: {tok.value!r}", tok)
            body = Statement.block()
            name = self.parse_instruction(body)
            if name in instructions:
                if self.on_duplicate == "error":
                    raise ParseError(f"Instruction {name!r} is already defined", tok)
                logger.debug("Instruction %s redefined; keeping the later body", name)
            instructions[name] = body
        return instructions

    def parse_instruction(self, body: Statement) -> str:
        """Parse one INSTRUCTION definition into `body` and return its name.

        Args:
            body (Statement): An empty BLOCK that receives the instruction body.

        Returns:
            str: The declared instruction name.

        Raises:
            ValueError: If `body` is not an empty BLOCK.
            ParseError: If the front token is not INSTRUCTION, or on strict/nested
                violations.
        """
        if not body.is_empty():
            raise ValueError("Instruction body must be an empty BLOCK")
        self.match("INSTRUCTION", "Expected 'INSTRUCTION'")
        name_tok = self.current()
        name = self.parse_name("instruction")
        if self.strict and name in PRIMITIVE_INSTRUCTIONS:
            raise ParseError(
                f"Instruction name {name!r} shadows a primitive instruction", name_tok
            )

        is_tok = self.advance()
        if (self.strict or self.nested) and is_tok.value != "IS":
            raise ParseError(
                f"Expected 'IS' after instruction name, got {is_tok.value!r}", is_tok
            )

        self.parse_body(body)
        if self.current().value != "END":
            # Body did not end at END; leave the rest unconsumed.
            return name

        self.advance()
        closing = self.advance()
        if (self.strict or self.nested) and closing.value != name:
            raise ParseError(
                f"Instruction {name!r} closed with {closing.value!r}", closing
            )
        logger.debug("Instruction %s: %d statement(s)", name, len(body))
        return name

    def parse_body(self, body: Statement) -> None:
        if self.nested:
            self.statements.parse_block(body)
            return
        while (
            self.current().value not in BODY_STOPS
            and not self.stream.at_end_of_input()
        ):
            tok = self.advance()
            if self.strict and tok.type != "IDENTIFIER":
                raise ParseError(f"Expected instruction call, got {tok.value!r}", tok)
            body.assemble_call(tok.value)
        if self.current().value in ("IF", "WHILE"):
            logger.debug("Body scan stopped at %s", self.current().value)

    def parse_trailer(self, name: str) -> None:
        self.match("END", "Expected 'END' after program body")
        closing = self.advance()
        if closing.value != name:
            raise ParseError(
                f"Program {name!r} closed with {closing.value!r}", closing
            )
        tok = self.advance()
        if tok.value != self.stream.end_of_input:
            raise ParseError(f"Extra tokens after program end: {tok.value!r}", tok)


def parse_tokens(tokens: Sequence[Token | str], **options: object) -> Program:
    """Parse a token sequence into a Program. Options are passed to `Parser`."""
    return Parser(tokens, **options).parse()  # type: ignore[arg-type]


def parse_source(source: str, **options: object) -> Program:
    """Tokenize BL source text and parse it into a Program."""
    return parse_tokens(tokenize(source), **options)


__all__ = [
    "ParseError",
    "Parser",
    "StatementParser",
    "TokenStream",
    "parse_source",
    "parse_tokens",
]
