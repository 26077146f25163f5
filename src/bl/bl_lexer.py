"""
Tokenizer for the BL programming language.

This module turns raw BL source text into the flat token sequence consumed by the
program parser:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: A single token with type, value, and source location.
    Lexer: Converts a CharacterStream into a sequence of tokens.

Functions:
    classify(text): Returns the canonical token type for a token spelling.
    tokenize(source): Lexes a whole source string, appending the end-of-input sentinel.

Token types:
    - KEYWORD: reserved words such as PROGRAM, IS, BEGIN, END, IF, WHILE
    - CONDITION: condition names such as next-is-wall or random
    - IDENTIFIER: a letter followed by letters, digits, and dashes
    - END_OF_INPUT: the sentinel that terminates every token sequence
    - ERROR: any other run of non-whitespace characters

Tokens are maximal runs of non-whitespace characters; the lexer itself never
raises on malformed words, it emits ERROR tokens and leaves judgement to the parser.

Example:
    >>> [tok.value for tok in tokenize("PROGRAM p IS")]
    ['PROGRAM', 'p', 'IS', '### END OF INPUT ###']
"""

import re
from typing import Any

from bl.bl_constants import END_OF_INPUT, token_hashmap

IDENTIFIER_RE = re.compile(r"[a-zA-Z][a-zA-Z0-9-]*")


class CharacterStream:
    """
    Reads characters from a string source while tracking line and column.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            Exception: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise Exception(
                f"CharacterStreamError: Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character at `offset` without advancing, or "" when out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token in a BL program.

    Attributes:
        type (str): The canonical token type (e.g. 'KEYWORD', 'IDENTIFIER').
        value (str): The literal text of the token.
        line (int): The 1-based line number where the token appears.
        col (int): The 1-based column number where the token starts.
    """

    def __init__(self, type_: str, value: str, line: int = 0, col: int = 0):
        self.type = type_
        self.value = value
        self.line = line
        self.col = col

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value, self.line, self.col))


def classify(text: str) -> str:
    """Returns the token type for a token spelling.

    Args:
        text (str): The raw token text.

    Returns:
        str: One of KEYWORD, CONDITION, END_OF_INPUT, IDENTIFIER, or ERROR.
    """
    if text in token_hashmap:
        return token_hashmap[text]
    if IDENTIFIER_RE.fullmatch(text):
        return "IDENTIFIER"
    return "ERROR"


class Lexer:
    """Lexical analyzer for the BL language.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def skip_whitespace(self) -> None:
        while not self.stream.end_of_file() and self.stream.peek().isspace():
            self.stream.next()

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Returns:
            Token: The next token, or the END_OF_INPUT sentinel once the source is exhausted.
        """
        self.skip_whitespace()
        line, col = self.stream.line, self.stream.column

        if self.stream.end_of_file():
            return Token("END_OF_INPUT", END_OF_INPUT, line, col)

        word = ""
        while not self.stream.end_of_file() and not self.stream.peek().isspace():
            word += self.stream.next()
        return Token(classify(word), word, line, col)


def tokenize(source: str) -> list[Token]:
    """Lexes `source` into a list of tokens terminated by the END_OF_INPUT sentinel.

    Args:
        source (str): BL source text.

    Returns:
        list[Token]: Every token in order; the last one is always the sentinel.
    """
    lexer = Lexer(CharacterStream(source))
    tokens = []
    while True:
        tok = lexer.next_token()
        tokens.append(tok)
        if tok.type == "END_OF_INPUT":
            break
    return tokens


__all__ = ["CharacterStream", "Lexer", "Token", "classify", "tokenize"]
