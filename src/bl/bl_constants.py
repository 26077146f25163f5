"""
Shared vocabulary of the BL language.

Exports:
    END_OF_INPUT: Sentinel token appended once at the tail of every token stream.
    KEYWORDS: Reserved words recognized by the tokenizer.
    CONDITIONS: Condition names usable after IF / WHILE.
    PRIMITIVE_INSTRUCTIONS: Built-in instruction names that user code may call.
    token_hashmap: Maps each reserved spelling to its canonical token type.
"""

END_OF_INPUT = "### END OF INPUT ###"

KEYWORDS: tuple[str, ...] = (
    "PROGRAM",
    "INSTRUCTION",
    "IS",
    "BEGIN",
    "END",
    "IF",
    "THEN",
    "ELSE",
    "WHILE",
    "DO",
)

CONDITIONS: tuple[str, ...] = (
    "next-is-empty",
    "next-is-not-empty",
    "next-is-wall",
    "next-is-not-wall",
    "next-is-friend",
    "next-is-not-friend",
    "next-is-enemy",
    "next-is-not-enemy",
    "random",
    "true",
)

PRIMITIVE_INSTRUCTIONS: tuple[str, ...] = (
    "move",
    "turnleft",
    "turnright",
    "infect",
    "skip",
)

token_hashmap: dict[str, str] = {
    **{kw: "KEYWORD" for kw in KEYWORDS},
    **{cond: "CONDITION" for cond in CONDITIONS},
    END_OF_INPUT: "END_OF_INPUT",
}

__all__ = [
    "CONDITIONS",
    "END_OF_INPUT",
    "KEYWORDS",
    "PRIMITIVE_INSTRUCTIONS",
    "token_hashmap",
]
