"""Pattern tokenizer.

Lexes a TR35 date/time pattern into ``(symbol, count)`` tokens:

    >>> tokenize("h:mm a")
    [Token('h', 1), Token.literal(':'), Token('m', 2), Token.literal(' '), Token('a', 1)]

Rules:
    - A run of one repeated ASCII letter is one token; ``count`` is the
      run length.
    - Text between apostrophes is literal; ``''`` is one apostrophe, both
      inside and outside quoted text.
    - Any other character is literal. Adjacent literal text is merged.
    - ASCII letters outside :data:`PATTERN_SYMBOLS` are rejected.
"""

from __future__ import annotations

from dataclasses import dataclass

from horologe.errors import TokenizeError

# Every symbol TR35 reserves. Letters outside this set are errors.
PATTERN_SYMBOLS = frozenset("GyYuUrQqMLlwWdDFgEecabBhHKkjJCmsSAzZOvVXx")

LITERAL = "'"


@dataclass(frozen=True)
class Token:
    """One lexical unit of a pattern.

    Attributes:
        symbol: Pattern symbol, or :data:`LITERAL` for literal text
        count: Run length of the symbol
        text: Literal text for literal tokens
    """
    symbol: str
    count: int = 1
    text: str = ""

    def __post_init__(self) -> None:
        if self.count < 1:
            raise ValueError(f"Token count must be at least 1, got {self.count}")

    @classmethod
    def literal(cls, text: str) -> "Token":
        return cls(LITERAL, 1, text)

    @property
    def is_literal(self) -> bool:
        return self.symbol == LITERAL

    def __repr__(self) -> str:
        if self.is_literal:
            return f"Token.literal({self.text!r})"
        return f"Token({self.symbol!r}, {self.count})"


def tokenize(pattern: str) -> list[Token]:
    """Split a pattern into tokens.

    Args:
        pattern: TR35 pattern string

    Returns:
        Ordered list of tokens

    Raises:
        TokenizeError: On an unterminated quote or an unknown letter
    """
    tokens: list[Token] = []
    literal: list[str] = []

    def flush() -> None:
        if literal:
            tokens.append(Token.literal("".join(literal)))
            literal.clear()

    i = 0
    length = len(pattern)
    while i < length:
        char = pattern[i]

        if char == "'":
            if pattern.startswith("''", i):
                literal.append("'")
                i += 2
                continue
            i = _quoted(pattern, i, literal)
            continue

        if char.isascii() and char.isalpha():
            if char not in PATTERN_SYMBOLS:
                raise TokenizeError(
                    f"Unrecognized symbol {char!r} at position {i} in pattern {pattern!r}",
                    pattern=pattern,
                    position=i,
                )
            end = i
            while end < length and pattern[end] == char:
                end += 1
            flush()
            tokens.append(Token(char, end - i))
            i = end
            continue

        literal.append(char)
        i += 1

    flush()
    return tokens


def _quoted(pattern: str, start: int, out: list[str]) -> int:
    """Consume quoted text starting at the opening quote; return the next index."""
    i = start + 1
    length = len(pattern)
    while i < length:
        if pattern[i] == "'":
            if pattern.startswith("''", i):
                out.append("'")
                i += 2
                continue
            return i + 1
        out.append(pattern[i])
        i += 1
    raise TokenizeError(
        f"Unterminated quoted literal starting at position {start} in pattern {pattern!r}",
        pattern=pattern,
        position=start,
    )


def pattern_text(tokens: list[Token]) -> str:
    """Rebuild a pattern from tokens.

    Literal text containing ASCII letters is quoted and apostrophes are
    doubled, so ``tokenize(pattern_text(tokens)) == tokens``.
    """
    parts = []
    for token in tokens:
        if not token.is_literal:
            parts.append(token.symbol * token.count)
            continue
        text = token.text.replace("'", "''")
        if any(char.isascii() and char.isalpha() for char in token.text):
            text = f"'{text}'"
        parts.append(text)
    return "".join(parts)
