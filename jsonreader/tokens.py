"""
Tokens - The atomic units produced by the tokenizer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TokenType(Enum):
    """Kinds of token the tokenizer can emit."""

    OBJECT_START = "object-start"
    ARRAY_START = "array-start"
    OBJECT_END = "object-end"
    ARRAY_END = "array-end"
    KEY = "key"
    STRING = "string"
    NUMBER = "number"
    NULL = "null"
    TRUE = "true"
    FALSE = "false"


@dataclass(frozen=True)
class Token:
    """
    A single token.

    value is the decoded text for KEY and STRING, the raw matched text for
    NUMBER, and None for every other type.
    """

    type: TokenType
    value: Optional[str] = None

    @classmethod
    def key(cls, text: str) -> 'Token':
        return cls(TokenType.KEY, text)

    @classmethod
    def string(cls, text: str) -> 'Token':
        return cls(TokenType.STRING, text)

    @classmethod
    def number(cls, raw: str) -> 'Token':
        return cls(TokenType.NUMBER, raw)

    def __repr__(self) -> str:
        if self.value is None:
            return f"Token({self.type.name})"
        return f"Token({self.type.name}, {self.value!r})"


OBJECT_START = Token(TokenType.OBJECT_START)
ARRAY_START = Token(TokenType.ARRAY_START)
OBJECT_END = Token(TokenType.OBJECT_END)
ARRAY_END = Token(TokenType.ARRAY_END)
NULL = Token(TokenType.NULL)
TRUE = Token(TokenType.TRUE)
FALSE = Token(TokenType.FALSE)
