"""
jsonreader - Streaming JSON tokenizer and depth-based sub-document extractor.
"""

from .errors import (
    IncompleteLiteralError,
    InvalidEscapeError,
    JSONStreamError,
    LexicalError,
    StructuralError,
    TransportError,
    UnexpectedEndError,
)
from .extractor import DepthExtractor, iter_depth
from .handler import TokenHandler
from .source import ByteSource
from .tokenizer import Tokenizer, tokenize
from .tokens import Token, TokenType

__all__ = [
    'ByteSource',
    'DepthExtractor',
    'iter_depth',
    'Tokenizer',
    'tokenize',
    'TokenHandler',
    'Token',
    'TokenType',
    'JSONStreamError',
    'StructuralError',
    'LexicalError',
    'InvalidEscapeError',
    'IncompleteLiteralError',
    'UnexpectedEndError',
    'TransportError',
]
__version__ = '0.1.0'
