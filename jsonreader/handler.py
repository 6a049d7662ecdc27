"""
Token Handler - Base handler class for tokenizer events.

Clients should subclass this and override the methods they need, then pass
an instance to Tokenizer.parse().
"""

from .tokens import Token


class TokenHandler:
    """
    Base handler class for tokenizer events.
    Clients should subclass this and override the methods they need.
    """

    def on_object_start(self) -> None:
        """Called on an opening brace."""
        pass

    def on_object_end(self) -> None:
        """Called on a closing brace."""
        pass

    def on_array_start(self) -> None:
        """Called on an opening bracket."""
        pass

    def on_array_end(self) -> None:
        """Called on a closing bracket."""
        pass

    def on_key(self, key: str) -> None:
        """Called for each object key, escapes already decoded."""
        pass

    def on_value(self, token: Token) -> None:
        """Called for each string, number, null, true or false."""
        pass
