"""
Game exceptions

Raised by the engine and translated into HTTP responses or socket events
by the transport layer.
"""


class GuessGameException(Exception):
    """Base class for all game errors."""
    pass


class InvalidInput(GuessGameException):
    """The submitted guess is not a usable number."""

    title = 'Invalid guess'
    message = 'Enter a number!'

    def __init__(self, raw):
        self.raw = raw
        super().__init__(f"Invalid guess {raw!r}")

    def to_dict(self):
        return {'error': self.title, 'message': self.message}
