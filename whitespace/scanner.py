from .errors import UnexpectedEndOfProgram
from .tokens import Token, WHITESPACE


def sanitize(source):
    return "".join(character for character in source if character in WHITESPACE)


class Scanner:
    """
    Delivers the whitespace tokens of a source text in order.

    The significant characters are kept reversed so that consuming
    one is a pop from the end of the list.
    """

    def __init__(self, source):
        self.remaining = list(reversed(sanitize(source)))

    def more(self):
        return bool(self.remaining)

    def next(self, context):
        if not self.remaining:
            raise UnexpectedEndOfProgram(context)
        return Token(self.remaining.pop())
