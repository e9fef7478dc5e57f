from enum import Enum


class Token(Enum):
    SPACE = ' '
    TAB = '\t'
    LINE_BREAK = '\n'

    def __str__(self):
        return self.name.replace('_', ' ').title().replace(' ', '')


WHITESPACE = frozenset(token.value for token in Token)
