import logging

from .errors import InvalidNumber
from .instructions import (
    INT64_MAX,
    Add,
    Call,
    DefineLabel,
    Discard,
    Divide,
    Duplicate,
    Halt,
    HeapRetrieve,
    HeapStore,
    Jump,
    JumpIfNegative,
    JumpIfZero,
    Modulo,
    Multiply,
    OutputChar,
    OutputNumber,
    ParseError,
    Push,
    ReadChar,
    ReadNumber,
    Return,
    Subtract,
    Swap,
)
from .scanner import Scanner
from .tokens import Token

logger = logging.getLogger(__name__)

SPACE = Token.SPACE
TAB = Token.TAB
LINE_BREAK = Token.LINE_BREAK


def unexpected(token, context):
    return ParseError(f'Unexpected {token} in {context}')


def number(tokens):
    sign = tokens.next('Number: sign (Space/Tab)')
    if sign is LINE_BREAK:
        raise InvalidNumber('Unexpected LineBreak in number, expected Space or Tab for the sign')

    magnitude = 0
    while (current := tokens.next('Number: 0/1 (Space/Tab)')) is not LINE_BREAK:
        magnitude = magnitude * 2 + (0 if current is SPACE else 1)
        if magnitude > INT64_MAX + 1:
            raise InvalidNumber('Number literal does not fit in 64 bits')

    value = -magnitude if sign is TAB else magnitude
    if value > INT64_MAX:
        raise InvalidNumber('Number literal does not fit in 64 bits')
    return value


def label(tokens):
    """
    Decodes a label as a binary number with an implicit leading 1,
    Space being a 1 bit and Tab a 0 bit. The empty label is 1.
    """
    result = 1
    while (current := tokens.next('Label')) is not LINE_BREAK:
        result = (result << 1) | (1 if current is SPACE else 0)
    return result


def stack_manipulation(tokens):
    token = tokens.next('Stack Manipulation')
    if token is SPACE:
        return Push(number(tokens))
    if token is TAB:
        return unexpected(token, 'Stack Manipulation')

    token = tokens.next('Stack Manipulation: Duplicate, Swap, Discard')
    if token is SPACE:
        return Duplicate()
    if token is TAB:
        return Swap()
    return Discard()


def flow_control(tokens):
    token = tokens.next('Flow Control')
    if token is SPACE:
        token = tokens.next('Flow Control: DefineLabel, Call, Jump')
        if token is SPACE:
            return DefineLabel(label(tokens))
        if token is TAB:
            return Call(label(tokens))
        return Jump(label(tokens))

    if token is TAB:
        token = tokens.next('Flow Control: JumpIfZero, JumpIfNegative, Return')
        if token is SPACE:
            return JumpIfZero(label(tokens))
        if token is TAB:
            return JumpIfNegative(label(tokens))
        return Return()

    token = tokens.next('Flow Control: Halt')
    if token is LINE_BREAK:
        return Halt()
    return unexpected(token, 'Flow Control: Halt')


def arithmetic(tokens):
    token = tokens.next('Arithmetic')
    if token is SPACE:
        token = tokens.next('Arithmetic: Add, Subtract, Multiply')
        if token is SPACE:
            return Add()
        if token is TAB:
            return Subtract()
        return Multiply()

    if token is TAB:
        token = tokens.next('Arithmetic: Divide, Modulo')
        if token is SPACE:
            return Divide()
        if token is TAB:
            return Modulo()
        return unexpected(token, 'Arithmetic: Divide, Modulo')

    return unexpected(token, 'Arithmetic')


def heap_access(tokens):
    token = tokens.next('Heap Access: HeapStore, HeapRetrieve')
    if token is SPACE:
        return HeapStore()
    if token is TAB:
        return HeapRetrieve()
    return unexpected(token, 'Heap Access: HeapStore, HeapRetrieve')


def io(tokens):
    token = tokens.next('I/O')
    if token is SPACE:
        token = tokens.next('I/O: OutputChar, OutputNumber')
        if token is SPACE:
            return OutputChar()
        if token is TAB:
            return OutputNumber()
        return unexpected(token, 'I/O: OutputChar, OutputNumber')

    if token is TAB:
        token = tokens.next('I/O: ReadChar, ReadNumber')
        if token is SPACE:
            return ReadChar()
        if token is TAB:
            return ReadNumber()
        return unexpected(token, 'I/O: ReadChar, ReadNumber')

    return unexpected(token, 'I/O')


def instruction(tokens):
    token = tokens.next('Stack Manipulation, Flow Control, or Arithmetic/Heap/I-O')
    if token is SPACE:
        return stack_manipulation(tokens)
    if token is LINE_BREAK:
        return flow_control(tokens)

    token = tokens.next('Arithmetic, Heap, I/O')
    if token is SPACE:
        return arithmetic(tokens)
    if token is TAB:
        return heap_access(tokens)
    return io(tokens)


def instructions(source):
    tokens = Scanner(source)
    while tokens.more():
        yield instruction(tokens)


def parse(source):
    result = list(instructions(source))
    errors = sum(1 for item in result if isinstance(item, ParseError))
    logger.debug('Parsed %d instructions (%d parse errors)', len(result), errors)
    return result
