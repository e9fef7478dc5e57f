import re

from .errors import (
    ArithmeticOverflow,
    CallStackUnderflow,
    DivisionByZero,
    InternalConsistencyError,
)

INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1

NUMBER_PATTERN = re.compile(r'[+-]?[0-9]+')


def fits_int64(value):
    return INT64_MIN <= value <= INT64_MAX


def truncating_divide(left, right):
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def truncating_remainder(left, right):
    # Sign follows the dividend
    return left - right * truncating_divide(left, right)


def parse_number(text):
    """
    Parses a line typed by the user as a signed 64-bit integer.

    Returns None when the line is not a valid number.
    """
    text = text.strip()
    if not NUMBER_PATTERN.fullmatch(text):
        return None
    value = int(text)
    if not fits_int64(value):
        return None
    return value


class Instruction:
    def perform(self, vm):
        self._perform(vm)
        vm.instruction_index += 1

    def __eq__(self, other):
        return type(self) is type(other)

    def __hash__(self):
        return hash(type(self))


class Nullary(Instruction):
    def __str__(self):
        return f'{type(self).__name__}'

    def __repr__(self):
        return str(self)


class Unary(Instruction):
    def __init__(self, argument):
        self.argument = argument

    def __eq__(self, other):
        return type(self) is type(other) and self.argument == other.argument

    def __hash__(self):
        return hash((type(self), self.argument))

    def __str__(self):
        return f'{type(self).__name__}({repr(self.argument)})'

    def __repr__(self):
        return str(self)


# Stack manipulation

class Push(Unary):
    def _perform(self, vm):
        vm.push(self.argument)


class Duplicate(Nullary):
    def _perform(self, vm):
        vm.push(vm.peek())


class Swap(Nullary):
    def _perform(self, vm):
        vm.require(2, 'swap')
        vm.stack[-1], vm.stack[-2] = vm.stack[-2], vm.stack[-1]


class Discard(Nullary):
    def _perform(self, vm):
        vm.pop()


# Arithmetic

class BinArith(Nullary):
    def _perform(self, vm):
        right = vm.pop()
        left = vm.pop()
        result = self._combine(left, right)
        if not fits_int64(result):
            raise ArithmeticOverflow(f'{self} overflowed with operands {left} and {right}')
        vm.push(result)


class Add(BinArith):
    def _combine(self, left, right):
        return left + right


class Subtract(BinArith):
    def _combine(self, left, right):
        return left - right


class Multiply(BinArith):
    def _combine(self, left, right):
        return left * right


class Divide(BinArith):
    def _combine(self, left, right):
        if right == 0:
            raise DivisionByZero(f'Tried to divide {left} by zero')
        return truncating_divide(left, right)


class Modulo(BinArith):
    def _combine(self, left, right):
        if right == 0:
            raise DivisionByZero(f'Tried to take {left} modulo zero')
        return truncating_remainder(left, right)


# Heap access

class HeapStore(Nullary):
    def _perform(self, vm):
        value = vm.pop()
        address = vm.pop()
        vm.store(address, value)


class HeapRetrieve(Nullary):
    def _perform(self, vm):
        address = vm.pop()
        vm.push(vm.retrieve(address))


# Flow control

class DefineLabel(Unary):
    def perform(self, vm):
        raise InternalConsistencyError(f'Found an unresolved label definition at runtime: {self.argument}')


class LabelReference(Unary):
    """
    A flow control instruction whose argument is a label id before
    resolution and an instruction index afterwards.
    """

    def retarget(self, index):
        return type(self)(index)


class Call(LabelReference):
    def perform(self, vm):
        vm.call_stack.append(vm.instruction_index)
        vm.instruction_index = self.argument


class Jump(LabelReference):
    def perform(self, vm):
        vm.instruction_index = self.argument


class JumpIfZero(LabelReference):
    def perform(self, vm):
        if vm.pop() == 0:
            vm.instruction_index = self.argument
        else:
            vm.instruction_index += 1


class JumpIfNegative(LabelReference):
    def perform(self, vm):
        if vm.pop() < 0:
            vm.instruction_index = self.argument
        else:
            vm.instruction_index += 1


class Return(Nullary):
    def perform(self, vm):
        if not vm.call_stack:
            raise CallStackUnderflow('Tried to return from a subroutine, but no call was made')
        vm.instruction_index = vm.call_stack.pop() + 1


class Halt(Nullary):
    def perform(self, vm):
        vm.stop()


# I/O

class OutputChar(Nullary):
    def _perform(self, vm):
        vm.write(chr(vm.pop() & 0xFF))


class OutputNumber(Nullary):
    def _perform(self, vm):
        vm.write(str(vm.pop()))


class ReadChar(Nullary):
    def _perform(self, vm):
        address = vm.pop()
        vm.store(address, vm.read_byte())


class ReadNumber(Nullary):
    def _perform(self, vm):
        address = vm.pop()
        while True:
            line = vm.read_line()
            number = parse_number(line)
            if number is not None:
                break
            vm.write(f'Unable to parse number: {line.strip()!r}\n')
        vm.store(address, number)


class ParseError(Unary):
    def perform(self, vm):
        raise InternalConsistencyError(f'Found a parse error while executing the program: {self.argument}')
