import io
import logging
import sys

from .errors import (
    HeapAccessError,
    InputExhausted,
    ProgramCounterOutOfRange,
    StackUnderflow,
)
from .parser import parse
from .resolver import resolve

logger = logging.getLogger(__name__)


class VirtualMachine:
    """
    Executes a resolved instruction sequence.

    stdin is a binary stream, stdout a text stream; both default to
    the process's console, stdin only being looked up on the first
    read. All state lives for the duration of one run.
    """

    def __init__(self, instructions, stdin=None, stdout=None):
        self.instructions = instructions
        self.stdin = stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.instruction_index = 0
        self.call_stack = []
        self.stack = []
        self.heap = {}
        self.steps = 0
        self.running = True

    # Operand stack

    def push(self, value):
        self.stack.append(value)

    def pop(self):
        if not self.stack:
            raise StackUnderflow('Tried to pop the stack, but it was empty')
        return self.stack.pop()

    def peek(self):
        if not self.stack:
            raise StackUnderflow('Tried to read the top of the stack, but it was empty')
        return self.stack[-1]

    def require(self, count, operation):
        if len(self.stack) < count:
            raise StackUnderflow(f'Tried to {operation} with {len(self.stack)} values on the stack, need {count}')

    # Heap

    def store(self, address, value):
        self.heap[address] = value

    def retrieve(self, address):
        if address not in self.heap:
            raise HeapAccessError(address)
        return self.heap[address]

    # Console

    def write(self, text):
        self.stdout.write(text)
        self.stdout.flush()

    @property
    def input(self):
        return self.stdin if self.stdin is not None else sys.stdin.buffer

    def read_byte(self):
        try:
            data = self.input.read(1)
        except OSError as error:
            raise InputExhausted(f'Unable to read a character: {error}') from error
        if not data:
            raise InputExhausted('Unable to read a character: end of input')
        return data[0]

    def read_line(self):
        try:
            data = self.input.readline()
        except OSError as error:
            raise InputExhausted(f'Unable to read a number: {error}') from error
        if not data:
            raise InputExhausted('Unable to read a number: end of input')
        try:
            return data.decode('utf-8')
        except UnicodeDecodeError as error:
            raise InputExhausted(f'Unable to read a number: {error}') from error

    # Execution

    def step(self):
        self.current_instruction.perform(self)
        self.steps += 1

    def run(self):
        logger.debug('Running %d instructions', len(self.instructions))
        while self.running:
            self.step()
        logger.debug('Halted after %d steps', self.steps)

    def stop(self):
        self.running = False

    @property
    def current_instruction(self):
        if not 0 <= self.instruction_index < len(self.instructions):
            raise ProgramCounterOutOfRange(
                f'Program counter {self.instruction_index} is outside the program '
                f'of {len(self.instructions)} instructions'
            )
        return self.instructions[self.instruction_index]


def execute(instructions, stdin=None, stdout=None):
    vm = VirtualMachine(instructions, stdin, stdout)
    vm.run()
    return vm


def whitespace(code, input=b'', strict=False):
    if isinstance(input, str):
        input = input.encode('utf-8')
    output = io.StringIO()
    execute(resolve(parse(code), strict=strict), io.BytesIO(input), output)
    return output.getvalue()
