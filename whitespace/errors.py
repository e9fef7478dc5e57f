class WhitespaceError(Exception):
    pass


class ParseFailure(WhitespaceError):
    pass


class UnexpectedEndOfProgram(ParseFailure):
    def __init__(self, context):
        super().__init__(f'Program ended while trying to match: {context}')
        self.context = context


class InvalidNumber(ParseFailure):
    pass


class ResolveError(WhitespaceError):
    pass


class UndefinedLabel(ResolveError):
    def __init__(self, label):
        super().__init__(f'Reference to undefined label {label}')
        self.label = label


class DuplicateLabel(ResolveError):
    def __init__(self, label):
        super().__init__(f'Label {label} is defined more than once')
        self.label = label


class RuntimeFault(WhitespaceError):
    pass


class StackUnderflow(RuntimeFault):
    pass


class HeapAccessError(RuntimeFault):
    def __init__(self, address):
        super().__init__(f'No value found in the heap at address {address}')
        self.address = address


class CallStackUnderflow(RuntimeFault):
    pass


class DivisionByZero(RuntimeFault):
    pass


class ArithmeticOverflow(RuntimeFault):
    pass


class ProgramCounterOutOfRange(RuntimeFault):
    pass


class InputExhausted(RuntimeFault):
    pass


class InternalConsistencyError(RuntimeFault):
    pass
