from .errors import WhitespaceError
from .parser import parse
from .resolver import resolve
from .vm import VirtualMachine, execute, whitespace
