import pytest

from whitespace.errors import DuplicateLabel, UndefinedLabel
from whitespace.instructions import (
    Call,
    DefineLabel,
    Halt,
    Jump,
    JumpIfNegative,
    JumpIfZero,
    LabelReference,
    OutputNumber,
    ParseError,
    Push,
    Return,
)
from whitespace.parser import parse
from whitespace.resolver import label_table, resolve

from .programs import COUNTDOWN, NESTED_CALLS, SUBROUTINE


def test_labels_point_at_next_instruction():
    program = [DefineLabel(7), Push(1), DefineLabel(9), DefineLabel(11), OutputNumber(), Halt()]
    assert label_table(program) == {7: 0, 9: 1, 11: 1}


def test_resolve_rewrites_references():
    program = [
        Jump(5),
        DefineLabel(3),
        Return(),
        DefineLabel(5),
        Call(3),
        JumpIfZero(3),
        JumpIfNegative(5),
        Halt(),
    ]
    assert resolve(program) == [
        Jump(2),
        Return(),
        Call(1),
        JumpIfZero(1),
        JumpIfNegative(2),
        Halt(),
    ]


def test_undefined_label():
    with pytest.raises(UndefinedLabel) as info:
        resolve([Push(0), JumpIfZero(42), Halt()])
    assert info.value.label == 42


def test_duplicate_label_last_definition_wins(caplog):
    program = [DefineLabel(3), Push(1), DefineLabel(3), Jump(3), Halt()]
    assert resolve(program) == [Push(1), Jump(1), Halt()]
    assert 'redefined' in caplog.text


def test_duplicate_label_strict():
    with pytest.raises(DuplicateLabel):
        resolve([DefineLabel(3), DefineLabel(3), Halt()], strict=True)


def test_parse_errors_pass_through():
    program = [ParseError('Unexpected Tab in Stack Manipulation'), Halt()]
    assert resolve(program) == program


def test_label_at_end_resolves_past_last_instruction():
    assert resolve([Jump(1), DefineLabel(1)]) == [Jump(1)]


@pytest.mark.parametrize('source', [SUBROUTINE, NESTED_CALLS, COUNTDOWN])
def test_resolved_programs_are_label_free(source):
    resolved = resolve(parse(source))
    assert not any(isinstance(instruction, DefineLabel) for instruction in resolved)
    for instruction in resolved:
        if isinstance(instruction, LabelReference):
            assert 0 <= instruction.argument < len(resolved)


def test_retarget_keeps_variant():
    assert JumpIfNegative(99).retarget(4) == JumpIfNegative(4)
    assert JumpIfNegative(4) != JumpIfZero(4)
