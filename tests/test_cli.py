import pytest

from whitespace.cli import main

from .programs import ADDITION, MISSING_HEAP_KEY, SUBROUTINE, ws


@pytest.fixture
def program(tmp_path):
    def write(source):
        path = tmp_path / 'program.ws'
        path.write_text(source, encoding='utf-8')
        return str(path)
    return write


def test_run_is_default(program, capsys):
    assert main([program(ADDITION)]) == 0
    assert capsys.readouterr().out == '8'


def test_run_command(program, capsys):
    assert main(['run', program(SUBROUTINE)]) == 0
    assert capsys.readouterr().out == '12'


def test_list_command(program, capsys):
    assert main(['list', program(ADDITION)]) == 0
    assert capsys.readouterr().out.splitlines() == [
        'Push(5)',
        'Push(3)',
        'Add',
        'OutputNumber',
        'Halt',
    ]


def test_carriage_return_is_a_comment(tmp_path, capsys):
    path = tmp_path / 'program.ws'
    path.write_bytes(ADDITION.replace('\t\n \t', '\t\n\r \t').encode('utf-8'))
    assert main(['list', str(path)]) == 0
    assert capsys.readouterr().out.splitlines() == [
        'Push(5)',
        'Push(3)',
        'Add',
        'OutputNumber',
        'Halt',
    ]
    assert main([str(path)]) == 0
    assert capsys.readouterr().out == '8'


def test_list_shows_labels_and_parse_errors(program, capsys):
    assert main(['list', program(ws('ST  LSS S L  LLL'))]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "ParseError('Unexpected Tab in Stack Manipulation')",
        'DefineLabel(3)',
        'Halt',
    ]


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / 'missing.ws')]) == 1
    captured = capsys.readouterr()
    assert captured.out == ''
    assert captured.err.startswith('Error: ')


def test_runtime_fault(program, capsys):
    assert main([program(MISSING_HEAP_KEY)]) == 1
    captured = capsys.readouterr()
    assert captured.out == '5'
    assert 'HeapAccessError' in captured.err


def test_undefined_label(program, capsys):
    assert main([program(ws('LSL T L  LLL'))]) == 1
    assert 'UndefinedLabel' in capsys.readouterr().err


def test_truncated_program_runs_nothing(program, capsys):
    assert main([program(ws('SS S T L  TLST  SS'))]) == 1
    captured = capsys.readouterr()
    assert captured.out == ''
    assert 'UnexpectedEndOfProgram' in captured.err


def test_strict_labels(program, capsys):
    source = ws('LSS S L  LSS S L  LLL')
    assert main([program(source)]) == 0
    assert main(['--strict-labels', program(source)]) == 1
    assert 'DuplicateLabel' in capsys.readouterr().err


def test_verbose_logs_debug(program, capsys):
    assert main(['-v', program(ADDITION)]) == 0
    assert 'Parsed 5 instructions' in capsys.readouterr().err
