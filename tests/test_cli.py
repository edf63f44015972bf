import io
import json
from pathlib import Path

import pytest

from alp.__main__ import main

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_runs_program_file(capsys):
    main([str(EXAMPLES / 'program_3.alp')])
    assert capsys.readouterr().out.splitlines() == ['[2, 4, 6, 8]', '20']


def test_prints_final_value(tmp_path, capsys):
    source = tmp_path / 'value.alp'
    source.write_text('let x = 6; x * 7', encoding='utf-8')
    main([str(source)])
    assert capsys.readouterr().out == '42\n'


def test_null_result_is_not_printed(capsys):
    main([str(EXAMPLES / 'program_1.alp')])
    assert capsys.readouterr().out == 'Hello World!!\n'


def test_error_result_exits_nonzero(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main([str(EXAMPLES / 'program_6.alp')])
    assert exc_info.value.code == 1
    captured = capsys.readouterr()
    assert captured.out.splitlines() == ['small', 'big', 'huge']
    assert captured.err == 'ERROR: type mismatch: INTEGER + BOOLEAN\n'


def test_syntax_errors_exit_nonzero(tmp_path, capsys):
    source = tmp_path / 'broken.alp'
    source.write_text('let = 5;', encoding='utf-8')
    with pytest.raises(SystemExit) as exc_info:
        main([str(source)])
    assert exc_info.value.code == 1
    err = capsys.readouterr().err
    assert '\texpected next token to be IDENT, got = instead\n' in err


def test_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main([str(tmp_path / 'nope.alp')])
    assert exc_info.value.code == 1
    assert 'not found' in capsys.readouterr().err


def test_timeout_interrupts_program(tmp_path, capsys):
    source = tmp_path / 'spin.alp'
    source.write_text(
        'let f = fn(n) { if (n > 0) { f(n - 1); f(n - 1) } else { 0 } }; f(40);',
        encoding='utf-8',
    )
    with pytest.raises(SystemExit) as exc_info:
        main(['--timeout', '0.2', str(source)])
    assert exc_info.value.code == 1
    assert capsys.readouterr().err == 'Interrupted: evaluation deadline exceeded\n'


def test_emit_and_run_ast(tmp_path, capsys):
    source = tmp_path / 'prog.alp'
    source.write_text((EXAMPLES / 'program_5.alp').read_text(encoding='utf-8'), encoding='utf-8')
    main(['--emit-ast', str(source)])
    out_path = tmp_path / 'prog.alp.ast.json'
    assert capsys.readouterr().out.strip() == str(out_path)
    data = json.loads(out_path.read_text(encoding='utf-8'))
    assert data['type'] == 'Program'

    main(['--ast', str(out_path)])
    assert capsys.readouterr().out == '610\n'


def test_verbose_run_writes_debug_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    source = tmp_path / 'prog.alp'
    source.write_text('let a = 1; a + 1', encoding='utf-8')
    main(['-vv', str(source)])
    assert capsys.readouterr().out == '2\n'
    trace = (tmp_path / 'debug.txt').read_text(encoding='utf-8').splitlines()
    assert trace == ['run program with 2 statement(s)', 'let a = 1', 'result: 2']


def test_no_program_starts_repl(monkeypatch, capsys):
    monkeypatch.setattr('sys.stdin', io.StringIO('1 + 2\n'))
    main([])
    assert capsys.readouterr().out == '>> 3\n>> '


def test_unbounded_recursion_exits_nonzero(tmp_path, capsys):
    source = tmp_path / 'forever.alp'
    source.write_text('let f = fn(x) { f(x) }; f(1);', encoding='utf-8')
    with pytest.raises(SystemExit) as exc_info:
        main([str(source)])
    assert exc_info.value.code == 1
    assert capsys.readouterr().err == 'Error: maximum recursion depth exceeded\n'
