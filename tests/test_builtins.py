import pytest

from alp.evaluator import Evaluator
from alp.parser import parse_program
from alp.std import BUILTINS, lookup_builtin
from alp.types import Array, Error, Integer, String, NULL


def run(source):
    return Evaluator().run(parse_program(source))


def test_lookup_builtin():
    assert set(BUILTINS) == {'len', 'first', 'last', 'rest', 'push', 'puts'}
    assert lookup_builtin('len') is BUILTINS['len']
    assert lookup_builtin('print') is None


@pytest.mark.parametrize('source, expected', [
    ('len("")', Integer(0)),
    ('len("four")', Integer(4)),
    ('len("hello world")', Integer(11)),
    ('len([1, 2, 3])', Integer(3)),
    ('len([])', Integer(0)),
    ('first([1, 2, 3])', Integer(1)),
    ('first([])', NULL),
    ('last([1, 2, 3])', Integer(3)),
    ('last([])', NULL),
    ('rest([1, 2, 3])', Array([Integer(2), Integer(3)])),
    ('rest([1])', Array([])),
    ('rest([])', NULL),
    ('push([], 1)', Array([Integer(1)])),
    ('push([1], "two")', Array([Integer(1), String('two')])),
])
def test_builtin_results(source, expected):
    assert run(source) == expected


@pytest.mark.parametrize('source, message', [
    ('len(1)', 'argument to `len` not supported, got INTEGER'),
    ('len("one", "two")', 'wrong number of arguments. got=2, want=1'),
    ('len()', 'wrong number of arguments. got=0, want=1'),
    ('first(1)', 'argument to `first` must be ARRAY, got INTEGER'),
    ('last("abc")', 'argument to `last` must be ARRAY, got STRING'),
    ('rest(true)', 'argument to `rest` must be ARRAY, got BOOLEAN'),
    ('push(1, 1)', 'argument to `push` must be ARRAY, got INTEGER'),
    ('push([1])', 'wrong number of arguments. got=1, want=2'),
    ('first([1], [2])', 'wrong number of arguments. got=2, want=1'),
])
def test_builtin_errors(source, message):
    result = run(source)
    assert isinstance(result, Error)
    assert result.message == message


def test_push_and_rest_leave_argument_unchanged():
    source = '''
    let a = [1, 2];
    let b = push(a, 3);
    let c = rest(a);
    [len(a), len(b), len(c), a[1]]
    '''
    assert run(source).inspect() == '[2, 3, 1, 2]'


def test_puts_prints_each_argument(capsys):
    result = run('puts("hello", 1, [1, true], {"k": "v"})')
    assert result is NULL
    assert capsys.readouterr().out == 'hello\n1\n[1, true]\n{k: v}\n'


def test_puts_without_arguments_prints_nothing(capsys):
    assert run('puts()') is NULL
    assert capsys.readouterr().out == ''


def test_builtins_are_first_class():
    source = '''
    let apply = fn(f, x) { f(x) };
    apply(len, [1, 2, 3, 4])
    '''
    assert run(source) == Integer(4)
