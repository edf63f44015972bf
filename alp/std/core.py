from typing import Dict, List, Optional

from alp.builtin_function import Builtin
from alp.types import Object, Error, Integer, String, Array, NULL, type_name


def _wrong_arg_count(got: int, want: int) -> Error:
    return Error(f"wrong number of arguments. got={got}, want={want}")


def _must_be_array(name: str, arg: Object) -> Error:
    return Error(f"argument to `{name}` must be ARRAY, got {type_name(arg)}")


def std_len(args: List[Object]) -> Object:
    if len(args) != 1:
        return _wrong_arg_count(len(args), 1)
    arg = args[0]
    if isinstance(arg, String):
        return Integer(len(arg.value))
    if isinstance(arg, Array):
        return Integer(len(arg.elements))
    return Error(f"argument to `len` not supported, got {type_name(arg)}")


def std_first(args: List[Object]) -> Object:
    if len(args) != 1:
        return _wrong_arg_count(len(args), 1)
    arr = args[0]
    if not isinstance(arr, Array):
        return _must_be_array('first', arr)
    if arr.elements:
        return arr.elements[0]
    return NULL


def std_last(args: List[Object]) -> Object:
    if len(args) != 1:
        return _wrong_arg_count(len(args), 1)
    arr = args[0]
    if not isinstance(arr, Array):
        return _must_be_array('last', arr)
    if arr.elements:
        return arr.elements[-1]
    return NULL


def std_rest(args: List[Object]) -> Object:
    if len(args) != 1:
        return _wrong_arg_count(len(args), 1)
    arr = args[0]
    if not isinstance(arr, Array):
        return _must_be_array('rest', arr)
    if arr.elements:
        return Array(list(arr.elements[1:]))
    return NULL


def std_push(args: List[Object]) -> Object:
    if len(args) != 2:
        return _wrong_arg_count(len(args), 2)
    arr = args[0]
    if not isinstance(arr, Array):
        return _must_be_array('push', arr)
    # the argument array is left untouched
    return Array(arr.elements + [args[1]])


def std_puts(args: List[Object]) -> Object:
    for arg in args:
        print(arg.inspect())
    return NULL


BUILTINS: Dict[str, Builtin] = {
    'len': Builtin('len', std_len),
    'first': Builtin('first', std_first),
    'last': Builtin('last', std_last),
    'rest': Builtin('rest', std_rest),
    'push': Builtin('push', std_push),
    'puts': Builtin('puts', std_puts),
}


def lookup_builtin(name: str) -> Optional[Builtin]:
    return BUILTINS.get(name)
