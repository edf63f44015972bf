"""Tree-walking evaluator for the Alp language.

`Evaluator.eval` dispatches on the AST node type and recurses into
children, resolving names through an `Environment` and producing values
from `alp.types`. Two kinds of outcome travel back up the recursion:

* In-language results. `Error` objects and `ReturnValue` wrappers are
  ordinary return values; every step that receives one hands it straight
  back to its caller. Statement sequences stop at the first of either,
  function application unwraps `ReturnValue`, and a program unwraps it at
  the top.

* Interruption. Before every node the `Context` is checked and a
  cancelled or expired context raises `EvaluationInterrupted`, which is
  never turned into an `Error` object.
"""

from __future__ import annotations

import sys
import threading
from typing import List, Optional, Union

from .ast import (
    Node, Program, BlockStatement, ExpressionStatement, LetStatement,
    ReturnStatement, Identifier, IntegerLiteral, StringLiteral,
    BooleanLiteral, PrefixExpression, InfixExpression, IfExpression,
    FunctionLiteral, CallExpression, ArrayLiteral, HashLiteral,
    IndexExpression,
)
from .builtin_function import Builtin
from .context import Context
from .environment import Environment, new_enclosed_environment
from .parser import parse_program
from .std import lookup_builtin
from .types import (
    Object, ObjectType, Boolean, Integer, String, Array, Hash, HashPair, Function,
    ReturnValue, Error, TRUE, FALSE, NULL, native_bool_to_boolean,
    is_error, is_hashable, type_name, wrap_int64,
)


MAX_RECURSION_DEPTH = 100_000
EVAL_STACK_SIZE = 512 * 1024 * 1024


class Evaluator:
    """Evaluates Alp ASTs, optionally writing a debug trace."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def __enter__(self) -> 'Evaluator':
        return self

    def __exit__(self, *exc_info):
        self.close()

    def new_error(self, message: str) -> Error:
        if self.debug_level >= 3:
            self.debug(f"error: {message}")
        return Error(message)

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None,
            ctx: Optional[Context] = None) -> Optional[Object]:
        if env is None:
            env = Environment()
        if ctx is None:
            ctx = Context.background()
        self.debug(f"run program with {len(program.statements)} statement(s)")
        result = self.execute(ctx, program, env)
        if self.debug_level >= 1:
            self.debug(f"result: {result.inspect() if result is not None else None}")
        return result

    def execute(self, ctx: Context, node: Node, env: Environment) -> Optional[Object]:
        """Evaluate `node` on a worker thread with a deep stack.

        Every Alp call costs several Python frames. The worker gets `EVAL_STACK_SIZE` bytes of stack and the interpreter's
        recursion limit is raised to `MAX_RECURSION_DEPTH`. Exceptions
        raised while evaluating are re-raised in the calling thread.
        """
        outcome = {}

        def target():
            try:
                outcome['value'] = self.eval(ctx, node, env)
            except BaseException as e:
                outcome['error'] = e

        if sys.getrecursionlimit() < MAX_RECURSION_DEPTH:
            sys.setrecursionlimit(MAX_RECURSION_DEPTH)
        previous = threading.stack_size(EVAL_STACK_SIZE)
        try:
            worker = threading.Thread(target=target, name='alp-eval', daemon=True)
            worker.start()
        finally:
            threading.stack_size(previous)

        try:
            worker.join()
        except KeyboardInterrupt:
            ctx.cancel()
            worker.join()
            raise
        if 'error' in outcome:
            raise outcome['error']
        return outcome.get('value')

    def eval(self, ctx: Context, node: Node, env: Environment) -> Optional[Object]:
        ctx.check()

        # Statements
        if isinstance(node, Program):
            return self.eval_program(ctx, node, env)
        if isinstance(node, BlockStatement):
            return self.eval_block_statement(ctx, node, env)
        if isinstance(node, ExpressionStatement):
            return self.eval(ctx, node.expression, env)
        if isinstance(node, ReturnStatement):
            if node.return_value is None:
                return ReturnValue(NULL)
            value = self.eval(ctx, node.return_value, env)
            if is_error(value):
                return value
            return ReturnValue(value)
        if isinstance(node, LetStatement):
            value = self.eval(ctx, node.value, env)
            if is_error(value):
                return value
            env.set(node.name.value, value)
            if self.debug_level >= 2:
                self.debug(f"let {node.name.value} = {value.inspect()}")
            return None

        # Expressions
        if isinstance(node, IntegerLiteral):
            return Integer(node.value)
        if isinstance(node, StringLiteral):
            return String(node.value)
        if isinstance(node, BooleanLiteral):
            return native_bool_to_boolean(node.value)
        if isinstance(node, Identifier):
            return self.eval_identifier(node, env)
        if isinstance(node, PrefixExpression):
            right = self.eval(ctx, node.right, env)
            if is_error(right):
                return right
            return self.eval_prefix_expression(node.operator, right)
        if isinstance(node, InfixExpression):
            left = self.eval(ctx, node.left, env)
            if is_error(left):
                return left
            right = self.eval(ctx, node.right, env)
            if is_error(right):
                return right
            return self.eval_infix_expression(node.operator, left, right)
        if isinstance(node, IfExpression):
            return self.eval_if_expression(ctx, node, env)
        if isinstance(node, FunctionLiteral):
            return Function(node.parameters, node.body, env)
        if isinstance(node, CallExpression):
            function = self.eval(ctx, node.function, env)
            if is_error(function):
                return function
            args = self.eval_expressions(ctx, node.arguments, env)
            if isinstance(args, Error):
                return args
            return self.apply_function(ctx, function, args)
        if isinstance(node, ArrayLiteral):
            elements = self.eval_expressions(ctx, node.elements, env)
            if isinstance(elements, Error):
                return elements
            return Array(elements)
        if isinstance(node, HashLiteral):
            return self.eval_hash_literal(ctx, node, env)
        if isinstance(node, IndexExpression):
            left = self.eval(ctx, node.left, env)
            if is_error(left):
                return left
            index = self.eval(ctx, node.index, env)
            if is_error(index):
                return index
            return self.eval_index_expression(left, index)

        raise NotImplementedError(f"eval: unexpected node type {type(node).__name__}")

    def eval_program(self, ctx: Context, program: Program, env: Environment) -> Optional[Object]:
        result: Optional[Object] = None
        for statement in program.statements:
            result = self.eval(ctx, statement, env)
            if isinstance(result, ReturnValue):
                return result.value
            if isinstance(result, Error):
                return result
        return result

    def eval_block_statement(self, ctx: Context, block: BlockStatement, env: Environment) -> Optional[Object]:
        result: Optional[Object] = None
        for statement in block.statements:
            result = self.eval(ctx, statement, env)
            # leave ReturnValue wrapped so enclosing blocks stop too
            if result is not None and result.type() in (ObjectType.RETURN_VALUE, ObjectType.ERROR):
                return result
        return result

    def eval_identifier(self, node: Identifier, env: Environment) -> Object:
        value, ok = env.get(node.value)
        if ok:
            return value
        builtin = lookup_builtin(node.value)
        if builtin is not None:
            return builtin
        return self.new_error(f"identifier not found: {node.value}")

    def eval_prefix_expression(self, operator: str, right: Object) -> Object:
        if operator == '!':
            return self.eval_bang_operator_expression(right)
        if operator == '-':
            return self.eval_minus_prefix_operator_expression(right)
        return self.new_error(f"unknown operator: {operator}{type_name(right)}")

    def eval_bang_operator_expression(self, right: Object) -> Object:
        return FALSE if is_truthy(right) else TRUE

    def eval_minus_prefix_operator_expression(self, right: Object) -> Object:
        if not isinstance(right, Integer):
            return self.new_error(f"unknown operator: -{type_name(right)}")
        return Integer(wrap_int64(-right.value))

    def eval_infix_expression(self, operator: str, left: Object, right: Object) -> Object:
        if isinstance(left, Integer) and isinstance(right, Integer):
            return self.eval_integer_infix_expression(operator, left, right)
        if isinstance(left, String) and isinstance(right, String):
            return self.eval_string_infix_expression(operator, left, right)
        if left.type() != right.type():
            return self.new_error(f"type mismatch: {type_name(left)} {operator} {type_name(right)}")
        if operator == '==':
            return native_bool_to_boolean(left is right or left == right)
        if operator == '!=':
            return native_bool_to_boolean(not (left is right or left == right))
        return self.new_error(f"unknown operator: {type_name(left)} {operator} {type_name(right)}")

    def eval_integer_infix_expression(self, operator: str, left: Integer, right: Integer) -> Object:
        a = left.value
        b = right.value
        if operator == '+':
            return Integer(wrap_int64(a + b))
        if operator == '-':
            return Integer(wrap_int64(a - b))
        if operator == '*':
            return Integer(wrap_int64(a * b))
        if operator == '/':
            if b == 0:
                return self.new_error('division by zero')
            # truncate toward zero
            quotient = abs(a) // abs(b)
            if (a < 0) != (b < 0):
                quotient = -quotient
            return Integer(wrap_int64(quotient))
        if operator == '<':
            return native_bool_to_boolean(a < b)
        if operator == '>':
            return native_bool_to_boolean(a > b)
        if operator == '==':
            return native_bool_to_boolean(a == b)
        if operator == '!=':
            return native_bool_to_boolean(a != b)
        return self.new_error(f"unknown operator: {type_name(left)} {operator} {type_name(right)}")

    def eval_string_infix_expression(self, operator: str, left: String, right: String) -> Object:
        if operator == '+':
            return String(left.value + right.value)
        if operator == '==':
            return native_bool_to_boolean(left.value == right.value)
        if operator == '!=':
            return native_bool_to_boolean(left.value != right.value)
        return self.new_error(f"unknown operator: {type_name(left)} {operator} {type_name(right)}")

    def eval_if_expression(self, ctx: Context, node: IfExpression, env: Environment) -> Optional[Object]:
        condition = self.eval(ctx, node.condition, env)
        if is_error(condition):
            return condition
        truthy = is_truthy(condition)
        if self.debug_level >= 3:
            self.debug(f"if condition {condition.inspect()} -> {truthy}")
        if truthy:
            result = self.eval(ctx, node.consequence, env)
        elif node.alternative is not None:
            result = self.eval(ctx, node.alternative, env)
        else:
            return NULL
        return result if result is not None else NULL

    def eval_expressions(self, ctx: Context, expressions: List[Node],
                         env: Environment) -> Union[List[Object], Error]:
        result: List[Object] = []
        for expression in expressions:
            evaluated = self.eval(ctx, expression, env)
            if isinstance(evaluated, Error):
                return evaluated
            result.append(evaluated)
        return result

    def eval_hash_literal(self, ctx: Context, node: HashLiteral, env: Environment) -> Object:
        pairs = {}
        for key_node, value_node in node.pairs:
            key = self.eval(ctx, key_node, env)
            if is_error(key):
                return key
            if not is_hashable(key):
                return self.new_error(f"unusable as hash key: {type_name(key)}")
            value = self.eval(ctx, value_node, env)
            if is_error(value):
                return value
            # a repeated key replaces the earlier pair
            pairs[key.hash_key()] = HashPair(key, value)
        return Hash(pairs)

    def eval_index_expression(self, left: Object, index: Object) -> Object:
        if isinstance(left, Array) and isinstance(index, Integer):
            return self.eval_array_index_expression(left, index)
        if isinstance(left, Hash):
            return self.eval_hash_index_expression(left, index)
        return self.new_error(f"index operator not supported: {type_name(left)}")

    def eval_array_index_expression(self, array: Array, index: Integer) -> Object:
        idx = index.value
        if idx < 0 or idx >= len(array.elements):
            return NULL
        return array.elements[idx]

    def eval_hash_index_expression(self, hash_obj: Hash, index: Object) -> Object:
        if not is_hashable(index):
            return self.new_error(f"unusable as hash key: {type_name(index)}")
        pair = hash_obj.pairs.get(index.hash_key())
        if pair is None:
            return NULL
        return pair.value

    def apply_function(self, ctx: Context, fn: Object, args: List[Object]) -> Object:
        if isinstance(fn, Function):
            if len(args) != len(fn.parameters):
                return self.new_error(
                    f"wrong number of arguments: want={len(fn.parameters)}, got={len(args)}"
                )
            if self.debug_level >= 2:
                rendered = ', '.join(a.inspect() for a in args)
                self.debug(f"call fn({', '.join(str(p) for p in fn.parameters)}) with ({rendered})")
            extended_env = self.extend_function_env(fn, args)
            evaluated = self.eval(ctx, fn.body, extended_env)
            return unwrap_return_value(evaluated)
        if isinstance(fn, Builtin):
            if self.debug_level >= 2:
                self.debug(f"call builtin {fn.name} with {len(args)} argument(s)")
            result = fn.fn(args)
            if isinstance(result, Error) and self.debug_level >= 3:
                self.debug(f"error: {result.message}")
            return result
        return self.new_error(f"not a function: {type_name(fn)}")

    def extend_function_env(self, fn: Function, args: List[Object]) -> Environment:
        env = new_enclosed_environment(fn.env)
        for param, arg in zip(fn.parameters, args):
            env.set(param.value, arg)
        return env


def unwrap_return_value(obj: Optional[Object]) -> Object:
    if isinstance(obj, ReturnValue):
        return obj.value
    if obj is None:
        return NULL
    return obj


def is_truthy(obj: Optional[Object]) -> bool:
    if obj is NULL or obj is None:
        return False
    if obj is TRUE:
        return True
    if obj is FALSE:
        return False
    if isinstance(obj, Boolean):
        return obj.value
    return True


_DEFAULT_EVALUATOR = Evaluator()


def evaluate(ctx: Context, node: Node, env: Environment) -> Optional[Object]:
    """Evaluate `node` in `env`.

    Returns the resulting object (an `Error` object for in-language
    failures, None for a program whose last statement produces no value).
    Raises `EvaluationInterrupted` if `ctx` is cancelled or expires.
    """
    return _DEFAULT_EVALUATOR.execute(ctx, node, env)


def run_program(source: str, env: Optional[Environment] = None,
                ctx: Optional[Context] = None, debug_level: int = 0) -> Optional[Object]:
    """Convenience function to parse and evaluate a program from a source string."""
    program = parse_program(source)
    with Evaluator(debug_level=debug_level) as evaluator:
        return evaluator.run(program, env, ctx)
