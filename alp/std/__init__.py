from .core import BUILTINS, lookup_builtin

__all__ = ['BUILTINS', 'lookup_builtin']
