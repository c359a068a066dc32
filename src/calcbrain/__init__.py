'''
RPN calculator brain.

Keeps every operand and operator entered, in order, and re-evaluates the lot
after each one. The stack can also be rendered back as infix text, which is
what a calculator shows as its history line.

Operators: × ÷ + − √ sin cos ᐩ/- and the constant π. Missing operands make
the result None rather than raising.
'''

from .brain import Brain
from .cli import CLI
from .lexer import Lexer


__all__ = 'Brain', 'Lexer', 'CLI'
