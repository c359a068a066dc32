'''
Evaluator engine behind the calculator.

Operands and operators are logged onto a stack in the order they were
entered. The stack is never reduced in place: after every input it is
re-evaluated from the most recent token backward, and it can be rendered as
infix text the same way.
'''

from collections import namedtuple
from functools import wraps
import logging
import math
import sys


logger = logging.getLogger(__name__)

# Precedence of atoms, unary operations, and the tightest binding operators.
MAX_PRECEDENCE = sys.maxsize

# Sentinel produced when describing an empty sequence.
UNKNOWN = '?'


class Operand(namedtuple('Operand', 'value')):
    __slots__ = ()

    def __str__(self):
        return repr(float(self.value))


class UnaryOperation(namedtuple('UnaryOperation', 'symbol operation')):
    __slots__ = ()

    def __str__(self):
        return self.symbol


class BinaryOperation(namedtuple('BinaryOperation',
                                 'symbol precedence operation')):
    __slots__ = ()

    def __str__(self):
        return self.symbol


class Constant(namedtuple('Constant', 'symbol value')):
    __slots__ = ()

    def __str__(self):
        return self.symbol


def _ieee(f):
    '''
    Return NaN where math raises a domain error, like IEEE 754 floats do.
    '''
    @wraps(f)
    def wrapped(*args):
        try:
            return f(*args)
        except ValueError:
            return math.nan
    return wrapped


def _divide(divisor, dividend):
    '''
    Divide without raising on a zero divisor.
    '''
    try:
        return dividend / divisor
    except ZeroDivisionError:
        if dividend == 0 or math.isnan(dividend):
            return math.nan
        return math.copysign(math.inf, dividend) * math.copysign(1, divisor)


def _format(ops):
    return '[' + ', '.join(map(str, ops)) + ']'


def evaluate(ops):
    '''
    Evaluate the expression ending at the top of ops.

    Returns the value, or None if the tokens don't reduce to one, along with
    the tokens left below the expression. On failure nothing is consumed.
    '''
    if ops:
        remaining, op = ops[:-1], ops[-1]
        if isinstance(op, (Operand, Constant)):
            return op.value, remaining
        elif isinstance(op, UnaryOperation):
            operand, rest = evaluate(remaining)
            if operand is not None:
                return op.operation(operand), rest
        elif isinstance(op, BinaryOperation):
            # The most recently entered operand comes off first.
            operand2, rest = evaluate(remaining)
            if operand2 is not None:
                operand1, rest = evaluate(rest)
                if operand1 is not None:
                    return op.operation(operand1, operand2), rest
    return None, ops


def describe(ops):
    '''
    Render the expression ending at the top of ops as infix text.

    Returns the text, its precedence, and the tokens left below it. Missing
    operands render as '?'.
    '''
    if not ops:
        return UNKNOWN, MAX_PRECEDENCE, ops
    remaining, op = ops[:-1], ops[-1]
    if isinstance(op, UnaryOperation):
        inner, _, rest = describe(remaining)
        return '{}({})'.format(op.symbol, inner), MAX_PRECEDENCE, rest
    elif isinstance(op, BinaryOperation):
        right, right_precedence, rest = describe(remaining)
        left, _, rest = describe(rest)
        if right_precedence < op.precedence:
            right = '({})'.format(right)
        return ('{} {} {}'.format(left, op.symbol, right),
                op.precedence,
                rest)
    return str(op), MAX_PRECEDENCE, remaining


class Brain:
    '''
    Calculator brain: operator registry plus the stack of entered tokens.

    Not thread-safe; use one per calculator session.
    '''

    SIGN = 'ᐩ/-'

    # Binary operations get (earlier, later) operands.
    OPERATIONS = (
        BinaryOperation('×', MAX_PRECEDENCE, lambda a, b: a * b),
        BinaryOperation('÷', MAX_PRECEDENCE, _divide),
        BinaryOperation('+', 1, lambda a, b: a + b),
        BinaryOperation('−', 1, lambda a, b: b - a),
        UnaryOperation('√', _ieee(math.sqrt)),
        UnaryOperation('sin', _ieee(math.sin)),
        UnaryOperation('cos', _ieee(math.cos)),
        UnaryOperation(SIGN, lambda a: a * -1),
        Constant('π', math.pi),
    )

    def __init__(self):
        '''
        Create a brain with an empty stack.
        '''
        self.variable_values = dict()
        self._known = dict()
        for op in type(self).OPERATIONS:
            self._known[op.symbol] = op
        self._stack = []

    @property
    def stack(self):
        '''
        Snapshot of the stack, oldest token first.
        '''
        return tuple(self._stack)

    def lookup(self, symbol):
        return self._known.get(symbol)

    def clear(self):
        '''
        Clear everything from the stack.
        '''
        self._stack.clear()

    def evaluate(self):
        '''
        Evaluate the whole stack, returning None if there's nothing to show.
        '''
        result, remainder = evaluate(self._stack)
        logger.debug('%s = %s with %s left over',
                     _format(self._stack), result, _format(remainder))
        return result

    def push_operand(self, operand):
        self._stack.append(Operand(float(operand)))
        return self.evaluate()

    def perform_operation(self, symbol):
        '''
        Push the operation named by symbol and evaluate.

        Unknown symbols are ignored, but the stack is still evaluated.
        '''
        operation = self.lookup(symbol)
        if operation is not None:
            self._stack.append(operation)
        else:
            logger.debug('ignoring unknown operation %r', symbol)
        return self.evaluate()

    @property
    def description(self):
        '''
        Infix rendering of every expression on the stack, oldest first.
        '''
        expressions = []
        text, _, remaining = describe(self._stack)
        while text != UNKNOWN:
            expressions.insert(0, text)
            text, _, remaining = describe(remaining)
        return ', '.join(expressions)
