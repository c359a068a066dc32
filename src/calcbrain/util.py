from functools import wraps


class CalcError(Exception):
    pass


def wrap_user_errors(fmt):
    '''
    Decorator that converts exceptions from bad user input to CalcErrors.

    Passes through CalcErrors. The original exception is kept as the second
    argument.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except CalcError:
                raise
            except Exception as e:
                raise CalcError(fmt.format(*args, **kwargs), e)
        return wrapper
    return decorator
