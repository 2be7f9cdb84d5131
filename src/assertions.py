import inspect

from errors import AssertionFailed


def assert_equals(expected, actual, label: str = "values differ") -> None:
    if expected != actual:
        raise AssertionFailed(label, expected=expected, actual=actual)


def assert_true(condition, label: str = "condition is false") -> None:
    if not condition:
        raise AssertionFailed(label, expected=True, actual=condition)


async def assert_throws(error_kind: type[BaseException], action, label: str = ""):
    """Run action and return the error it raised; fail if it raised nothing.

    action may be a plain callable or a coroutine function. Errors of any
    other kind propagate untouched.
    """
    label = label or f"expected {error_kind.__name__}"
    try:
        result = action()
        if inspect.isawaitable(result):
            await result
    except error_kind as e:
        return e
    raise AssertionFailed(label, detail=f"{error_kind.__name__} was not raised")
