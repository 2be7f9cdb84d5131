"""Error taxonomy for the documentation-site suite."""


class HarnessError(Exception):
    """Base error for everything the harness raises on its own."""


class DriverEnvironmentError(HarnessError):
    """Browser could not be launched. Fatal for the whole run."""


class NavigationError(HarnessError):
    """Navigation failed before the page reached the load state."""


class DriverTimeout(HarnessError):
    """A driver call did not complete within its per-call timeout."""


class ElementNotFound(HarnessError):
    """No element matched the locator at lookup time."""


class ElementNotInteractable(HarnessError):
    """Element exists but could not be clicked or typed into."""


class NoSuchWindow(HarnessError):
    """Window handle does not refer to an open window."""


class AssertionFailed(AssertionError):
    def __init__(self, label: str, expected=None, actual=None, detail: str = ""):
        self.label = label
        self.expected = expected
        self.actual = actual
        self.detail = detail
        msg = label
        if detail:
            msg += f": {detail}"
        else:
            msg += f": expected {expected!r}, got {actual!r}"
        super().__init__(msg)


# Element-level problems mean the site did not behave; the rest is infrastructure.
ELEMENT_ERRORS = (ElementNotFound, ElementNotInteractable, NoSuchWindow)
