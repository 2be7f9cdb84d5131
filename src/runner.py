import asyncio
import random
import time
from dataclasses import asdict, dataclass, field
from enum import Enum

from errors import ELEMENT_ERRORS, AssertionFailed, DriverEnvironmentError, DriverTimeout
from page_facade import BrowserPage
from session import DriverConfig, close_session, open_session


class Outcome(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    ERRORED = "errored"


class LifecycleState(str, Enum):
    INIT = "init"
    OPEN = "open"
    ACTIVE = "active"
    CLOSING = "closing"
    CLOSED = "closed"


@dataclass
class ScenarioResult:
    name: str
    description: str
    outcome: Outcome
    error_kind: str = ""
    error: str = ""
    expected: object = None
    actual: object = None
    duration: float = 0.0
    lifecycle: list = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.outcome is Outcome.PASSED

    def to_dict(self) -> dict:
        data = asdict(self)
        data["outcome"] = self.outcome.value
        data["lifecycle"] = [s.value for s in self.lifecycle]
        for key in ("expected", "actual"):
            if data[key] is not None and not isinstance(data[key], (str, int, float, bool)):
                data[key] = repr(data[key])
        return data


def classify(error: BaseException) -> Outcome:
    """Assertion and element-level failures mean the site misbehaved; anything else is infrastructure."""
    if isinstance(error, AssertionFailed) or isinstance(error, ELEMENT_ERRORS):
        return Outcome.FAILED
    return Outcome.ERRORED


def format_result_line(result: ScenarioResult) -> str:
    if result.passed:
        return f"✓ Passed: {result.name} ({result.duration:.1f}s)"
    marker = "Failed" if result.outcome is Outcome.FAILED else "Errored"
    line = f"✖ {marker}: {result.name} — {result.error_kind}: {result.error}"
    return line if len(line) < 400 else (line[:397] + "...")


async def run_scenario(scenario, config: DriverConfig, verbose: bool = False, timeout: float | None = None,
                       opener=open_session, closer=close_session) -> ScenarioResult:
    """Run one scenario against a fresh browser session.

    Teardown always runs once the session is open, including when the body
    fails, times out or is cancelled. DriverEnvironmentError from opening the
    session propagates so the suite can stop.
    """
    states = [LifecycleState.INIT]
    result = ScenarioResult(name=scenario.name, description=scenario.description, outcome=Outcome.PASSED, lifecycle=states)
    started = time.monotonic()
    if verbose:
        print(f"🏃 {scenario.name}: {scenario.description}")

    session = await opener(config, verbose=verbose)
    states.append(LifecycleState.OPEN)
    try:
        states.append(LifecycleState.ACTIVE)
        page = BrowserPage(session, verbose=verbose)
        body = scenario.body(page)
        if timeout:
            try:
                await asyncio.wait_for(body, timeout=timeout)
            except asyncio.TimeoutError as e:
                raise DriverTimeout(f"Scenario exceeded {timeout:g}s") from e
        else:
            await body
    except Exception as e:
        result.outcome = classify(e)
        result.error_kind = type(e).__name__
        result.error = str(e)
        if isinstance(e, AssertionFailed):
            result.expected = e.expected
            result.actual = e.actual
        if verbose:
            try:
                current_url = session.page.url
            except Exception:
                current_url = ""
            print(f"→ {scenario.name} stopped at url={current_url}")
    finally:
        states.append(LifecycleState.CLOSING)
        await closer(session, verbose=verbose)
        states.append(LifecycleState.CLOSED)
        result.duration = time.monotonic() - started
    return result


def order_scenarios(scenarios: list, shuffle: bool = False, seed: int | None = None) -> list:
    ordered = list(scenarios)
    if shuffle:
        random.Random(seed).shuffle(ordered)
    return ordered


async def run_suite(scenarios: list, config: DriverConfig, verbose: bool = False, timeout: float | None = None,
                    opener=open_session, closer=close_session) -> dict:
    results: list[ScenarioResult] = []
    aborted = ""
    for scenario in scenarios:
        try:
            result = await run_scenario(scenario, config, verbose=verbose, timeout=timeout, opener=opener, closer=closer)
        except DriverEnvironmentError as e:
            result = ScenarioResult(
                name=scenario.name,
                description=scenario.description,
                outcome=Outcome.ERRORED,
                error_kind=type(e).__name__,
                error=str(e),
                lifecycle=[LifecycleState.INIT],
            )
            results.append(result)
            print(format_result_line(result))
            aborted = str(e)
            print(f"⛔ Browser unavailable, skipping {len(scenarios) - len(results)} remaining scenario(s)")
            break
        results.append(result)
        print(format_result_line(result))

    passed = sum(1 for r in results if r.passed)
    return {
        "tests": results,
        "total": len(scenarios),
        "passed": passed,
        "failed": sum(1 for r in results if r.outcome is Outcome.FAILED),
        "errored": sum(1 for r in results if r.outcome is Outcome.ERRORED),
        "not_run": len(scenarios) - len(results),
        "aborted": aborted,
    }


def suite_succeeded(summary: dict) -> bool:
    return summary["total"] > 0 and summary["passed"] == summary["total"]
