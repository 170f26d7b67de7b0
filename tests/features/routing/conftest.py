"""BDD step definitions for severity routing features."""

from dataclasses import dataclass

import pytest
from pytest_bdd import given, parsers, then, when

from flatlog.core.models import Severity
from flatlog.logger import Logger


@dataclass
class RoutingScenarioContext:
    """State shared between the steps of one scenario."""

    logger: Logger | None = None
    exit_status: int | None = None


@pytest.fixture
def ctx() -> RoutingScenarioContext:
    """Fresh scenario context for each test."""
    return RoutingScenarioContext()


def _lines(streams, name: str) -> list[str]:
    stdout, stderr = streams
    stream = stdout if name == "stdout" else stderr
    return stream.getvalue().splitlines()


def _log(ctx: RoutingScenarioContext, level: str, message: str) -> None:
    try:
        getattr(ctx.logger, level)(message)
    except SystemExit as exc:
        ctx.exit_status = exc.code


@given(parsers.parse('a KVP logger with threshold "{threshold}"'))
def step_logger(ctx: RoutingScenarioContext, make_logger, threshold: str) -> None:
    ctx.logger = make_logger(threshold=Severity.parse(threshold))


@when(parsers.parse('an event is logged at "{level}" with message "{message}"'))
def step_log_one(ctx: RoutingScenarioContext, level: str, message: str) -> None:
    _log(ctx, level, message)


@when(parsers.parse('events are logged at "{levels}"'))
def step_log_many(ctx: RoutingScenarioContext, levels: str) -> None:
    for level in levels.split(","):
        _log(ctx, level.strip(), "event")


@then(parsers.re(r"(?P<name>stdout|stderr) has (?P<count>\d+) lines?"))
def step_line_count(streams, name: str, count: str) -> None:
    assert len(_lines(streams, name)) == int(count)


@then(parsers.parse("the stderr line contains {fragment}"))
def step_stderr_contains(streams, fragment: str) -> None:
    assert fragment in _lines(streams, "stderr")[0]


@then(parsers.parse("the process exit status is {status:d}"))
def step_exit_status(ctx: RoutingScenarioContext, status: int) -> None:
    assert ctx.exit_status == status
