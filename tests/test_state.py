import pytest

from kconfig2html.errors import (
    DependencyOverflowError,
    DependencyUnderflowError,
    ExitCode,
    NestingOverflowError,
    NestingUnderflowError,
)
from kconfig2html.state import DependencyStack, NestingState


def test_paragraph_numbers_advance_and_reset():
    nesting = NestingState()
    nesting.enter()
    assert nesting.paragraph == "1"

    nesting.enter()
    assert nesting.paragraph == "1.1"
    nesting.advance()
    assert nesting.paragraph == "1.2"

    nesting.leave()
    nesting.advance()
    assert nesting.paragraph == "2"

    nesting.enter()
    assert nesting.paragraph == "2.1"


def test_nesting_limits():
    nesting = NestingState(max_levels=2)
    nesting.enter()
    nesting.enter()
    with pytest.raises(NestingOverflowError) as excinfo:
        nesting.enter("Kconfig", 7)
    assert excinfo.value.exit_code == ExitCode.NESTING_TOO_DEEP
    assert str(excinfo.value) == "Kconfig:7: Nesting level is too deep, aborting"

    nesting.leave()
    nesting.leave()
    with pytest.raises(NestingUnderflowError):
        nesting.leave()
    with pytest.raises(NestingUnderflowError):
        nesting.advance()


def test_anchor_counters_are_independent():
    nesting = NestingState()

    assert nesting.next_menu_anchor() == "menu_0"
    assert nesting.next_choice_anchor() == "choice_0"
    assert nesting.next_menu_anchor() == "menu_1"
    assert nesting.next_choice_anchor() == "choice_1"


def test_dependency_stack():
    deps = DependencyStack(capacity=2)
    deps.push("ARCH_ARM")
    deps.push("NET && !DISABLE_SOCKETS")

    assert deps.snapshot() == ("ARCH_ARM", "NET && !DISABLE_SOCKETS")
    with pytest.raises(DependencyOverflowError):
        deps.push("ONE_TOO_MANY")

    assert deps.pop() == "NET && !DISABLE_SOCKETS"
    assert deps.pop() == "ARCH_ARM"
    assert len(deps) == 0
    with pytest.raises(DependencyUnderflowError) as excinfo:
        deps.pop()
    assert excinfo.value.exit_code == ExitCode.DEPENDENCIES_UNDERFLOW
