"""
Active calendar rules for the current execution context.

One process-wide default rule set is shared by everyone. ``using_rules``
pushes a modified copy onto a stack that is private to the current thread
or asyncio task, so concurrent callers never see each other's overrides.
Changing the default rule set (for example adding a holiday) is visible
immediately to every context without an active override.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import IO, Iterator, Optional, Tuple, Union

from .config import load_rules
from .domain.models import CalendarRules


logger = logging.getLogger(__name__)

_default_rules: CalendarRules = CalendarRules.default()

_local_rules_stack: ContextVar[Tuple[CalendarRules, ...]] = ContextVar(
    "businesstime_local_rules_stack",
    default=(),
)


def default_rules() -> CalendarRules:
    """The process-wide rule set used when no override is active."""
    return _default_rules


def set_default_rules(rules: CalendarRules) -> None:
    """Replace the process-wide rule set."""
    global _default_rules
    _default_rules = rules


def current_rules() -> CalendarRules:
    """The innermost override of this context, or the default rule set."""
    stack = _local_rules_stack.get()
    return stack[-1] if stack else _default_rules


def has_local_rules() -> bool:
    return bool(_local_rules_stack.get())


@contextmanager
def using_rules(rules: Optional[CalendarRules] = None, **overrides) -> Iterator[CalendarRules]:
    """
    Apply a rule set for the extent of a ``with`` block.

    The block works on a copy of ``rules`` (or of the currently active rule
    set) with ``overrides`` applied through the ``CalendarRules`` setters.
    The previous rules are restored when the block exits, also on error.

    Example::

        with using_rules(work_week=["sun", "mon", "tue", "wed", "thu"]):
            BusinessCalendar().add_business_days(friday, 1)

    Raises:
        InvalidArgument: If an override is not a calendar setting
    """
    local = (rules or current_rules()).clone().apply(**overrides)
    token = _local_rules_stack.set(_local_rules_stack.get() + (local,))
    logger.debug("Pushed calendar rules override (depth %d)", len(_local_rules_stack.get()))
    try:
        yield local
    finally:
        _local_rules_stack.reset(token)
        logger.debug("Popped calendar rules override (depth %d)", len(_local_rules_stack.get()))


def reset() -> CalendarRules:
    """Drop this context's overrides and restore the built-in default rules."""
    _local_rules_stack.set(())
    set_default_rules(CalendarRules.default())
    return _default_rules


def load(source: Union[Path, str, IO[str]]) -> CalendarRules:
    """
    Load the default rule set from a YAML document, dropping overrides.

    Raises:
        ConfigurationError: If the document cannot be loaded
    """
    rules = load_rules(source)
    reset()
    set_default_rules(rules)
    logger.debug("Default calendar rules replaced from %s", getattr(source, "name", source))
    return _default_rules
