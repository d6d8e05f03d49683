"""Indicator field setup: maps element markers to visual indicators.

A renderer asks which indicators apply to an element: every field whose
element condition holds contributes the first of its states whose marker
condition holds. Conditions are user code; one that raises is logged and
treated as not matching so a single bad marker never breaks a repaint.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from .types import TEST_STATUS_FIELD, ElementState, WorkspaceElementInfo

logger = logging.getLogger(__name__)

Markers = dict[str, Any]


@dataclass(frozen=True)
class IndicatorState:
    """One visual state of an indicator field."""

    condition: Callable[[Markers], bool]
    style: str  # renderer token (symbol, css classes, ...)
    label: Callable[[Markers], str]


@dataclass(frozen=True)
class IndicatorField:
    """An indicator slot shown for elements matching ``condition``."""

    condition: Callable[[WorkspaceElementInfo], bool]
    states: tuple[IndicatorState, ...] = ()


@dataclass(frozen=True)
class ActiveIndicator:
    style: str
    label: str


@dataclass
class IndicatorFieldSetup:
    fields: list[IndicatorField] = field(default_factory=list)

    def active_indicators(
        self, element: WorkspaceElementInfo, markers: Markers
    ) -> list[ActiveIndicator]:
        result: list[ActiveIndicator] = []
        for indicator_field in self.fields:
            if not _safe(indicator_field.condition, element):
                continue
            for state in indicator_field.states:
                if _safe(state.condition, markers):
                    result.append(ActiveIndicator(state.style, state.label(markers)))
                    break
        return result


def _safe(condition: Callable[[Any], bool], arg: Any) -> bool:
    try:
        return bool(condition(arg))
    except Exception as e:
        logger.debug("Indicator condition failed: %s", e)
        return False


def _status_is(state: ElementState) -> Callable[[Markers], bool]:
    return lambda markers: markers.get(TEST_STATUS_FIELD) == state


def status_indicator_setup(suffix: str = ".tcl") -> IndicatorFieldSetup:
    """Running/success/failure indicator for executable test files."""
    return IndicatorFieldSetup(
        fields=[
            IndicatorField(
                condition=lambda element: element.name.endswith(suffix),
                states=(
                    IndicatorState(
                        condition=_status_is(ElementState.RUNNING),
                        style="⏳",
                        label=lambda m: "Test is running",
                    ),
                    IndicatorState(
                        condition=_status_is(ElementState.LAST_RUN_SUCCESSFUL),
                        style="✅",
                        label=lambda m: "Last run was successful",
                    ),
                    IndicatorState(
                        condition=_status_is(ElementState.LAST_RUN_FAILED),
                        style="❌",
                        label=lambda m: "Last run has failed",
                    ),
                ),
            )
        ]
    )
