from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from ..recommendations.models import RecommendationResponse, Selections
from ..recommendations.scoring import FACET_SENTINELS, NO_CONTEXT
from ..weather.context import to_context_tag
from .steps import STEPS, get_step

logger = logging.getLogger(__name__)


class WeatherSnapshot(BaseModel):
    temp: float | None = None
    condition: str | None = None
    loaded: bool = False


class SessionState(BaseModel):
    """Everything one user's recommendation flow needs between requests."""

    current_step: int = 0
    selections: Selections = Field(default_factory=Selections)
    exclude_ids: list[str] = Field(default_factory=list)
    weather: WeatherSnapshot = Field(default_factory=WeatherSnapshot)
    recommended_id: str | None = None
    alternative_ids: list[str] = Field(default_factory=list)


def _with_selection(state: SessionState, step_id: str, values: list[str]) -> SessionState:
    selections = state.selections.model_copy(update={step_id: values})
    return state.model_copy(update={"selections": selections})


def select_option(state: SessionState, step_id: str, option_id: str) -> SessionState:
    """Toggle *option_id* on a multi-select step, or replace the value on a single-select one."""
    step = get_step(step_id)
    if option_id not in step.option_ids():
        raise ValueError(f"Unknown option {option_id!r} for step {step_id!r}")

    if not step.multi_select:
        return _with_selection(state, step_id, [option_id])

    current = state.selections.get(step_id)
    sentinel = FACET_SENTINELS.get(step_id)
    if option_id in current:
        updated = [v for v in current if v != option_id]
    elif option_id == sentinel:
        # "No preference" replaces every concrete answer on the step.
        updated = [option_id]
    else:
        updated = [v for v in current if v != sentinel] + [option_id]
    return _with_selection(state, step_id, updated)


def skip_step(state: SessionState, step_id: str) -> SessionState:
    step = get_step(step_id)
    if not step.optional:
        raise ValueError(f"Step {step_id!r} cannot be skipped")
    return _with_selection(state, step_id, [NO_CONTEXT])


def next_step(state: SessionState) -> SessionState:
    return state.model_copy(update={"current_step": min(state.current_step + 1, len(STEPS) - 1)})


def prev_step(state: SessionState) -> SessionState:
    return state.model_copy(update={"current_step": max(state.current_step - 1, 0)})


def apply_weather(state: SessionState, temp: float | None, condition: str | None) -> SessionState:
    """Record the first weather load and derive a context from it.

    Later loads are ignored. The derived context is only injected while the
    user has not chosen one.
    """
    if state.weather.loaded:
        return state

    updated = state.model_copy(
        update={"weather": WeatherSnapshot(temp=temp, condition=condition, loaded=True)},
    )
    tag = to_context_tag(temp, condition)
    if tag and not updated.selections.context:
        logger.info("Injecting weather context %s (temp=%s, condition=%s)", tag, temp, condition)
        updated = _with_selection(updated, "context", [tag])
    return updated


def record_recommendation(state: SessionState, response: RecommendationResponse) -> SessionState:
    return state.model_copy(update={
        "recommended_id": response.recommended.id if response.recommended else None,
        "alternative_ids": [m.id for m in response.alternatives],
    })


def retry(state: SessionState) -> SessionState:
    """Exclude the current pick so the next run chooses something else."""
    if state.recommended_id is None or state.recommended_id in state.exclude_ids:
        return state
    return state.model_copy(update={"exclude_ids": [*state.exclude_ids, state.recommended_id]})


def reset(state: SessionState) -> SessionState:
    # Weather is fetched once per session and survives a reset.
    return SessionState(weather=state.weather.model_copy())
