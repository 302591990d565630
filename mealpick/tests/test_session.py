from unittest.mock import patch

import pytest

from mealpick.recommendations.data_store import get_menu
from mealpick.recommendations.models import SELECTION_FACETS, RecommendationResponse, Selections
from mealpick.session.state import (
    SessionState,
    WeatherSnapshot,
    apply_weather,
    next_step,
    prev_step,
    record_recommendation,
    reset,
    retry,
    select_option,
    skip_step,
)
from mealpick.session.steps import STEPS, STEPS_BY_ID, StepConfig, StepOption, get_step


def test_steps_cover_every_selection_facet():
    assert [step.id for step in STEPS] == list(SELECTION_FACETS)
    assert [step.id for step in STEPS if step.optional] == ["context"]
    assert all(step.multi_select for step in STEPS)


def test_get_step_rejects_unknown_id():
    with pytest.raises(ValueError):
        get_step("dessert_course")


def test_select_toggles_options():
    state = select_option(SessionState(), "taste", "매콤")
    state = select_option(state, "taste", "고소")
    assert state.selections.taste == ["매콤", "고소"]

    state = select_option(state, "taste", "매콤")
    assert state.selections.taste == ["고소"]


def test_select_does_not_mutate_previous_state():
    before = SessionState()
    after = select_option(before, "meal_time", "저녁")
    assert before.selections.meal_time == []
    assert after.selections.meal_time == ["저녁"]


def test_select_rejects_unknown_option():
    with pytest.raises(ValueError):
        select_option(SessionState(), "cuisine", "우주식")


def test_skip_sets_pass_on_optional_step():
    state = skip_step(SessionState(), "context")
    assert state.selections.context == ["패스"]


def test_skip_rejects_required_step():
    with pytest.raises(ValueError):
        skip_step(SessionState(), "meal_time")


def test_navigation_is_clamped():
    state = prev_step(SessionState())
    assert state.current_step == 0

    for _ in range(len(STEPS) + 3):
        state = next_step(state)
    assert state.current_step == len(STEPS) - 1

    assert prev_step(state).current_step == len(STEPS) - 2


def test_weather_injects_context_when_unset():
    state = apply_weather(SessionState(), 18.0, "Rain")
    assert state.weather == WeatherSnapshot(temp=18.0, condition="Rain", loaded=True)
    assert state.selections.context == ["비"]


def test_weather_keeps_user_context():
    state = select_option(SessionState(), "context", "해장")
    state = apply_weather(state, 33.0, "Clear")
    assert state.selections.context == ["해장"]
    assert state.weather.loaded is True


def test_weather_is_applied_once():
    state = apply_weather(SessionState(), 2.0, "Clear")
    assert state.selections.context == ["추운날"]

    again = apply_weather(state, 35.0, "Rain")
    assert again.weather.temp == 2.0
    assert again.weather.condition == "Clear"
    assert again.selections.context == ["추운날"]


def test_mild_weather_injects_nothing():
    state = apply_weather(SessionState(), 20.0, "Clouds")
    assert state.weather.loaded is True
    assert state.selections.context == []


def test_record_and_retry_accumulate_exclusions():
    first = get_menu("kimchi-jjigae")
    second = get_menu("bibimbap")

    state = record_recommendation(
        SessionState(),
        RecommendationResponse(recommended=first, alternatives=[second], total_candidates=2),
    )
    assert state.recommended_id == "kimchi-jjigae"
    assert state.alternative_ids == ["bibimbap"]

    state = retry(state)
    assert state.exclude_ids == ["kimchi-jjigae"]
    # Retrying the same pick again does not duplicate it.
    assert retry(state).exclude_ids == ["kimchi-jjigae"]

    state = record_recommendation(
        state, RecommendationResponse(recommended=second, alternatives=[], total_candidates=1),
    )
    assert retry(state).exclude_ids == ["kimchi-jjigae", "bibimbap"]


def test_retry_without_recommendation_is_noop():
    state = SessionState()
    assert retry(state) == state


def test_empty_recommendation_clears_ids():
    state = SessionState(recommended_id="old", alternative_ids=["a"])
    state = record_recommendation(
        state, RecommendationResponse(recommended=None, alternatives=[], total_candidates=0),
    )
    assert state.recommended_id is None
    assert state.alternative_ids == []


def test_reset_keeps_weather_only():
    state = SessionState(
        current_step=5,
        selections=Selections(meal_time=["저녁"], context=["비"]),
        exclude_ids=["kimchi-jjigae"],
        recommended_id="bibimbap",
        weather=WeatherSnapshot(temp=18.0, condition="Rain", loaded=True),
    )
    fresh = reset(state)
    assert fresh.current_step == 0
    assert fresh.selections == Selections()
    assert fresh.exclude_ids == []
    assert fresh.recommended_id is None
    assert fresh.weather == state.weather


def test_no_preference_replaces_concrete_answers():
    state = select_option(SessionState(), "temperature", "뜨거운")
    state = select_option(state, "temperature", "상온")
    assert state.selections.temperature == ["상온"]

    state = select_option(state, "temperature", "차가운")
    assert state.selections.temperature == ["차가운"]


def test_pass_after_weather_context_clears_rain():
    state = apply_weather(SessionState(), 18.0, "Rain")
    assert state.selections.context == ["비"]

    state = select_option(state, "context", "패스")
    assert state.selections.context == ["패스"]

    state = select_option(state, "context", "패스")
    assert state.selections.context == []


def test_picking_a_value_clears_any_sentinel():
    state = select_option(SessionState(), "cuisine", "상관없음")
    state = select_option(state, "cuisine", "중식")
    state = select_option(state, "cuisine", "일식")
    assert state.selections.cuisine == ["중식", "일식"]


def test_single_select_step_replaces_value():
    single = StepConfig(
        id="meal_time",
        title="식사 시간",
        subtitle="하나만 골라주세요",
        options=[StepOption(id="아침", label="아침"), StepOption(id="점심", label="점심")],
    )
    with patch.dict(STEPS_BY_ID, {"meal_time": single}):
        state = select_option(SessionState(), "meal_time", "아침")
        state = select_option(state, "meal_time", "점심")
    assert state.selections.meal_time == ["점심"]
