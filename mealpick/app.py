from __future__ import annotations

import os

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, Field, ValidationError
from starlette.middleware.sessions import SessionMiddleware

from .logging_config import setup_logging
from .recommendations.data_store import get_catalog, tag_vocabulary
from .recommendations.models import (
    MenuItem,
    ReasonRequest,
    ReasonResponse,
    RecommendationRequest,
    RecommendationResponse,
)
from .recommendations.retrieval import get_reason, get_recommendations
from .session.state import (
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
from .session.steps import STEPS, StepConfig
from .weather.client import WeatherReport, fetch_weather
from .weather.context import to_message

setup_logging()

app = FastAPI(title="Menu Recommendation API", version="2.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "mealpick-secret-change-in-production"),
)


class SelectOptionRequest(BaseModel):
    step_id: str = Field(..., min_length=1)
    option_id: str = Field(..., min_length=1)


class SkipStepRequest(BaseModel):
    step_id: str = Field(..., min_length=1)


class LocationRequest(BaseModel):
    lat: float | str | None = None
    lon: float | str | None = None


class SessionWeatherResponse(BaseModel):
    weather: WeatherSnapshot
    message: str
    context: list[str]


class SessionRecommendationResponse(BaseModel):
    state: SessionState
    result: RecommendationResponse


def _load_state(request: Request) -> SessionState:
    try:
        raw_state = request.session.get("flow_state")
        return SessionState(**raw_state) if raw_state else SessionState()
    except (TypeError, ValidationError):
        return SessionState()


def _save_state(request: Request, state: SessionState) -> SessionState:
    request.session["flow_state"] = state.model_dump()
    return state


def _recommend_for(state: SessionState) -> RecommendationResponse:
    # Snapshot the answers so the engine never sees the live session object.
    return get_recommendations(
        state.selections.model_copy(deep=True),
        exclude_ids=list(state.exclude_ids),
        weather_temp=state.weather.temp,
    )


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    return {"total_menus": len(get_catalog()), "tags": tag_vocabulary()}


@app.get("/steps", response_model=list[StepConfig])
def steps() -> list[StepConfig]:
    return list(STEPS)


@app.get("/menus", response_model=list[MenuItem])
def menus() -> list[MenuItem]:
    return get_catalog()


@app.post("/recommendations", response_model=RecommendationResponse)
def recommendations(body: RecommendationRequest) -> RecommendationResponse:
    return get_recommendations(
        body.selections,
        exclude_ids=body.exclude_ids,
        weather_temp=body.weather_temp,
        count=body.count,
    )


@app.post("/reason", response_model=ReasonResponse)
def reason(body: ReasonRequest) -> ReasonResponse:
    try:
        text = get_reason(body.menu_id, body.selections)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown menu: {body.menu_id}")
    return ReasonResponse(menu_id=body.menu_id, reason=text)


@app.get("/weather", response_model=WeatherReport)
def weather(lat: str | None = None, lon: str | None = None) -> WeatherReport:
    return fetch_weather(lat, lon)


# ── Session flow endpoints ───────────────────────────────────────────────


@app.get("/session", response_model=SessionState)
def get_session(request: Request) -> SessionState:
    return _load_state(request)


@app.post("/session/select", response_model=SessionState)
def session_select(body: SelectOptionRequest, request: Request) -> SessionState:
    try:
        state = select_option(_load_state(request), body.step_id, body.option_id)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return _save_state(request, state)


@app.post("/session/skip", response_model=SessionState)
def session_skip(body: SkipStepRequest, request: Request) -> SessionState:
    try:
        state = skip_step(_load_state(request), body.step_id)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return _save_state(request, next_step(state))


@app.post("/session/next", response_model=SessionState)
def session_next(request: Request) -> SessionState:
    return _save_state(request, next_step(_load_state(request)))


@app.post("/session/prev", response_model=SessionState)
def session_prev(request: Request) -> SessionState:
    return _save_state(request, prev_step(_load_state(request)))


@app.post("/session/weather", response_model=SessionWeatherResponse)
def session_weather(body: LocationRequest, request: Request) -> SessionWeatherResponse:
    state = _load_state(request)
    if not state.weather.loaded:
        report = fetch_weather(body.lat, body.lon)
        state = _save_state(request, apply_weather(state, report.temp, report.condition))
    return SessionWeatherResponse(
        weather=state.weather,
        message=to_message(state.weather.temp, state.weather.condition),
        context=state.selections.context,
    )


@app.post("/session/recommend", response_model=SessionRecommendationResponse)
def session_recommend(request: Request) -> SessionRecommendationResponse:
    state = _load_state(request)
    result = _recommend_for(state)
    state = _save_state(request, record_recommendation(state, result))
    return SessionRecommendationResponse(state=state, result=result)


@app.post("/session/retry", response_model=SessionRecommendationResponse)
def session_retry(request: Request) -> SessionRecommendationResponse:
    state = retry(_load_state(request))
    result = _recommend_for(state)
    state = _save_state(request, record_recommendation(state, result))
    return SessionRecommendationResponse(state=state, result=result)


@app.post("/session/reset", response_model=SessionState)
def session_reset(request: Request) -> SessionState:
    return _save_state(request, reset(_load_state(request)))
