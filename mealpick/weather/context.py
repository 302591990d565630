from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Protocol

RAIN_CONTEXT = "비"
HOT_CONTEXT = "더운날"
COLD_CONTEXT = "추운날"

HOT_CONTEXT_TEMP = 30
COLD_CONTEXT_TEMP = 5
DEFAULT_MESSAGE_TEMP = 20

PRECIPITATION_KEYWORDS = ("rain", "drizzle", "thunderstorm")

DEFAULT_MESSAGE = "오늘 같은 날씨엔 맛있는 한 끼로 기분 전환! 🍽️"

RAIN_MESSAGES = (
    "비 오는 날엔 따끈한 국물이나 바삭한 파전 어때요? ☔️",
    "빗소리 들으며 즐기는 삼겹살에 소주 한 잔! 🥓",
    "비 올 땐 얼큰한 짬뽕 국물이 최고죠! 🍜",
    "비 오는 날 감성 돋는 칼국수 한 그릇! 🥢",
    "우산 쓰고 따뜻한 국밥 한 그릇 어떠세요? 🍚",
)
SNOW_MESSAGES = (
    "눈 내리는 날엔 김이 모락모락 나는 우동 한 그릇! ❄️",
    "추운 날엔 따뜻한 전골 요리가 딱이에요! 🥘",
    "흰 눈이 오면 분위기 있는 스테이크 썰어볼까요? 🍽️",
    "눈 오는 날 호호 불며 먹는 군고구마와 라떼! 🍠",
)
HEATWAVE_MESSAGES = (
    "폭염 주의! 살얼음 동동 띄운 시원한 냉면! 🧊",
    "오늘 너무 덥죠? 시원한 콩국수로 더위 사냥! 🥢",
    "더위에 지친 몸, 삼계탕으로 이열치열 몸보신! 🐔",
    "입맛 없을 땐 새콤달콤한 비빔국수 어때요? 🥗",
)
WARM_MESSAGES = (
    "더운 날씨엔 시원한 메밀소바나 초밥 어때요? 🍣",
    "시원한 맥주와 함께 즐기는 타코는 어떠세요? 🌮",
    "가볍게 즐기는 샐러드 보울로 상큼하게! 🥗",
)
FREEZING_MESSAGES = (
    "꽁꽁 언 날씨엔 뜨끈한 순대국밥이나 김치찌개! 🍲",
    "추울 땐 보글보글 부대찌개가 생각나지 않나요? 🥘",
    "몸 녹이는 따뜻한 핫초코와 디저트가 땡기는 날! ☕",
)
COLD_MESSAGES = (
    "쌀쌀한 바람 부는 날엔 따뜻한 라멘이나 쌀국수! 🍜",
    "몸을 따뜻하게 해줄 죽이나 숭늉은 어때요? 🥣",
    "따뜻한 온메밀이나 우동으로 몸 녹이기! 🥢",
)
CLOUDY_MESSAGES = (
    "구름 낀 흐린 날엔 매콤한 떡볶이나 짬뽕으로 기분 전환! 🌶️",
    "흐린 날씨엔 기름진 전이나 튀김이 땡기지 않나요? 🍤",
    "기분 전환이 필요할 땐 달달한 디저트 타임! 🍰",
)
CLEAR_MESSAGES = (
    "화창한 날씨엔 가벼운 샌드위치나 브런치 어때요? 🥗",
    "햇살 좋은 날, 테라스에서 파스타 어떠세요? 🍝",
    "날씨가 너무 좋아요! 소풍 가는 기분으로 김밥? 🍙",
    "맑은 날씨엔 뷰 좋은 카페에서 브런치! ☕",
)
FOGGY_MESSAGES = (
    "안개 낀 날엔 분위기 있게 파스타나 스테이크! 🍷",
    "몽환적인 날씨, 따뜻한 차 한 잔과 스콘? 🍵",
)
GENERIC_MESSAGES = (
    "선선한 날씨엔 든든한 덮밥이나 가정식 백반 어때요? 🍚",
    "오늘 같은 날씨엔 치킨에 맥주가 딱! 🍗",
    "특별한 날, 초밥으로 깔끔한 한 끼! 🍣",
    "맛있는 한 끼로 오늘 하루 힘내세요! 💪",
)


class ChoiceSource(Protocol):
    def choice(self, seq: Sequence[str]) -> str: ...


def _has_any(condition: str, keywords: Sequence[str]) -> bool:
    return any(k in condition for k in keywords)


def is_precipitation(condition: str | None) -> bool:
    return _has_any((condition or "").lower(), PRECIPITATION_KEYWORDS)


def to_context_tag(temp: float | None, condition: str | None) -> str | None:
    """Context tag implied by the weather, or ``None``. Precipitation beats temperature."""
    if is_precipitation(condition):
        return RAIN_CONTEXT
    if temp is not None:
        if temp >= HOT_CONTEXT_TEMP:
            return HOT_CONTEXT
        if temp <= COLD_CONTEXT_TEMP:
            return COLD_CONTEXT
    return None


def message_band(temp: float | None, condition: str | None) -> tuple[str, ...]:
    """Candidate flavor sentences for the weather, most specific band first."""
    if not condition:
        return (DEFAULT_MESSAGE,)

    t = DEFAULT_MESSAGE_TEMP if temp is None else temp
    c = condition.lower()

    if is_precipitation(c):
        return RAIN_MESSAGES
    if "snow" in c:
        return SNOW_MESSAGES

    if t >= 30:
        return HEATWAVE_MESSAGES
    if t >= 25:
        return WARM_MESSAGES
    if t <= 0:
        return FREEZING_MESSAGES
    if t <= 10:
        return COLD_MESSAGES

    if _has_any(c, ("cloud", "overcast")):
        return CLOUDY_MESSAGES
    if _has_any(c, ("clear", "sunny")):
        return CLEAR_MESSAGES
    if _has_any(c, ("mist", "fog", "haze")):
        return FOGGY_MESSAGES
    return GENERIC_MESSAGES


def to_message(
    temp: float | None, condition: str | None, rng: ChoiceSource | None = None,
) -> str:
    """Start-screen flavor sentence. Display only; scoring never reads it."""
    return (rng or random).choice(message_band(temp, condition))
