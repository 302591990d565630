from __future__ import annotations

from .models import SELECTION_FACETS, MenuItem, Selections
from .scoring import active_values

MAX_REASONS = 2

CONTEXT_REASONS: dict[str, str] = {
    "해장": "속이 풀리는 해장 메뉴로 딱이에요!",
    "다이어트": "가볍고 건강하게 즐길 수 있어요!",
    "컨디션": "몸이 안 좋을 때 부담 없이 먹기 좋아요.",
    "비": "비 오는 날 분위기와 찰떡이에요!",
    "더운날": "더운 날씨에 딱 맞는 선택이에요!",
    "추운날": "추운 날 몸을 따뜻하게 녹여줄 거예요.",
    "기분좋은날": "좋은 날엔 맛있는 걸로 기분 UP!",
    "시간없어": "빠르게 든든하게 해결할 수 있어요!",
    "우울해": "꿀꿀한 기분을 달래줄 소울푸드예요.",
    "월급날": "고생한 나에게 주는 근사한 선물!",
    "넷플릭스": "정주행하면서 먹기 딱 좋은 메뉴예요!",
}

COMPANION_REASONS: dict[str, str] = {
    "혼밥": "혼자서도 편하게 즐기기 좋아요.",
    "연인": "데이트 메뉴로 분위기 있는 선택!",
    "친구": "친구들과 나눠 먹으면 더 맛있어요!",
    "가족": "온 가족이 함께 즐기기 좋은 메뉴예요.",
    "회식": "다 같이 먹으면 분위기 최고!",
}

TEXTURE_REASONS: dict[str, str] = {
    "바삭": "바삭한 식감이 매력적이에요!",
    "쫄깃": "쫄깃한 식감이 일품이에요!",
    "부드러움": "부드럽게 넘어가는 맛이 좋아요.",
    "아삭": "아삭한 채소가 식감을 더해요!",
    "꾸덕": "꾸덕한 식감이 중독적이에요!",
}


def _context_reason(menu: MenuItem, selections: Selections) -> str | None:
    for context in active_values(selections, "context"):
        if context in menu.tags.context and context in CONTEXT_REASONS:
            return CONTEXT_REASONS[context]
    return None


def _taste_reason(menu: MenuItem, selections: Selections) -> str | None:
    matched = [t for t in selections.get("taste") if t in menu.tags.taste]
    if not matched:
        return None
    return f"{' + '.join(matched)} 맛을 좋아하신다면 강력 추천!"


def _companion_reason(menu: MenuItem, selections: Selections) -> str | None:
    for companion in selections.get("companion"):
        if companion in menu.tags.companion and companion in COMPANION_REASONS:
            return COMPANION_REASONS[companion]
    return None


def _texture_reason(menu: MenuItem) -> str | None:
    for texture in menu.tags.texture:
        if texture in TEXTURE_REASONS:
            return TEXTURE_REASONS[texture]
    return None


def explain(menu: MenuItem, selections: Selections) -> str:
    """Short justification for recommending *menu* given the user's answers.

    Falls back to the item's own description when nothing specific matches.
    """
    reasons = [
        r
        for r in (
            _context_reason(menu, selections),
            _taste_reason(menu, selections),
            _companion_reason(menu, selections),
        )
        if r
    ]
    # Empty answers go straight to the description.
    answered = any(selections.get(facet) for facet in SELECTION_FACETS)
    if answered and len(reasons) < MAX_REASONS:
        texture = _texture_reason(menu)
        if texture:
            reasons.append(texture)

    if not reasons:
        return menu.description
    return " ".join(reasons[:MAX_REASONS])
