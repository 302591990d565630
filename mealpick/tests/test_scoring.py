from mealpick.recommendations.data_store import get_catalog
from mealpick.recommendations.models import MenuItem, MenuTags, Selections
from mealpick.recommendations.scoring import (
    CONTEXT_MATCH,
    MEAL_TIME_MATCH,
    MEAL_TIME_MISMATCH,
    SYNERGY_RULES,
    active_values,
    score,
    score_menu,
)


def _menu(menu_id: str, calories: str = "보통", **tags) -> MenuItem:
    base = {"meal_time": ["점심"], "cuisine": ["한식"], "dish_type": ["밥"], "satiety": "적당함"}
    base.update(tags)
    return MenuItem(
        id=menu_id,
        name=menu_id,
        description=f"{menu_id} 설명",
        calories=calories,
        tags=MenuTags(**base),
    )



# ── Step 0: exclusion and hard filters ───────────────────────────────────


def test_score_is_deterministic():
    catalog = get_catalog()
    selections = Selections(meal_time=["저녁"], taste=["매콤", "고소"], context=["비"], temperature=["뜨거운"])
    first = score(catalog, selections, ["kimchi-jjigae"], 3.0)
    second = score(catalog, selections, ["kimchi-jjigae"], 3.0)
    assert [(s.menu.id, s.score) for s in first] == [(s.menu.id, s.score) for s in second]


def test_excluded_ids_never_scored():
    catalog = [_menu("a"), _menu("b"), _menu("c")]
    scored = score(catalog, Selections(), exclude_ids={"a", "c"})
    assert [s.menu.id for s in scored] == ["b"]


def test_empty_catalog_yields_empty_list():
    assert score([], Selections(meal_time=["아침"])) == []


def test_everything_excluded_yields_empty_list():
    catalog = [_menu("a"), _menu("b")]
    assert score(catalog, Selections(), exclude_ids=["a", "b"]) == []


def test_cuisine_filter_applied_with_three_matches():
    catalog = [
        _menu("k1"), _menu("k2"), _menu("k3"),
        _menu("c1", cuisine=["중식"]), _menu("c2", cuisine=["중식"]),
    ]
    scored = score(catalog, Selections(cuisine=["한식"]))
    assert sorted(s.menu.id for s in scored) == ["k1", "k2", "k3"]


def test_cuisine_filter_skipped_when_too_narrow():
    catalog = [
        _menu("k1"), _menu("k2"), _menu("k3"),
        _menu("c1", cuisine=["중식"]), _menu("c2", cuisine=["중식"]),
    ]
    scored = score(catalog, Selections(cuisine=["중식"]))
    ids = {s.menu.id for s in scored}
    assert ids == {"k1", "k2", "k3", "c1", "c2"}


def test_cuisine_filter_accepts_any_of_several_values():
    catalog = [
        _menu("k1"), _menu("c1", cuisine=["중식"]), _menu("j1", cuisine=["일식"]),
        _menu("w1", cuisine=["양식"]),
    ]
    scored = score(catalog, Selections(cuisine=["중식", "일식", "한식"]))
    assert sorted(s.menu.id for s in scored) == ["c1", "j1", "k1"]


def test_cuisine_any_sentinel_disables_filter():
    catalog = [_menu("k1"), _menu("k2"), _menu("k3"), _menu("c1", cuisine=["중식"])]
    scored = score(catalog, Selections(cuisine=["상관없음", "한식"]))
    assert len(scored) == 4


def test_dish_type_filter_threshold_is_two():
    catalog = [_menu("rice1"), _menu("rice2"), _menu("noodle1", dish_type=["면"])]
    assert len(score(catalog, Selections(dish_type=["면"]))) == 3

    catalog.append(_menu("noodle2", dish_type=["면"]))
    scored = score(catalog, Selections(dish_type=["면"]))
    assert sorted(s.menu.id for s in scored) == ["noodle1", "noodle2"]


def test_unknown_selection_values_degrade_gracefully():
    catalog = [_menu("a"), _menu("b"), _menu("c")]
    scored = score(catalog, Selections(cuisine=["우주식"], meal_time=["새벽"], context=["외계인"]))
    assert len(scored) == 3
    for s in scored:
        assert s.breakdown["meal_time"] == MEAL_TIME_MISMATCH
        assert "context" not in s.breakdown


# ── Step 1: per-facet scoring ────────────────────────────────────────────


def test_meal_time_mismatch_costs_at_least_eighty():
    selections = Selections(meal_time=["아침"])
    match = score_menu(_menu("match", meal_time=["아침"]), selections)
    miss = score_menu(_menu("miss", meal_time=["저녁"]), selections)
    assert match.score - miss.score >= 80
    assert match.score - miss.score == MEAL_TIME_MATCH - MEAL_TIME_MISMATCH


def test_companion_match_and_penalty():
    selections = Selections(companion=["연인"])
    assert score_menu(_menu("a", companion=["연인", "친구"]), selections).breakdown["companion"] == 20
    assert score_menu(_menu("b", companion=["혼밥"]), selections).breakdown["companion"] == -15


def test_taste_ratio_scoring():
    selections = Selections(taste=["매콤", "달콤"])
    half = score_menu(_menu("half", taste=["매콤"]), selections)
    full = score_menu(_menu("full", taste=["매콤", "달콤"]), selections)
    none = score_menu(_menu("none", taste=["담백"]), selections)
    # 1 × 20 + round(0.5 × 15) rounds half up
    assert half.breakdown["taste"] == 28
    assert full.breakdown["taste"] == 55
    assert none.breakdown["taste"] == -30


def test_context_is_bonus_only():
    selections = Selections(context=["해장"])
    tagged = score_menu(_menu("tagged", context=["해장", "비"]), selections)
    plain = score_menu(_menu("plain", context=["비"]), selections)
    assert tagged.score - plain.score == CONTEXT_MATCH
    assert "context" not in plain.breakdown


def test_sentinels_skip_facets():
    selections = Selections(temperature=["상온"], budget=["상관없음"], context=["패스"], cooking_method=["상관없음"])
    result = score_menu(_menu("a", temperature=["차가운"], budget=["플렉스"], context=["패스"]), selections)
    assert result.breakdown == {}
    assert result.score == 0


def test_active_values_drop_facet_with_sentinel_anywhere():
    selections = Selections(context=["비", "패스"], temperature=["뜨거운", "상온"], cuisine=["한식"])
    assert active_values(selections, "context") == []
    assert active_values(selections, "temperature") == []
    assert active_values(selections, "cuisine") == ["한식"]
    # Facets without a no-preference option pass through.
    assert active_values(Selections(meal_time=["아침"]), "meal_time") == ["아침"]


def test_context_mixed_with_pass_scores_nothing():
    tteok = _menu("tteok", dish_type=["빵분식"], context=["비"])
    result = score_menu(tteok, Selections(context=["비", "패스"]))
    assert "context" not in result.breakdown
    assert "synergy:비=분식" not in result.breakdown
    assert result.score == 0


def test_temperature_mixed_with_room_temp_disables_synergy():
    stew = _menu("stew", dish_type=["국찌개"], temperature=["뜨거운"])
    result = score_menu(stew, Selections(context=["비"], temperature=["뜨거운", "상온"]))
    assert "temperature" not in result.breakdown
    assert "synergy:비+뜨거운=국물" not in result.breakdown


def test_dish_type_mixed_with_any_disables_filter_and_synergy():
    catalog = [_menu("rice1"), _menu("rice2"), _menu("stew1", dish_type=["국찌개"]), _menu("stew2", dish_type=["국찌개"])]
    selections = Selections(context=["추운날"], dish_type=["국찌개", "상관없음"])
    scored = score(catalog, selections)
    assert len(scored) == 4
    spicy_stew = score_menu(_menu("spicy", dish_type=["국찌개"], taste=["매콤"]), selections)
    assert "synergy:추운날+국찌개=매콤" not in spicy_stew.breakdown


def test_temperature_and_budget_penalties():
    selections = Selections(temperature=["뜨거운"], budget=["가성비"])
    result = score_menu(_menu("a", temperature=["차가운"], budget=["플렉스"]), selections)
    assert result.breakdown["temperature"] == -20
    assert result.breakdown["budget"] == -10


def test_cooking_method_bonus_without_penalty():
    selections = Selections(cooking_method=["국물"])
    assert score_menu(_menu("soup", cooking_method=["국물"]), selections).breakdown["cooking_method"] == 10
    assert "cooking_method" not in score_menu(_menu("fried", cooking_method=["튀김"]), selections).breakdown


def test_texture_affinity_from_tastes():
    selections = Selections(taste=["매콤", "새콤"])
    result = score_menu(_menu("a", taste=["매콤"], texture=["쫄깃", "아삭", "꾸덕"]), selections)
    # 매콤 → 쫄깃/탱글, 새콤 → 아삭/탱글
    assert result.breakdown["texture"] == 10


def test_satiety_follows_meal_time():
    breakfast = Selections(meal_time=["아침"])
    assert score_menu(_menu("light", meal_time=["아침"], satiety="가벼움"), breakfast).breakdown["satiety"] == 8
    assert score_menu(_menu("huge", meal_time=["아침"], satiety="배터짐"), breakfast).breakdown["satiety"] == -5
    assert "satiety" not in score_menu(_menu("solid", meal_time=["아침"], satiety="든든함"), breakfast).breakdown

    snack = Selections(meal_time=["간식"])
    assert score_menu(_menu("solid", satiety="든든함"), snack).breakdown["satiety"] == -5

    both = Selections(meal_time=["아침", "저녁"])
    assert score_menu(_menu("huge", satiety="배터짐"), both).breakdown["satiety"] == 8


def test_dish_time_affinity():
    breakfast = Selections(meal_time=["아침"])
    assert score_menu(_menu("noodle", dish_type=["면"]), breakfast).breakdown["dish_time_affinity"] == -5
    assert score_menu(_menu("soup-rice", dish_type=["국찌개", "밥"]), breakfast).breakdown["dish_time_affinity"] == 10
    assert "dish_time_affinity" not in score_menu(_menu("salad", dish_type=["샐러드"]), breakfast).breakdown

    brunch = Selections(meal_time=["아침", "점심"])
    assert score_menu(_menu("noodle", dish_type=["면"]), brunch).breakdown["dish_time_affinity"] == 5


def test_weather_temperature_nudges():
    cold_dish = _menu("cold", temperature=["차가운"])
    hot_dish = _menu("hot", temperature=["뜨거운"])
    selections = Selections()

    assert score_menu(cold_dish, selections, weather_temp=30).breakdown["weather_temp"] == 8
    assert score_menu(hot_dish, selections, weather_temp=-2).breakdown["weather_temp"] == 8
    assert "weather_temp" not in score_menu(hot_dish, selections, weather_temp=30).breakdown
    assert "weather_temp" not in score_menu(cold_dish, selections, weather_temp=15).breakdown
    assert score_menu(cold_dish, selections, weather_temp=None).score == 0


# ── Synergy rules ────────────────────────────────────────────────────────


def test_synergy_rules_are_declarative_and_only_diet_penalises():
    labels = [rule.label for rule in SYNERGY_RULES]
    assert len(labels) == len(set(labels))
    with_penalty = [rule.label for rule in SYNERGY_RULES if rule.penalty_tag is not None]
    assert with_penalty == ["다이어트=저칼"]
    for rule in SYNERGY_RULES:
        assert rule.points > 0
        assert rule.conditions


def test_synergy_condition_matches_multi_value_selection():
    rain_hot = next(r for r in SYNERGY_RULES if r.label == "비+뜨거운=국물")
    assert rain_hot.applies(Selections(context=["해장", "비"], temperature=["뜨거운"]))
    assert not rain_hot.applies(Selections(context=["비"]))
    assert not rain_hot.applies(Selections(context=["해장"], temperature=["뜨거운"]))


def test_diet_rule_is_two_sided():
    selections = Selections(context=["다이어트"])
    low = score_menu(_menu("low", calories="저칼로리"), selections)
    neutral = score_menu(_menu("neutral", calories="보통"), selections)
    high = score_menu(_menu("high", calories="고칼로리"), selections)
    assert low.score > neutral.score
    assert high.score < neutral.score
    assert low.breakdown["synergy:다이어트=저칼"] == 15
    assert high.breakdown["synergy:다이어트=저칼"] == -15


def test_synergy_bonuses_stack():
    selections = Selections(context=["비"], temperature=["뜨거운"])
    result = score_menu(_menu("a", dish_type=["국찌개", "빵분식"], temperature=["뜨거운"]), selections)
    assert result.breakdown["synergy:비+뜨거운=국물"] == 15
    assert result.breakdown["synergy:비=분식"] == 8


def test_companion_synergies():
    group = score_menu(_menu("bbq", dish_type=["고기구이"], companion=["회식"]), Selections(companion=["회식"]))
    assert group.breakdown["synergy:회식=고기"] == 12

    date = score_menu(_menu("pasta", cuisine=["양식"], companion=["연인"]), Selections(companion=["연인"]))
    assert date.breakdown["synergy:연인=양식"] == 8


# ── Scenario ─────────────────────────────────────────────────────────────


def test_breakfast_hangover_prefers_plain_soup():
    selections = Selections(meal_time=["아침"], taste=["담백"], context=["해장"])
    soup = _menu(
        "soup", meal_time=["아침"], taste=["담백"], dish_type=["국찌개"], context=["해장"],
    )
    dessert = _menu("dessert", meal_time=["아침"], taste=["달콤"], dish_type=["디저트"])

    soup_scored = score_menu(soup, selections)
    dessert_scored = score_menu(dessert, selections)

    assert soup_scored.breakdown["synergy:아침해장=국물"] == 20
    assert soup_scored.score - dessert_scored.score >= 20 + 25


def test_breakfast_hangover_on_catalog_ranks_breakfast_soup_first():
    selections = Selections(meal_time=["아침"], taste=["담백"], context=["해장"])
    scored = sorted(score(get_catalog(), selections), key=lambda s: s.score, reverse=True)
    top = scored[0].menu
    assert "아침" in top.tags.meal_time
    assert "국찌개" in top.tags.dish_type
    assert "해장" in top.tags.context
