import json
from datetime import date

from quickstock.intelligence.context import StaticContextSource
from quickstock.intelligence.prompts import (
    build_recommendations_prompt,
    build_system_prompt,
    build_what_if_prompt,
    format_today,
)


def test_format_today_en_in():
    assert format_today(date(2026, 10, 19)) == "Monday, 19 October 2026"
    assert format_today(date(2026, 1, 1)) == "Thursday, 1 January 2026"


def test_format_today_ignores_locale():
    # 2026-10-19 is a Monday; walk one week, then the first of every month
    week = [format_today(date(2026, 10, 19 + i)).split(",")[0] for i in range(7)]
    assert week == ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
    months = [format_today(date(2026, m, 1)).split(" ")[2] for m in range(1, 13)]
    assert months == ["January", "February", "March", "April", "May", "June",
                      "July", "August", "September", "October", "November", "December"]


def test_system_prompt_embeds_context():
    ctx = StaticContextSource().fetch()
    prompt = build_system_prompt(ctx, today=date(2026, 10, 19))
    assert "QuickStock AI Intelligence" in prompt
    assert "Hyderabad" in prompt
    assert "STRICTLY" in prompt
    assert "Today: Monday, 19 October 2026." in prompt

    data = prompt.split("--- LIVE PLATFORM DATA ---")[1].split("--- END DATA ---")[0]
    assert json.loads(data)["next_3day_forecast"]["milk_1L_500034"]["p50"] == 315


def test_system_prompt_is_deterministic():
    ctx = StaticContextSource().fetch()
    d = date(2026, 10, 19)
    assert build_system_prompt(ctx, today=d) == build_system_prompt(ctx, today=d)


def test_what_if_prompt():
    p = build_what_if_prompt({"type": "rain"})
    assert 'Scenario: {"type": "rain"}' in p
    assert "2-3 step action plan" in p


def test_recommendations_prompt():
    p = build_recommendations_prompt({"product_id": "tomato_1kg", "pincode": "500001"})
    assert "exactly 3 prioritized recommendations" in p
    assert '"product_id": "tomato_1kg"' in p
