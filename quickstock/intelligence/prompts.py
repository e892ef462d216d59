# quickstock/intelligence/prompts.py
import json
from datetime import date
from typing import Any, Optional

from .context import LiveContext

SYSTEM_TEMPLATE = """
You are the QuickStock AI Intelligence, a data-driven AI agent for a hyper-local quick commerce distribution platform in Hyderabad, India.
Answer STRICTLY based on the real-time platform data below. Cite specific SKUs, node IDs, and numbers. Use markdown with bullet points. Be concise.
Today: {today}.

--- LIVE PLATFORM DATA ---
{data}
--- END DATA ---
"""

WHAT_IF_TEMPLATE = """
Analyze this what-if scenario against the live platform data.
Scenario: {scenario}

Provide:
1. Specific affected nodes and SKUs from the data
2. Quantified impact on demand using numbers from the data
3. Concrete 2-3 step action plan with exact quantities
"""

RECOMMENDATIONS_TEMPLATE = """
Given this forecast AND the live platform data, provide exactly 3 prioritized recommendations.
Forecast: {forecast}

Each recommendation must name the specific SKU, node ID, and give a concrete action with exact quantities.
"""


_DAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def format_today(d: date) -> str:
    # en-IN long form, e.g. "Monday, 19 October 2026"; independent of the process locale
    return f"{_DAYS[d.weekday()]}, {d.day} {_MONTHS[d.month - 1]} {d.year}"


def build_system_prompt(context: LiveContext, today: Optional[date] = None) -> str:
    return SYSTEM_TEMPLATE.format(
        today=format_today(today or date.today()),
        data=context.model_dump_json(),
    )


def build_what_if_prompt(scenario: Any) -> str:
    return WHAT_IF_TEMPLATE.format(scenario=json.dumps(scenario, ensure_ascii=False))


def build_recommendations_prompt(forecast: Any) -> str:
    return RECOMMENDATIONS_TEMPLATE.format(forecast=json.dumps(forecast, ensure_ascii=False))
