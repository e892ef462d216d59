# quickstock/intelligence/responder.py
import json
import logging
from datetime import datetime, timezone
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, Field

from ..config import Settings
from .charts import ChartDescriptor, select_chart
from .context import ContextSource, LiveContext
from .errors import ValidationError
from .prompts import build_recommendations_prompt, build_system_prompt, build_what_if_prompt
from .providers import AIResponse, Invoker, build_invoker, select_provider

log = logging.getLogger(__name__)


class QueryAnswer(BaseModel):
    query: str
    response: str
    chart: ChartDescriptor = Field(discriminator="type")
    provider_used: str
    context_fetched: bool = True
    timestamp: str


class WhatIfAnswer(BaseModel):
    scenario: Any
    impact_analysis: str
    provider_used: str
    suggestions: List[str] = []


class Recommendations(BaseModel):
    recommendations: List[str]
    provider_used: str


def split_recommendations(text: str) -> List[str]:
    """One entry per line of AI text, dropping blank and 1-2 character lines."""
    return [line for line in text.split("\n") if len(line.strip()) > 2]


def _missing(value: Any) -> bool:
    # Presence only: None, blank text or an empty container.
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (dict, list, tuple)):
        return not value
    return False


class IntelligenceResponder:
    """
    Fetch context -> build prompt -> ask the provider -> package the answer.

    The provider is fixed when the responder is built; a failing provider
    fails the request.
    """

    def __init__(self, settings: Settings, source: ContextSource, invoker: Optional[Invoker] = None):
        self.settings = settings
        self.source = source
        self.invoker = invoker or build_invoker(select_provider(settings), settings)

    @property
    def provider_label(self) -> str:
        return self.invoker.kind.label

    def _ask(self, user_message: str) -> Tuple[AIResponse, LiveContext]:
        ctx = self.source.fetch()
        system_prompt = build_system_prompt(ctx)
        log.info("Using AI provider: %s", self.invoker.kind.value.upper())
        ai = self.invoker.invoke(system_prompt, user_message)
        return ai, ctx

    def answer_query(self, query: Any) -> QueryAnswer:
        if _missing(query):
            raise ValidationError("query")
        query = query if isinstance(query, str) else json.dumps(query, ensure_ascii=False)
        ai, ctx = self._ask(query)
        return QueryAnswer(
            query=query,
            response=ai.text,
            chart=select_chart(query, ctx),
            provider_used=ai.provider.label,
            timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        )

    def analyze_what_if(self, scenario: Any) -> WhatIfAnswer:
        if _missing(scenario):
            raise ValidationError("scenario")
        ai, _ = self._ask(build_what_if_prompt(scenario))
        return WhatIfAnswer(scenario=scenario, impact_analysis=ai.text, provider_used=ai.provider.label)

    def recommend(self, forecast: Any) -> Recommendations:
        if _missing(forecast):
            raise ValidationError("forecast")
        ai, _ = self._ask(build_recommendations_prompt(forecast))
        return Recommendations(recommendations=split_recommendations(ai.text), provider_used=ai.provider.label)
