# quickstock/intelligence/providers.py
"""
AI backends behind the Intelligence routes.

Which backend answers is decided once from configuration:

- AWS Bedrock when both AWS credentials are set (production)
- Google Gemini when only GEMINI_API_KEY is set (development / fallback)
- a mock responder otherwise

A failing backend raises ProviderError. There is no retry and no automatic
fallback to the next provider.
"""
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Type

import httpx
from botocore.exceptions import BotoCoreError, ClientError
from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from ..aws import aws_client
from ..config import Settings
from .errors import ProviderError

log = logging.getLogger(__name__)

ANTHROPIC_VERSION = "bedrock-2023-05-31"
BEDROCK_MAX_TOKENS = 1000
GEMINI_TEMPERATURE = 0.2
GEMINI_MAX_OUTPUT_TOKENS = 512


class ProviderKind(str, Enum):
    BEDROCK = "bedrock"
    GEMINI = "gemini"
    MOCK = "mock"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    ProviderKind.BEDROCK: "AWS Bedrock",
    ProviderKind.GEMINI: "Google Gemini",
    ProviderKind.MOCK: "Mock",
}


@dataclass(frozen=True)
class AIResponse:
    text: str
    provider: ProviderKind


def select_provider(settings: Settings) -> ProviderKind:
    if settings.has_aws_credentials:
        return ProviderKind.BEDROCK
    if settings.gemini_api_key:
        return ProviderKind.GEMINI
    return ProviderKind.MOCK


class Invoker(ABC):
    kind: ProviderKind

    def __init__(self, settings: Settings):
        self.settings = settings

    @abstractmethod
    def invoke(self, system_prompt: str, user_query: str) -> AIResponse:
        """Send one request to the backend and return its text."""


class BedrockInvoker(Invoker):
    kind = ProviderKind.BEDROCK

    def __init__(self, settings: Settings, client: Any = None):
        super().__init__(settings)
        self.model_id = settings.bedrock_model_id
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = aws_client("bedrock-runtime", self.settings)
        return self._client

    def invoke(self, system_prompt: str, user_query: str) -> AIResponse:
        payload = {
            "anthropic_version": ANTHROPIC_VERSION,
            "max_tokens": BEDROCK_MAX_TOKENS,
            "system": system_prompt,
            "messages": [{"role": "user", "content": user_query}],
        }
        try:
            resp = self.client.invoke_model(
                modelId=self.model_id,
                contentType="application/json",
                accept="application/json",
                body=json.dumps(payload),
            )
            body = json.loads(resp["body"].read())
        except (BotoCoreError, ClientError) as e:
            raise ProviderError(self.kind.label, f"invoke_model failed: {e}") from e
        except (KeyError, TypeError, ValueError) as e:
            raise ProviderError(self.kind.label, f"unreadable response body: {e}") from e

        text = _first_text_block(body)
        if not text:
            raise ProviderError(self.kind.label, "response has no text content")
        return AIResponse(text=text, provider=self.kind)


def _first_text_block(body: Any) -> Optional[str]:
    if not isinstance(body, dict):
        return None
    content = body.get("content")
    if not isinstance(content, list) or not content:
        return None
    first = content[0]
    if not isinstance(first, dict):
        return None
    text = first.get("text")
    return text if isinstance(text, str) else None


class GeminiInvoker(Invoker):
    kind = ProviderKind.GEMINI

    def __init__(self, settings: Settings, client: Any = None):
        super().__init__(settings)
        self.model = settings.gemini_model
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = genai.Client(api_key=self.settings.gemini_api_key)
        return self._client

    def invoke(self, system_prompt: str, user_query: str) -> AIResponse:
        log.info("Calling Gemini", extra={"model": self.model})
        try:
            resp = self.client.models.generate_content(
                model=self.model,
                contents=[genai_types.Content(role="user", parts=[genai_types.Part(text=user_query)])],
                config=genai_types.GenerateContentConfig(
                    system_instruction=system_prompt,
                    temperature=GEMINI_TEMPERATURE,
                    max_output_tokens=GEMINI_MAX_OUTPUT_TOKENS,
                ),
            )
        except (genai_errors.APIError, httpx.HTTPError) as e:
            raise ProviderError(self.kind.label, f"generate_content failed: {e}") from e

        text = getattr(resp, "text", None)
        if not text:
            raise ProviderError(self.kind.label, "response has no text")
        return AIResponse(text=text, provider=self.kind)


MOCK_TEMPLATE = (
    "** Mock Response ** (No AI credentials configured) \n\n"
    'Your query: "{query}"\n\n'
    "To enable real AI responses, add to your `.env`:\n"
    "- `AWS_ACCESS_KEY_ID` + `AWS_SECRET_ACCESS_KEY` → uses AWS Bedrock\n"
    "- Or `GEMINI_API_KEY` → uses Google Gemini"
)


class MockInvoker(Invoker):
    kind = ProviderKind.MOCK

    def invoke(self, system_prompt: str, user_query: str) -> AIResponse:
        return AIResponse(text=MOCK_TEMPLATE.format(query=user_query), provider=self.kind)


INVOKERS: Dict[ProviderKind, Type[Invoker]] = {
    ProviderKind.BEDROCK: BedrockInvoker,
    ProviderKind.GEMINI: GeminiInvoker,
    ProviderKind.MOCK: MockInvoker,
}


def build_invoker(kind: ProviderKind, settings: Settings) -> Invoker:
    return INVOKERS[kind](settings)
