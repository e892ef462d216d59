import io
import json
from types import SimpleNamespace

AWS = dict(aws_access_key_id="AKIDEXAMPLE", aws_secret_access_key="secret")


class FakeBedrock:
    def __init__(self, body=None, exc=None):
        self.body = body
        self.exc = exc
        self.calls = []

    def invoke_model(self, **kwargs):
        self.calls.append(kwargs)
        if self.exc:
            raise self.exc
        raw = self.body if isinstance(self.body, bytes) else json.dumps(self.body).encode()
        return {"body": io.BytesIO(raw)}


class FakeGemini:
    def __init__(self, text=None, exc=None):
        self.text = text
        self.exc = exc
        self.calls = []
        self.models = SimpleNamespace(generate_content=self._generate)

    def _generate(self, **kwargs):
        self.calls.append(kwargs)
        if self.exc:
            raise self.exc
        return SimpleNamespace(text=self.text)


class RecordingInvoker:
    """Stands in for a provider; remembers every prompt it was sent."""

    def __init__(self, kind, text="ok", exc=None):
        self.kind = kind
        self.text = text
        self.exc = exc
        self.calls = []

    def invoke(self, system_prompt, user_query):
        from quickstock.intelligence.providers import AIResponse
        self.calls.append((system_prompt, user_query))
        if self.exc:
            raise self.exc
        return AIResponse(text=self.text, provider=self.kind)
