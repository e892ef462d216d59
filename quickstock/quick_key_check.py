from quickstock.config import get_settings
from quickstock.intelligence.providers import build_invoker, select_provider

s = get_settings()
kind = select_provider(s)
print("AWS creds?", s.has_aws_credentials, "Gemini key?", bool(s.gemini_api_key))
print("Active provider:", kind.label)
r = build_invoker(kind, s).invoke("Reply with the single word OK.", "ping")  # raises ProviderError if keys are bad
print(f"{kind.label} OK:", r.text[:80])
