import json
import logging

from quickstock.config import DEFAULT_BEDROCK_MODEL, DEFAULT_REGION, Settings
from quickstock.obs.logging_config import JsonFormatter


def test_defaults_from_empty_env(monkeypatch):
    monkeypatch.delenv("AWS_REGION", raising=False)
    monkeypatch.delenv("CORS_ORIGINS", raising=False)
    s = Settings.from_env()
    assert s.aws_region == DEFAULT_REGION
    assert s.bedrock_model_id == DEFAULT_BEDROCK_MODEL
    assert s.has_aws_credentials is False
    assert s.cors_origins == ("*",)


def test_blank_values_count_as_unset(monkeypatch):
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "AKID")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "   ")
    monkeypatch.setenv("GEMINI_API_KEY", "")
    s = Settings.from_env()
    assert s.aws_secret_access_key is None
    assert s.gemini_api_key is None
    assert s.has_aws_credentials is False


def test_overrides(monkeypatch):
    monkeypatch.setenv("BEDROCK_MODEL_ID", "anthropic.claude-3-haiku-20240307-v1:0")
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost:5173, http://localhost:8501")
    s = Settings.from_env()
    assert s.bedrock_model_id == "anthropic.claude-3-haiku-20240307-v1:0"
    assert s.cors_origins == ("http://localhost:5173", "http://localhost:8501")


def test_json_formatter_includes_extra():
    rec = logging.makeLogRecord({"name": "quickstock.test", "levelname": "INFO", "msg": "hi %s",
                                 "args": ("there",), "model": "gemini-2.5-flash-lite"})
    out = json.loads(JsonFormatter().format(rec))
    assert out["msg"] == "hi there"
    assert out["logger"] == "quickstock.test"
    assert out["model"] == "gemini-2.5-flash-lite"
