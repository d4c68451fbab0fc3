import pytest

LLM_ENV = (
    "LLM_PROVIDER",
    "ANTHROPIC_API_KEY",
    "OPENAI_API_KEY",
)


@pytest.fixture(autouse=True)
def no_llm_credentials(monkeypatch):
    """Keep tests deterministic when the developer shell has provider keys."""
    for name in LLM_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("STORE_URL", "memory://")
