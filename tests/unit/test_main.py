"""Unit tests for the API entry point's startup checks."""

import pytest
import uvicorn

from fee_chat import main

KEY_VARS = ("LLM_API_KEY", "OPENAI_API_KEY")


def refuse_to_serve(*args: object, **kwargs: object) -> None:
    raise AssertionError("uvicorn.run must not be reached")


def test_missing_api_key_exits_before_binding(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in KEY_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(uvicorn, "run", refuse_to_serve)

    with pytest.raises(SystemExit) as exc_info:
        main.run_api()

    assert exc_info.value.code == 1


def test_out_of_range_setting_exits_before_binding(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test-key")
    monkeypatch.setenv("LLM_TEMPERATURE", "9")
    monkeypatch.setattr(uvicorn, "run", refuse_to_serve)

    with pytest.raises(SystemExit) as exc_info:
        main.run_api()

    assert exc_info.value.code == 1
