"""Unit tests for the command line interface."""

import json

import httpx
import pytest

from deepseek_chat_sdk import cli
from deepseek_chat_sdk.providers.deepseek import DeepSeekProvider
from tests.helpers.streaming_mocks import completion_body, json_handler, sse_body, streaming_handler


@pytest.fixture
def use_handler(monkeypatch):
    """Route every provider the CLI builds through a MockTransport handler."""
    monkeypatch.setenv("DEEPSEEK_API_KEY", "test-key")

    def _use(handler):
        def factory(config=None, **kwargs):
            http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
            return DeepSeekProvider(config, http_client=http_client)

        monkeypatch.setattr(cli, "DeepSeekProvider", factory)
        monkeypatch.setattr("deepseek_chat_sdk.api.client.DeepSeekProvider", factory)
        return handler
    return _use


def test_no_command_prints_help(capsys):
    assert cli.main([]) == 0
    assert "usage" in capsys.readouterr().out


def test_missing_key_exits_with_configuration_error(capsys):
    assert cli.main(["ask", "hi"]) == 2
    assert "DEEPSEEK_API_KEY" in capsys.readouterr().out


def test_ask(use_handler, capsys):
    handler = use_handler(json_handler(completion_body("Hello!")))

    assert cli.main(["--model", "deepseek-reasoner", "ask", "hi", "--system", "Be kind."]) == 0

    assert capsys.readouterr().out == "Hello!\n"
    assert handler.last_body["model"] == "deepseek-reasoner"
    assert handler.last_body["messages"][0] == {"role": "system", "content": "Be kind."}


def test_ask_json(use_handler, capsys):
    handler = use_handler(json_handler(completion_body('{"answer":42}')))

    assert cli.main(["ask", "q", "--json"]) == 0

    assert json.loads(capsys.readouterr().out) == {"answer": 42}
    assert handler.last_body["response_format"] == {"type": "json_object"}


def test_ask_stream(use_handler, capsys):
    use_handler(streaming_handler([sse_body(["Hel", "lo"])]))

    assert cli.main(["ask", "hi", "--stream"]) == 0
    assert capsys.readouterr().out == "Hello\n"


def test_ask_failure(use_handler, capsys):
    use_handler(json_handler({"error": {"message": "Authentication Fails"}}, status_code=401))

    assert cli.main(["ask", "hi"]) == 1
    assert "Authentication Fails" in capsys.readouterr().out


def test_chat_session(use_handler, monkeypatch, capsys):
    handler = use_handler(streaming_handler([sse_body(["Hi!"])]))
    lines = iter(["", "hello", "/reset", "/exit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))

    assert cli.main(["chat"]) == 0

    out = capsys.readouterr().out
    assert "assistant> Hi!" in out
    assert "(history cleared)" in out
    assert len(handler.requests) == 1


def test_chat_ends_on_eof(use_handler, monkeypatch):
    use_handler(streaming_handler([]))

    def eof(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", eof)
    assert cli.main(["chat"]) == 0
