import json

import pytest

from mcp_service import service as service_module
from mcp_service.__main__ import main
from tests.fakes import FakeClient, FakeClientFactory, make_tool


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "mcp.json"
    path.write_text(json.dumps({
        "mcp": {"transports": {"demo": {"type": "http", "url": "http://localhost:3000/mcp"}}}
    }))
    return path


@pytest.fixture
def client(monkeypatch) -> FakeClient:
    tool = make_tool(
        "echo",
        "Echoes input",
        {"type": "object", "properties": {"text": {"type": "string", "description": "Text to echo"}}},
    )
    client = FakeClient({"echo": tool})
    monkeypatch.setattr(service_module, "create_mcp_client", FakeClientFactory(client))
    return client


def test_lists_registered_tools(config_file, client, capsys) -> None:
    assert main(["--config", str(config_file)]) == 0

    out = capsys.readouterr().out
    assert "Registered 1 tools from 1 servers" in out
    assert "## Tool: demo/echo" in out
    assert "  - text (string, optional): Text to echo" in out
    assert client.closed


def test_calls_a_tool(config_file, client, capsys) -> None:
    assert main(["--config", str(config_file), "--call", "demo/echo", "--arguments", '{"text": "hi"}']) == 0

    out = capsys.readouterr().out
    assert "{'tool': 'echo', 'arguments': {'text': 'hi'}}" in out


def test_unknown_tool_to_call(config_file, client, capsys) -> None:
    assert main(["--config", str(config_file), "--call", "demo/missing"]) == 1
    assert "tool 'demo/missing' is not registered" in capsys.readouterr().out
    assert client.closed


def test_config_without_mcp_section(tmp_path, capsys) -> None:
    path = tmp_path / "empty.json"
    path.write_text("{}")

    assert main(["--config", str(path)]) == 0
    assert "nothing to do" in capsys.readouterr().out


def test_errors_are_reported(tmp_path, capsys) -> None:
    assert main(["--config", str(tmp_path / "missing.json")]) == 1
    assert capsys.readouterr().out.startswith("Error: Cannot read config file")


def test_arguments_must_be_a_json_object(config_file) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--config", str(config_file), "--arguments", "[1, 2]"])
    assert exc_info.value.code == 2


def test_connection_errors_are_reported(config_file, monkeypatch, capsys) -> None:
    monkeypatch.setattr(service_module, "create_mcp_client", FakeClientFactory(error=OSError("Connection refused")))

    assert main(["--config", str(config_file)]) == 1
    assert "Error: Connection refused" in capsys.readouterr().out
