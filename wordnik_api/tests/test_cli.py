from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest
import requests

BASE_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BASE_DIR))

import wordnik_cli as cli_module  # noqa: E402
import wordnik_client as client_module  # noqa: E402
import wordnik_config as config_module  # noqa: E402


@pytest.fixture()
def cli_client(client, monkeypatch):
    monkeypatch.setattr(
        cli_module.WordnikClient,
        "from_config",
        lambda *args, **kwargs: client,
    )
    return client


def test_definitions_prints_json(cli_client, session, capsys):
    session.queue(200, [{"word": "donkey", "text": "A domesticated ass."}])

    exit_code = cli_module.main(["definitions", "donkey", "--limit", "3"])

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out) == [
        {"text": "A domesticated ass.", "word": "donkey"}
    ]
    assert session.last_call["url"].endswith("/word.json/donkey/definitions")
    assert session.last_call["params"] == {"limit": 3}


def test_search_applies_client_defaults(cli_client, session, capsys):
    session.queue(200, {"searchResults": [], "totalResults": 0})

    exit_code = cli_module.main(["search", "cat", "--limit", "5"])

    assert exit_code == 0
    assert session.last_call["url"].endswith("/words.json/search/cat")
    assert session.last_call["params"] == {
        "limit": 5,
        "skip": 0,
        "caseSensitive": "true",
    }


def test_word_of_the_day_passes_date(cli_client, session, capsys):
    session.queue(200, {"word": "petrichor"})

    exit_code = cli_module.main(["word-of-the-day", "--date", "2024-03-01"])

    assert exit_code == 0
    assert session.last_call["params"] == {"date": "2024-03-01"}
    assert json.loads(capsys.readouterr().out)["word"] == "petrichor"


def test_token_status_without_term(cli_client, session, capsys):
    session.queue(200, {"valid": True})

    assert cli_module.main(["token-status"]) == 0
    assert session.last_call["url"].endswith("/account.json/apiTokenStatus")


def test_absent_result_exits_with_one(cli_client, session, capsys):
    session.queue(404)

    exit_code = cli_module.main(["word", "qwxz"])

    assert exit_code == 1
    assert capsys.readouterr().out.strip() == "No result found."


def test_missing_term_reports_validation_error(cli_client, session, capsys):
    exit_code = cli_module.main(["definitions"])

    assert exit_code == 2
    assert "expects word" in capsys.readouterr().err
    assert session.calls == []


def test_missing_api_key_reports_configuration_error(tmp_path, monkeypatch, capsys):
    monkeypatch.delenv("WORDNIK_API_KEY", raising=False)
    monkeypatch.setattr(config_module, "CONFIG_FILE", tmp_path / "wordnik_config.json")

    exit_code = cli_module.main(["word", "cat"])

    assert exit_code == 2
    assert "api_key" in capsys.readouterr().err


def test_unknown_command_is_rejected(capsys):
    with pytest.raises(SystemExit):
        cli_module.main(["conjugate", "cat"])


def test_word_commands_map_to_client_methods():
    assert cli_module.WORD_COMMANDS["related"] is client_module.WordnikClient.get_related_words
    assert cli_module.WORD_COMMANDS["pronunciations"] is (
        client_module.WordnikClient.get_text_pronunciations
    )


def test_transport_failure_exits_with_two(cli_client, session, capsys):
    session.queue_error(requests.exceptions.ChunkedEncodingError("dropped"))

    exit_code = cli_module.main(["word", "cat"])

    assert exit_code == 2
    assert "request error" in capsys.readouterr().err


def test_bad_base_url_exits_with_two(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("WORDNIK_API_KEY", "env-key")
    monkeypatch.setenv("WORDNIK_BASE_URL", "api.wordnik.com/v4")
    monkeypatch.setattr(config_module, "CONFIG_FILE", tmp_path / "wordnik_config.json")

    exit_code = cli_module.main(["word", "cat"])

    assert exit_code == 2
    assert "Invalid base_url" in capsys.readouterr().err


@pytest.mark.parametrize(
    "argv",
    [
        ["random-word", "--limit", "5"],
        ["random-word", "--skip", "2"],
        ["token-status", "cat"],
        ["word", "cat", "--date", "2024-03-01"],
        ["random-words", "--skip", "1"],
    ],
)
def test_unused_options_are_rejected(cli_client, session, argv, capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli_module.main(argv)

    assert exc_info.value.code == 2
    assert "does not accept" in capsys.readouterr().err
    assert session.calls == []
