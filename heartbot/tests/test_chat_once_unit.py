import json

import pytest

from heartbot.advice.formatter import CLARIFICATION_TEXT, GREETING_TEXT
from heartbot.scripts.chat_once import main


def test_chat_once_without_text_prints_greeting(capsys) -> None:
    assert main([]) == 0
    assert capsys.readouterr().out.strip() == GREETING_TEXT


def test_chat_once_prints_reply_with_prior_inputs(capsys) -> None:
    assert main(["risk=high", "--prior", "bp=150", "--prior", "age=70"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Risk: High\nNext:\n")
    assert "Blood pressure is high" in out
    assert "Age increases baseline risk" in out


def test_chat_once_json_output(capsys) -> None:
    assert main(["7%", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["matched"] is True
    assert payload["tier"] == "moderate"
    assert payload["percent"] == 7.0

    assert main(["hello", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload == {"matched": False, "reply": CLARIFICATION_TEXT}


def test_chat_once_rejects_bad_prior() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["12%", "--prior", "nonsense"])
    assert excinfo.value.code == 2
