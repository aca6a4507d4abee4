import json
import sys

import pytest

from scripts.generate import main


def _run(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["generate", *argv])
    main()


def test_rejects_size_factor_below_one(monkeypatch, capsys):
    with pytest.raises(SystemExit) as exc:
        _run(monkeypatch, "CATS", "--size-factor", "0")
    assert exc.value.code == 1
    assert "--size-factor" in capsys.readouterr().out


def test_rejects_non_alphabetic_letters(monkeypatch, capsys):
    with pytest.raises(SystemExit) as exc:
        _run(monkeypatch, "C4TS")
    assert exc.value.code == 1
    assert capsys.readouterr().out.startswith("Error:")


def test_rejects_missing_dictionary(monkeypatch, tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        _run(monkeypatch, "CATS", "--dictionary", str(tmp_path / "nope.txt"))
    assert exc.value.code == 1


def test_json_output(monkeypatch, tmp_path, capsys):
    dict_file = tmp_path / "dict.txt"
    dict_file.write_text("cats\ncat\n")
    _run(monkeypatch, "cats", "--dictionary", str(dict_file), "--seed", "4", "--json")
    data = json.loads(capsys.readouterr().out)
    assert data["letters"] == "CATS"
    assert data["placed_count"] == len(data["placements"])
    assert data["placements"][0]["word"] == "CATS"


def test_text_output(monkeypatch, tmp_path, capsys):
    dict_file = tmp_path / "dict.txt"
    dict_file.write_text("cats\ncat\ndog\n")
    _run(monkeypatch, "CATS", "--dictionary", str(dict_file), "--no-shuffle", "--seed", "1")
    out = capsys.readouterr().out
    assert "placed 2/2 words" in out
    assert "CATS" in out
