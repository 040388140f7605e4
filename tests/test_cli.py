"""
Tests for the custom-id command-line interface.
"""

from __future__ import annotations

import io
import json

import pytest

from custom_id.cli import main


class TestDecode:

    def test_decode_one(self, capsys):
        assert main(["decode", "ban/confirm?user=4239&roles=1,2"]) == 0
        doc = json.loads(capsys.readouterr().out)
        assert doc == {
            "prefix": "ban/confirm",
            "segments": ["ban", "confirm"],
            "fields": {"user": "4239", "roles": ["1", "2"]},
        }

    def test_decode_stdin(self, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("a?x=1\nb/c\n"))
        assert main(["decode", "-"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert [json.loads(line)["prefix"] for line in lines] == ["a", "b/c"]

    def test_decode_stdin_crlf(self, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("a?x=1\r\nb/c\r\n"))
        assert main(["decode", "-"]) == 0
        docs = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
        assert docs[0]["fields"] == {"x": "1"}
        assert docs[1]["prefix"] == "b/c"


class TestEncode:

    def test_encode(self, capsys):
        assert main(["encode", "ban/confirm", "-f", "user=4239", "-f", "roles=1,2"]) == 0
        assert capsys.readouterr().out == "ban/confirm?user=4239&roles=1,2\n"

    def test_encode_skips_empty_by_default(self, capsys):
        assert main(["encode", "p", "-f", "a="]) == 0
        assert capsys.readouterr().out == "p\n"

    def test_encode_keep_falsy(self, capsys):
        assert main(["encode", "p", "-f", "a=", "--keep-falsy"]) == 0
        assert capsys.readouterr().out == "p?a=\n"

    def test_encode_true_to_one(self, capsys):
        assert main(["encode", "p", "-f", "a=true", "--true-to-one"]) == 0
        assert capsys.readouterr().out == "p?a=1\n"

    def test_encode_over_limit(self, capsys):
        assert main(["encode", "p", "-f", "a=bbbb", "--limit", "5"]) == 2
        assert "error:" in capsys.readouterr().err

    def test_bad_field_argument(self):
        with pytest.raises(SystemExit) as exc:
            main(["encode", "p", "-f", "novalue"])
        assert exc.value.code == 2
