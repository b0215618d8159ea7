"""Testy komend CLI efx (wywołanie przez parser, bez uruchamiania procesu)."""

from __future__ import annotations

import json
import zipfile

import pytest

from efx.cli import build_parser

CH1_ID = "OEBPS/ch1.xhtml#1-0"


@pytest.fixture(autouse=True)
def _regex_segmenter(monkeypatch):
    monkeypatch.setenv("EFX_SEGMENTER", "regex")


def run_cli(*argv: str) -> None:
    args = build_parser().parse_args(list(argv))
    args.func(args)


def test_units_to_json(make_epub, tmp_path):
    book = make_epub()
    out = tmp_path / "units.json"
    run_cli("units", str(book), "--path", "OEBPS/ch1.xhtml", "--json", str(out))

    data = json.loads(out.read_text(encoding="utf-8"))
    assert [d["id"] for d in data] == [CH1_ID, "OEBPS/ch1.xhtml#1-1", "OEBPS/ch1.xhtml#3-0"]
    assert data[0]["text"] == "The qick fox jumps."
    assert data[0]["block_index"] == 1


def test_units_table(make_epub, capsys):
    run_cli("units", str(make_epub()), "--limit", "2")
    out = capsys.readouterr().out
    assert CH1_ID in out
    assert "2 jednostek" in out


def test_search(make_epub, capsys):
    run_cli("search", str(make_epub()), "qick")
    out = capsys.readouterr().out
    assert CH1_ID in out
    assert "1 wyników" in out


def test_revise_review_apply(make_epub, capsys):
    book = make_epub()
    revisions = book.with_suffix(".revisions.json")

    run_cli("revise", str(book), CH1_ID, "The quick fox jumps.")
    assert json.loads(revisions.read_text(encoding="utf-8")) == {CH1_ID: "The quick fox jumps."}

    run_cli("review", str(book))
    assert "1 poprawek" in capsys.readouterr().out

    run_cli("apply", str(book))
    fixed = book.with_name("fixed_book.epub")
    with zipfile.ZipFile(fixed) as zf:
        assert "The quick fox jumps." in zf.read("OEBPS/ch1.xhtml").decode("utf-8")


def test_revise_remove(make_epub, tmp_path):
    book = make_epub()
    revisions = tmp_path / "rev.json"
    run_cli("revise", str(book), CH1_ID, "The quick fox jumps.", "--revisions", str(revisions))
    run_cli("revise", str(book), CH1_ID, "--remove", "--revisions", str(revisions))
    assert json.loads(revisions.read_text(encoding="utf-8")) == {}


def test_revise_unknown_id_fails(make_epub):
    with pytest.raises(SystemExit) as exc:
        run_cli("revise", str(make_epub()), "OEBPS/ch1.xhtml#77-0", "Text.")
    assert exc.value.code == 1


def test_missing_book_fails(tmp_path):
    with pytest.raises(SystemExit) as exc:
        run_cli("units", str(tmp_path / "nope.epub"))
    assert exc.value.code == 1


def test_invalid_book_fails(tmp_path):
    book = tmp_path / "fake.epub"
    book.write_bytes(b"definitely not a zip")
    with pytest.raises(SystemExit) as exc:
        run_cli("units", str(book))
    assert exc.value.code == 1


def test_apply_without_revisions_writes_nothing(make_epub, capsys):
    book = make_epub()
    run_cli("apply", str(book))
    assert not book.with_name("fixed_book.epub").exists()
    assert "Brak poprawek" in capsys.readouterr().out


def test_units_marks_revised_sentences(make_epub, capsys):
    book = make_epub()
    run_cli("revise", str(book), CH1_ID, "The quick fox jumps.")
    capsys.readouterr()

    run_cli("units", str(book), "--limit", "2")
    out = capsys.readouterr().out
    assert "The quick fox jumps." in out
    assert "*" in out
    assert "The qick fox jumps." not in out


@pytest.mark.parametrize("name, value", [("EFX_WORKERS", "many"), ("EFX_DIFF_TIMEOUT", "soon")])
def test_bad_number_in_env_fails(make_epub, monkeypatch, capsys, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(SystemExit) as exc:
        run_cli("apply", str(make_epub()))
    assert exc.value.code == 1
    assert name in capsys.readouterr().out
