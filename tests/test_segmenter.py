"""Testy podziału tekstu na zdania."""

from __future__ import annotations

import pytest

from data_model.errors import SegmenterUnavailable
from markup import segmenter as segmenter_mod
from markup.segmenter import RegexSegmenter, get_segmenter

SAMPLES = [
    "",
    "   ",
    "no terminal punctuation here",
    "Hello world. How are you? Fine!",
    "...wait. ok",
    "Ends with space.  ",
    "Line one.\nLine two!\n\n",
    "안녕하세요. 반갑습니다! 좋아요?",
]


@pytest.mark.parametrize("text", SAMPLES)
def test_regex_segments_cover_input(text):
    segments = list(RegexSegmenter().segment(text))
    assert "".join(s.text for s in segments) == text

    offset = 0
    for seg in segments:
        assert seg.start == offset
        assert text[seg.start:seg.end] == seg.text
        offset = seg.end


def test_regex_splits_on_terminal_punctuation():
    segments = list(RegexSegmenter().segment("Hello world. How are you? Fine!"))
    assert [s.text for s in segments] == ["Hello world. ", "How are you? ", "Fine!"]
    assert [s.start for s in segments] == [0, 13, 26]


def test_regex_without_punctuation_is_single_segment():
    segments = list(RegexSegmenter().segment("no terminal punctuation here"))
    assert len(segments) == 1
    assert segments[0].start == 0


def test_empty_text_has_no_segments():
    assert list(RegexSegmenter().segment("")) == []


def test_segmentation_is_restartable():
    seg = RegexSegmenter().segment("One. Two. Three.")
    assert list(seg) == list(seg)
    assert len(list(seg)) == 3


def test_get_segmenter_regex():
    assert isinstance(get_segmenter("regex", "en"), RegexSegmenter)


def test_get_segmenter_unknown_strategy():
    with pytest.raises(ValueError):
        get_segmenter("nltk")


def test_auto_falls_back_to_regex_without_icu(monkeypatch):
    monkeypatch.setattr(segmenter_mod, "icu_available", lambda: False)
    assert isinstance(get_segmenter("auto", "ko"), RegexSegmenter)


def test_icu_strategy_requires_pyicu(monkeypatch):
    monkeypatch.setattr(segmenter_mod, "icu_available", lambda: False)
    with pytest.raises(SegmenterUnavailable):
        get_segmenter("icu", "ko")


@pytest.mark.parametrize("text", SAMPLES + ["Emoji 😀 here. And more! 🎉 End"])
def test_icu_segments_cover_input(text):
    pytest.importorskip("icu")
    seg = get_segmenter("icu", "en")
    segments = list(seg.segment(text))
    assert "".join(s.text for s in segments) == text
    assert all(text[s.start:s.end] == s.text for s in segments)
