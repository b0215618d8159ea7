"""Testy nanoszenia zmian tekstu na liście tekstowe bloku."""

from __future__ import annotations

from markup.blocks import flatten_text, parse_markup, serialize_markup
from markup.patcher import Op, apply_revision, compute_edit_script


def _tag_names(tree):
    return [t.name for t in tree.find_all(True)]


def test_single_edit():
    tree = parse_markup("<p>The qick fox jumps.</p>")
    assert apply_revision(tree.p, "The quick fox jumps.") is True
    assert flatten_text(tree.p) == "The quick fox jumps."
    assert serialize_markup(tree) == "<p>The quick fox jumps.</p>"


def test_edit_inside_bold_keeps_bold():
    tree = parse_markup("<p>The <b>qick</b> fox.</p>")
    apply_revision(tree.p, "The quick fox.")
    assert serialize_markup(tree) == "<p>The <b>quick</b> fox.</p>"


def test_replaced_bold_word_stays_bold():
    tree = parse_markup("<p>The <b>qick</b> fox.</p>")
    apply_revision(tree.p, "The slow fox.")
    assert tree.b.get_text() == "slow"
    assert flatten_text(tree.p) == "The slow fox."


def test_attributes_and_tags_untouched():
    markup = '<p class="x" id="p1">The <a href="u.xhtml">lnik</a> <i>end</i>.</p>'
    tree = parse_markup(markup)
    before = _tag_names(tree)
    apply_revision(tree.p, "The link end.")
    assert _tag_names(tree) == before
    assert tree.p["class"] == ["x"]
    assert tree.p["id"] == "p1"
    assert tree.a["href"] == "u.xhtml"
    assert tree.a.get_text() == "link"
    assert flatten_text(tree.p) == "The link end."


def test_delete_spanning_leaves():
    tree = parse_markup("<p>Hello <i>big</i> world.</p>")
    apply_revision(tree.p, "Hello world.")
    assert flatten_text(tree.p) == "Hello world."
    assert tree.i is not None


def test_insert_after_last_leaf_appends_new_leaf():
    tree = parse_markup("<p>Hi <b>there</b></p>")
    apply_revision(tree.p, "Hi there!")
    assert serialize_markup(tree) == "<p>Hi <b>there</b>!</p>"


def test_appended_words_stay_outside_formatting():
    tree = parse_markup("<p>He said <i>hello</i></p>")
    apply_revision(tree.p, "He said hello again.")
    assert serialize_markup(tree) == "<p>He said <i>hello</i> again.</p>"


def test_insert_at_leaf_boundary_goes_to_next_leaf():
    tree = parse_markup("<p>Hello <i>world</i>.</p>")
    apply_revision(tree.p, "Hello world!.")
    assert flatten_text(tree.p) == "Hello world!."
    assert tree.i.get_text() == "world"


def test_replaced_last_word_stays_formatted():
    tree = parse_markup("<p>He said <i>hello</i></p>")
    apply_revision(tree.p, "He said fun")
    assert serialize_markup(tree) == "<p>He said <i>fun</i></p>"


def test_insert_into_block_without_text_appends_leaf():
    tree = parse_markup('<p><img src="x.png"/></p>')
    assert apply_revision(tree.p, "Caption") is True
    assert flatten_text(tree.p) == "Caption"
    assert tree.p.img is not None
    assert tree.p.contents[-1] == "Caption"


def test_same_text_is_noop():
    markup = "<p>The <b>quick</b> <i>brown</i> fox.</p>"
    tree = parse_markup(markup)
    before = serialize_markup(tree)
    assert apply_revision(tree.p, "The quick brown fox.") is False
    assert serialize_markup(tree) == before


def test_rewrite_across_many_leaves():
    tree = parse_markup("<p>Alpha <em>beta</em> gamma <strong>delta</strong> epsilon.</p>")
    target = "Alpha bet gamma, delta and epsilon!"
    apply_revision(tree.p, target)
    assert flatten_text(tree.p) == target
    assert _tag_names(tree) == ["p", "em", "strong"]


def test_edit_script_reproduces_both_texts():
    current, target = "The qick brown fox jumps.", "The quick fox jumped."
    script = compute_edit_script(current, target)
    assert all(isinstance(op, Op) for op, _ in script)
    assert "".join(t for op, t in script if op is not Op.INSERT) == current
    assert "".join(t for op, t in script if op is not Op.DELETE) == target


def test_edit_script_of_equal_texts():
    assert compute_edit_script("same", "same") == [(Op.EQUAL, "same")]
