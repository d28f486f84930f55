"""Tests for loop placeholder substitution."""

from __future__ import annotations

import pytest

from blockblog.core.substitution import file_stem, substitute_special_values


# ---------------------------------------------------------------------------
# file_stem
# ---------------------------------------------------------------------------

class TestFileStem:
    def test_strips_last_extension_only(self):
        assert file_stem("photo.final.jpg") == "photo.final"

    def test_no_extension(self):
        assert file_stem("README") == "README"

    def test_uses_base_name(self):
        assert file_stem("posts/first.md") == "first"

    def test_empty_value(self):
        assert file_stem("") == ""


# ---------------------------------------------------------------------------
# $loop_value
# ---------------------------------------------------------------------------

class TestLoopValue:
    def test_text_without_placeholders_unchanged(self):
        assert substitute_special_values("plain text", "x") == "plain text"

    def test_whole_string(self):
        assert substitute_special_values("$loop_value", "cat") == "cat"

    def test_followed_by_punctuation(self):
        assert substitute_special_values("$loop_value!", "cat") == "cat!"

    def test_followed_by_word_character_not_replaced(self):
        assert substitute_special_values("$loop_valuefoo", "cat") == "$loop_valuefoo"

    def test_replaces_every_occurrence(self):
        result = substitute_special_values("a $loop_value b $loop_value", "x")
        assert result == "a x b x"

    def test_adjacent_occurrences(self):
        assert substitute_special_values("$loop_value/$loop_value", "x") == "x/x"

    def test_inside_path(self):
        assert substitute_special_values("img/$loop_value", "a.png") == "img/a.png"

    @pytest.mark.parametrize("loop_value", ["", "anything", "x.txt"])
    def test_escaped_placeholder_is_literal(self, loop_value):
        assert substitute_special_values("\\$loop_value", loop_value) == "$loop_value"

    def test_escaped_and_plain_mixed(self):
        result = substitute_special_values("\\$loop_value = $loop_value", "7")
        assert result == "$loop_value = 7"


# ---------------------------------------------------------------------------
# $loop_value_filename
# ---------------------------------------------------------------------------

class TestLoopValueFilename:
    def test_uses_stem(self):
        assert substitute_special_values("$loop_value_filename", "photo.final.jpg") == "photo.final"

    def test_resolved_before_loop_value(self):
        result = substitute_special_values("$loop_value_filename.html <- $loop_value", "post.md")
        assert result == "post.html <- post.md"

    def test_escaped(self):
        result = substitute_special_values("\\$loop_value_filename", "post.md")
        assert result == "$loop_value_filename"

    def test_skipped_without_stem(self):
        assert substitute_special_values("$loop_value_filename", "") == "$loop_value_filename"
