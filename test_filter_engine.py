import logging

import pytest

from textfind import (InvalidArgumentError, LineMatchItem, PartialTextContent, SubMatchItem,
                      TextSelection, build_find_line_text_pattern, build_find_text_pattern,
                      find_lines, find_multiple_keywords, is_all_keywords_excluded)


def _line_starts(line_match_items):
    return [item.start for item in line_match_items]


def test_find_lines_single_include(log_text):
    items = find_lines([PartialTextContent(0, log_text)], ["disk"], [], False, False)

    assert items == [
        LineMatchItem(0, 15, "error disk full", (SubMatchItem(6, "disk"),)),
        LineMatchItem(17, 34, "warning disk slow", (SubMatchItem(25, "disk"),)),
    ]


def test_find_lines_include_keywords_are_and(log_text):
    items = find_lines([PartialTextContent(0, log_text)], ["error", "disk"], [], False, False)

    assert _line_starts(items) == [0]
    assert items[0].sub_match_items == (SubMatchItem(0, "error"), SubMatchItem(6, "disk"))


def test_find_lines_include_requires_every_keyword():
    items = find_lines([PartialTextContent(0, "a only\nb only\na and b")], ["a", "b"], [], True, True)

    assert [item.text_content for item in items] == ["a and b"]


def test_find_lines_exclude_only(log_text):
    items = find_lines([PartialTextContent(0, log_text)], [], ["net"], False, False)

    assert _line_starts(items) == [0, 17]
    assert all(item.sub_match_items == () for item in items)


def test_find_lines_exclude_vetoes_include(log_text):
    items = find_lines([PartialTextContent(0, log_text)], ["error"], ["net", "nothing"], False, False)

    assert _line_starts(items) == [0]


def test_find_lines_or_mode(log_text):
    items = find_lines([PartialTextContent(0, log_text)], ["net", "slow"], [], False, False,
                       match_all_includes=False)

    assert _line_starts(items) == [17, 35]
    assert items[0].sub_match_items == (SubMatchItem(30, "slow"),)


def test_find_lines_skips_blank_lines():
    items = find_lines([PartialTextContent(0, "a\n\n\nb\n")], [], ["zzz"], False, False)

    assert [item.text_content for item in items] == ["a", "b"]
    assert all(item.text_content != "" for item in items)


def test_find_lines_case_sensitivity(log_text):
    blocks = [PartialTextContent(0, log_text)]

    assert find_lines(blocks, ["ERROR"], [], True, False) == []
    assert _line_starts(find_lines(blocks, ["ERROR"], [], False, False)) == [0, 35]


def test_find_lines_whole_word(log_text):
    blocks = [PartialTextContent(0, log_text)]

    assert find_lines(blocks, ["dis"], [], False, True) == []
    assert _line_starts(find_lines(blocks, ["dis"], [], False, False)) == [0, 17]


def test_find_lines_keywords_are_literal():
    items = find_lines([PartialTextContent(0, "abc\na.c")], ["a.c"], [], True, False)

    assert [(item.start, item.text_content) for item in items] == [(4, "a.c")]


def test_find_lines_offsets_across_blocks():
    blocks = [PartialTextContent(100, "foo bar"), PartialTextContent(200, "x\nfoo")]

    items = find_lines(blocks, ["foo"], [], True, False)

    assert items == [
        LineMatchItem(100, 107, "foo bar", (SubMatchItem(100, "foo"),)),
        LineMatchItem(202, 205, "foo", (SubMatchItem(202, "foo"),)),
    ]


def test_find_lines_crlf_terminators():
    items = find_lines([PartialTextContent(0, "a foo\r\nfoo b")], ["foo"], [], True, False)

    assert [(item.start, item.end) for item in items] == [(0, 5), (7, 12)]


def test_find_lines_max_match_limit(log_text):
    blocks = [PartialTextContent(0, log_text), PartialTextContent(100, "error again")]

    assert len(find_lines(blocks, ["error"], [], False, False, 1)) == 1
    assert len(find_lines(blocks, ["error"], [], False, False, 2)) == 2
    assert len(find_lines(blocks, ["error"], [], False, False)) == 3


def test_find_lines_empty_keywords_raise():
    with pytest.raises(InvalidArgumentError):
        find_lines([PartialTextContent(0, "abc")], [], [], False, False)


def test_find_lines_empty_include_keyword_never_matches():
    assert find_lines([PartialTextContent(0, "abc")], [""], [], False, False) == []


def test_find_lines_custom_line_splitter():
    class SemicolonSplitter:
        def get_line_text_selections(self, text):
            selections = []
            start = 0
            for part in text.split(";"):
                selections.append(TextSelection(start, start + len(part)))
                start += len(part) + 1
            return selections

        def get_line_text(self, text, selection):
            return text[selection.start:selection.end]

    items = find_lines([PartialTextContent(0, "foo;bar;foo baz")], ["foo"], [], True, False,
                       line_splitter=SemicolonSplitter())

    assert _line_starts(items) == [0, 8]


def test_find_lines_logs_summary(caplog, log_text):
    caplog.set_level(logging.DEBUG, logger="textfind")

    find_lines([PartialTextContent(0, log_text)], ["error"], ["net"], False, False)

    assert "('error') &! ('net')" in caplog.text


def test_find_multiple_keywords_sorts_sub_matches():
    patterns = [build_find_line_text_pattern("b", True, False),
                build_find_line_text_pattern("a", True, False)]

    sub_match_items = find_multiple_keywords("a b a", patterns, extra_offset=10)

    assert sub_match_items == [SubMatchItem(10, "a"), SubMatchItem(12, "b"), SubMatchItem(14, "a")]


def test_find_multiple_keywords_missing_keyword_returns_empty():
    patterns = [build_find_line_text_pattern("a", True, False),
                build_find_line_text_pattern("z", True, False)]

    assert find_multiple_keywords("a b a", patterns) == []
    assert find_multiple_keywords("a b a", patterns, match_all=False) == [
        SubMatchItem(0, "a"), SubMatchItem(4, "a")]


def test_find_multiple_keywords_zero_width_pattern_returns_empty():
    patterns = [build_find_text_pattern("x*", True, False, True)]

    assert find_multiple_keywords("abc", patterns) == []


def test_find_multiple_keywords_max_match_limit():
    patterns = [build_find_line_text_pattern("a", True, False)]

    assert len(find_multiple_keywords("aaaa", patterns, max_match_limit=2)) == 2


def test_is_all_keywords_excluded():
    patterns = [build_find_line_text_pattern("x", True, False),
                build_find_line_text_pattern("y", True, False)]

    assert is_all_keywords_excluded("abc", [])
    assert is_all_keywords_excluded("abc", patterns)
    assert not is_all_keywords_excluded("ayc", patterns)
    # 同一组表达式可以在下一行继续使用
    assert is_all_keywords_excluded("abc", patterns)


def test_find_lines_negative_limit_means_unlimited(log_text):
    items = find_lines([PartialTextContent(0, log_text)], ["error"], [], False, False, -1)

    assert _line_starts(items) == [0, 35]
