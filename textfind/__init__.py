from textfind.dataform.search_result import (LineMatchItem, MatchItem, PartialTextContent,
                                             ReplaceResult, SubMatchItem, TextSelection)
from textfind.errors import InvalidArgumentError
from textfind.index.line_indexer import LineIndexer
from textfind.logic.filter_engine import (find_lines, find_multiple_keywords,
                                          format_pattern_display, is_all_keywords_excluded)
from textfind.logic.pattern_builder import (ScanPattern, build_find_line_text_pattern,
                                            build_find_text_pattern)
from textfind.logic.replacer import replace
from textfind.logic.search_engine import find
from textfind.logic.search_manager import SearchOptions, TextFindAndReplace

__all__ = [
    "TextSelection", "PartialTextContent", "MatchItem", "SubMatchItem", "LineMatchItem",
    "ReplaceResult", "InvalidArgumentError", "LineIndexer", "ScanPattern",
    "build_find_text_pattern", "build_find_line_text_pattern",
    "find", "find_lines", "find_multiple_keywords", "is_all_keywords_excluded",
    "format_pattern_display", "replace", "SearchOptions", "TextFindAndReplace",
]
