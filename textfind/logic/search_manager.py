from dataclasses import dataclass
from typing import Iterable, List, Sequence

from textfind import config
from textfind.dataform.search_result import LineMatchItem, MatchItem, PartialTextContent
from textfind.logic import filter_engine, pattern_builder, replacer, search_engine


@dataclass(frozen=True)
class SearchOptions:
    """搜索选项配置"""
    case_sensitive: bool = config.DEFAULT_CASE_SENSITIVE
    whole_word: bool = config.DEFAULT_WHOLE_WORD
    use_regex: bool = config.DEFAULT_USE_REGEX
    match_all_includes: bool = config.DEFAULT_MATCH_ALL_INCLUDES
    max_match_limit: int = config.DEFAULT_MAX_MATCH_LIMIT


class TextFindAndReplace:
    """
    文本的查找和替换

    - 支持在多个指定文本范围（文本块）里查找
    - 支持"多关键字行查找"模式
    - 替换时重新计算光标位置
    """

    find = staticmethod(search_engine.find)
    find_lines = staticmethod(filter_engine.find_lines)
    find_multiple_keywords = staticmethod(filter_engine.find_multiple_keywords)
    is_all_keywords_excluded = staticmethod(filter_engine.is_all_keywords_excluded)
    replace = staticmethod(replacer.replace)
    build_find_text_pattern = staticmethod(pattern_builder.build_find_text_pattern)
    build_find_line_text_pattern = staticmethod(pattern_builder.build_find_line_text_pattern)
    format_pattern_display = staticmethod(filter_engine.format_pattern_display)

    @staticmethod
    def find_with_options(partial_text_contents: Iterable[PartialTextContent], keyword: str,
                          options: SearchOptions) -> List[MatchItem]:
        return search_engine.find(
            partial_text_contents, keyword,
            options.case_sensitive, options.whole_word, options.use_regex,
            options.max_match_limit)

    @staticmethod
    def find_lines_with_options(partial_text_contents: Iterable[PartialTextContent],
                                include_keywords: Sequence[str], exclude_keywords: Sequence[str],
                                options: SearchOptions, line_splitter=None) -> List[LineMatchItem]:
        # 行模式下关键字总是按字面量匹配，options.use_regex 不起作用
        return filter_engine.find_lines(
            partial_text_contents, include_keywords, exclude_keywords,
            options.case_sensitive, options.whole_word, options.max_match_limit,
            match_all_includes=options.match_all_includes,
            line_splitter=line_splitter)
