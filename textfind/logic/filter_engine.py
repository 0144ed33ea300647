import logging
import time
from typing import Iterable, List, Optional, Sequence

from textfind.dataform.search_result import LineMatchItem, PartialTextContent, SubMatchItem
from textfind.errors import InvalidArgumentError
from textfind.index.line_indexer import LineIndexer
from textfind.logic.pattern_builder import ScanPattern, build_find_line_text_pattern

logger = logging.getLogger(__name__)


def find_lines(partial_text_contents: Iterable[PartialTextContent],
               include_keywords: Sequence[str], exclude_keywords: Sequence[str],
               case_sensitive: bool, whole_word: bool, max_match_limit: int = 0,
               match_all_includes: bool = True,
               line_splitter=None) -> List[LineMatchItem]:
    """
    按行查找一个或多个关键字，空白行会被跳过

    Args:
        partial_text_contents: 文本块
        include_keywords: 需要出现的关键字，默认是 AND 关系
        exclude_keywords: 需要排除的关键字，OR 关系（出现任意一个即排除该行）
        case_sensitive: 区分大小写
        whole_word: 整词匹配
        max_match_limit: 最多匹配多少行，0 或负数表示不限制
        match_all_includes: False 时 include_keywords 之间改为 OR 关系
        line_splitter: 行分割器，需提供 get_line_text_selections() 和
            get_line_text()，默认使用 LineIndexer

    Returns:
        LineMatchItem 列表

    Raises:
        InvalidArgumentError: 两组关键字都为空
    """
    if not include_keywords and not exclude_keywords:
        raise InvalidArgumentError("包含关键字和排除关键字不能同时为空")

    include_patterns = _compile_line_patterns(include_keywords, case_sensitive, whole_word)
    exclude_patterns = _compile_line_patterns(exclude_keywords, case_sensitive, whole_word)

    if not include_patterns and not exclude_patterns:
        # 全部表达式都无效
        return []

    if line_splitter is None:
        line_splitter = LineIndexer()

    start_time = time.perf_counter()
    line_match_items = []
    processed_lines = 0

    for partial_text_content in partial_text_contents:
        if max_match_limit > 0 and len(line_match_items) >= max_match_limit:
            break

        text_content = partial_text_content.text_content
        offset = partial_text_content.offset

        for line_selection in line_splitter.get_line_text_selections(text_content):
            line_text = line_splitter.get_line_text(text_content, line_selection)

            # 空白行不作任何匹配
            if line_text == '':
                continue
            processed_lines += 1

            line_start = offset + line_selection.start
            line_end = offset + line_selection.end

            # 没有匹配中 include_keywords 时 sub_match_items 为空
            sub_match_items = find_multiple_keywords(
                line_text, include_patterns, line_start, max_match_limit, match_all_includes)

            if not is_all_keywords_excluded(line_text, exclude_patterns):
                continue

            if include_keywords and not sub_match_items:
                continue

            line_match_items.append(
                LineMatchItem(line_start, line_end, line_text, tuple(sub_match_items)))

            if max_match_limit > 0 and len(line_match_items) >= max_match_limit:
                break

    logger.debug("按行查找 %s 完成: %d/%d 行匹配, 耗时 %.3f 秒",
                 format_pattern_display(include_keywords, exclude_keywords, match_all_includes),
                 len(line_match_items), processed_lines, time.perf_counter() - start_time)
    return line_match_items


def find_multiple_keywords(line_text: str, include_patterns: Sequence[ScanPattern],
                           extra_offset: int = 0, max_match_limit: int = 0,
                           match_all: bool = True) -> List[SubMatchItem]:
    """
    在一行之内查找多个关键字

    Args:
        line_text: 行文本
        include_patterns: 编译好的关键字表达式
        extra_offset: 行在整篇文本中的开始索引
        max_match_limit: 最多匹配多少项，0 或负数表示不限制
        match_all: True 时每个关键字都必须出现（AND），否则任意一个出现即可（OR）

    Returns:
        按 offset 排序的 SubMatchItem 列表；
        没有满足关键字条件，或者表达式会导致死循环时返回空列表。
    """
    sub_match_items = []

    for scan_pattern in include_patterns:
        scan_pattern.reset()
        match = scan_pattern.exec(line_text)

        if match is None:
            if match_all:
                # AND 关系：只要有一个关键字没匹配中就不算
                return []
            continue

        last_position = -1

        while match is not None:
            if last_position == match.start():
                logger.warning("关键字 %r 会导致死循环，放弃查找", scan_pattern.keyword)
                return []

            last_position = match.start()
            sub_match_items.append(SubMatchItem(match.start() + extra_offset, match.group(0)))

            if max_match_limit > 0 and len(sub_match_items) >= max_match_limit:
                break

            match = scan_pattern.exec(line_text)

    # 不同关键字的匹配项可能交错，按位置从小到大排序
    sub_match_items.sort(key=lambda item: item.offset)
    return sub_match_items


def is_all_keywords_excluded(line_text: str, exclude_patterns: Sequence[ScanPattern]) -> bool:
    """判断是否所有排除关键字都没有出现；只要出现任意一个就返回 False"""
    for scan_pattern in exclude_patterns:
        scan_pattern.reset()
        if scan_pattern.exec(line_text) is not None:
            return False
    return True


def format_pattern_display(include_keywords: Sequence[str], exclude_keywords: Sequence[str],
                           match_all_includes: bool = True) -> str:
    """
    格式化显示查找条件，例如 ('a' & 'b') &! ('x' | 'y')

    Args:
        include_keywords: 包含关键字列表
        exclude_keywords: 排除关键字列表
        match_all_includes: 包含关键字之间是否为 AND 关系

    Returns:
        格式化后的字符串
    """
    parts = []

    if include_keywords:
        joiner = " & " if match_all_includes else " | "
        parts.append("(" + joiner.join(f"'{kw}'" for kw in include_keywords) + ")")

    if exclude_keywords:
        exclude_expr = " | ".join(f"'{kw}'" for kw in exclude_keywords)
        parts.append(f"&! ({exclude_expr})")

    return " ".join(parts) if parts else "(empty)"


def _compile_line_patterns(keywords: Sequence[str], case_sensitive: bool,
                           whole_word: bool) -> List[ScanPattern]:
    patterns: List[Optional[ScanPattern]] = [
        build_find_line_text_pattern(keyword, case_sensitive, whole_word) for keyword in keywords
    ]
    # 过滤无效的表达式
    return [pattern for pattern in patterns if pattern is not None]
