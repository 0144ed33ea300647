import logging
import time
from typing import Iterable, List

from textfind.dataform.search_result import MatchItem, PartialTextContent
from textfind.errors import InvalidArgumentError
from textfind.logic.pattern_builder import build_find_text_pattern

logger = logging.getLogger(__name__)


def find(partial_text_contents: Iterable[PartialTextContent], keyword: str,
         case_sensitive: bool, whole_word: bool, is_regex: bool,
         max_match_limit: int = 0) -> List[MatchItem]:
    """
    查找指定关键字的匹配项

    Args:
        partial_text_contents: 文本块，按位置顺序排列且互不重叠
        keyword: 关键字
        case_sensitive: 区分大小写
        whole_word: 整词匹配
        is_regex: 使用正则表达式查找，此时 keyword 必须是正则表达式
        max_match_limit: 最多匹配多少项，0 或负数表示不限制

    Returns:
        MatchItem 列表，按整篇文本中的位置从小到大排列。
        正则表达式无效，或者正则表达式会导致死循环时，返回空列表。

    Raises:
        InvalidArgumentError: keyword 为空
    """
    if keyword == '':
        raise InvalidArgumentError("关键字不能为空")

    scan_pattern = build_find_text_pattern(keyword, case_sensitive, whole_word, is_regex)
    if scan_pattern is None:
        return []

    start_time = time.perf_counter()
    match_items = []

    for partial_text_content in partial_text_contents:
        if max_match_limit > 0 and len(match_items) >= max_match_limit:
            # 匹配项数量过多
            break

        scan_pattern.reset()

        offset = partial_text_content.offset
        text_content = partial_text_content.text_content

        match = scan_pattern.exec(text_content)
        last_position = -1

        while match is not None:
            # 'a*'、'a?'、'a{0,}' 之类的表达式对任意输入都能匹配中空字符串，
            # 匹配位置不再前进时说明会陷入死循环
            if last_position == match.start():
                logger.warning("关键字 %r 会导致死循环，放弃查找", keyword)
                return []

            last_position = match.start()

            match_text = match.group(0)
            match_start = offset + match.start()  # 匹配项在整篇文本中的索引

            match_items.append(MatchItem(match_start, match_start + len(match_text), match_text))

            if max_match_limit > 0 and len(match_items) >= max_match_limit:
                break

            match = scan_pattern.exec(text_content)

    logger.debug("查找 %r 完成: %d 个结果, 耗时 %.3f 秒",
                 keyword, len(match_items), time.perf_counter() - start_time)
    return match_items
