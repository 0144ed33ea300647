import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

# 开头的全局内联标志，如 (?i)、(?ms)
_LEADING_INLINE_FLAGS = re.compile(r"^(?:\(\?[aiLmsux]+\))+")


class ScanPattern:
    """带扫描游标的正则表达式

    re.Pattern 本身没有状态，这里用 last_index 显式记录下一次扫描的开始位置：
    每次 exec() 从 last_index 开始查找，并把 last_index 移到匹配项的结束位置。
    匹配中空字符串时 last_index 不会前进，调用方据此检测死循环。

    同一个对象不能在多个扫描之间共享，开始扫描新文本前必须先 reset()。
    """

    def __init__(self, regex: re.Pattern, keyword: str):
        self.regex = regex
        self.keyword = keyword
        self.last_index = 0

    def reset(self):
        self.last_index = 0

    def exec(self, text: str) -> Optional[re.Match]:
        """从 last_index 开始查找下一个匹配项，没有时返回 None 并重置游标"""
        if self.last_index > len(text):
            self.last_index = 0
            return None

        match = self.regex.search(text, self.last_index)
        if match is None:
            self.last_index = 0
            return None

        self.last_index = match.end()
        return match

    def __repr__(self):
        return f"ScanPattern({self.regex.pattern!r}, last_index={self.last_index})"


def build_find_text_pattern(keyword: str, case_sensitive: bool, whole_word: bool,
                            is_regex: bool) -> Optional[ScanPattern]:
    """
    构建查找字符串的正则表达式

    Args:
        keyword: 关键字，is_regex 为 True 时是正则表达式
        case_sensitive: 区分大小写
        whole_word: 整词匹配
        is_regex: 使用正则表达式查找

    Returns:
        ScanPattern；正则表达式有语法错误时返回 None
    """
    pattern = keyword if is_regex else re.escape(keyword)

    if whole_word:
        # 正则表达式可能含有 '|'，先用非捕获组包起来
        if is_regex:
            # 全局内联标志必须位于表达式开头，不能包进分组
            inline_flags = _LEADING_INLINE_FLAGS.match(pattern)
            prefix = inline_flags.group(0) if inline_flags else ''
            pattern = prefix + r'\b(?:' + pattern[len(prefix):] + r')\b'
        else:
            pattern = r'\b' + pattern + r'\b'

    flags = re.MULTILINE
    if not case_sensitive:
        flags |= re.IGNORECASE

    return _compile(pattern, flags, keyword)


def build_find_line_text_pattern(keyword: str, case_sensitive: bool,
                                 whole_word: bool) -> Optional[ScanPattern]:
    """构建"行模式"查找的正则表达式，关键字总是按字面量匹配"""
    pattern = re.escape(keyword)

    if whole_word:
        pattern = r'\b' + pattern + r'\b'

    flags = 0 if case_sensitive else re.IGNORECASE
    return _compile(pattern, flags, keyword)


def _compile(pattern: str, flags: int, keyword: str) -> Optional[ScanPattern]:
    try:
        return ScanPattern(re.compile(pattern, flags), keyword)
    except (re.error, OverflowError) as e:
        # 用户输入的正则表达式有语法错误
        logger.debug("正则表达式错误: %r - %s", keyword, e)
        return None
