from typing import Sequence

from textfind.dataform.search_result import MatchItem, ReplaceResult


def replace(text_content: str, replace_text: str, match_items: Sequence[MatchItem],
            cursor_position: int) -> ReplaceResult:
    """
    替换所有匹配项，并计算新的光标位置

    不使用 re.sub() 整体替换：对能匹配空字符串的表达式它没有死循环保护，
    也无法跟踪光标。这里按顺序逐个处理匹配项，replace_text 原样插入，
    不支持 \\1、\\g<name> 之类的分组引用。

    Args:
        text_content: 原文本
        replace_text: 替换成的文本
        match_items: 匹配项，必须按 start 从小到大排列且互不重叠
            （find() / find_lines() 的结果满足这个条件）
        cursor_position: 原光标位置

    Returns:
        ReplaceResult
    """
    current_offset = 0  # 当前正在处理的原文本索引
    position_after = cursor_position  # 光标的新位置

    buffer = []
    for match_item in match_items:
        match_length = match_item.end - match_item.start

        if match_item.start != current_offset:
            # 上一次处理的位置到这个匹配项之间的普通文本
            buffer.append(text_content[current_offset:match_item.start])
            current_offset = match_item.start

        buffer.append(replace_text)

        if current_offset < cursor_position:
            # 匹配项位于原光标之前，光标随替换后的文本移动
            position_after += len(replace_text) - match_length

        current_offset += match_length

    # 尾部剩余的文本
    if current_offset != len(text_content):
        buffer.append(text_content[current_offset:])

    replaced_text = ''.join(buffer)
    # 光标原本落在被缩短的匹配项内部时可能越界
    position_after = min(max(position_after, 0), len(replaced_text))
    return ReplaceResult(replaced_text, position_after)
