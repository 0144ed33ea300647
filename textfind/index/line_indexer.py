import re
from typing import List

from textfind.dataform.search_result import TextSelection

_LINE_BREAK = re.compile(r'\r\n|\r|\n')


class LineIndexer:
    """行索引器 - 记录每行在文本中的范围

    支持 '\\n'、'\\r\\n'、'\\r' 三种换行符，行范围不包括换行符。
    以换行符结尾的文本，最后还有一个空行；空文本也算一个空行。
    """

    def get_line_text_selections(self, text: str) -> List[TextSelection]:
        """
        获取每一行的范围（相对于给定文本）

        Args:
            text: 文本内容

        Returns:
            按顺序排列、互不重叠的 TextSelection 列表
        """
        selections = []
        line_start = 0  # 第一行从偏移量0开始

        for line_break in _LINE_BREAK.finditer(text):
            selections.append(TextSelection(line_start, line_break.start()))
            # 记录下一行的起始偏移量
            line_start = line_break.end()

        selections.append(TextSelection(line_start, len(text)))
        return selections

    def get_line_text(self, text: str, selection: TextSelection) -> str:
        """获取行的正文内容，不包括换行符"""
        return text[selection.start:selection.end]

    def build_line_offsets(self, text: str) -> List[int]:
        """建立行索引 - 记录每行在文本中的开始偏移量"""
        return [selection.start for selection in self.get_line_text_selections(text)]
