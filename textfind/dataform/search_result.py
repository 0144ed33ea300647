from dataclasses import dataclass, field
from typing import Tuple

from textfind.errors import InvalidArgumentError


@dataclass(frozen=True)
class TextSelection:
    """文本范围 - 整篇文本中的开始、结束索引（结束索引不包括）"""
    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.end < self.start:
            raise InvalidArgumentError(f"无效的文本范围: ({self.start}, {self.end})")

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True)
class PartialTextContent:
    """文本块 - 整篇文本中指定范围的部分文本内容

    支持在多个指定范围内查找（比如只在标题中查找），每一个范围就是一个文本块。
    """
    offset: int           # 文本块在整篇文本中的开始索引
    text_content: str     # 文本块的文本内容


@dataclass(frozen=True)
class MatchItem:
    """查找到的一项匹配项

    start/end 是相对于整篇文本的索引，而不是相对于文本块的。
    """
    start: int            # 匹配文本的开始索引
    end: int              # 匹配文本的结束索引（不包括）
    text_content: str     # 匹配中的文本内容

    @property
    def selection(self) -> TextSelection:
        return TextSelection(self.start, self.end)

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class SubMatchItem:
    """"多关键字行查找"模式下，一行之内的子匹配项

    offset 相对于整篇文本，既不是相对文本块，也不是相对行。
    """
    offset: int
    text_content: str

    @property
    def end(self) -> int:
        return self.offset + len(self.text_content)


@dataclass(frozen=True)
class LineMatchItem:
    """"多关键字行查找"模式下查找到的一整行

    - start/end 是行的开始和结束位置（不包括换行符），相对于整篇文本
    - sub_match_items 按 offset 从小到大排列；只查找排除关键字时为空
    """
    start: int
    end: int
    text_content: str     # 行的正文内容，不包括换行符
    sub_match_items: Tuple[SubMatchItem, ...] = field(default_factory=tuple)

    @property
    def match_item(self) -> MatchItem:
        return MatchItem(self.start, self.end, self.text_content)

    @property
    def selection(self) -> TextSelection:
        return TextSelection(self.start, self.end)

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class ReplaceResult:
    """执行替换操作后的结果"""
    text_content: str     # 替换后的文本内容
    cursor_position: int  # 替换后的新光标位置
