from typing import Iterable, List, Optional, Sequence, Tuple

from PyQt5.QtCore import QObject, pyqtSignal
from PyQt5.QtGui import QColor, QTextCharFormat, QTextCursor, QTextDocument
from PyQt5.QtWidgets import QTextEdit

from textfind import config
from textfind.dataform.search_result import PartialTextContent, ReplaceResult
from textfind.logic.replacer import replace
from textfind.logic.search_engine import find
from textfind.logic.search_manager import SearchOptions

# Qt 的光标位置按 UTF-16 计数，Python 字符串按码位计数，
# BMP 之外的字符（如 emoji）在 Qt 中占两个位置


def to_qt_position(text: str, index: int) -> int:
    """Python 字符串索引 -> Qt 光标位置"""
    return index + sum(1 for ch in text[:index] if ord(ch) > 0xFFFF)


def from_qt_position(text: str, position: int) -> int:
    """Qt 光标位置 -> Python 字符串索引"""
    index = 0
    units = 0
    while index < len(text) and units < position:
        units += 2 if ord(text[index]) > 0xFFFF else 1
        index += 1
    return index


def blocks_from_document(document: QTextDocument,
                         selections: Optional[Iterable[Tuple[int, int]]] = None) -> List[PartialTextContent]:
    """
    把文档转换成文本块

    Args:
        document: 文档
        selections: 只在这些 (start, end) 范围内查找（Python 字符串索引），
            None 表示整篇文档

    Returns:
        按位置排列的 PartialTextContent 列表
    """
    text = document.toPlainText()
    if selections is None:
        return [PartialTextContent(0, text)]
    return [PartialTextContent(start, text[start:end]) for start, end in sorted(selections)]


def blocks_from_editor(editor, in_selection: bool = False) -> List[PartialTextContent]:
    """获取编辑器的文本块；in_selection 为 True 且有选中文本时只返回选中范围"""
    cursor = editor.textCursor()
    if in_selection and cursor.hasSelection():
        text = editor.toPlainText()
        start = from_qt_position(text, cursor.selectionStart())
        end = from_qt_position(text, cursor.selectionEnd())
        return blocks_from_document(editor.document(), [(start, end)])
    return blocks_from_document(editor.document())


def match_extra_selections(editor, match_items: Sequence,
                           color: str = config.HIGHLIGHT_COLOR,
                           sub_match_color: str = config.SUB_MATCH_HIGHLIGHT_COLOR) -> List[QTextEdit.ExtraSelection]:
    """
    生成匹配项的高亮，传给 editor.setExtraSelections()

    LineMatchItem 高亮整行，行内的子匹配项再用 sub_match_color 高亮。
    """
    text = editor.toPlainText()
    document = editor.document()
    extra_selections = []

    def highlight(start: int, end: int, background: str):
        selection = QTextEdit.ExtraSelection()
        char_format = QTextCharFormat()
        char_format.setBackground(QColor(background))
        selection.format = char_format
        cursor = QTextCursor(document)
        cursor.setPosition(to_qt_position(text, start))
        cursor.setPosition(to_qt_position(text, end), QTextCursor.KeepAnchor)
        selection.cursor = cursor
        extra_selections.append(selection)

    for match_item in match_items:
        highlight(match_item.start, match_item.end, color)
        for sub_match_item in getattr(match_item, "sub_match_items", ()):
            highlight(sub_match_item.offset, sub_match_item.end, sub_match_color)

    return extra_selections


def select_match(editor, match_item):
    """选中匹配项并滚动到可见位置"""
    text = editor.toPlainText()
    cursor = QTextCursor(editor.document())
    cursor.setPosition(to_qt_position(text, match_item.start))
    cursor.setPosition(to_qt_position(text, match_item.end), QTextCursor.KeepAnchor)
    editor.setTextCursor(cursor)
    editor.ensureCursorVisible()


def apply_replace_result(editor, result: ReplaceResult):
    """把替换结果写回编辑器（作为一次撤销操作），并恢复光标位置"""
    cursor = QTextCursor(editor.document())
    cursor.beginEditBlock()
    cursor.select(QTextCursor.Document)
    cursor.insertText(result.text_content)
    cursor.endEditBlock()

    position = min(max(result.cursor_position, 0), len(result.text_content))
    cursor.setPosition(to_qt_position(result.text_content, position))
    editor.setTextCursor(cursor)


def replace_all_in_editor(editor, keyword: str, replace_text: str,
                          options: Optional[SearchOptions] = None,
                          in_selection: bool = False) -> int:
    """
    在编辑器中全部替换

    Returns:
        替换的数量
    """
    options = options or SearchOptions()
    match_items = find(blocks_from_editor(editor, in_selection), keyword,
                       options.case_sensitive, options.whole_word, options.use_regex,
                       options.max_match_limit)
    if not match_items:
        return 0

    text = editor.toPlainText()
    cursor_position = from_qt_position(text, editor.textCursor().position())
    apply_replace_result(editor, replace(text, replace_text, match_items, cursor_position))
    return len(match_items)


class SearchResultsManager(QObject):
    """
    搜索结果管理器 - 保存一次查找的结果，支持上一个/下一个导航
    """

    current_result_changed = pyqtSignal(object)  # 当前结果变化

    def __init__(self):
        super().__init__()
        self.results = []
        self.current_index = -1

    def set_results(self, results: Sequence):
        """替换全部结果，有结果时自动选中第一个"""
        self.results = list(results)
        self.current_index = -1
        if self.results:
            self.navigate_to_index(0)

    def clear_results(self):
        self.results = []
        self.current_index = -1

    def get_result_count(self) -> int:
        return len(self.results)

    def get_current_result(self):
        if 0 <= self.current_index < len(self.results):
            return self.results[self.current_index]
        return None

    def navigate_to_next(self) -> bool:
        if not self.results:
            return False
        return self.navigate_to_index((self.current_index + 1) % len(self.results))

    def navigate_to_previous(self) -> bool:
        if not self.results:
            return False
        return self.navigate_to_index((self.current_index - 1) % len(self.results))

    def navigate_to_index(self, index: int) -> bool:
        if not (0 <= index < len(self.results)):
            return False

        self.current_index = index
        self.current_result_changed.emit(self.results[index])
        return True
