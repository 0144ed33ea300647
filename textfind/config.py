import os


def env_flag(name: str, default: bool = False) -> bool:
    val = os.environ.get(name)
    if val is None:
        return default
    return val.lower() in ("1", "true", "yes", "on")


def env_int(name: str, default: int = 0) -> int:
    val = os.environ.get(name)
    if val is None or not val.strip():
        return default
    try:
        return int(val)
    except ValueError:
        return default


# 查找默认参数
DEFAULT_MAX_MATCH_LIMIT = max(0, env_int("TEXTFIND_MAX_MATCH_LIMIT", 0))  # 0 表示不限制
DEFAULT_CASE_SENSITIVE = env_flag("TEXTFIND_CASE_SENSITIVE", False)
DEFAULT_WHOLE_WORD = env_flag("TEXTFIND_WHOLE_WORD", False)
DEFAULT_USE_REGEX = env_flag("TEXTFIND_USE_REGEX", False)
DEFAULT_MATCH_ALL_INCLUDES = env_flag("TEXTFIND_MATCH_ALL_INCLUDES", True)

# 编辑器高亮颜色
HIGHLIGHT_COLOR = os.environ.get("TEXTFIND_HIGHLIGHT_COLOR", "#ffd54f")
SUB_MATCH_HIGHLIGHT_COLOR = os.environ.get("TEXTFIND_SUB_MATCH_HIGHLIGHT_COLOR", "#ff8a65")
