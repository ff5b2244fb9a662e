import re

CJK_RE = re.compile(r"[\u4e00-\u9fff]")


def is_chinese(text: str) -> bool:
    """Check if the string contains at least one Chinese character"""
    return bool(CJK_RE.search(text or ""))


def normalize_word(word: str) -> str:
    """Trim, and lower-case anything that is not Chinese script"""
    word = (word or "").strip()
    if is_chinese(word):
        return word
    return word.lower()
