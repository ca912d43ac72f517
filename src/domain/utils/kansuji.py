"""漢数字→算用数字変換ユーティリティ."""

import unicodedata


# 漢数字→数値のマッピング
_KANJI_DIGITS: dict[str, int] = {
    "〇": 0,
    "一": 1,
    "壱": 1,
    "二": 2,
    "三": 3,
    "四": 4,
    "五": 5,
    "六": 6,
    "七": 7,
    "八": 8,
    "九": 9,
}

# 万未満の位取り
_SMALL_UNITS: dict[str, int] = {
    "十": 10,
    "百": 100,
    "千": 1000,
}

_MAN = 10000


def kansuji_to_int(text: str) -> int:
    """漢数字を整数に変換する.

    「四」→4、「十二」→12、「二十」→20、「三百五」→305、「一万二千」→12000 等に対応。
    「二〇」のように位取りを使わない表記は桁をそのまま並べたものとして扱う。
    算用数字・全角数字の場合はそのまま変換する。

    Args:
        text: 漢数字文字列または数字文字列

    Returns:
        変換後の整数

    Raises:
        ValueError: 変換できない場合
    """
    normalized = unicodedata.normalize("NFKC", text).strip()
    if not normalized:
        msg = "空文字列は変換できません"
        raise ValueError(msg)

    if normalized.isdigit():
        return int(normalized)

    result = 0
    section = 0
    current: int | None = None

    for char in normalized:
        if char in _KANJI_DIGITS:
            digit = _KANJI_DIGITS[char]
            # 位取りなしの連続した数字（例: 「二〇」）
            current = digit if current is None else current * 10 + digit
        elif char in _SMALL_UNITS:
            section += (current if current is not None else 1) * _SMALL_UNITS[char]
            current = None
        elif char == "万":
            section += current or 0
            result += (section if section else 1) * _MAN
            section = 0
            current = None
        else:
            msg = f"変換できない文字: {char}"
            raise ValueError(msg)

    return result + section + (current or 0)
