from __future__ import annotations

DIGITS = ("零", "一", "二", "三", "四", "五", "六", "七", "八", "九")
SECTION_UNITS = ((1000, "千"), (100, "百"), (10, "十"), (1, ""))
LARGE_UNITS = ((10**8, "亿"), (10**4, "万"))


def to_chinese_numeral(value: int) -> str:
    """Render a non-negative integer with Chinese numerals (10 -> 十, 101 -> 一百零一)."""
    if value < 0:
        raise ValueError(f"cannot render negative number: {value}")
    if value == 0:
        return DIGITS[0]

    text = _convert(value)
    # 10-19 (and 十万, 十亿 ...) drop the leading 一.
    if text.startswith("一十"):
        text = text[1:]
    return text


def _convert(value: int) -> str:
    for unit_value, unit in LARGE_UNITS:
        if value >= unit_value:
            high, low = divmod(value, unit_value)
            text = _convert(high) + unit
            if low:
                if low < unit_value // 10:
                    text += DIGITS[0]
                text += _convert(low)
            return text
    return _section(value)


def _section(value: int) -> str:
    text = ""
    pending_zero = False
    for unit_value, unit in SECTION_UNITS:
        digit = value // unit_value % 10
        if digit == 0:
            if text:
                pending_zero = True
            continue
        if pending_zero:
            text += DIGITS[0]
            pending_zero = False
        text += DIGITS[digit] + unit
    return text
