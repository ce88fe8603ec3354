from __future__ import annotations
from decimal import Decimal


def format_coord(value: float) -> str:
    """坐标转文本；不用科学计数法，整数值不带 ".0"，与外部接口及地图链接的写法保持一致。"""
    text = format(Decimal(repr(float(value))), "f")
    if text.endswith(".0"):
        text = text[:-2]
    return text
