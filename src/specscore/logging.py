"""Loguruによるログ出力の設定。"""

import sys
from contextlib import suppress

from loguru import logger

_CURRENT_LEVEL: str | None = None
_HANDLER_IDS: list[int] = []

_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> [<level>{level: <8}</level>] <cyan>{name}</cyan> | {message}"


def configure_logging(level: str = "INFO") -> None:
    """標準エラー出力へのログハンドラを設定する。

    同じレベルで複数回呼び出しても何もしない。レベルが変わった場合は
    この関数が追加したハンドラのみを差し替え、外部で追加されたハンドラには触れない。

    Args:
        level: 出力する最小ログレベル（DEBUG, INFO, WARNING など）。
    """
    global _CURRENT_LEVEL

    level = level.upper()
    if level == _CURRENT_LEVEL:
        return

    for handler_id in _HANDLER_IDS:
        with suppress(ValueError):
            logger.remove(handler_id)
    _HANDLER_IDS.clear()

    # loguru の初期ハンドラ（id=0）は二重出力になるため外す
    with suppress(ValueError):
        logger.remove(0)

    handler_id = logger.add(sys.stderr, level=level, format=_FORMAT, colorize=sys.stderr.isatty())
    _HANDLER_IDS.append(handler_id)
    _CURRENT_LEVEL = level
