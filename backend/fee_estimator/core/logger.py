"""
日志配置模块
"""
import logging
import sys
from typing import Optional

from .config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    配置 fee_estimator 包的日志记录器，防止重复添加 handler

    Args:
        level: 日志级别名称，未指定时使用 settings.LOG_LEVEL
    """
    logger = logging.getLogger("fee_estimator")
    level_name = (level or settings.LOG_LEVEL).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    # 已配置过时只更新级别
    if logger.handlers:
        logger.setLevel(log_level)
        for handler in logger.handlers:
            handler.setLevel(log_level)
        return logger

    logger.setLevel(log_level)
    # 子模块（services / api）的日志统一由此 logger 输出
    logger.propagate = False

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(console_handler)

    return logger
