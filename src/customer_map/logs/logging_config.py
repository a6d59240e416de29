# ============================================================
# 📦 src/customer_map/logs/logging_config.py
# ============================================================

import sys
from loguru import logger


LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"


def setup_logging(level: str = "INFO"):
    """Substitui o sink padrão do loguru por stderr no formato do serviço."""
    logger.remove()
    logger.add(sys.stderr, colorize=True, level=level, format=LOG_FORMAT)
    return logger
