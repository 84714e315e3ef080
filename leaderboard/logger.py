import logging

LOGGER_NAME = 'leaderboard'
LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'

def configure_logging(level: str = 'INFO') -> logging.Logger:
    """Configure root handlers once and set the service log level"""
    level_no = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=level_no, format=LOG_FORMAT)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level_no)
    return logger

def get_logger(name: str = None) -> logging.Logger:
    if name:
        return logging.getLogger(f"{LOGGER_NAME}.{name}")
    return logging.getLogger(LOGGER_NAME)
