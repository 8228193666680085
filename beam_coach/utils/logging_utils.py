import logging
from beam_coach.config import config

def setup_logging():
    """
    Configure logging level based on debug mode setting.
    Non-debug mode uses WARNING level to minimize console output.
    Debug mode uses INFO level so every tick and session change is traced.
    """
    if config.debug_mode == "non_debug":
        level = logging.WARNING
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    return logging.getLogger("beam_coach")


def apply_log_level():
    """Re-apply the level after config.setup_from_args() changed the mode"""
    level = logging.WARNING if config.debug_mode == "non_debug" else logging.INFO
    logger.setLevel(level)

# Global logger instance - import this in other modules
logger = setup_logging()
