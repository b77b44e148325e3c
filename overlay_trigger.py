import logging

logger = logging.getLogger(__name__)

FIRE = "fire"
NO_OP = "no-op"


def fire_overlay_trigger(matched: bool) -> str:
    if matched:
        logger.info("Stand gesture detected, showing overlay")
        return FIRE
    logger.debug("No stand gesture")
    return NO_OP
