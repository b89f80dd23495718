import logging

logger = logging.getLogger("localdoc_sdk")
logger.addHandler(logging.NullHandler())
