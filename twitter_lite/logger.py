import logging

logger = logging.getLogger('twitter_lite')
logger.addHandler(logging.NullHandler())
