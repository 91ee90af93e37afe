import logging
import logging.config

from config import config

def setup_logger(journey_config=None):
    journey_config = journey_config or config
    journey_config.ensure_directories()
    logging.config.dictConfig(journey_config.get_logging_config())
    return logging.getLogger()
