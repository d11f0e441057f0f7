# Diagnostic logging setup.
# The terminal is reserved for the booking dialogue, so loguru's default
# stderr sink is replaced by a file sink.

from loguru import logger

LOG_FORMAT = '{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}'


def setup_logging(settings):
    logger.remove()
    logger.add(
        str(settings.log_file),
        level=settings.log_level,
        format=LOG_FORMAT,
        rotation='1 MB',
        retention=3,
        encoding='utf-8',
    )
    logger.debug('Logging to {} at level {}', settings.log_file, settings.log_level)
