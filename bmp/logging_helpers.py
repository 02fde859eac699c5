import logging

import coloredlogs

LOGGER_NAME = "bmp_decoder"


def initialise_logging(level=logging.INFO):
    """
    Set up timestamped, coloured log output for the decoder. Nothing is configured until this is called.

    :param level: Log level for the decoder logger
    :return: The decoder logger
    """

    logging.basicConfig(format='%(asctime)s.%(msecs)03d %(name)s %(levelname)s %(message)s', datefmt='%F %H:%M:%S',
                        level=level)
    logger = logging.getLogger(LOGGER_NAME)
    coloredlogs.install(level=level, logger=logger)
    logger.debug("Logging initialised for the BMP decoder.")
    return logger
