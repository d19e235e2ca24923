import logging

from lighthouse.logging_setup import configure_logging


def test_configure_logging_is_idempotent():
    logger = configure_logging()
    handlers = list(logger.handlers)
    again = configure_logging(debug=True)
    assert again is logger
    assert again.handlers == handlers
    assert again.level == logging.DEBUG
    configure_logging(debug=False)
    assert logger.level == logging.INFO
