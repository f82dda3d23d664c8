import logging

LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'


def configure_logging(level: str = 'INFO') -> None:
    """Attach one stream handler to the root logger.

    Streamlit re-executes the script on every interaction, so repeated calls
    only adjust the level.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    if getattr(configure_logging, '_applied', False):
        return
    configure_logging._applied = True
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
