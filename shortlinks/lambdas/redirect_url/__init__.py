from shortlinks.utils import initialize_logging


initialize_logging()
