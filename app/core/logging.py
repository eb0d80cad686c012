import logging


def configure_logging() -> None:
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        )
    else:
        root_logger.setLevel(logging.INFO)
    # never log API keys, passwords or session tokens; upstream error bodies are fine
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
