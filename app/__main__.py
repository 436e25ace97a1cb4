import logging
import sys

from dotenv import load_dotenv

from .config import load_settings
from .metrics import start_metrics_server
from .server import run


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)-12s | %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("aiohttp.access").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def main() -> None:
    load_dotenv()
    settings = load_settings()
    setup_logging(settings.log_level)

    if settings.metrics_enabled:
        start_metrics_server(settings.metrics_port)
        logging.info(f"📊 Metrics exposed on :{settings.metrics_port}")

    run(settings)


if __name__ == "__main__":
    main()
