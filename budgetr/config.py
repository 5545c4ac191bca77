import logging
import os

from dotenv import load_dotenv

load_dotenv()

SEED_PATH = os.getenv("BUDGETR_SEED_PATH", "data/seed.json")
DEFAULT_FREQUENCY = os.getenv("BUDGETR_DEFAULT_FREQUENCY", "month")
CURRENCY_SYMBOL = os.getenv("BUDGETR_CURRENCY_SYMBOL", "$")
LOG_LEVEL = os.getenv("BUDGETR_LOG_LEVEL", "INFO")


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s',
    )
