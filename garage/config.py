# garage/config.py
import logging
import os

# Catalog source: http(s) URL or a local JSON file
CATALOG_URL = os.getenv(
    "CATALOG_URL",
    "https://raw.githubusercontent.com/Fernandojoseee/carros/refs/heads/main/data.json",
)
CATALOG_TIMEOUT = float(os.getenv("CATALOG_TIMEOUT", "10"))

STORE_NAME = os.getenv("STORE_NAME", "GarageOnline")

# Single currency, not configurable
CURRENCY_CODE = "USD"
CURRENCY_SYMBOL = "$"

DEFAULT_CUSTOMER = os.getenv("DEFAULT_CUSTOMER", "Customer")
INVOICE_DIR = os.getenv("INVOICE_DIR", "invoices")
INVOICE_DATE_FORMAT = os.getenv("INVOICE_DATE_FORMAT", "%d/%m/%Y")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PORT = int(os.getenv("PORT", "8000"))


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
