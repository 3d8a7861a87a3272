from pathlib import Path


PACKAGE_DIR = Path(__file__).resolve().parents[1]
PROJECT_ROOT = PACKAGE_DIR.parent

DATA_DIR = PACKAGE_DIR / "data"

UNKNOWN_PRODUCT_LABEL = "Unknown Product"
DEFAULT_CUSTOMER = "Walk-in Customer"
DEFAULT_PAYMENT_METHOD = "Cash"
DEFAULT_CODE_PREFIX = "PRD"

PAYMENT_METHODS = (
    "Cash",
    "Due",
    "Credit Card",
    "Debit Card",
    "Bank Transfer",
    "Mobile Payment",
)

# Simulated processing fees, for report estimates only.
FEE_RATES = {
    "Cash": 0.0,
    "Bank Transfer": 0.005,
}
DEFAULT_FEE_RATE = 0.029

DATE_RANGES = ("week", "month", "year", "all")
SALE_SORT_FIELDS = ("date", "saleRef", "customer", "payment", "amount")
SORT_ORDERS = ("asc", "desc")

STATUS_IN_STOCK = "In Stock"
STATUS_LOW_STOCK = "Low Stock"
STATUS_OUT_OF_STOCK = "Out of Stock"
