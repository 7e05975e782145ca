"""Configuration for the penal code loader."""

import os

# Content delivery network serving the penal code; files are requested as
# `{CONTENT_DELIVERY_NETWORK}?file=<name>`.
CONTENT_DELIVERY_NETWORK = os.environ.get("CONTENT_DELIVERY_NETWORK", "")

PENAL_CODE_FILE = "gtaw_penal_code.json"

# Request settings
REQUEST_HEADERS = {
    "User-Agent": "arrest-calculator/0.1 (+penal-code-loader)",
    "Accept": "application/json",
}

# Be polite: delay between requests in seconds
REQUEST_DELAY = 0.5
REQUEST_TIMEOUT = 30

# Retry settings
MAX_RETRIES = 3
RETRY_BACKOFF = 2.0  # exponential backoff multiplier

# Local data
DATA_DIR = "data"
PENAL_CODE_PATH = f"{DATA_DIR}/penal_code.json"
ADDITIONS_PATH = f"{DATA_DIR}/additions.json"

# Output
OUTPUT_DIR = "out"
