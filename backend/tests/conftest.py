"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach the real catalog
os.environ.setdefault("MUSEUM_API_URL", "http://catalog.test/list.json")
os.environ.setdefault("PREFETCH_ON_STARTUP", "false")
