"""Root conftest: shared test configuration."""

import os

# Ensure tests never pick up real secrets or a real database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("APPLOVIN_SSV_SIGNING_KEY", "applovin-test-key")
os.environ.setdefault("IRONSOURCE_SSV_PRIVATE_KEY", "ironsource-test-key")
os.environ.setdefault("LOG_FORMAT", "text")
