"""Root pytest configuration for all tests."""

import logging

# googleapiclient logs discovery cache warnings that are noise in tests
logging.getLogger("googleapiclient").setLevel(logging.WARNING)
