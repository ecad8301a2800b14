"""Root conftest - shared test configuration."""

import os

# Ensure tests never reach a real MongoDB
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:1")
os.environ.setdefault("LOG_FORMAT", "text")
