import os

# In-memory database for the whole test session; must be set before config is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ.setdefault("LOG_LEVEL", "WARNING")
