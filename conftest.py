import os

# Load .env.test when present so a developer can point the suite elsewhere
from dotenv import load_dotenv

env_test_path = os.path.join(os.path.dirname(__file__), ".env.test")
if os.path.exists(env_test_path):
    load_dotenv(env_test_path, override=True)

# Settings are read at import time by libs.db.config and libs.common.rate_limit,
# so the test environment must be in place before any app module is imported.
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("JWT_SECRET", "test-access-secret")
os.environ.setdefault("JWT_REFRESH_SECRET", "test-refresh-secret")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from libs.common.config import get_settings  # noqa: E402

# Clear cached settings to reload with the env vars above
get_settings.cache_clear()
