from pathlib import Path


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent

# Log directory
LOG_DIR = BASE_DIR / 'logs'

# SQLite database directory (shared with the setup scripts)
SHARED_DB_DIR = BASE_DIR / 'shared-db'
