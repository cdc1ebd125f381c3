import tempfile
from pathlib import Path

# Fresh directory per process, so no run restores an earlier run's backups
DATA_DIR = Path(tempfile.mkdtemp(prefix="timecal-test-"))

# In-memory primary store
DATABASE_URL = "sqlite://"
SQL_ECHO = False

SNAPSHOT_ENABLED = True
BACKUP_KV_PATH = str(DATA_DIR / "localstorage.json")
BACKUP_DB_PATH = str(DATA_DIR / "TimeCalDB_SQLite.sqlite3")
EXPORT_DIR = str(DATA_DIR / "exports")

DEBUG = False
LOG_LEVEL = "WARNING"
LOG_FILE = None
