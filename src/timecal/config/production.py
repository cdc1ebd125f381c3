import os

from .config import Config

DATA_DIR = Config.DATA_DIR
DATABASE_URL = Config.DATABASE_URL
SQL_ECHO = Config.SQL_ECHO

SNAPSHOT_ENABLED = Config.SNAPSHOT_ENABLED
BACKUP_KV_PATH = Config.BACKUP_KV_PATH
BACKUP_DB_PATH = Config.BACKUP_DB_PATH
EXPORT_DIR = Config.EXPORT_DIR

DEBUG = False
LOG_LEVEL = Config.LOG_LEVEL
LOG_FILE = os.getenv("LOG_FILE", str(DATA_DIR / "timecal.log"))
