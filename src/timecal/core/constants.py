"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SOLL_STUNDEN = 8.0
ABSENCE_HOURS = 8.0
DEFAULT_PAUSE = "00:30"

ABSENCE_VON = "08:00"
ABSENCE_BIS = "16:00"
ABSENCE_PAUSE = "00:00"

MONTHS_PER_YEAR = 12

BACKUP_KV_KEY = "timecal_sqlite_backup"
BACKUP_DB_NAME = "TimeCalDB_SQLite"
BACKUP_TABLE = "sqlitedb"
BACKUP_ROW_KEY = "backup"

EXPORT_PREFIX = "timecal_backup_"
EXPORT_SUFFIX = ".sqlite"
