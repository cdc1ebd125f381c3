"""TimeCal package.

Personal work-time tracking per day, organised by feature modules
(records, hours, snapshot, backup) with service/repository layers and a
portable SQLite snapshot for backup, export and restore.
"""
