"""SQLite schema definitions."""

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS commands (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    created_ms INTEGER NOT NULL,
    times_selected INTEGER NOT NULL DEFAULT 0,
    exit_code INTEGER NOT NULL,
    directory TEXT NOT NULL,
    command TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_commands_created_ms ON commands (created_ms);
"""
