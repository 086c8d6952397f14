# ABOUTME: SQL DDL statements for the bookdesc option database.
# ABOUTME: Defines the options table, its lookup index, and schema versioning.

SCHEMA_V1 = """
-- Typed values are stored as text and parsed by the option handles
CREATE TABLE options (
    category      TEXT NOT NULL,
    scope         TEXT NOT NULL,
    name          TEXT NOT NULL,
    value         TEXT NOT NULL,
    date_modified TEXT,
    PRIMARY KEY (category, scope, name)
);

CREATE INDEX idx_options_scope ON options(category, scope);

-- Schema versioning for future migrations
CREATE TABLE schema_version (
    version    INTEGER NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

INSERT INTO schema_version (version) VALUES (1);
"""

# (version, sql) pairs applied in order by open_options; none yet past version 1
MIGRATIONS: list[tuple[int, str]] = []
