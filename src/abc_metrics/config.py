"""
Configuration settings for analysis and reporting.
"""

import os
from typing import FrozenSet, Tuple

# Severity buckets: a score below the bound gets the label
SEVERITY_THRESHOLDS: Tuple[Tuple[float, str], ...] = (
    (10.0, "Low"),
    (20.0, "Medium"),
    (40.0, "High"),
)
SEVERITY_CEILING_LABEL: str = "Very High"

# Source handling
SOURCE_ENCODING: str = "utf-8"
GO_LANGUAGE: str = "go"

# Directories never descended into when a directory is analyzed
EXCLUDED_DIRS: FrozenSet[str] = frozenset({".git", ".hg", ".svn", "vendor", "node_modules"})

# Logging
LOG_LEVEL: str = os.environ.get("ABC_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT: str = "%(levelname)s %(name)s: %(message)s"

# CSV report
CSV_FIELDS: Tuple[str, ...] = ("File", "A", "B", "C", "ABC", "Severity", "Error")
