"""Migrate Tracker - Event-driven progress reporting for migration runs."""

import logging
import warnings

__version__ = "0.1.0"
__author__ = "Migrate Tracker Team"
__license__ = "Apache-2.0"

# Suppress verbose third-party library logging
# SQL echo would otherwise interleave with progress messages
logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)

warnings.filterwarnings("ignore", category=DeprecationWarning, module="sqlalchemy")
