"""Punchlog package.

Attendance tracking over an append-only event log kept in a remote store.
The package is organized by feature modules (events, shifts, summaries,
reports, sync, ...) with a thin Flask controller layer on top.
"""

__version__ = "0.3.0"
