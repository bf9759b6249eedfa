"""
utils package
-------------

Contains utility modules used throughout the roster application.

Includes constants loading, logging setup, calendar helpers, input validation,
spreadsheet import/export and the local workspace store.
"""
