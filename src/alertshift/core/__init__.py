"""alertshift core -- errors, logging, configuration, and collaborator protocols.

Architecture::

    errors.py          Structured error hierarchy (AlertShiftError, StoreError, ...)
    logging.py         structlog configuration + get_logger / LogContext
    protocols.py       ResourceStore and SettingsSource contracts
    config/            AlertShiftSettings (pydantic-settings) + settings sources
"""
