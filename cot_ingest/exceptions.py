"""
Custom exception hierarchy for cot-ingest.

The CSV parsers never raise: messy input degrades to fewer records or
zero values. Exceptions belong to the layers around them (config files,
output files), where a failure is something the caller has to fix.

Why a custom hierarchy:
- Callers can catch ``CotIngestError`` for everything the library
  raises deliberately, or a specific subclass.
- Messages name the file and setting involved.
"""


class CotIngestError(Exception):
    """Base exception for all cot-ingest errors."""


class ConfigValidationError(CotIngestError):
    """Raised when cotconfig.yaml is unusable.

    This can happen if:
    - The file is empty.
    - Neither a positions nor a history source is configured.
    """


class ExportError(CotIngestError):
    """Raised when the exporter fails to write output files.

    For example, permission errors, disk full, or unsupported format.
    """
