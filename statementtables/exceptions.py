"""Errors raised for contract violations.

Malformed statement *data* never raises; these cover bad files, unreachable
services and export failures.
"""


class StatementError(Exception):
  """Base class for statementtables errors."""


class UnsupportedFileError(StatementError):
  """The input is missing or is not a PDF."""


class FileTooLargeError(StatementError):
  def __init__(self, path, size, limit):
    self.path = path
    self.size = size
    self.limit = limit
    super().__init__(
      f"{path} is too large ({size / 1024 / 1024:.2f} MB). "
      f"Maximum size is {limit / 1024 / 1024:.0f} MB."
    )


class ExtractionServiceError(StatementError):
  """The hosted extraction service failed or returned an unusable response."""


class ExportError(StatementError):
  """Rows or transactions could not be written in the requested format."""
