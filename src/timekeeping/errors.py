"""
Exception types for the timekeeping package.

**Conceptual**: Two kinds of failure exist and they are reported differently:
  - Configuration errors: the *developer* passed a malformed format spec, a
    digit delimiter, an unknown unit or omitted a required argument. These
    are bugs to fix before shipping, so they are always raised.
  - Validation failures: the *end user* typed a date or time that doesn't
    parse. These are expected at runtime and are returned as the INVALID
    sentinel (see parsing.py) so UI code can branch without try/except.

The storage-format conversion sits in between: the caller chooses per call
whether a failure raises ConversionError or returns a fallback value.
"""


class TimekeepingError(Exception):
    """
    Base exception for all timekeeping errors.

    Caller can catch TimekeepingError to handle every error raised by this
    package, or catch a subclass for fine-grained handling.
    """
    pass


class ConfigurationError(TimekeepingError, ValueError):
    """
    Raised when a function is called with an invalid configuration.

    **Examples**: date format "dmy" (missing delimiter), "dmy1" (digit
    delimiter), time format "hx:", unit "fortnight", amount 0 for
    add_period().

    **Recovery**: None at runtime. Fix the calling code.
    """
    pass


class ConversionError(TimekeepingError, ValueError):
    """
    Raised by to_storage_format() when a value can't be converted and the
    caller did not supply a fallback.

    Attributes:
        value: The original input that failed to convert.
    """

    def __init__(self, message: str, value: str | None = None):
        super().__init__(message)
        self.value = value
