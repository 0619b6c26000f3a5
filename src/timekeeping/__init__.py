"""
Wall-clock date and time helpers.

Parsing and validation of user-entered date/time text, conversion to the
storage format, period arithmetic, ages, duration descriptions and
compact period ranges. All values are local wall-clock times with no
timezone conversion.
"""
