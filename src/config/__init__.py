"""
Configuration loading and validation for settings.

Provides a strongly typed settings object for timekeeping defaults, loaded
from environment variables with upfront validation.
"""
