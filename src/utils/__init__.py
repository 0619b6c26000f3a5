"""
Generic utility functions shared across modules.

Includes clock abstractions and clock-skew correction.
"""
