"""
Column-wise (pandas) helpers for batch date/time conversion.
"""
