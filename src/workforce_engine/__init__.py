"""Workforce engine: shift coverage and payroll period tracking."""

__version__ = "0.1.0"
