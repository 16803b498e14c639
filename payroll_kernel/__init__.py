"""
Payroll Kernel

Shared foundation for the payroll and attendance computation core:
- Decimal coercion and explicit rounding
- Wall-clock time parsing
- Status workflow value objects
- Structured JSON logging
- Typed exception hierarchy
"""

__version__ = "0.1.0"
