"""
Payroll Modules.

Thin caller-side layers over the payroll kernel and engines.  Each module
contains:
- Domain models (the nouns the form and persistence layers exchange)
- Pure helpers (period aggregation, reports)
- Validation and workflows (business rules the engines deliberately skip)
- A service facade tying the pieces together

Modules:
- Attendance: daily punch records, checkout correction, period summaries
- Payroll: payroll records, submission validation, status workflow, reports

Persistence is not here: every function returns new immutable objects for
the caller's CRUD layer to store.
"""

from payroll_modules import attendance, payroll

__all__ = ["attendance", "payroll"]
