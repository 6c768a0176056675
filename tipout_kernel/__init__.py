"""
Tipout Kernel

Domain records and shared infrastructure for the shift/payroll tracker:
- Immutable shift, role and effective-dated role-config records
- Employee/role and range-wide payroll summary records
- Typed exceptions with machine-readable codes
- Structured JSON logging
"""

__version__ = "0.1.0"
