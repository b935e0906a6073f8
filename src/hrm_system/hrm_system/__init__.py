"""HRM System package.

This package is organized by feature modules (employees, attendance, leaves,
holidays, payroll) with a thin Flask controller layer and service/repository
layers underneath.
"""
