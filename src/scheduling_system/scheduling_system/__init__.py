"""Employee Scheduling package.

This package is organized by feature modules (employees, schedules, leaves)
with a thin Flask controller layer and service/repository layers.
"""
