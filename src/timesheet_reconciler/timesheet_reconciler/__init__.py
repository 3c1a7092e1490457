"""Timesheet Reconciler package.

This package is organized by feature modules (punches, timesheets,
reconciliation, leave, export, ...) with a thin Flask controller layer on top
of pure aggregation services.
"""
