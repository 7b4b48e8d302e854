"""Attendance & Verification core.

Organized by feature modules (sessions, whitelist, ledger, attendance,
verification, users) with a thin Flask controller layer over service and
repository layers.
"""
