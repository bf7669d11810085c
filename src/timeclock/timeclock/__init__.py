"""Timeclock package.

Turns biometric time-clock exports (punch logs and the binary user
directory) into per-day attendance calendars and monthly summaries.
Organized by feature modules (punches, directory, attendance, reports,
payroll) with a thin Flask controller layer on top of the services.
"""
