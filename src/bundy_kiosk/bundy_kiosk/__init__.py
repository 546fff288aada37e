"""Bundy Kiosk package.

Attendance status engine for a shared clock-in terminal, organized by feature
modules (employees, attendance) with a thin Flask controller layer over
service/repository layers.
"""
