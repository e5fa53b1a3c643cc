"""School Administration package.

This package is organized by feature modules (users, students, attendance,
academic, nutrition, ...) with a thin Flask controller layer and
service/repository layers. Records live in a remote spreadsheet reached
through the sync client in ``sync``.
"""
