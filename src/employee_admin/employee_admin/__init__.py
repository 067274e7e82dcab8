"""Employee administration package.

This package is organized by feature modules (employees, attendance, leaves)
with a thin Flask controller layer over service/repository layers. The
attendance and leave services hold the business rules; everything else is
plumbing around them.
"""
