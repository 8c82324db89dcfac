"""School Attendance package.

This package is organized by feature modules (directory, access, ledger,
aggregation, gateway) with a thin Flask controller layer on top of
service/repository layers.
"""
