"""Student attendance tracker package.

Organized by feature modules (roster, attendance) with a thin Flask
controller layer over service / repository layers. Daily attendance is
persisted as one CSV file per calendar date.
"""
