"""
Cohort profile classification.

Modules
-------
classifier : ProfileSignals dataclass + classify_profile() — threshold
             signals derived from the breakdowns, no I/O.
"""
