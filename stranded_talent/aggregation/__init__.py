"""
Aggregation core: scope filtering and cohort breakdowns over dataset rows.

Modules
-------
scope     : filter_scope() + list_sectors() — row selection, no arithmetic.
breakdown : WeightTable, CohortStats, Breakdowns + compute_stats() /
            compute_breakdowns() — pure folds over scoped rows, no I/O.
"""
