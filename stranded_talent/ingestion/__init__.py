"""
Dataset ingestion: read the precomputed summary table from JSON or CSV and
normalize it into immutable ``LaborRow`` records.

Modules
-------
dataset_loader : load_rows() + normalize_records() — field-alias mapping,
                 numeric coercion, label defaults; logs and returns an empty
                 dataset on failure.
"""
