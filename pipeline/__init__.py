"""
Parisar — Reading Pipeline Package.

Components:
    - ingestion: incoming reading validation
    - classification: AQI categories, status tiers and reading normalization
    - aggregation: fleet statistics, critical areas, filtering and sorting
    - scoring: what-if AQI predictor and prediction session
    - refresh: periodic dashboard refresh job
"""
