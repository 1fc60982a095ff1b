"""
SeaTrace REST API.

Provides DRF ViewSets for:
- Supplier (full CRUD)
- ProductGrade (read-only)
- RawMaterial (list, retrieve, intake)
- Lot (read + create from receipts + depuration/processing actions)
- ProcessingBatch (read + packaging QC action)
"""
