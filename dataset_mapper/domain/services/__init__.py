"""Domain services.

Stateless operations over mappings and rows: normalization, field
ordering and validation.
"""
