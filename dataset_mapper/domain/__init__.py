"""Domain layer for the dataset mapper.

This layer contains the mapping schema model, row validation and the
normalization of source records. It is independent of storage and I/O.
"""
