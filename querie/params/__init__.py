"""Query parameter parsing and validation.

The params layer converts a flat mapping of textual query parameters into a strict, typed filter and
sort specification validated against a caller-supplied schema.
"""
