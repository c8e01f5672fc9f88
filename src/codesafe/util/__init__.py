"""Glue utilities.

- check: Null, blank, emptiness and validity predicates
- parse: Lenient text-to-value parsing
- parsers: Injected object/list parser capability
"""
