"""Property-based testing for dsflint components.

These tests use the Hypothesis library to check invariants of the finding
ordering, report aggregation, canonical handling and terminology cache over
generated inputs rather than hand-picked examples.
"""
