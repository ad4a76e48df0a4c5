"""
Core modules for Team Usage.

This package contains the usage ledger, the aggregation engine and the
breakdown formatter for hierarchies of cooperating agents.
"""
