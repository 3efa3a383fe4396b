"""Formula evaluation against a fact store.

Responsibilities:
  - Provide the evaluator and result types for single-state formula checks.
  - Must not traverse transitions; each check is pinned to one state.
"""
