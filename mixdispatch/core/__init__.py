"""
mixdispatch.core: shared type helpers and diagnostics.

Modules:
  - diagnostics: Diagnostic record for resolution failures
  - types_core: Capability marker, member lookup, conversion ranking
"""

__all__ = [
    "diagnostics",
    "types_core",
]
