"""Failure-aware execution.

- operator: SafeOperator, bound to one scope's exception policy
- safer: module-level functions over a default, absorbing operator
  (import it as ``from codesafe.safe import safer``)
"""

from codesafe.safe.operator import SafeOperator, safer_for

__all__ = ["SafeOperator", "safer_for"]
