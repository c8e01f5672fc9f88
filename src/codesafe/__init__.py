"""`codesafe` - per-scope exception recovery, strict optionals and enum indexes.

Subpackages:
- policy: Scopes, exception policies and their registry
- safe: SafeOperator and the default ``safer`` functions
- values: Opt and Def
- enums: EnumIndex and value kinds
- util: Validity predicates, parsing, parser capability
- contracts: Contract violations and the unhandled-failure wrapper
- schemas: Configuration models
"""

__version__ = "0.1.0"
