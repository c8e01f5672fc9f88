"""Value containers.

- opt: Opt, the strict optional
- defaults: Def, a default value paired with an acceptance test
"""
