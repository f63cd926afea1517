"""
The `one-var` rule package.

Modules:
    - ``options``: Option schema and per-kind policy derivation.
    - ``declaration``: Read-only views over declaration statements.
    - ``scope_stack``: Function/block scope records for the ALWAYS policy.
    - ``classifier``: Initialized/uninitialized and special-call counts.
    - ``policy``: The combine/split decision checks.
    - ``fixes``: Join and split fix synthesis.
    - ``rule``: Traversal hooks tying it together.
"""
