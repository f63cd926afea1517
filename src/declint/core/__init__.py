"""
Core lint engine.

Modules:
    - ``parser``: tree-sitter parsing and syntax error lookup.
    - ``source_code``: Token index and offset/location queries.
    - ``traverser``: Enter/exit hook dispatch over the tree.
    - ``fixer``: Fix objects, merging and application.
    - ``report``: Lint messages and results.
    - ``linter``: The driver tying the above together.
"""
