"""
Static Analysis Package.

Three independent passes over one read-only Program AST.

Modules:
    - ``validator``: Declaration, assignment and call checks.
    - ``unused``: Declared-but-unused variable detection.
    - ``callgraph``: Transitive function dependencies.
    - ``scope``: Variable state used by the validator.
    - ``diagnostics``: Side channel for rejection reasons.
    - ``runner``: Mode dispatch and reports.
"""
