"""
Static analysis helpers shared by rules.
"""

from declint.analysis.scope import Definition, Reference, Scope, ScopeManager, ScopeType, Variable

__all__ = ["Definition", "Reference", "Scope", "ScopeManager", "ScopeType", "Variable"]
