# domain/__init__.py

from .audit import audit, audit_contract, generate_invariants

__all__ = [
    "audit",
    "audit_contract",
    "generate_invariants",
]
