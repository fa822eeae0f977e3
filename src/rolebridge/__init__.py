"""RoleBridge - tool-call mediation for users and roles.

Exposes create/read/update/delete operations over users and their access
roles to natural-language tool-calling agents, plus an idempotent seed.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
