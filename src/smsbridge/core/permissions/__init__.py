from .gate import AuthorizationGate, Capability, StaticAuthorizationGate

__all__ = ["AuthorizationGate", "Capability", "StaticAuthorizationGate"]
