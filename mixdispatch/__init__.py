# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
mixdispatch: attach external behavior (mixins) to objects and resolve calls.

Modules:
  core: capability marker, conversion ranking, diagnostics
  weak_store: identity-keyed side table with weak ownership
  method_registry: mixin declarations bucketed by name/scope
  method_resolver: instance-vs-mixin priority and overload selection
  demo: message types and the escalation mixins
"""

__all__ = ["core", "weak_store", "method_registry", "method_resolver", "demo"]
