# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Escalation mixins attached to the demo message types.

Every function here stays a plain function (`escalate(msg)` works directly)
and is also registered with the module-level `registry`, so
`resolver.view(msg).escalate()` goes through resolution.
"""

from __future__ import annotations

from mixdispatch.demo.messages import (
	Confusable,
	Escalatable,
	Message,
	StatefulEscalatable,
	Unicodable,
)
from mixdispatch.method_registry import MixinRegistry
from mixdispatch.method_resolver import MethodResolver
from mixdispatch.weak_store import WeakAuxStore

registry = MixinRegistry()
resolver = MethodResolver(registry)

# One store per logical counter.
_escalations: WeakAuxStore[int] = WeakAuxStore()
_confusions: WeakAuxStore[str] = WeakAuxStore()


@registry.mixin
def escalate(self: Message) -> str:
	"""On the internet, caps escalate: one more '!' per call on the same receiver."""
	n = _escalations.get(self, 0)
	_escalations.set(self, n + 1)
	return self.text.upper() + "!" * n


@registry.mixin
def escalate_uppercase_only(self: Message) -> str:
	return self.text.upper()


@registry.mixin
def append(self: Message, other: Message) -> None:
	# Read both sides before writing so append(m, m) doubles the text.
	self.text = self.text + other.text


@registry.mixin
def escalated1(self: Escalatable) -> str:
	return self.text.upper()


@registry.mixin
def sophisticated1(self: Message, i: int) -> str:
	return f"Mixin: {i}"


@registry.mixin
def sophisticated2(self: Message, o: object) -> str:
	return f"Mixin: {o}"


@registry.mixin(name="describe")
def describe_int(self: Message, i: int) -> str:
	return f"{self.text}: int {i}"


@registry.mixin(name="describe")
def describe_any(self: Message, o: object) -> str:
	return f"{self.text}: value {o!r}"


@registry.mixin
def utf8(self: Unicodable) -> bytes:
	return self.text.encode("utf-8")


@registry.mixin
def confuse(self: Confusable) -> str:
	s = _confusions.get(self, "?")
	_confusions.set(self, s + s)
	return self.text + s


@registry.mixin
def escalated(self: StatefulEscalatable) -> str:
	"""Escalation with the counter kept in the receiver's own state."""
	n = self.get_state(StatefulEscalatable, 0)
	self.set_state(StatefulEscalatable, n + 1)
	return self.text.upper() + "!" * n


__all__ = [
	"append",
	"confuse",
	"describe_any",
	"describe_int",
	"escalate",
	"escalate_uppercase_only",
	"escalated",
	"escalated1",
	"registry",
	"resolver",
	"sophisticated1",
	"sophisticated2",
	"utf8",
]
