# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Message types used to exercise mixin resolution.

Dataclasses compare by value (`eq=True` makes them unhashable), so any state
attached to them has to be keyed by identity.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from typing import Any, Dict

from mixdispatch.core.types_core import Capability


class Escalatable(Capability):
	"""Has `text`; gains `escalated1` as a capability mixin."""


class Unicodable(Capability):
	"""Has `text`; gains `utf8` as a capability mixin."""


class Stateful(Capability):
	"""Keeps its own per-capability state instead of a side table."""

	@abc.abstractmethod
	def get_state(self, key: type, initial: Any) -> Any: ...

	@abc.abstractmethod
	def set_state(self, key: type, value: Any) -> None: ...


class Confusable(Stateful):
	pass


class StatefulEscalatable(Stateful):
	pass


@dataclass
class Message:
	text: str = ""


@dataclass
class UnicodeMessage(Message):
	def utf8(self) -> bytes:
		return self.text.encode("utf-8")


@dataclass
class EscalatableUnicodeMessage(UnicodeMessage, Escalatable):
	pass


@dataclass
class DynamicMessage(Message, Escalatable):
	# Shadows the Escalatable mixin of the same name unless the caller upcasts.
	def escalated1(self) -> str:
		return self.text.lower()

	def sophisticated1(self, o: object) -> str:
		return f"Message: {type(o).__name__}"

	def sophisticated2(self, i: int) -> str:
		return f"Message: {type(i).__name__}"


@dataclass
class CoolMessage(Message, Escalatable, Unicodable):
	pass


@dataclass
class StatefulMessage(Message, StatefulEscalatable, Confusable):
	_states: Dict[type, Any] = field(default_factory=dict, repr=False, compare=False)

	def get_state(self, key: type, initial: Any) -> Any:
		return self._states.get(key, initial)

	def set_state(self, key: type, value: Any) -> None:
		self._states[key] = value


__all__ = [
	"Confusable",
	"CoolMessage",
	"DynamicMessage",
	"Escalatable",
	"EscalatableUnicodeMessage",
	"Message",
	"Stateful",
	"StatefulEscalatable",
	"StatefulMessage",
	"Unicodable",
	"UnicodeMessage",
]
