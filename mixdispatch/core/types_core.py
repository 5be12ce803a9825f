# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Minimal type core shared by the registry and the resolver.

Python classes stand in for declared types. A call site names its static type
explicitly; everything here reasons about that class and its MRO only, never
about the runtime type of the receiver. Capabilities are ABCs: a class
*declares* a capability by listing it among its bases, while virtual
subclasses (`Cap.register(X)`) only satisfy it dynamically.
"""

from __future__ import annotations

import abc
from enum import IntEnum
from typing import Any, List, Optional


class Capability(abc.ABC):
	"""
	Marker base for capability (interface) types.

	Subclasses whose bases are all capabilities are capabilities themselves;
	a concrete class mixing a capability into its bases is not.
	"""

	_capability = False

	def __init_subclass__(cls, **kwargs) -> None:
		super().__init_subclass__(**kwargs)
		cls._capability = all(b is Capability or is_capability(b) for b in cls.__bases__)


# Classes whose attributes never count as instance members of a user type.
_MEMBERLESS = (object, abc.ABC, Capability)


def is_capability(cls: object) -> bool:
	return isinstance(cls, type) and bool(cls.__dict__.get("_capability", False))


def declared_capabilities(static_type: type) -> List[type]:
	"""Capabilities statically declared by `static_type`, most-derived first."""
	return [c for c in static_type.__mro__ if is_capability(c)]


def declares_member(static_type: type, name: str) -> bool:
	"""
	Return True if `name` is an instance member reachable from `static_type`.

	Only class bodies along the MRO count; attributes set on instances and
	attributes inherited from the marker/ABC machinery do not.
	"""
	for klass in static_type.__mro__:
		if klass in _MEMBERLESS:
			continue
		if name in klass.__dict__:
			return True
	return False


class ConversionKind(IntEnum):
	"""
	Ranked argument conversions, best first.

	Resolution compares tuples of these left to right, so the numeric values
	are the precedence order and must stay dense and increasing.
	"""

	EXACT = 0
	REFERENCE = 1  # base class or statically declared capability
	NUMERIC = 2  # narrower numeric kind to a wider one
	BOXING = 3  # anything to `object` / `Any`


# Narrowest first. bool is an int subclass, so bool -> int is REFERENCE; the
# ladder still lets bool widen numerically to float/complex.
NUMERIC_LADDER = (bool, int, float, complex)


def conversion_kind(source: type, target: Any) -> Optional[ConversionKind]:
	"""
	Rank the conversion of a `source`-typed argument to a `target` parameter.

	Returns None when no implicit conversion exists (e.g. float -> int).
	"""
	if source is target:
		return ConversionKind.EXACT
	if target is object or target is Any:
		return ConversionKind.BOXING
	if isinstance(target, type) and target in source.__mro__:
		return ConversionKind.REFERENCE
	if source in NUMERIC_LADDER and target in NUMERIC_LADDER:
		if NUMERIC_LADDER.index(source) < NUMERIC_LADDER.index(target):
			return ConversionKind.NUMERIC
	return None


def type_label(tp: Any) -> str:
	if tp is Any:
		return "Any"
	return getattr(tp, "__qualname__", None) or repr(tp)


__all__ = [
	"Capability",
	"ConversionKind",
	"NUMERIC_LADDER",
	"conversion_kind",
	"declared_capabilities",
	"declares_member",
	"is_capability",
	"type_label",
]
