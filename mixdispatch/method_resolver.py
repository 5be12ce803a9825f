# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Call resolution atop MixinRegistry.

This module applies the resolution rules:
- An instance member reachable from the static type is the only candidate;
  the registry is not consulted at all.
- Otherwise registry candidates for the static type compete by ranked
  conversions (exact < reference < numeric < boxing), receiver first, then
  arguments left to right.
- A tie at the best rank is an ambiguity error, never broken by registration
  order.

Resolution depends only on the static type named at the call site. The
runtime type of the receiver plays no part, so capability mixins stay
invisible from a concrete static type that does not declare the capability
until the caller explicitly upcasts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from mixdispatch.core.diagnostics import Diagnostic
from mixdispatch.core.types_core import ConversionKind, conversion_kind, declares_member, type_label
from mixdispatch.method_registry import MixinDecl, MixinRegistry


class ResolutionError(ValueError):
	"""Raised when no viable or ambiguous candidates are found."""

	code: Optional[str] = None

	def __init__(self, message: str, *, site: Optional[str] = None, notes: Optional[List[str]] = None) -> None:
		super().__init__(message)
		self.site = site
		self.notes = list(notes or [])

	def to_diagnostic(self) -> Diagnostic:
		return Diagnostic(message=str(self), code=self.code, phase="resolve", site=self.site, notes=list(self.notes))


class NoMatchingMember(ResolutionError):
	code = "E-METHOD-NO-MATCH"


class AmbiguousMatch(ResolutionError):
	code = "E-METHOD-AMBIGUOUS"

	def __init__(self, message: str, *, candidates: Sequence[MixinDecl], site: Optional[str] = None, notes: Optional[List[str]] = None) -> None:
		super().__init__(message, site=site, notes=notes)
		self.candidates = tuple(candidates)


class CandidateSource(Enum):
	INSTANCE = auto()
	MIXIN = auto()


@dataclass(frozen=True)
class MethodResolution:
	"""Selected candidate plus the conversion ranks that selected it."""

	static_type: type
	name: str
	source: CandidateSource
	decl: Optional[MixinDecl] = None
	ranks: Tuple[ConversionKind, ...] = ()

	def invoke(self, receiver: object, args: Sequence[Any] = ()) -> Any:
		if self.source is CandidateSource.INSTANCE:
			return getattr(receiver, self.name)(*args)
		assert self.decl is not None
		return self.decl.body(receiver, *args)


def _site_label(static_type: type, name: str, arg_types: Sequence[Any]) -> str:
	return f"{type_label(static_type)}.{name}({', '.join(type_label(a) for a in arg_types)})"


def _rank(decl: MixinDecl, static_type: type, arg_types: Sequence[Any]) -> Optional[Tuple[ConversionKind, ...]]:
	"""
	Rank a candidate for the given call, or None if it is not viable.

	The receiver is ranked as parameter zero: a mixin scoped to the static type
	itself beats one scoped to an ancestor or a declared capability.
	"""
	params = decl.signature.param_types
	if len(params) != len(arg_types):
		return None
	ranks = [ConversionKind.EXACT if decl.scope is static_type else ConversionKind.REFERENCE]
	for arg, param in zip(arg_types, params):
		kind = conversion_kind(arg, param)
		if kind is None:
			return None
		ranks.append(kind)
	return tuple(ranks)


def resolve_method_call(
	registry: MixinRegistry,
	*,
	static_type: type,
	method_name: str,
	arg_types: Sequence[Any],
	visible_modules: Optional[Iterable[str]] = None,
) -> MethodResolution:
	site = _site_label(static_type, method_name, arg_types)
	if declares_member(static_type, method_name):
		return MethodResolution(static_type=static_type, name=method_name, source=CandidateSource.INSTANCE)

	candidates = registry.get_candidates(name=method_name, static_type=static_type, visible_modules=visible_modules)
	if not candidates:
		raise NoMatchingMember(
			f"no member or mixin '{method_name}' visible from static type {type_label(static_type)}",
			site=site,
		)

	viable: List[Tuple[Tuple[ConversionKind, ...], MixinDecl]] = []
	for decl in candidates:
		ranks = _rank(decl, static_type, arg_types)
		if ranks is not None:
			viable.append((ranks, decl))
	if not viable:
		raise NoMatchingMember(
			f"no matching overload of mixin '{method_name}' for {site}",
			site=site,
			notes=[f"candidate: {decl.label()}" for decl in candidates],
		)

	best = min(ranks for ranks, _decl in viable)
	winners = [decl for ranks, decl in viable if ranks == best]
	if len(winners) > 1:
		raise AmbiguousMatch(
			f"ambiguous mixin '{method_name}' for {site}",
			candidates=winners,
			site=site,
			notes=[f"candidate: {decl.label()}" for decl in winners],
		)
	return MethodResolution(
		static_type=static_type,
		name=method_name,
		source=CandidateSource.MIXIN,
		decl=winners[0],
		ranks=best,
	)


class MethodResolver:
	"""
	Resolve and invoke calls against one registry.

	Failures are recorded in `diagnostics` and re-raised to the caller.
	`visible_modules` restricts which modules' mixins are in scope (None means
	all registered mixins).
	"""

	def __init__(self, registry: MixinRegistry, *, visible_modules: Optional[Iterable[str]] = None) -> None:
		self.registry = registry
		self.visible_modules = tuple(visible_modules) if visible_modules is not None else None
		self.diagnostics: List[Diagnostic] = []

	def resolve(self, static_type: type, name: str, arg_types: Sequence[Any] = ()) -> MethodResolution:
		try:
			return resolve_method_call(
				self.registry,
				static_type=static_type,
				method_name=name,
				arg_types=arg_types,
				visible_modules=self.visible_modules,
			)
		except ResolutionError as err:
			self.diagnostics.append(err.to_diagnostic())
			raise

	def bind(self, static_type: type, name: str, arg_types: Sequence[Any] = ()) -> "CallSite":
		"""Resolve once and return a reusable call site."""
		return CallSite(static_type=static_type, arg_types=tuple(arg_types), resolution=self.resolve(static_type, name, arg_types))

	def view(self, receiver: object, static_type: Optional[type] = None) -> "StaticRef":
		"""See `receiver` through `static_type` (its own class by default)."""
		return StaticRef(self, receiver, static_type if static_type is not None else type(receiver))


@dataclass(frozen=True)
class CallSite:
	"""A resolved call: static type, argument types and the selected candidate."""

	static_type: type
	arg_types: Tuple[Any, ...]
	resolution: MethodResolution

	def __call__(self, receiver: object, *args: Any) -> Any:
		if not isinstance(receiver, self.static_type):
			raise TypeError(f"receiver of type {type_label(type(receiver))} is not a {type_label(self.static_type)}")
		if len(args) != len(self.arg_types):
			raise TypeError(
				f"{self.resolution.name}() bound for {len(self.arg_types)} argument(s), got {len(args)}"
			)
		return self.resolution.invoke(receiver, args)


class StaticRef:
	"""
	A receiver seen through a static type.

	`ref.name(*args)` resolves against the static type using the runtime types
	of the arguments; `ref.upcast(T)` re-views the same receiver through `T`.
	"""

	def __init__(self, resolver: MethodResolver, receiver: object, static_type: type) -> None:
		if not isinstance(receiver, static_type):
			raise TypeError(f"cannot view {type_label(type(receiver))} as {type_label(static_type)}")
		self._resolver = resolver
		self._receiver = receiver
		self._static_type = static_type
		self._sites: Dict[Tuple[str, Tuple[type, ...]], CallSite] = {}

	@property
	def receiver(self) -> object:
		return self._receiver

	@property
	def static_type(self) -> type:
		return self._static_type

	def upcast(self, target: type) -> "StaticRef":
		return StaticRef(self._resolver, self._receiver, target)

	def __getattr__(self, name: str):
		if name.startswith("_"):
			raise AttributeError(name)

		def call(*args: Any) -> Any:
			arg_types = tuple(type(a) for a in args)
			key = (name, arg_types)
			site = self._sites.get(key)
			if site is None:
				site = self._resolver.bind(self._static_type, name, arg_types)
				self._sites[key] = site
			return site(self._receiver, *args)

		call.__name__ = name
		return call

	def __repr__(self) -> str:
		return f"StaticRef({self._receiver!r} as {type_label(self._static_type)})"


__all__ = [
	"AmbiguousMatch",
	"CallSite",
	"CandidateSource",
	"MethodResolution",
	"MethodResolver",
	"NoMatchingMember",
	"ResolutionError",
	"StaticRef",
	"resolve_method_call",
]
