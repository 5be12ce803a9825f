# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Mixin registry.

This stores mixin declarations (free functions attached to a receiver type or
to a capability) with enough metadata for the resolver to pick a concrete
overload. The registry itself does not perform overload resolution; it only
returns candidate sets filtered by name, static type and module visibility.

Instance methods declared on a class are never stored here. The resolver looks
them up on the static type directly and always prefers them.
"""

from __future__ import annotations

import inspect
import itertools
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from mixdispatch.core.types_core import is_capability, type_label

MixinId = int


class ScopeKind(Enum):
	TYPE = auto()
	CAPABILITY = auto()


@dataclass(frozen=True)
class MixinSignature:
	"""Extra parameter types; the receiver parameter is not included."""

	param_types: Tuple[Any, ...] = ()

	def label(self) -> str:
		return ", ".join(type_label(p) for p in self.param_types)


@dataclass(frozen=True)
class MixinDecl:
	"""Registry entry for one mixin function."""

	mixin_id: MixinId
	name: str
	kind: ScopeKind
	scope: type  # receiver type or capability the first parameter is typed to
	signature: MixinSignature
	module: str
	body: Callable[..., Any]

	def label(self) -> str:
		return f"{self.name}(self: {type_label(self.scope)}{', ' if self.signature.param_types else ''}{self.signature.label()})"


def _annotation_type(annotation: Any) -> Any:
	if annotation is inspect.Parameter.empty or annotation is Any:
		return object
	return annotation


class MixinRegistry:
	"""
	Store mixin declarations and provide candidate retrieval.

	Declarations are bucketed by name. Candidate retrieval walks the static
	type's MRO, so both type-scoped mixins on an ancestor and capability-scoped
	mixins on a statically declared capability are found.
	"""

	def __init__(self) -> None:
		self._by_name: Dict[str, List[MixinDecl]] = {}
		self._by_id: Dict[MixinId, MixinDecl] = {}
		self._ids = itertools.count(1)

	def register(
		self,
		*,
		name: str,
		scope: type,
		param_types: Iterable[Any] = (),
		body: Callable[..., Any],
		module: Optional[str] = None,
	) -> MixinDecl:
		if not isinstance(scope, type):
			raise TypeError(f"mixin '{name}' scope must be a class, got {scope!r}")
		decl = MixinDecl(
			mixin_id=next(self._ids),
			name=name,
			kind=ScopeKind.CAPABILITY if is_capability(scope) else ScopeKind.TYPE,
			scope=scope,
			signature=MixinSignature(tuple(param_types)),
			module=module if module is not None else getattr(body, "__module__", "__main__"),
			body=body,
		)
		self._by_id[decl.mixin_id] = decl
		self._by_name.setdefault(name, []).append(decl)
		return decl

	def mixin(self, fn: Optional[Callable[..., Any]] = None, *, name: Optional[str] = None, scope: Optional[type] = None):
		"""
		Decorator form of `register`.

		The receiver scope comes from the first parameter's annotation unless
		given explicitly; the remaining annotations become the parameter types.
		The function is returned unchanged, so it stays directly callable.
		"""

		def deco(func: Callable[..., Any]) -> Callable[..., Any]:
			params = list(inspect.signature(func, eval_str=True).parameters.values())
			if not params:
				raise TypeError(f"mixin '{func.__name__}' needs a receiver parameter")
			recv_scope = scope if scope is not None else _annotation_type(params[0].annotation)
			self.register(
				name=name or func.__name__,
				scope=recv_scope,
				param_types=[_annotation_type(p.annotation) for p in params[1:]],
				body=func,
			)
			return func

		if fn is not None:
			return deco(fn)
		return deco

	def get_candidates(
		self,
		*,
		name: str,
		static_type: type,
		visible_modules: Optional[Iterable[str]] = None,
	) -> List[MixinDecl]:
		all_candidates = self._by_name.get(name, [])
		if not all_candidates:
			return []
		# Capabilities only count when declared; virtual subclasses are not in the MRO.
		reachable = set(static_type.__mro__)
		visible = set(visible_modules) if visible_modules is not None else None
		result: List[MixinDecl] = []
		for decl in all_candidates:
			if decl.scope not in reachable:
				continue
			if visible is not None and decl.module not in visible:
				continue
			result.append(decl)
		return result

	def get_by_id(self, mixin_id: MixinId) -> MixinDecl:
		return self._by_id[mixin_id]

	def __len__(self) -> int:
		return len(self._by_id)


__all__ = [
	"MixinRegistry",
	"MixinDecl",
	"MixinSignature",
	"MixinId",
	"ScopeKind",
]
