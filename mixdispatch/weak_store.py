# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Identity-keyed auxiliary state with weak ownership.

`weakref.WeakKeyDictionary` keys by `__hash__`/`__eq__`, which would merge two
receivers with equal fields (and rejects unhashable ones outright). This store
keys by `id()` instead and guards every entry with a weak reference whose
callback drops the entry once the receiver is collected. The store never keeps
a receiver alive and there is no explicit cleanup call.

Single-threaded: entries are read and written without locking.
"""

from __future__ import annotations

import weakref
from typing import Any, Dict, Generic, Iterator, Optional, Tuple, TypeVar, overload

T = TypeVar("T")

_Entry = Tuple["weakref.ref[Any]", Any]


class WeakAuxStore(Generic[T]):
	"""
	Map receiver identity -> payload without extending receiver lifetime.

	One store holds one logical slot per receiver; use a separate store per
	counter. Receivers must support weak references (`TypeError` otherwise).
	"""

	def __init__(self) -> None:
		self._entries: Dict[int, _Entry] = {}

		def _remove(wr: "weakref.ref[Any]", key: int, selfref: "weakref.ref[WeakAuxStore[T]]" = weakref.ref(self)) -> None:
			store = selfref()
			if store is None:
				return
			entry = store._entries.get(key)
			# The id may already belong to a newer receiver; only drop our own entry.
			if entry is not None and entry[0] is wr:
				del store._entries[key]

		self._remove = _remove

	def _lookup(self, receiver: object) -> Optional[_Entry]:
		entry = self._entries.get(id(receiver))
		if entry is None or entry[0]() is not receiver:
			return None
		return entry

	@overload
	def get(self, receiver: object) -> Optional[T]: ...

	@overload
	def get(self, receiver: object, default: T) -> T: ...

	def get(self, receiver, default=None):
		"""Return the payload for `receiver`, or `default` if none was set."""
		entry = self._lookup(receiver)
		if entry is None:
			return default
		return entry[1]

	def set(self, receiver: object, payload: T) -> None:
		"""Create or replace the payload for `receiver`."""
		key = id(receiver)
		entry = self._lookup(receiver)
		if entry is not None:
			self._entries[key] = (entry[0], payload)
			return
		remove = self._remove
		wr = weakref.ref(receiver, lambda r: remove(r, key))
		self._entries[key] = (wr, payload)

	def __contains__(self, receiver: object) -> bool:
		return self._lookup(receiver) is not None

	def __len__(self) -> int:
		return sum(1 for _ in self._live())

	def _live(self) -> Iterator[_Entry]:
		for entry in list(self._entries.values()):
			if entry[0]() is not None:
				yield entry


__all__ = ["WeakAuxStore"]
