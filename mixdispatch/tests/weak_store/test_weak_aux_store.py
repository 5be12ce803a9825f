# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import gc
import weakref
from dataclasses import dataclass

import pytest

from mixdispatch.weak_store import WeakAuxStore


@dataclass
class Box:
	value: str = ""


def test_get_on_fresh_receiver_is_absent():
	store: WeakAuxStore[int] = WeakAuxStore()
	box = Box("a")
	assert store.get(box) is None
	assert store.get(box, 0) == 0
	assert box not in store
	assert len(store) == 0


def test_set_creates_then_replaces():
	store: WeakAuxStore[int] = WeakAuxStore()
	box = Box("a")
	store.set(box, 1)
	store.set(box, 2)
	assert store.get(box) == 2
	assert box in store
	assert len(store) == 1


def test_equal_receivers_are_distinct_entries():
	store: WeakAuxStore[int] = WeakAuxStore()
	a = Box("same")
	b = Box("same")
	assert a == b
	store.set(a, 5)
	assert store.get(b) is None
	store.set(b, 7)
	assert store.get(a) == 5
	assert store.get(b) == 7
	assert len(store) == 2


def test_store_does_not_keep_receiver_alive():
	store: WeakAuxStore[int] = WeakAuxStore()
	box = Box("gone")
	probe = weakref.ref(box)
	store.set(box, 3)
	del box
	gc.collect()
	assert probe() is None
	assert len(store) == 0
	assert store._entries == {}


def test_new_receiver_never_sees_collected_state():
	store: WeakAuxStore[int] = WeakAuxStore()
	for _ in range(50):
		box = Box("x")
		assert store.get(box) is None
		store.set(box, 99)
		del box
		gc.collect()
	assert len(store) == 0


def test_unweakrefable_receiver_is_rejected():
	store: WeakAuxStore[int] = WeakAuxStore()
	assert store.get(1) is None
	with pytest.raises(TypeError):
		store.set(1, 0)
