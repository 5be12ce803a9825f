# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import gc
import weakref

from mixdispatch.demo.messages import CoolMessage, DynamicMessage, Message, StatefulEscalatable, StatefulMessage
from mixdispatch.demo.mixins import (
	append,
	confuse,
	escalate,
	escalate_uppercase_only,
	escalated,
	resolver,
	utf8,
)


def test_uppercase_only_is_stateless():
	m = Message("abc")
	for _ in range(4):
		assert escalate_uppercase_only(m) == "ABC"
	assert m.text == "abc"
	assert escalate(m) == "ABC"


def test_escalate_adds_one_bang_per_call():
	m = Message("abc")
	assert [escalate(m) for _ in range(4)] == ["ABC", "ABC!", "ABC!!", "ABC!!!"]


def test_equal_receivers_escalate_independently():
	a = Message("abc")
	b = Message("abc")
	assert a == b
	assert escalate(a) == "ABC"
	assert escalate(b) == "ABC"
	assert escalate(a) == "ABC!"


def test_collected_receiver_leaks_no_counter():
	m = Message("abc")
	probe = weakref.ref(m)
	escalate(m)
	escalate(m)
	del m
	gc.collect()
	assert probe() is None
	fresh = Message("abc")
	assert escalate(fresh) == "ABC"


def test_escalate_through_resolver():
	m = DynamicMessage("Hallo, Welt")
	ref = resolver.view(m)
	assert ref.escalate() == "HALLO, WELT"
	assert ref.escalate() == "HALLO, WELT!"
	# Direct calls share the same counter.
	assert escalate(m) == "HALLO, WELT!!"


def test_append_self_doubles_text():
	r = Message("x")
	append(r, r)
	assert r.text == "xx"


def test_append_through_resolver_accepts_subtypes():
	r = Message("a")
	resolver.view(r).append(CoolMessage("b"))
	assert r.text == "ab"


def test_confuse_doubles_marker_per_receiver():
	m1 = StatefulMessage("Hans")
	m2 = StatefulMessage("Dampf")
	assert confuse(m1) == "Hans?"
	assert confuse(m1) == "Hans??"
	assert confuse(m2) == "Dampf?"
	assert resolver.view(m1).confuse() == "Hans????"


def test_stateful_escalation_lives_on_the_receiver():
	m = StatefulMessage("meh")
	assert escalated(m) == "MEH"
	assert resolver.view(m).escalated() == "MEH!"
	# The side-table counter is a different logical counter.
	assert escalate(m) == "MEH"
	assert m.get_state(StatefulEscalatable, None) == 2


def test_utf8_mixin_on_capability():
	cm = CoolMessage("\U0001F608")
	assert utf8(cm) == b"\xf0\x9f\x98\x88"
	assert resolver.view(cm).utf8() == b"\xf0\x9f\x98\x88"
