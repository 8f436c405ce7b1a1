# Virtual memory analysis scripts.
# Developed 2012-2014 by Peter Hornyack, pjh@cs.washington.edu
# Copyright (c) 2012-2014 Peter Hornyack and University of Washington

from analyze.MemorySample import Counter, MemorySample
from measure.sampling_scheduler import manual_clock, tick_scheduler
import scene_scripts.scene_to_load_class as scenes
import pytest

FRAME_MS = 10.0

'''
Load handle whose progress is a function of the scheduler clock:
progress jumps to 0.9 at threshold_at_ms and the load completes at
done_at_ms (both measured on the clock).
'''
class scripted_load:
	def __init__(self, clock, threshold_at_ms, done_at_ms):
		self.clock = clock
		self.threshold_at_ms = threshold_at_ms
		self.done_at_ms = done_at_ms
		self.polls = 0

	def progress(self):
		self.polls += 1
		now = self.clock.now_ms()
		if now >= self.done_at_ms:
			return 1.0
		if self.threshold_at_ms is not None and now >= self.threshold_at_ms:
			return 0.9
		return 0.5 * now / self.done_at_ms

	def is_done(self):
		return self.clock.now_ms() >= self.done_at_ms

	def work(self):
		while not self.is_done():
			yield
		return

'''
Counter source that returns a fixed reading, or raises for the call
numbers listed in fail_on (1-based).
'''
class fake_counter_source:
	def __init__(self, reading=None, fail_on=(), exc_class=None):
		self.reading = reading or {
			Counter.ALLOCATED: 1.0, Counter.RESERVED: 2.0,
			Counter.MANAGED_HEAP: 0.5, Counter.SYSTEM_USED: 3.0}
		self.fail_on = set(fail_on)
		self.exc_class = exc_class
		self.calls = 0
		self.started = False
		self.disposed = False

	def start(self):
		self.started = True

	def read(self):
		self.calls += 1
		if self.calls in self.fail_on:
			raise self.exc_class("counter unavailable")
		return dict(self.reading)

	def dispose(self):
		self.disposed = True

def make_samples(times, values):
	samples = []
	for (t, (a, r, m, s)) in zip(times, values):
		samples.append(MemorySample(t, {Counter.ALLOCATED: a,
			Counter.RESERVED: r, Counter.MANAGED_HEAP: m,
			Counter.SYSTEM_USED: s}))
	return samples

@pytest.fixture
def clock():
	return manual_clock()

@pytest.fixture
def scheduler(clock):
	return tick_scheduler(clock, frame_ms=FRAME_MS)

@pytest.fixture(autouse=True)
def empty_scene_cache():
	scenes.cache.clear()
	yield scenes.cache
	scenes.cache.clear()
