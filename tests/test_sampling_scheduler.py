# Virtual memory analysis scripts.
# Developed 2012-2014 by Peter Hornyack, pjh@cs.washington.edu
# Copyright (c) 2012-2014 Peter Hornyack and University of Washington

from conftest import FRAME_MS, fake_counter_source, scripted_load
from analyze.MemorySample import Counter
from measure.sampling_scheduler import *
import math
import pytest

def times_of(samples):
	return [s.time_ms for s in samples]

##############################################################################
# tick_scheduler

def test_tasks_step_in_spawn_order(scheduler):
	order = []
	def task(name, steps):
		for i in range(steps):
			order.append((name, i))
			yield
	scheduler.spawn(task('a', 2))
	scheduler.spawn(task('b', 1))
	scheduler.tick()
	scheduler.tick()
	assert order == [('a', 0), ('b', 0), ('a', 1)]

def test_delta_is_zero_then_one_frame(scheduler, clock):
	scheduler.tick()
	assert scheduler.delta_ms == 0.0
	scheduler.tick()
	assert scheduler.delta_ms == FRAME_MS
	assert clock.now_ms() == 2 * FRAME_MS
	assert scheduler.tick_count == 2

def test_cancel_takes_effect_within_tick(scheduler):
	ran = []
	def victim():
		while True:
			ran.append('victim')
			yield
	v = victim()
	def killer():
		scheduler.cancel(v)
		yield
	scheduler.spawn(killer())
	scheduler.spawn(v)
	scheduler.tick()
	assert ran == []
	assert not scheduler.is_running(v)

def test_cancel_finished_task_is_harmless(scheduler):
	def once():
		yield
	t = scheduler.spawn(once())
	scheduler.run_until_complete(t)
	scheduler.cancel(t)
	assert not scheduler.is_running(t)

def test_run_until_complete_leaves_other_tasks(scheduler):
	def forever():
		while True:
			yield
	def three():
		for i in range(3):
			yield
	bg = scheduler.spawn(forever())
	scheduler.run_until_complete(three())
	assert scheduler.tick_count == 4
	assert scheduler.is_running(bg)

def test_negative_frame_is_rejected(clock):
	with pytest.raises(SystemExit):
		tick_scheduler(clock, frame_ms=-1.0)

def test_manual_clock_only_moves_forward():
	clock = manual_clock(100.0)
	clock.sleep_ms(-5)
	clock.advance(20)
	assert clock.now_ms() == 120.0

##############################################################################
# run_once

def test_threshold_and_completion_marks(scheduler, clock):
	load = scripted_load(clock, threshold_at_ms=40, done_at_ms=100)
	(samples, t90, tdone) = run_once(lambda: load, 50, 0,
		fake_counter_source(), scheduler)
	assert t90 == 40.0
	assert tdone == 100.0
	assert samples[0].time_ms == 0.0

def test_single_step_completion_never_sees_threshold(scheduler, clock):
	load = scripted_load(clock, threshold_at_ms=None, done_at_ms=0)
	(samples, t90, tdone) = run_once(lambda: load, 50, 0,
		fake_counter_source(), scheduler)
	assert t90 == NOT_OBSERVED
	assert tdone == 0.0
	assert load.polls == 0   # is_done() is checked before progress()

def test_timestamps_are_actual_capture_times(clock):
	scheduler = tick_scheduler(clock, frame_ms=30.0)
	load = scripted_load(clock, threshold_at_ms=None, done_at_ms=0)
	(samples, t90, tdone) = run_once(lambda: load, 50, 130,
		fake_counter_source(), scheduler)
	# due at 0, 50, 110 but the sampler only wakes every 30 ms
	assert times_of(samples) == [0.0, 60.0, 120.0]

def test_sampling_stops_with_the_window(scheduler, clock):
	source = fake_counter_source()
	load = scripted_load(clock, threshold_at_ms=20, done_at_ms=30)
	(samples, t90, tdone) = run_once(lambda: load, 10, 40, source,
		scheduler)
	assert times_of(samples) == [0.0, 10.0, 20.0, 30.0, 40.0, 50.0,
		60.0]
	assert scheduler.tasks == []

	calls = source.calls
	scheduler.tick()
	assert source.calls == calls

@pytest.mark.parametrize('exc_class', [CounterReadError, OSError])
def test_failed_read_skips_sample(scheduler, clock, exc_class):
	source = fake_counter_source(fail_on=(2,), exc_class=exc_class)
	load = scripted_load(clock, threshold_at_ms=None, done_at_ms=0)
	state = run_once_state(lambda: load, 10, 30, source, scheduler)
	assert times_of(state.samples) == [0.0, 20.0, 30.0]
	assert state.skipped_reads == 1

@pytest.mark.parametrize('interval', [0, -20, 0.5])
def test_tiny_interval_is_clamped(scheduler, clock, interval):
	load = scripted_load(clock, threshold_at_ms=None, done_at_ms=0)
	(samples, t90, tdone) = run_once(lambda: load, interval, 30,
		fake_counter_source(), scheduler)
	# one sample per frame, never more
	assert times_of(samples) == [0.0, 10.0, 20.0, 30.0]

def test_timestamps_are_relative_to_run_start(scheduler, clock):
	clock.advance(5000)
	load = scripted_load(clock, threshold_at_ms=5020, done_at_ms=5030)
	(samples, t90, tdone) = run_once(lambda: load, 10, 0,
		fake_counter_source(), scheduler)
	assert samples[0].time_ms == 0.0
	assert (t90, tdone) == (20.0, 30.0)

def test_samples_carry_counter_readings(scheduler, clock):
	load = scripted_load(clock, threshold_at_ms=None, done_at_ms=0)
	(samples, t90, tdone) = run_once(lambda: load, 10, 0,
		fake_counter_source(), scheduler)
	assert len(samples) == 1
	assert samples[0].value(Counter.RESERVED) == 2.0

def test_load_work_is_stepped_on_the_loop(scheduler, clock):
	steps = []
	class stepped_load:
		done = False
		def progress(self):
			return 1.0 if self.done else 0.0
		def is_done(self):
			return self.done
		def work(self):
			for i in range(3):
				steps.append(clock.now_ms())
				yield
			self.done = True
	(samples, t90, tdone) = run_once(stepped_load, 100, 0,
		fake_counter_source(), scheduler)
	assert steps == [0.0, 10.0, 20.0]
	# work finishes in the 4th tick, before the monitor looks at it
	assert tdone == 30.0
	assert t90 == NOT_OBSERVED

@pytest.mark.parametrize('window', [10, 40, 55])
def test_no_capture_after_window_elapses(scheduler, clock, window):
	load = scripted_load(clock, threshold_at_ms=None, done_at_ms=30)
	state = run_once_state(lambda: load, 10, window, fake_counter_source(),
		scheduler)
	# the window starts accruing on the tick that sees completion
	last_tick = 30 + 10 * math.ceil((window - 10) / 10.0)
	assert state.samples[-1].time_ms == last_tick
	assert clock.now_ms() == last_tick + FRAME_MS

def test_stabilization_ends_in_the_tick_it_elapses(scheduler):
	wait = scheduler.spawn(stabilization_wait(scheduler, 20))
	ticks = 0
	while scheduler.is_running(wait):
		scheduler.tick()
		ticks += 1
	# deltas 0, 10, 10: done during the third tick
	assert ticks == 3

def test_zero_window_does_not_suspend(scheduler):
	assert list(stabilization_wait(scheduler, 0)) == []
