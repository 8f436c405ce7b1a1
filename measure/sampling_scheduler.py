# Virtual memory analysis scripts.
# Developed 2012-2014 by Peter Hornyack, pjh@cs.washington.edu
# Copyright (c) 2012-2014 Peter Hornyack and University of Washington

# Cooperative, single-threaded scheduling for one benchmark run.
#
# Every "concurrent" activity is a generator; the tick_scheduler steps
# each live generator once per tick (one tick == one host frame), then
# lets the clock advance by one frame. An activity suspends by yielding,
# so only one of them runs at any instant and the state they share (the
# sample list, the stopwatch, the cancel token) needs no locking.
#
# Per run, three activities are interleaved:
#   - the periodic sampler, capturing a MemorySample every interval;
#   - the load-progress monitor, which records the Load90 and LoadDone
#     marks;
#   - the stabilization wait, which follows the monitor and accrues
#     per-tick elapsed time until the configured window has passed.
# The load operation's own work is stepped on the same loop.

from analyze.MemorySample import MemorySample
from util.bench_utils import *
import conf.system_conf as sysconf
import time

NOT_OBSERVED = -1.0

class CounterReadError(Exception):
	pass

##############################################################################

'''
Real time source for actual benchmark sessions.
'''
class wall_clock:
	def now_ms(self):
		return time.perf_counter() * 1000.0

	def sleep_ms(self, ms):
		if ms > 0:
			time.sleep(ms / 1000.0)
		return

'''
Time only moves when someone sleeps on this clock: makes runs
deterministic (tests, dry runs).
'''
class manual_clock:
	def __init__(self, start_ms=0.0):
		self.t = float(start_ms)

	def now_ms(self):
		return self.t

	def sleep_ms(self, ms):
		if ms > 0:
			self.t += ms
		return

	def advance(self, ms):
		self.sleep_ms(ms)
		return

class stopwatch:
	def __init__(self, clock):
		self.clock = clock
		self.start_ms = clock.now_ms()

	def elapsed_ms(self):
		return self.clock.now_ms() - self.start_ms

'''
Replaces a shared "still sampling" flag: the owner calls cancel(), and
the sampler checks the token every time it is resumed.
'''
class cancel_token:
	def __init__(self):
		self.cancelled = False

	def cancel(self):
		self.cancelled = True
		return

##############################################################################

class tick_scheduler:
	tag = 'tick_scheduler'

	def __init__(self, clock=None, frame_ms=sysconf.DEFAULT_FRAME_MS):
		tag = "{}.__init__".format(self.tag)

		if frame_ms < 0:
			print_error_exit(tag, ("invalid frame_ms {}").format(frame_ms))
		if clock is None:
			clock = wall_clock()
		self.clock = clock
		self.frame_ms = frame_ms
		self.tasks = []
		self.tick_count = 0
		self.delta_ms = 0.0
		self.last_tick_ms = None
		return

	# Adds a generator to the end of the task list; it first runs on the
	# next tick. Returns the generator, which can be passed to cancel().
	def spawn(self, task):
		self.tasks.append(task)
		return task

	# Removes a task immediately: it is never resumed again, even if it
	# would have run later in the current tick.
	def cancel(self, task):
		tag = "{}.cancel".format(self.tag)

		if task in self.tasks:
			self.tasks.remove(task)
			task.close()
		else:
			print_debug(tag, ("task {} already finished").format(task))
		return

	# Steps every live task once, in spawn order, then advances one frame.
	def tick(self):
		now = self.clock.now_ms()
		if self.last_tick_ms is None:
			self.delta_ms = 0.0
		else:
			self.delta_ms = now - self.last_tick_ms
		self.last_tick_ms = now

		for task in list(self.tasks):
			if task not in self.tasks:
				continue   # cancelled earlier in this tick
			try:
				next(task)
			except StopIteration:
				if task in self.tasks:
					self.tasks.remove(task)

		self.tick_count += 1
		self.clock.sleep_ms(self.frame_ms)
		return

	def is_running(self, task):
		return task in self.tasks

	# Drives the tick loop until the given task has finished; other
	# spawned tasks keep running alongside it.
	def run_until_complete(self, task):
		if task not in self.tasks:
			self.spawn(task)
		while task in self.tasks:
			self.tick()
		return

##############################################################################
# The three activities of a run.

class run_state:
	def __init__(self, watch):
		self.watch = watch
		self.samples = []
		self.load_start_ms = 0.0
		self.time_to_threshold_ms = NOT_OBSERVED
		self.time_to_complete_ms = NOT_OBSERVED
		self.skipped_reads = 0

def periodic_sampler(state, counter_source, interval_ms, token):
	tag = 'periodic_sampler'

	next_due = state.watch.elapsed_ms()
	while not token.cancelled:
		now = state.watch.elapsed_ms()
		if now >= next_due:
			try:
				counters = counter_source.read()
			except (CounterReadError, OSError) as e:
				state.skipped_reads += 1
				print_warning(tag, ("counter read failed at {:.1f} ms, "
					"skipping this sample: {}").format(now, e))
			else:
				# Record when the read actually happened, not when it
				# was due.
				state.samples.append(MemorySample(
					state.watch.elapsed_ms(), counters))
			next_due = now + interval_ms
		yield
	return

def load_monitor(state, handle, threshold=sysconf.LOAD_THRESHOLD):
	tag = 'load_monitor'

	while not handle.is_done():
		if (state.time_to_threshold_ms < 0 and
				handle.progress() >= threshold):
			state.time_to_threshold_ms = (state.watch.elapsed_ms() -
				state.load_start_ms)
			print_debug(tag, ("progress reached {} after {:.1f} "
				"ms").format(threshold, state.time_to_threshold_ms))
		yield

	state.time_to_complete_ms = (state.watch.elapsed_ms() -
		state.load_start_ms)
	print_debug(tag, ("load completed after {:.1f} ms").format(
		state.time_to_complete_ms))
	return

def stabilization_wait(scheduler, stabilization_ms):
	accrued = 0.0
	while accrued < stabilization_ms:
		accrued += scheduler.delta_ms
		if accrued >= stabilization_ms:
			break   # window over: end in this tick, before another capture
		yield
	return

def load_then_stabilize(state, scheduler, handle, stabilization_ms):
	yield from load_monitor(state, handle)
	yield from stabilization_wait(scheduler, stabilization_ms)
	return

# Runs one measurement cycle and returns the whole run_state: the
# samples, both timing marks, the load start time and the number of
# skipped reads. See run_once().
def run_once_state(load_trigger, sample_interval_ms, stabilization_ms,
		counter_source, scheduler=None):
	tag = 'run_once_state'

	if scheduler is None:
		scheduler = tick_scheduler()
	interval_ms = max(sysconf.MIN_SAMPLE_INTERVAL_MS, float(sample_interval_ms))
	stabilization_ms = max(0.0, float(stabilization_ms))

	state = run_state(stopwatch(scheduler.clock))
	token = cancel_token()
	sampler = scheduler.spawn(periodic_sampler(state, counter_source,
		interval_ms, token))

	state.load_start_ms = state.watch.elapsed_ms()
	handle = load_trigger()
	scheduler.spawn(handle.work())
	phases = scheduler.spawn(load_then_stabilize(state, scheduler, handle,
		stabilization_ms))

	scheduler.run_until_complete(phases)

	token.cancel()
	scheduler.cancel(sampler)

	print_debug(tag, ("{} samples ({} skipped reads), load90={:.1f} ms, "
		"loaddone={:.1f} ms, {} ticks").format(len(state.samples),
		state.skipped_reads, state.time_to_threshold_ms,
		state.time_to_complete_ms, scheduler.tick_count))

	return state

# Runs one measurement cycle: starts the sampler, begins the load via
# load_trigger() (a no-arg callable returning a load_operation handle),
# waits for the load to complete and then for the stabilization window,
# and stops sampling as soon as the window has elapsed.
# Returns a tuple: (samples, time_to_threshold_ms, time_to_complete_ms);
# time_to_threshold_ms is NOT_OBSERVED (-1) if progress never reached the
# threshold before the load completed.
def run_once(load_trigger, sample_interval_ms, stabilization_ms,
		counter_source, scheduler=None):
	state = run_once_state(load_trigger, sample_interval_ms,
		stabilization_ms, counter_source, scheduler)
	return (state.samples, state.time_to_threshold_ms,
		state.time_to_complete_ms)

if __name__ == '__main__':
	print_error_exit("not an executable module")
