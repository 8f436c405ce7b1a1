# Virtual memory analysis scripts.
# Developed 2012-2014 by Peter Hornyack, pjh@cs.washington.edu
# Copyright (c) 2012-2014 Peter Hornyack and University of Washington

from util.bench_utils import *
import enum

'''
The fixed set of memory counters tracked by every run. The order of this
enum is the order used for log columns, chart series and summaries.
'''
class Counter(enum.Enum):
	ALLOCATED = 'allocated'
	RESERVED = 'reserved'
	MANAGED_HEAP = 'managed_heap'
	SYSTEM_USED = 'system_used'

COUNTERS = list(Counter)

def zero_counters():
	return {c: 0.0 for c in COUNTERS}

'''
One timestamped snapshot of all tracked counters (values in MB). After
initialization, MemorySample.counters is guaranteed to have an entry for
each Counter.
'''
class MemorySample:
	tag = "MemorySample"

	__slots__ = ('_time_ms', '_counters')

	# counter_dict maps Counters to values; it is copied, so the caller
	# may reuse it. time_ms is the elapsed time since the start of the
	# run when the sample was captured.
	def __init__(self, time_ms, counter_dict):
		tag = "{0}.__init__".format(self.tag)

		if time_ms is None or counter_dict is None:
			print_error_exit(tag, ("invalid arg: time_ms={}, "
				"counter_dict={}").format(time_ms, counter_dict))

		counters = dict()
		for c in COUNTERS:
			counters[c] = float(counter_dict.get(c, 0.0))
		object.__setattr__(self, '_time_ms', float(time_ms))
		object.__setattr__(self, '_counters', counters)
		return

	def __setattr__(self, name, value):
		raise AttributeError("MemorySample is immutable")

	@property
	def time_ms(self):
		return self._time_ms

	@property
	def counters(self):
		return dict(self._counters)

	def value(self, counter):
		return self._counters[counter]

	def __repr__(self):
		vals = ", ".join("{}={:.2f}".format(c.value, self._counters[c])
			for c in COUNTERS)
		return "MemorySample({:.1f}ms: {})".format(self._time_ms, vals)

if __name__ == '__main__':
	print_error_exit("not an executable module")
