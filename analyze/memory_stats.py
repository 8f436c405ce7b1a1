# Virtual memory analysis scripts.
# Developed 2012-2014 by Peter Hornyack, pjh@cs.washington.edu
# Copyright (c) 2012-2014 Peter Hornyack and University of Washington

# Reductions over the samples from a single run: max and last value only,
# no smoothing or interpolation.

from analyze.MemorySample import *
from util.bench_utils import *

# Returns a tuple: (peaks, steady). peaks maps each Counter to the
# maximum value seen across the samples (never below 0); steady is the
# counters of the last sample. Both are all-zero for an empty list.
def aggregate(samples):
	tag = 'aggregate'

	peaks = zero_counters()
	for sample in samples:
		for c in COUNTERS:
			v = sample.value(c)
			if v > peaks[c]:
				peaks[c] = v

	if len(samples) > 0:
		steady = samples[-1].counters
	else:
		steady = zero_counters()

	print_debug(tag, ("{} samples: peaks={}, steady={}").format(
		len(samples), peaks, steady))
	return (peaks, steady)

# Largest value of any counter across all samples, or 0.0 for an empty
# list.
def max_counter_value(samples):
	ymax = 0.0
	for sample in samples:
		for c in COUNTERS:
			ymax = max(ymax, sample.value(c))
	return ymax

if __name__ == '__main__':
	print_error_exit("not an executable module")
