# Virtual memory analysis scripts.
# Developed 2012-2014 by Peter Hornyack, pjh@cs.washington.edu
# Copyright (c) 2012-2014 Peter Hornyack and University of Washington

from analyze.MemorySample import Counter
from util.bench_utils import *

# Downstream tooling parses these by position: don't reorder columns or
# rename phases.
METRICS_HEADER = ("runId,scene,iteration,timestampMs,phase,loadMs,"
	"allocatedMB,reservedMB,monoMB,systemUsedMB,"
	"peakAllocatedMB,peakReservedMB,peakMonoMB")
NUM_COLUMNS = len(METRICS_HEADER.split(','))

PHASE_LOAD90 = 'Load90'
PHASE_LOADDONE = 'LoadDone'
PHASE_POSTACTIVATE = 'PostActivate'
PHASE_SAMPLE = 'Sample'

VALUE_COUNTERS = [Counter.ALLOCATED, Counter.RESERVED,
	Counter.MANAGED_HEAP, Counter.SYSTEM_USED]
PEAK_COUNTERS = [Counter.ALLOCATED, Counter.RESERVED,
	Counter.MANAGED_HEAP]

def fmt_ms(ms):
	return "{:.1f}".format(ms)

def fmt_mb(mb):
	return "{:.2f}".format(mb)

def fmt_timestamp(ms):
	return "{}".format(int(ms))

def value_fields(counters):
	if counters is None:
		return [''] * len(VALUE_COUNTERS)
	return [fmt_mb(counters[c]) for c in VALUE_COUNTERS]

def peak_fields(peaks):
	if peaks is None:
		return [''] * len(PEAK_COUNTERS)
	return [fmt_mb(peaks[c]) for c in PEAK_COUNTERS]

'''
Append-only CSV log with one row per (run, phase). Owned by the runner
for the whole session; rows are buffered until flush().
'''
class metrics_log:
	tag = 'metrics_log'

	def __init__(self, fname):
		tag = "{}.__init__".format(self.tag)

		self.fname = fname
		self.f = open(fname, 'w', encoding='utf-8', newline='')
		self.f.write(METRICS_HEADER + '\n')
		self.rows = 0
		print_debug(tag, ("opened metrics log {}").format(fname))
		return

	def write_row(self, runid, scenename, iteration, timestamp_ms, phase,
			load_ms=None, counters=None, peaks=None):
		tag = "{}.write_row".format(self.tag)

		fields = [runid, scenename, "{}".format(iteration),
			fmt_timestamp(timestamp_ms), phase]
		if load_ms is None:
			fields.append('')
		else:
			fields.append(fmt_ms(load_ms))
		fields += value_fields(counters)
		fields += peak_fields(peaks)
		if len(fields) != NUM_COLUMNS:
			print_unexpected(True, tag, ("built {} fields for a {}-column "
				"row").format(len(fields), NUM_COLUMNS))

		self.f.write(",".join(fields) + '\n')
		self.rows += 1
		return

	# Writes all of the rows for one completed run: Load90, LoadDone,
	# PostActivate, then one Sample row per sample.
	def write_run(self, runid, result, load_start_ms):
		scenename = result.target_id
		iteration = result.iteration

		self.write_row(runid, scenename, iteration, load_start_ms,
			PHASE_LOAD90, load_ms=result.load_threshold_ms)
		self.write_row(runid, scenename, iteration,
			load_start_ms + result.load_complete_ms, PHASE_LOADDONE,
			load_ms=result.load_complete_ms, peaks=result.peaks)
		if len(result.samples) > 0:
			last_ms = result.samples[-1].time_ms
		else:
			last_ms = 0.0
		self.write_row(runid, scenename, iteration, last_ms,
			PHASE_POSTACTIVATE, counters=result.steady, peaks=result.peaks)
		for sample in result.samples:
			self.write_row(runid, scenename, iteration, sample.time_ms,
				PHASE_SAMPLE, counters=sample.counters)
		return

	def flush(self):
		self.f.flush()
		return

	def close(self):
		tag = "{}.close".format(self.tag)

		if self.f:
			self.f.flush()
			self.f.close()
			self.f = None
			print_debug(tag, ("closed {} after {} rows").format(self.fname,
				self.rows))
		return

if __name__ == '__main__':
	print_error_exit("not an executable module")
