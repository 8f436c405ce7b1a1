# Virtual memory analysis scripts.
# Developed 2012-2014 by Peter Hornyack, pjh@cs.washington.edu
# Copyright (c) 2012-2014 Peter Hornyack and University of Washington

from analyze.MemorySample import Counter
from util.bench_utils import *
import math
import os

'''
Results of one run (one scene / iteration pair). Created by the runner
once the run is complete and kept for the end-of-session summary.
'''
class run_result:
	tag = 'run_result'

	target_id = None
	iteration = None
	load_threshold_ms = None
	load_complete_ms = None
	peaks = None
	steady = None
	samples = None
	image_path = None

	def __init__(self, target_id, iteration, load_threshold_ms,
			load_complete_ms, peaks, steady, samples, image_path=None):
		self.target_id = target_id
		self.iteration = iteration
		self.load_threshold_ms = load_threshold_ms
		self.load_complete_ms = load_complete_ms
		self.peaks = dict(peaks)
		self.steady = dict(steady)
		self.samples = tuple(samples)
		self.image_path = image_path
		return

	def __repr__(self):
		return ("run_result({} iter {}: load90={:.1f} loaddone={:.1f} "
			"samples={} image={})").format(self.target_id, self.iteration,
			self.load_threshold_ms, self.load_complete_ms,
			len(self.samples), self.image_path)

##############################################################################
# End-of-session summary: one line per run, same columns as the live
# results table.

SUMMARY_COLUMNS = [
		'Scene', 'Iter',
		'Load90 ms', 'LoadDone ms',
		'Peak Res MB', 'Peak Alloc MB', 'Peak Mono MB', 'Peak Sys MB',
		'Steady Res', 'Steady Alloc', 'Steady Mono', 'Steady Sys',
		'PNG',
	]

def fmt1(v):
	if v is None or math.isnan(v) or math.isinf(v):
		return '-'
	return "{:.1f}".format(v)

def short_path(path):
	if not path:
		return '-'
	return os.path.basename(path)

def summary_fields(result):
	return [result.target_id, "{}".format(result.iteration),
		fmt1(result.load_threshold_ms), fmt1(result.load_complete_ms),
		fmt1(result.peaks[Counter.RESERVED]),
		fmt1(result.peaks[Counter.ALLOCATED]),
		fmt1(result.peaks[Counter.MANAGED_HEAP]),
		fmt1(result.peaks[Counter.SYSTEM_USED]),
		fmt1(result.steady[Counter.RESERVED]),
		fmt1(result.steady[Counter.ALLOCATED]),
		fmt1(result.steady[Counter.MANAGED_HEAP]),
		fmt1(result.steady[Counter.SYSTEM_USED]),
		short_path(result.image_path)]

# Returns: True on success, False if the file couldn't be written.
def write_summary(fname, results):
	tag = 'write_summary'

	try:
		with open(fname, 'w', encoding='utf-8') as f:
			f.write("\t".join(SUMMARY_COLUMNS) + '\n')
			for result in results:
				f.write("\t".join(summary_fields(result)) + '\n')
	except OSError as e:
		print_error(tag, ("couldn't write summary {}: {}").format(fname, e))
		return False

	print_debug(tag, ("wrote {} runs to {}").format(len(results), fname))
	return True

# Same table, as aligned text lines for the console.
def summary_lines(results):
	rows = [SUMMARY_COLUMNS] + [summary_fields(r) for r in results]
	widths = [max(len(row[i]) for row in rows)
		for i in range(len(SUMMARY_COLUMNS))]
	lines = []
	for row in rows:
		lines.append("  ".join(field.ljust(widths[i])
			for (i, field) in enumerate(row)).rstrip())
	return lines

if __name__ == '__main__':
	print_error_exit("not an executable module")
