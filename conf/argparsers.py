# Virtual memory analysis scripts.
# Developed 2012-2014 by Peter Hornyack, pjh@cs.washington.edu
# Copyright (c) 2012-2014 Peter Hornyack and University of Washington

import argparse
import sys
import conf.scenelist as scenelist
import conf.system_conf as sysconf
from conf.benchmark_config import RUN_MODES

# http://docs.python.org/3/library/argparse.html

bench_parser = argparse.ArgumentParser(
		description=("Loads each scene repeatedly, samples memory counters "
			"during load and stabilization, and writes a metrics log and "
			"one graph per run.\n\tBuiltin scenes:{}").format(
			scenelist.scenelist_str()))
bench_parser.add_argument('scenes', metavar='scene', type=str, nargs='*',
		help=("scenes to run, in order (default: synced from --scenes-dir, "
			"or {})").format(" ".join(scenelist.default_scenenames)))
bench_parser.add_argument('-n', '--iterations',
		type=int, default=sysconf.DEFAULT_ITERATIONS, dest='iterations',
		help=("runs per scene (default: {})").format(sysconf.DEFAULT_ITERATIONS))
bench_parser.add_argument('-i', '--sample-interval',
		metavar='ms', type=float, default=sysconf.DEFAULT_SAMPLE_INTERVAL_MS,
		dest='sample_interval_ms',
		help=("time between samples (default: {})").format(
			sysconf.DEFAULT_SAMPLE_INTERVAL_MS))
bench_parser.add_argument('-s', '--stabilization',
		metavar='ms', type=float, default=sysconf.DEFAULT_STABILIZATION_MS,
		dest='stabilization_ms',
		help=("keep sampling this long after the load completes "
			"(default: {})").format(sysconf.DEFAULT_STABILIZATION_MS))
bench_parser.add_argument('-f', '--frame',
		metavar='ms', type=float, default=sysconf.DEFAULT_FRAME_MS,
		dest='frame_ms',
		help=("duration of one scheduler tick (default: {})").format(
			sysconf.DEFAULT_FRAME_MS))
bench_parser.add_argument('-m', '--mode',
		choices=RUN_MODES, default=sysconf.DEFAULT_RUN_MODE, dest='run_mode',
		help=("platform to measure (default: {})").format(
			sysconf.DEFAULT_RUN_MODE))
bench_parser.add_argument('-o', '--results-root',
		metavar='dir', type=str, default=None, dest='results_root',
		help=("where to create BenchmarkResults/ (default depends on "
			"the platform)"))
bench_parser.add_argument('-d', '--scenes-dir',
		metavar='dir', type=str, default=None, dest='scenes_dir',
		help=("add one data-file scene per file in this directory"))
bench_parser.add_argument('--include-hidden',
		action='store_true', default=False, dest='include_hidden',
		help=("also use hidden files in --scenes-dir"))
bench_parser.add_argument('--no-unload',
		action='store_false', default=sysconf.DEFAULT_UNLOAD_UNUSED,
		dest='unload_unused',
		help=("don't unload unused scenes between runs"))
bench_parser.add_argument('--no-gc',
		action='store_false', default=sysconf.DEFAULT_FORCE_GC_BEFORE_RUN,
		dest='force_gc_before_run',
		help=("don't force a garbage collection before the first run"))
bench_parser.add_argument('--debug',
		action='store_true', default=False, dest='debug',
		help=("print debugging output"))

if __name__ == '__main__':
	print("Cannot run stand-alone")
	sys.exit(1)
