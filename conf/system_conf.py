# Virtual memory analysis scripts.
# Developed 2012-2014 by Peter Hornyack, pjh@cs.washington.edu
# Copyright (c) 2012-2014 Peter Hornyack and University of Washington

# Locations and defaults that may change depending on the system that
# we're running on.

import os
import sys

results_root	= os.environ.get('MEMBENCH_RESULTS_ROOT',
		os.path.join(os.path.expanduser('~'), '.membench'))
  # Where the process platform writes BenchmarkResults/; the simulated
  # platform always uses the current directory.

proc_status_file = '/proc/self/status'

# Run parameters (can be overridden on the command line):
DEFAULT_RUN_MODE			= 'auto'
DEFAULT_ITERATIONS			= 3
DEFAULT_SAMPLE_INTERVAL_MS	= 50
DEFAULT_STABILIZATION_MS	= 1000
DEFAULT_UNLOAD_UNUSED		= True
DEFAULT_FORCE_GC_BEFORE_RUN	= True
DEFAULT_FRAME_MS			= 16.0
  # One scheduler tick per "frame": ~60 ticks per second.

MIN_SAMPLE_INTERVAL_MS		= 1.0
LOAD_THRESHOLD				= 0.9
  # Progress fraction at which the Load90 mark is taken.

# Chart geometry, in pixels:
CHART_WIDTH			= 1200
CHART_HEIGHT		= 600
CHART_MARGIN_LEFT	= 60
CHART_MARGIN_RIGHT	= 20
CHART_MARGIN_TOP	= 20
CHART_MARGIN_BOTTOM	= 40

# Session output layout:
RESULTS_DIRNAME		= 'BenchmarkResults'
GRAPHS_DIRNAME		= 'Graphs'
METRICS_FNAME		= 'metrics.csv'
SUMMARY_FNAME		= 'summary.tsv'
SESSION_TIMEFMT		= '%Y-%m-%d_%H-%M-%S'
IMAGE_EXT			= 'png'

# Synthetic scenes allocate their payload in chunks of this size, one
# chunk per tick; data-file scenes read this many bytes per tick.
SYNTHETIC_CHUNK_MB		= 4
DATAFILE_CHUNK_BYTES	= 4 * 1024 * 1024

if __name__ == '__main__':
	print("Cannot run stand-alone")
	sys.exit(1)
