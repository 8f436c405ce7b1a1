# Virtual memory analysis scripts.
# Developed 2012-2014 by Peter Hornyack, pjh@cs.washington.edu
# Copyright (c) 2012-2014 Peter Hornyack and University of Washington

from analyze.MemorySample import Counter
from util.bench_utils import *
import brewer2mpl

# COLORS:
#   https://github.com/jiffyclub/brewer2mpl
#   http://bl.ocks.org/mbostock/5577023
# The rasterizer writes 8-bit pixels directly, so use the .colors lists
# (0-255 ints) rather than the .mpl_colors lists (0.0-1.0 floats).
brewer_set1   = brewer2mpl.get_map('Set1',   'qualitative',  9).colors

def rgb(color):
	return tuple(int(v) for v in color)

brewer_blue   = rgb(brewer_set1[1])
brewer_green  = rgb(brewer_set1[2])
brewer_purple = rgb(brewer_set1[3])
brewer_orange = rgb(brewer_set1[4])

WHITE        = (255, 255, 255)
PLOT_BORDER  = (245, 245, 245)
TITLE_BAND   = (240, 240, 240)
GRIDLINE     = (220, 220, 220)
AXIS         = (0, 0, 0)

# One fixed, distinct color per counter; series are drawn in Counter
# order, so SYSTEM_USED ends up on top where lines share pixels.
SERIES_COLORS = {
		Counter.ALLOCATED    : brewer_blue,
		Counter.RESERVED     : brewer_green,
		Counter.MANAGED_HEAP : brewer_orange,
		Counter.SYSTEM_USED  : brewer_purple,
	}

# Counters whose zero readings mean "not available on this platform"
# rather than a real value; a zero breaks the polyline.
SKIP_ZERO_SERIES = frozenset([Counter.SYSTEM_USED])

if __name__ == '__main__':
	print_error_exit("not an executable module")
