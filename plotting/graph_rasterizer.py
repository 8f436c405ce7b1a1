# Virtual memory analysis scripts.
# Developed 2012-2014 by Peter Hornyack, pjh@cs.washington.edu
# Copyright (c) 2012-2014 Peter Hornyack and University of Washington

# Renders the samples from one benchmark run as a fixed-layout line
# chart: one series per Counter over time, with auto-scaled axes and
# gridlines at "nice" steps. The chart is drawn pixel-by-pixel into a
# numpy RGB buffer (no anti-aliasing, no blending), then saved as a png.

from analyze.MemorySample import *
from analyze.memory_stats import max_counter_value
from util.bench_utils import *
import conf.system_conf as sysconf
import plotting.plots_style as style
import math
import os
import matplotlib.image as mpimg
import numpy as np

VALUE_AXIS_DIVISIONS = 5
TIME_AXIS_DIVISIONS = 6

# Tolerance used when walking gridlines up to the end of an axis, so that
# accumulated float error doesn't drop the last gridline.
GRID_EPSILON = 1e-9

##############################################################################

'''
Chart geometry: image size, margins around the plot rectangle, and an
optional title. Pure configuration.
'''
class chart_spec:
	tag = 'chart_spec'

	def __init__(self, width=sysconf.CHART_WIDTH, height=sysconf.CHART_HEIGHT,
			margin_left=sysconf.CHART_MARGIN_LEFT,
			margin_right=sysconf.CHART_MARGIN_RIGHT,
			margin_top=sysconf.CHART_MARGIN_TOP,
			margin_bottom=sysconf.CHART_MARGIN_BOTTOM, title=None):
		tag = "{}.__init__".format(self.tag)

		self.width = width
		self.height = height
		self.margin_left = margin_left
		self.margin_right = margin_right
		self.margin_top = margin_top
		self.margin_bottom = margin_bottom
		self.title = title

		if self.plot_width() < 2 or self.plot_height() < 2:
			print_error_exit(tag, ("margins leave no room for a plot: "
				"{}x{} with margins l={} r={} t={} b={}").format(
				width, height, margin_left, margin_right, margin_top,
				margin_bottom))
		return

	def plot_width(self):
		return self.width - self.margin_left - self.margin_right

	def plot_height(self):
		return self.height - self.margin_top - self.margin_bottom

'''
Derived per render: the domain of one axis and its gridline spacing.
'''
class axis_scale:
	def __init__(self, min_, max_, step):
		self.min = min_
		self.max = max_
		self.step = step

	# Returns the gridline positions from min up to (and including) max.
	def ticks(self):
		ticks = []
		k = 0
		while True:
			t = self.min + k * self.step
			if t > self.max + GRID_EPSILON * max(1.0, abs(self.max)):
				break
			ticks.append(t)
			k += 1
		return ticks

	def __repr__(self):
		return "axis_scale({}, {}, step={})".format(self.min, self.max,
			self.step)

##############################################################################
# Axis scaling.

# Snaps a raw step size to {1, 2, 5, 10} x 10^n so that gridlines land on
# human-readable values.
def nice_step(raw):
	if raw <= 0 or math.isnan(raw) or math.isinf(raw):
		raise ValueError("nice_step needs a positive finite step, "
			"got {}".format(raw))

	exp = math.pow(10, math.floor(math.log10(raw)))
	f = raw / exp
	if f < 1.5:
		nice = 1
	elif f < 3:
		nice = 2
	elif f < 7:
		nice = 5
	else:
		nice = 10
	return nice * exp

def time_axis(samples):
	tmin = samples[0].time_ms
	tmax = samples[-1].time_ms
	if tmax <= tmin:
		tmax = tmin + 1.0
	return axis_scale(tmin, tmax,
		nice_step((tmax - tmin) / TIME_AXIS_DIVISIONS))

def value_axis(samples):
	ymax = max_counter_value(samples)
	if ymax <= 0:
		ymax = 1.0
	return axis_scale(0.0, ymax, nice_step(ymax / VALUE_AXIS_DIVISIONS))

##############################################################################
# Coordinate mapping: data space -> pixel space inside the plot rectangle.
# Fractions are clamped to [0, 1] so float overshoot never leaves the plot.

def clamp01(u):
	if u < 0.0:
		return 0.0
	if u > 1.0:
		return 1.0
	return u

def x_to_pix(t, xscale, spec):
	u = clamp01((t - xscale.min) / (xscale.max - xscale.min))
	return spec.margin_left + int(round(u * (spec.plot_width() - 1)))

def y_to_pix(val, yscale, spec):
	if val <= 0:
		u = 0.0
	else:
		u = clamp01(val / yscale.max)
	return (spec.margin_top + (spec.plot_height() - 1) -
		int(round(u * (spec.plot_height() - 1))))

##############################################################################
# Drawing primitives. buf is an (height, width, 3) uint8 array; (x, y)
# has y growing downwards. Out-of-bounds pixels are silently dropped.

def new_canvas(spec, color=style.WHITE):
	buf = np.empty((spec.height, spec.width, 3), dtype=np.uint8)
	buf[:, :] = color
	return buf

def set_pixel(buf, x, y, color):
	(height, width) = buf.shape[0:2]
	if 0 <= x < width and 0 <= y < height:
		buf[y, x] = color
	return

def draw_hline(buf, x0, x1, y, color):
	(height, width) = buf.shape[0:2]
	if y < 0 or y >= height:
		return
	if x0 > x1:
		(x0, x1) = (x1, x0)
	x0 = min(max(x0, 0), width - 1)
	x1 = min(max(x1, 0), width - 1)
	buf[y, x0:x1 + 1] = color
	return

def draw_vline(buf, x, y0, y1, color):
	(height, width) = buf.shape[0:2]
	if x < 0 or x >= width:
		return
	if y0 > y1:
		(y0, y1) = (y1, y0)
	y0 = min(max(y0, 0), height - 1)
	y1 = min(max(y1, 0), height - 1)
	buf[y0:y1 + 1, x] = color
	return

def draw_rect(buf, x, y, w, h, color):
	draw_hline(buf, x, x + w, y, color)
	draw_hline(buf, x, x + w, y + h, color)
	draw_vline(buf, x, y, y + h, color)
	draw_vline(buf, x + w, y, y + h, color)
	return

def fill_rect(buf, x, y, w, h, color):
	(height, width) = buf.shape[0:2]
	x0 = max(x, 0)
	y0 = max(y, 0)
	x1 = min(x + w, width)
	y1 = min(y + h, height)
	if x0 < x1 and y0 < y1:
		buf[y0:y1, x0:x1] = color
	return

# Bresenham: integer-only, covers both endpoints, same pixels every time.
def draw_line(buf, p0, p1, color):
	(x0, y0) = p0
	(x1, y1) = p1
	dx = abs(x1 - x0)
	sx = 1 if x0 < x1 else -1
	dy = -abs(y1 - y0)
	sy = 1 if y0 < y1 else -1
	err = dx + dy
	while True:
		set_pixel(buf, x0, y0, color)
		if x0 == x1 and y0 == y1:
			break
		e2 = 2 * err
		if e2 >= dy:
			err += dy
			x0 += sx
		if e2 <= dx:
			err += dx
			y0 += sy
	return

##############################################################################

# Maps one counter's samples to pixel space and splits them into
# polylines. For skip-zero series a reading <= 0 is a gap: it ends the
# current polyline instead of being plotted.
# Returns: a list of polylines, each a list of (x, y) pixel points.
def series_polylines(samples, counter, xscale, yscale, spec,
		skip_zeros=False):
	polylines = []
	current = None
	for sample in samples:
		v = sample.value(counter)
		if skip_zeros and v <= 0:
			current = None
			continue
		point = (x_to_pix(sample.time_ms, xscale, spec),
			y_to_pix(v, yscale, spec))
		if current is None:
			current = []
			polylines.append(current)
		current.append(point)
	return polylines

def draw_polyline(buf, points, color):
	for i in range(1, len(points)):
		draw_line(buf, points[i-1], points[i], color)
	return

def draw_grid(buf, xscale, yscale, spec):
	left = spec.margin_left
	top = spec.margin_top
	plotw = spec.plot_width()
	ploth = spec.plot_height()

	for y in yscale.ticks():
		draw_hline(buf, left, left + plotw, y_to_pix(y, yscale, spec),
			style.GRIDLINE)
	for t in xscale.ticks():
		draw_vline(buf, x_to_pix(t, xscale, spec), top, top + ploth,
			style.GRIDLINE)
	return

def draw_axes(buf, spec, color):
	left = spec.margin_left
	top = spec.margin_top
	draw_hline(buf, left, left + spec.plot_width(),
		top + spec.plot_height(), color)
	draw_vline(buf, left, top, top + spec.plot_height(), color)
	return

# Returns: the pixel buffer for the chart, or None if there are fewer
# than two samples (a single point can't be drawn as a line; this is not
# an error).
def render_chart(samples, spec=None):
	tag = 'render_chart'

	if samples is None or len(samples) < 2:
		print_debug(tag, ("only {} samples, nothing to plot").format(
			0 if samples is None else len(samples)))
		return None
	if spec is None:
		spec = chart_spec()

	xscale = time_axis(samples)
	yscale = value_axis(samples)
	print_debug(tag, ("{} samples, time {}, value {}").format(
		len(samples), xscale, yscale))

	buf = new_canvas(spec)
	draw_grid(buf, xscale, yscale, spec)
	draw_rect(buf, spec.margin_left, spec.margin_top, spec.plot_width(),
		spec.plot_height(), style.PLOT_BORDER)
	draw_axes(buf, spec, style.AXIS)

	for counter in COUNTERS:
		polylines = series_polylines(samples, counter, xscale, yscale,
			spec, skip_zeros=(counter in style.SKIP_ZERO_SERIES))
		for points in polylines:
			draw_polyline(buf, points, style.SERIES_COLORS[counter])

	if spec.title:
		fill_rect(buf, spec.margin_left, 4, spec.plot_width(), 12,
			style.TITLE_BAND)

	return buf

# Encodes the buffer as a png (lossless). The title, if any, is stored
# in the png's Title text chunk. Errors (unwritable destination, bad
# buffer) are raised to the caller.
def write_image(buf, path, title=None):
	tag = 'write_image'

	dirname = os.path.dirname(path)
	if dirname:
		make_dirs(dirname)
	metadata = None
	if title:
		metadata = {'Title': title}
	mpimg.imsave(path, buf, format='png', metadata=metadata)
	print_debug(tag, ("wrote {}x{} chart to {}").format(buf.shape[1],
		buf.shape[0], path))
	return

# Returns: True if an image was written, False if there were too few
# samples to plot.
def save_memory_graph(samples, path, spec=None, title=None):
	if spec is None:
		spec = chart_spec(title=title)
	buf = render_chart(samples, spec)
	if buf is None:
		return False
	write_image(buf, path, title=spec.title)
	return True

if __name__ == '__main__':
	print_error_exit("not an executable module")
