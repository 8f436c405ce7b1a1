#! /usr/bin/env python3

# Virtual memory analysis scripts.
# Developed 2012-2014 by Peter Hornyack, pjh@cs.washington.edu
# Copyright (c) 2012-2014 Peter Hornyack and University of Washington

from analyze.memory_stats import aggregate
from analyze.run_result_class import *
from conf.argparsers import bench_parser
from conf.benchmark_config import benchmark_config
from measure.metrics_log_class import metrics_log
from measure.run_common import *
from measure.sampling_scheduler import run_once_state, tick_scheduler
from analyze.MemorySample import Counter
from util.bench_utils import *
import conf.system_conf as sysconf
import platforms.platform_factory as platform_factory
import plotting.graph_rasterizer as graph
import os
import sys

##############################################################################

def graph_title(scenename, iteration, load_ms, peak_reserved_mb):
	return ("{} - iter {} - Load: {:.0f} ms - PeakRes: {:.1f} MB").format(
		scenename, iteration, load_ms, peak_reserved_mb)

# Drives the platform's cleanup generator to completion on the
# scheduler's tick loop.
def cleanup(platform, scheduler, force_gc, unload_unused):
	tag = 'cleanup'

	print_debug(tag, ("force_gc={}, unload_unused={}").format(force_gc,
		unload_unused))
	scheduler.run_until_complete(platform.cleanup_once(force_gc,
		unload_unused))
	return

# Runs one scene / iteration: samples the counters while the scene loads
# and stabilizes, writes the log rows, and saves the graph. A graph that
# can't be written is logged, not fatal: the log rows come first.
# Returns: the run_result.
def run_one(config, platform, scheduler, scene, iteration, log,
		graphs_dir):
	tag = 'run_one'

	scenename = scene.scenename
	print_debug(tag, ("running {} iteration {}").format(scenename,
		iteration))

	sampler = platform.create_sampler()
	sampler.start()
	try:
		state = run_once_state(scene.begin, config.sample_interval_ms,
			config.stabilization_ms, sampler, scheduler)
	finally:
		sampler.dispose()

	samples = state.samples
	(peaks, steady) = aggregate(samples)
	result = run_result(scenename, iteration, state.time_to_threshold_ms,
		state.time_to_complete_ms, peaks, steady, samples)

	runid = run_id(scenename, iteration)
	log.write_run(runid, result, state.load_start_ms)
	log.flush()

	png_fname = graph_fname(graphs_dir, scenename, iteration)
	title = graph_title(scenename, iteration, state.time_to_complete_ms,
		peaks[Counter.RESERVED])
	try:
		if graph.save_memory_graph(samples, png_fname, title=title):
			result.image_path = png_fname
		else:
			print_debug(tag, ("only {} samples for {}, no graph").format(
				len(samples), runid))
	except Exception as e:
		# Any encode or I/O failure only costs this run its graph.
		platform.log(("Graph export failed: {}").format(e))

	return result

# Runs every scene in config.scenes config.iterations times, strictly
# one after another, with a cleanup between runs.
# Returns a tuple: (session_dir, list of run_results), or (None, None)
# if the session directory couldn't be set up.
def run_session(config, platform, scheduler=None, now=None):
	tag = 'run_session'

	if scheduler is None:
		scheduler = tick_scheduler(frame_ms=config.frame_ms)

	(session_dir, graphs_dir) = init_session(platform.results_root, now)
	if not session_dir:
		return (None, None)
	print('Output will be saved in directory {}'.format(session_dir))

	results = []
	log = metrics_log(os.path.join(session_dir, sysconf.METRICS_FNAME))
	try:
		cleanup(platform, scheduler, config.force_gc_before_run,
			config.unload_unused)

		for scenename in config.scenes:
			scene = config.lookup_scene(scenename)
			if scene is None:
				print_error(tag, ("unknown scene {}, skipping it").format(
					scenename))
				continue
			for iteration in range(1, config.iterations + 1):
				result = run_one(config, platform, scheduler, scene,
					iteration, log, graphs_dir)
				results.append(result)
				cleanup(platform, scheduler, False, config.unload_unused)
	finally:
		log.close()

	write_summary(os.path.join(session_dir, sysconf.SUMMARY_FNAME), results)
	for line in summary_lines(results):
		print_debug(tag, line)
	platform.log(("Benchmark done. Results: {}").format(session_dir))

	return (session_dir, results)

def handle_args(argv=None):
	tag = 'handle_args'

	args = bench_parser.parse_args(argv)
	setup_logging(args.debug)
	print_debug(tag, ("parser returned args: {}").format(args))

	config = benchmark_config(scenes=args.scenes,
		iterations=args.iterations,
		sample_interval_ms=args.sample_interval_ms,
		stabilization_ms=args.stabilization_ms,
		unload_unused=args.unload_unused,
		force_gc_before_run=args.force_gc_before_run,
		run_mode=args.run_mode, frame_ms=args.frame_ms,
		results_root=args.results_root, scenes_dir=args.scenes_dir,
		include_hidden=args.include_hidden)

	return config

def main(argv=None):
	tag = 'main'

	config = handle_args(argv)
	if not config.sync_scenes() or not config.validate():
		print_error(tag, "exiting without running")
		return 1

	platform = platform_factory.create(config)
	if not platform:
		print_error(tag, "no platform, exiting without running")
		return 1

	(session_dir, results) = run_session(config, platform)
	if not session_dir:
		print_error(tag, "exiting without running")
		return 1

	for line in summary_lines(results):
		print(line)
	return 0

##############################################################################
# Main:
if __name__ == '__main__':
	sys.exit(main())
