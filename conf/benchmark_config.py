# Virtual memory analysis scripts.
# Developed 2012-2014 by Peter Hornyack, pjh@cs.washington.edu
# Copyright (c) 2012-2014 Peter Hornyack and University of Washington

from util.bench_utils import *
import conf.scenelist as scenelist
import conf.system_conf as sysconf
import scene_scripts.scene_datafile as datafile

RUN_MODES = ['auto', 'simulated', 'process']

'''
Everything that controls one benchmark session: which scenes to load,
how many times, and how to sample.
'''
class benchmark_config:
	tag = 'benchmark_config'

	def __init__(self, scenes=None, iterations=sysconf.DEFAULT_ITERATIONS,
			sample_interval_ms=sysconf.DEFAULT_SAMPLE_INTERVAL_MS,
			stabilization_ms=sysconf.DEFAULT_STABILIZATION_MS,
			unload_unused=sysconf.DEFAULT_UNLOAD_UNUSED,
			force_gc_before_run=sysconf.DEFAULT_FORCE_GC_BEFORE_RUN,
			run_mode=sysconf.DEFAULT_RUN_MODE, frame_ms=sysconf.DEFAULT_FRAME_MS,
			results_root=None, scenes_dir=None, include_hidden=False,
			autosync_scenes=True):
		self.scenes = list(scenes) if scenes else []
		  # scene names, in run order
		self.iterations = iterations
		self.sample_interval_ms = sample_interval_ms
		self.stabilization_ms = stabilization_ms
		self.unload_unused = unload_unused
		self.force_gc_before_run = force_gc_before_run
		self.run_mode = run_mode
		self.frame_ms = frame_ms
		self.results_root = results_root
		self.scenes_dir = scenes_dir
		self.include_hidden = include_hidden
		self.autosync_scenes = autosync_scenes

		# scene_to_load objects that scenes may name, besides the builtin
		# ones; filled by sync_scenes().
		self.extra_scenes = []
		return

	# If a scenes_dir is configured, adds a data-file scene for each file
	# in it. With autosync_scenes set and no scenes named explicitly, the
	# scene list becomes the synced scenes (or the defaults, when there
	# is no scenes_dir).
	# Returns: True on success, False if scenes_dir couldn't be read.
	def sync_scenes(self):
		tag = "{}.sync_scenes".format(self.tag)

		synced = []
		if self.scenes_dir:
			found = datafile.find_datafile_scenes(self.scenes_dir,
				self.include_hidden)
			if found is None:
				return False
			synced = found
		self.extra_scenes = synced

		if self.autosync_scenes and len(self.scenes) == 0:
			if len(synced) > 0:
				self.scenes = [s.scenename for s in synced]
			else:
				self.scenes = list(scenelist.default_scenenames)
			print_debug(tag, ("synced scene list: {}").format(self.scenes))
		return True

	def lookup_scene(self, scenename):
		scene = scenelist.lookup_scene(scenename, self.extra_scenes)
		if scene is None:
			scene = scenelist.lookup_scene(scenename)
		return scene

	# Returns: True if the config can be used for a session; logs each
	# problem found and returns False otherwise.
	def validate(self):
		tag = "{}.validate".format(self.tag)

		ok = True
		if len(self.scenes) == 0:
			print_error(tag, "no scenes to run")
			ok = False
		if self.iterations < 1:
			print_error(tag, ("iterations must be >= 1, got {}").format(
				self.iterations))
			ok = False
		if self.sample_interval_ms <= 0:
			print_warning(tag, ("sample_interval_ms {} will be clamped to "
				"{} ms").format(self.sample_interval_ms,
				sysconf.MIN_SAMPLE_INTERVAL_MS))
		if self.stabilization_ms < 0:
			print_error(tag, ("stabilization_ms must be >= 0, got "
				"{}").format(self.stabilization_ms))
			ok = False
		if self.frame_ms < 0:
			print_error(tag, ("frame_ms must be >= 0, got {}").format(
				self.frame_ms))
			ok = False
		if self.run_mode not in RUN_MODES:
			print_error(tag, ("unknown run_mode {}, expected one of "
				"{}").format(self.run_mode, RUN_MODES))
			ok = False
		return ok

	def __repr__(self):
		return ("benchmark_config(scenes={}, iterations={}, "
			"sample_interval_ms={}, stabilization_ms={}, run_mode={})").format(
			self.scenes, self.iterations, self.sample_interval_ms,
			self.stabilization_ms, self.run_mode)

if __name__ == '__main__':
	print_error_exit("not an executable module")
