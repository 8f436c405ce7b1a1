# Virtual memory analysis scripts.
# Developed 2012-2014 by Peter Hornyack, pjh@cs.washington.edu
# Copyright (c) 2012-2014 Peter Hornyack and University of Washington

from util.bench_utils import *
import scene_scripts.scene_to_load_class as scenes
import gc

'''
Everything the benchmark runner needs from the platform it is measuring:
where to put results, how to read the memory counters, how to log, and
how to clean up between runs. Subclasses set results_root and implement
create_sampler().
'''
class platform_services:
	tag = 'platform_services'

	name = 'base'
	log_prefix = ''

	def __init__(self, results_root, cache=None):
		self.results_root = results_root
		self.cache = cache if cache is not None else scenes.cache
		return

	# Returns a new counter source object with start(), read() and
	# dispose() methods; read() returns a dict mapping each Counter to a
	# value in MB.
	def create_sampler(self):
		raise NotImplementedError("create_sampler() must be implemented")

	# User-facing session messages (as opposed to print_debug() etc.).
	def log(self, msg):
		logger.info("{}{}".format(self.log_prefix, msg))
		return

	# A generator: forces a full collection if asked to, then releases
	# unused scenes one per step.
	def cleanup_once(self, force_gc, unload_unused):
		tag = "{}.cleanup_once".format(self.tag)

		if force_gc:
			collected = gc.collect()
			print_debug(tag, ("gc.collect() found {} unreachable "
				"objects").format(collected))
		if unload_unused:
			yield from self.cache.unload_unused()
		yield
		return

if __name__ == '__main__':
	print_error_exit("not an executable module")
