# Virtual memory analysis scripts.
# Developed 2012-2014 by Peter Hornyack, pjh@cs.washington.edu
# Copyright (c) 2012-2014 Peter Hornyack and University of Washington

from util.bench_utils import *
import conf.system_conf as sysconf

# scene_to_load defines how a particular scene is loaded; the benchmark
# runner doesn't know anything about what a scene is, it only calls
# begin() and then polls the handle that comes back.

##############################################################################

'''
Holds the payloads of scenes that have been activated. Only one scene is
"active" at a time (single-scene loading): activating a new scene leaves
the previous ones loaded but unused, until unload_unused() releases them.
'''
class scene_cache:
	tag = 'scene_cache'

	def __init__(self):
		self.loaded = dict()
		self.active = None
		self.pending_bytes = 0
		return

	def activate(self, scenename, payload):
		tag = "{}.activate".format(self.tag)

		self.loaded[scenename] = payload
		self.active = scenename
		print_debug(tag, ("scene {} is now active ({} loaded)").format(
			scenename, len(self.loaded)))
		return

	def held_bytes(self):
		total = self.pending_bytes
		for payload in self.loaded.values():
			total += payload_size(payload)
		return total

	# Releases one unused scene per step; a generator so that the caller
	# can spread the work over several ticks.
	def unload_unused(self):
		tag = "{}.unload_unused".format(self.tag)

		unused = [name for name in self.loaded if name != self.active]
		for name in unused:
			del self.loaded[name]
			print_debug(tag, ("unloaded scene {}").format(name))
			yield
		return

	def clear(self):
		self.loaded.clear()
		self.active = None
		self.pending_bytes = 0
		return

def payload_size(payload):
	return sum(len(chunk) for chunk in payload)

cache = scene_cache()

##############################################################################

'''
Handle for one in-progress scene load. Subclasses implement load_steps():
a generator that does one chunk of work per step. progress() and
is_done() may be polled at any time.
'''
class load_operation:
	tag = 'load_operation'

	def __init__(self, scenename, cache_=None):
		self.scenename = scenename
		self.cache = cache_ if cache_ is not None else cache
		self.fraction = 0.0
		self.done = False
		return

	def progress(self):
		return self.fraction

	def is_done(self):
		return self.done

	# Loading reports progress up to sysconf.LOAD_THRESHOLD; activation is a
	# separate final step that takes progress to 1.0.
	def set_loading_fraction(self, fraction):
		self.fraction = sysconf.LOAD_THRESHOLD * min(1.0, max(0.0, fraction))
		return

	# Appends a loaded chunk to the payload; it counts as memory held by
	# the cache while the load is still in progress.
	def hold(self, payload, chunk):
		payload.append(chunk)
		self.cache.pending_bytes += len(chunk)
		return

	def work(self):
		tag = "{}.work".format(self.tag)

		payload = yield from self.load_steps()
		self.cache.pending_bytes = max(0,
			self.cache.pending_bytes - payload_size(payload))
		self.cache.activate(self.scenename, payload)
		self.fraction = 1.0
		self.done = True
		print_debug(tag, ("scene {} loaded and activated").format(
			self.scenename))
		return

	def load_steps(self):
		raise NotImplementedError("load_steps() must be implemented")

class scene_to_load:
	tag = 'scene_to_load'

	# Members:
	#   scenename: name of the scene being loaded; used in the log rows and
	#     image file names.
	#   beginfn:
	#     Signature: beginfn(scenename) returns a load_operation
	#     This method should only create the handle; the actual loading
	#     is done by the handle's work() generator, which the scheduler
	#     steps once per tick.
	scenename = None
	beginfn = None

	def __init__(self, scenename, beginfn):
		tag = "{}.__init__".format(self.tag)

		if (not scenename or not beginfn):
			print_error_exit(tag, ("None argument: scenename={}, "
				"beginfn={}").format(scenename, beginfn))

		self.tag += ".{}".format(scenename)
		self.scenename = scenename
		self.beginfn = beginfn

		return

	def begin(self):
		tag = "{}.begin".format(self.tag)

		print_debug(tag, ("beginning load of {}").format(self.scenename))
		return self.beginfn(self.scenename)

if __name__ == '__main__':
	print_error_exit("not an executable module")
