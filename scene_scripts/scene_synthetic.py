# Virtual memory analysis scripts.
# Developed 2012-2014 by Peter Hornyack, pjh@cs.washington.edu
# Copyright (c) 2012-2014 Peter Hornyack and University of Washington

# Synthetic scenes: "loading" one of these allocates (and touches) a
# fixed amount of memory, one chunk per tick, so that the counters
# have something real to follow. No files or external programs needed.

from scene_scripts.scene_to_load_class import *
import conf.system_conf as sysconf
import math

FILL_BYTE = b'\xa5'
  # Fill chunks with non-zero data so the pages are actually touched
  # (a zeroed bytearray may just be mapped, not resident).

class synthetic_load_operation(load_operation):
	tag = 'synthetic_load_operation'

	def __init__(self, scenename, total_mb, chunk_mb=sysconf.SYNTHETIC_CHUNK_MB,
			cache_=None):
		tag = "{}.__init__".format(self.tag)

		if total_mb <= 0 or chunk_mb <= 0:
			print_error_exit(tag, ("invalid sizes: total_mb={}, "
				"chunk_mb={}").format(total_mb, chunk_mb))
		load_operation.__init__(self, scenename, cache_)
		self.total_bytes = int(total_mb * MB)
		self.chunk_bytes = int(chunk_mb * MB)
		self.nchunks = int(math.ceil(self.total_bytes / self.chunk_bytes))
		return

	def load_steps(self):
		payload = []
		remaining = self.total_bytes
		for i in range(self.nchunks):
			size = min(self.chunk_bytes, remaining)
			self.hold(payload, bytearray(FILL_BYTE) * size)
			remaining -= size
			self.set_loading_fraction((i + 1) / self.nchunks)
			yield
		# Activation happens on the following step.
		yield
		return payload

def synthetic_scene(scenename, total_mb, chunk_mb=sysconf.SYNTHETIC_CHUNK_MB):
	def beginfn(name):
		return synthetic_load_operation(name, total_mb, chunk_mb)
	return scene_to_load(scenename, beginfn)

# First arg is "scenename": used for log rows and graph file names.
small_scene = synthetic_scene('small', 16)
medium_scene = synthetic_scene('medium', 64)
large_scene = synthetic_scene('large', 256)

if __name__ == '__main__':
	print_error_exit("not an executable module")
