# Virtual memory analysis scripts.
# Developed 2012-2014 by Peter Hornyack, pjh@cs.washington.edu
# Copyright (c) 2012-2014 Peter Hornyack and University of Washington

# Data-file scenes: loading reads a file from disk into memory in
# fixed-size chunks, one chunk per tick. The scene name is the file name
# without its extension.

from scene_scripts.scene_to_load_class import *
import conf.system_conf as sysconf
import os

class datafile_load_operation(load_operation):
	tag = 'datafile_load_operation'

	def __init__(self, scenename, fname,
			chunk_bytes=sysconf.DATAFILE_CHUNK_BYTES, cache_=None):
		tag = "{}.__init__".format(self.tag)

		if chunk_bytes <= 0:
			print_error_exit(tag, ("invalid chunk_bytes {}").format(
				chunk_bytes))
		load_operation.__init__(self, scenename, cache_)
		self.fname = fname
		self.chunk_bytes = chunk_bytes
		return

	def load_steps(self):
		tag = "{}.load_steps".format(self.tag)

		payload = []
		size = os.path.getsize(self.fname)
		nread = 0
		with open(self.fname, 'rb') as f:
			while True:
				chunk = f.read(self.chunk_bytes)
				if not chunk:
					break
				self.hold(payload, chunk)
				nread += len(chunk)
				if size > 0:
					self.set_loading_fraction(nread / size)
				yield
		print_debug(tag, ("read {} bytes from {}").format(nread,
			self.fname))
		self.set_loading_fraction(1.0)
		yield
		return payload

def scenename_from_fname(fname):
	return os.path.splitext(os.path.basename(fname))[0]

def datafile_scene(fname, chunk_bytes=sysconf.DATAFILE_CHUNK_BYTES):
	def beginfn(name):
		return datafile_load_operation(name, fname, chunk_bytes)
	return scene_to_load(scenename_from_fname(fname), beginfn)

# Returns a list of scene_to_load objects, one per regular file in
# scenes_dir, sorted by file name. Hidden files are skipped unless
# include_hidden is set. Returns None if scenes_dir can't be listed.
def find_datafile_scenes(scenes_dir, include_hidden=False):
	tag = 'find_datafile_scenes'

	try:
		names = sorted(os.listdir(scenes_dir))
	except OSError as e:
		print_error(tag, ("couldn't list scenes dir {}: {}").format(
			scenes_dir, e))
		return None

	scenes = []
	for name in names:
		if name.startswith('.') and not include_hidden:
			continue
		fname = os.path.join(scenes_dir, name)
		if not os.path.isfile(fname):
			continue
		if not scenename_from_fname(fname):
			print_warning(tag, ("skipping {}: empty scene name").format(
				fname))
			continue
		scenes.append(datafile_scene(fname))
	print_debug(tag, ("found {} scenes in {}").format(len(scenes),
		scenes_dir))
	return scenes

if __name__ == '__main__':
	print_error_exit("not an executable module")
