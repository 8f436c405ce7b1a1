# Virtual memory analysis scripts.
# Developed 2012-2014 by Peter Hornyack, pjh@cs.washington.edu
# Copyright (c) 2012-2014 Peter Hornyack and University of Washington

# Process platform: measures this Python process.
#   ALLOCATED    - bytes currently traced by tracemalloc
#   RESERVED     - VmData from /proc/self/status (heap + data mappings)
#   MANAGED_HEAP - RssAnon (resident anonymous memory)
#   SYSTEM_USED  - VmRSS (total resident memory)
# Fields that aren't present (non-Linux, old kernels) read as 0.

from analyze.MemorySample import Counter
from platforms.platform_services_class import *
import conf.system_conf as sysconf
import re
import tracemalloc

# Example line: "VmRSS:	   23456 kB"
status_line_re = re.compile(r'^(?P<key>\w+):\s+(?P<value>\d+)\s*kB\s*$')

STATUS_COUNTERS = {
		'VmData'  : Counter.RESERVED,
		'RssAnon' : Counter.MANAGED_HEAP,
		'VmRSS'   : Counter.SYSTEM_USED,
	}

# Returns: a dict mapping the kB fields of a proc status file to their
# values in MB. Raises OSError if the file can't be read.
def read_proc_status(fname):
	fields = dict()
	with open(fname, 'r') as f:
		for line in f:
			match = status_line_re.match(line)
			if match:
				fields[match.group('key')] = (
					int(match.group('value')) / 1024.0)
	return fields

def proc_status_available(fname=sysconf.proc_status_file):
	tag = 'proc_status_available'

	try:
		fields = read_proc_status(fname)
	except OSError as e:
		print_debug(tag, ("can't read {}: {}").format(fname, e))
		return False
	return 'VmRSS' in fields

class process_sampler:
	tag = 'process_sampler'

	def __init__(self, status_fname=sysconf.proc_status_file):
		self.status_fname = status_fname
		self.started_tracing = False
		self.have_status = False

	def start(self):
		tag = "{}.start".format(self.tag)

		if not tracemalloc.is_tracing():
			tracemalloc.start()
			self.started_tracing = True
			print_debug(tag, "started tracemalloc")
		self.have_status = proc_status_available(self.status_fname)
		return

	def read(self):
		counters = {
			Counter.ALLOCATED    : 0.0,
			Counter.RESERVED     : 0.0,
			Counter.MANAGED_HEAP : 0.0,
			Counter.SYSTEM_USED  : 0.0,
		}
		if tracemalloc.is_tracing():
			(current, peak) = tracemalloc.get_traced_memory()
			counters[Counter.ALLOCATED] = bytes_to_mb(current)
		if self.have_status:
			# An OSError here means the read failed this time around; the
			# scheduler skips this sample.
			fields = read_proc_status(self.status_fname)
			for (key, counter) in STATUS_COUNTERS.items():
				counters[counter] = fields.get(key, 0.0)
		return counters

	def dispose(self):
		tag = "{}.dispose".format(self.tag)

		if self.started_tracing:
			tracemalloc.stop()
			self.started_tracing = False
			print_debug(tag, "stopped tracemalloc")
		return

class process_platform(platform_services):
	tag = 'process_platform'

	name = 'process'
	log_prefix = ''

	def __init__(self, results_root=None, cache=None,
			status_fname=sysconf.proc_status_file):
		if results_root is None:
			results_root = sysconf.results_root
		platform_services.__init__(self, results_root, cache)
		self.status_fname = status_fname
		return

	def create_sampler(self):
		return process_sampler(self.status_fname)

if __name__ == '__main__':
	print_error_exit("not an executable module")
