# Virtual memory analysis scripts.
# Developed 2012-2014 by Peter Hornyack, pjh@cs.washington.edu
# Copyright (c) 2012-2014 Peter Hornyack and University of Washington

# Simulated platform: the counters are computed from the bytes held by
# the scene cache instead of being read from the OS, so the numbers are
# deterministic and work everywhere. There is no system-wide counter on
# this platform, so SYSTEM_USED always reads 0.

from analyze.MemorySample import Counter
from platforms.platform_services_class import *
import math
import os

RESERVE_BLOCK_BYTES = 4 * 1024 * 1024
BASE_RESERVED_MB = 32.0
BASE_MANAGED_MB = 8.0
MANAGED_FRACTION = 0.25

class simulated_sampler:
	tag = 'simulated_sampler'

	def __init__(self, cache):
		self.cache = cache
		self.started = False

	def start(self):
		self.started = True
		return

	def read(self):
		held = self.cache.held_bytes()
		blocks = int(math.ceil(held / RESERVE_BLOCK_BYTES))
		return {
			Counter.ALLOCATED    : bytes_to_mb(held),
			Counter.RESERVED     : (BASE_RESERVED_MB +
				bytes_to_mb(blocks * RESERVE_BLOCK_BYTES)),
			Counter.MANAGED_HEAP : (BASE_MANAGED_MB +
				MANAGED_FRACTION * bytes_to_mb(held)),
			Counter.SYSTEM_USED  : 0.0,
		}

	def dispose(self):
		self.started = False
		return

class simulated_platform(platform_services):
	tag = 'simulated_platform'

	name = 'simulated'
	log_prefix = '[Simulated] '

	def __init__(self, results_root=None, cache=None):
		if results_root is None:
			results_root = os.path.abspath('.')
		platform_services.__init__(self, results_root, cache)
		return

	def create_sampler(self):
		return simulated_sampler(self.cache)

if __name__ == '__main__':
	print_error_exit("not an executable module")
