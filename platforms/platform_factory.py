# Virtual memory analysis scripts.
# Developed 2012-2014 by Peter Hornyack, pjh@cs.washington.edu
# Copyright (c) 2012-2014 Peter Hornyack and University of Washington

from util.bench_utils import *
from platforms.process_platform import process_platform, proc_status_available
from platforms.simulated_platform import simulated_platform

# Picks the platform services for config.run_mode: 'simulated' and
# 'process' are used as-is; 'auto' measures the real process when
# /proc/self/status can be read, and falls back to the simulated
# platform otherwise.
def create(config):
	tag = 'platform_factory.create'

	mode = config.run_mode
	if mode == 'auto':
		if proc_status_available():
			mode = 'process'
		else:
			mode = 'simulated'
		print_debug(tag, ("run_mode auto -> {}").format(mode))

	if mode == 'process':
		return process_platform(config.results_root)
	elif mode == 'simulated':
		return simulated_platform(config.results_root)

	print_error(tag, ("unknown run_mode {}").format(config.run_mode))
	return None

if __name__ == '__main__':
	print_error_exit("not an executable module")
