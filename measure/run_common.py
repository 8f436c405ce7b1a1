# Virtual memory analysis scripts.
# Developed 2012-2014 by Peter Hornyack, pjh@cs.washington.edu
# Copyright (c) 2012-2014 Peter Hornyack and University of Washington

# This file contains the directory layout of a benchmark session:
#   <results_root>/BenchmarkResults/<timestamp>/metrics.csv
#   <results_root>/BenchmarkResults/<timestamp>/summary.tsv
#   <results_root>/BenchmarkResults/<timestamp>/Graphs/<scene>_iter<NN>.png

from util.bench_utils import *
import conf.system_conf as sysconf
import datetime
import os

def results_dir(results_root):
	return os.path.join(results_root, sysconf.RESULTS_DIRNAME)

# Creates a new session directory (and its Graphs subdirectory) named
# after the current time.
# Returns a tuple: (session_dir, graphs_dir), or (None, None) on error.
def init_session(results_root, now=None):
	tag = 'init_session'

	if now is None:
		now = datetime.datetime.now()
	stamp = now.strftime(sysconf.SESSION_TIMEFMT)
	session_dir = os.path.join(results_dir(results_root), stamp)

	if os.path.exists(session_dir):
		print_error(tag, ("Output directory \'{}\' already exists").format(
			session_dir))
		return (None, None)
	try:
		os.makedirs(session_dir)
		graphs_dir = make_dirs(os.path.join(session_dir, sysconf.GRAPHS_DIRNAME))
	except OSError as e:
		print_error(tag, ("couldn't create session dir {}: {}").format(
			session_dir, e))
		return (None, None)
	print_debug(tag, ("created session dir {}").format(session_dir))

	return (session_dir, graphs_dir)

def graph_fname(graphs_dir, scenename, iteration):
	return os.path.join(graphs_dir, "{}_iter{:02d}.{}".format(scenename,
		iteration, sysconf.IMAGE_EXT))

def run_id(scenename, iteration):
	return "{}_{}".format(scenename, iteration)

if __name__ == '__main__':
	print("Cannot run stand-alone")
	sys.exit(1)
