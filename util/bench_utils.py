# Virtual memory analysis scripts.
# Developed 2012-2014 by Peter Hornyack, pjh@cs.washington.edu
# Copyright (c) 2012-2014 Peter Hornyack and University of Washington

# Tagged output helpers used throughout the benchmark scripts. Every
# function / method sets a local "tag" and passes it as the first arg,
# so that each line of output says where it came from.

import logging
import os
import sys

LOGGER_NAME = 'membench'
logger = logging.getLogger(LOGGER_NAME)

MB = 1024.0 * 1024.0

def setup_logging(debug=False, stream=None):
	if stream is None:
		stream = sys.stderr
	if not logger.handlers:
		handler = logging.StreamHandler(stream)
		handler.setFormatter(logging.Formatter(
			"%(levelname)s: %(message)s"))
		logger.addHandler(handler)
	if debug:
		logger.setLevel(logging.DEBUG)
	else:
		logger.setLevel(logging.INFO)
	return

def print_debug(tag, msg):
	logger.debug("[{}] {}".format(tag, msg))
	return

def print_warning(tag, msg):
	logger.warning("[{}] {}".format(tag, msg))
	return

def print_error(tag, msg):
	logger.error("[{}] {}".format(tag, msg))
	return

# Use for conditions that "shouldn't happen" but that we can survive;
# if exit is True, treat it as fatal instead.
def print_unexpected(exit, tag, msg):
	if exit:
		print_error_exit(tag, msg)
	logger.warning("[{}] UNEXPECTED: {}".format(tag, msg))
	return

def print_error_exit(tag, msg=None):
	if msg is None:
		(tag, msg) = ('unknown', tag)
	logger.critical("[{}] {}".format(tag, msg))
	sys.exit(1)

def bytes_to_mb(nbytes):
	return nbytes / MB

# Creates dirname (and its parents) if it doesn't already exist.
# Returns: the dirname.
def make_dirs(dirname):
	tag = 'make_dirs'

	if not os.path.exists(dirname):
		os.makedirs(dirname)
		print_debug(tag, ("created directory {}").format(dirname))
	return dirname

if __name__ == '__main__':
	print("Cannot run stand-alone")
	sys.exit(1)
