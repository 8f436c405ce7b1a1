# Virtual memory analysis scripts.
# Developed 2012-2014 by Peter Hornyack, pjh@cs.washington.edu
# Copyright (c) 2012-2014 Peter Hornyack and University of Washington

from util.bench_utils import *
from scene_scripts.scene_synthetic import small_scene, medium_scene, large_scene

# builtin_scenelist: list of scene_to_load objects that can be named on
# the command line without any setup.
builtin_scenelist = [
	small_scene,
	medium_scene,
	large_scene,
]

# Default scenes for a session when none are named.
default_scenenames = ['small', 'medium']

def scenelist_str(scenelist=None):
	if scenelist is None:
		scenelist = builtin_scenelist
	s = ""
	for scene in scenelist:
		s += " {}".format(scene.scenename)
	return s

# Returns: the scene_to_load with the given name from scenelist (the
# builtin list by default), or None if there is no such scene.
def lookup_scene(scenename, scenelist=None):
	if scenelist is None:
		scenelist = builtin_scenelist
	for scene in scenelist:
		if scene.scenename == scenename:
			return scene
	return None

if __name__ == '__main__':
	print_error_exit("not an executable module")
