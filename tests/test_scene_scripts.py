# Virtual memory analysis scripts.
# Developed 2012-2014 by Peter Hornyack, pjh@cs.washington.edu
# Copyright (c) 2012-2014 Peter Hornyack and University of Washington

from scene_scripts.scene_to_load_class import *
from scene_scripts.scene_datafile import *
from scene_scripts.scene_synthetic import *
import scene_scripts.scene_to_load_class as scenes
import pytest

def step_all(gen):
	n = 0
	for _ in gen:
		n += 1
	return n

##############################################################################
# scene_cache

def test_unload_releases_all_but_active():
	c = scene_cache()
	c.activate('a', [b'x' * 10])
	c.activate('b', [b'y' * 5])
	c.activate('c', [b'z' * 3])
	assert c.held_bytes() == 18

	steps = step_all(c.unload_unused())
	assert steps == 2   # one scene per step
	assert list(c.loaded) == ['c']
	assert c.held_bytes() == 3

def test_unload_with_nothing_unused():
	c = scene_cache()
	c.activate('a', [b'x'])
	assert step_all(c.unload_unused()) == 0
	assert c.active == 'a'

def test_pending_bytes_count_as_held():
	c = scene_cache()
	op = synthetic_load_operation('s', 1, 0.5, cache_=c)
	work = op.work()
	next(work)
	assert c.held_bytes() == MB // 2
	assert c.active is None

##############################################################################
# synthetic scenes

def test_synthetic_load_progress_and_activation():
	c = scene_cache()
	op = synthetic_load_operation('tiny', 1, 0.25, cache_=c)
	work = op.work()
	seen = []
	for i in range(4):
		next(work)
		seen.append(op.progress())
		assert not op.is_done()
	assert seen == pytest.approx([0.225, 0.45, 0.675, 0.9])

	next(work)   # activation step
	assert not op.is_done()
	with pytest.raises(StopIteration):
		next(work)
	assert op.is_done()
	assert op.progress() == 1.0
	assert c.active == 'tiny'
	assert c.pending_bytes == 0
	assert c.held_bytes() == MB

def test_synthetic_last_chunk_is_partial():
	c = scene_cache()
	op = synthetic_load_operation('odd', 1, 0.3, cache_=c)
	assert op.nchunks == 4
	step_all(op.work())
	sizes = [len(chunk) for chunk in c.loaded['odd']]
	assert sum(sizes) == MB
	assert sizes[-1] < sizes[0]

def test_synthetic_rejects_bad_sizes():
	with pytest.raises(SystemExit):
		synthetic_load_operation('bad', 0)

def test_scene_begin_uses_shared_cache():
	scene = synthetic_scene('shared', 0.5, 0.5)
	op = scene.begin()
	assert op.scenename == 'shared'
	step_all(op.work())
	assert scenes.cache.active == 'shared'

def test_scene_to_load_needs_name_and_fn():
	with pytest.raises(SystemExit):
		scene_to_load('', lambda name: None)
	with pytest.raises(SystemExit):
		scene_to_load('x', None)

##############################################################################
# data-file scenes

def test_datafile_load_reads_whole_file(tmp_path):
	fname = tmp_path / 'level1.dat'
	fname.write_bytes(b'0123456789')
	c = scene_cache()
	op = datafile_load_operation('level1', str(fname), chunk_bytes=4,
		cache_=c)
	work = op.work()
	progress = []
	for i in range(3):
		next(work)
		progress.append(op.progress())
	assert progress == pytest.approx([0.36, 0.72, 0.9])
	step_all(work)
	assert op.is_done()
	assert b''.join(c.loaded['level1']) == b'0123456789'

def test_datafile_empty_file(tmp_path):
	fname = tmp_path / 'empty.bin'
	fname.write_bytes(b'')
	c = scene_cache()
	op = datafile_load_operation('empty', str(fname), cache_=c)
	assert step_all(op.work()) == 1
	assert op.is_done()
	assert c.held_bytes() == 0

def test_scenename_from_fname():
	assert scenename_from_fname('/a/b/forest.level') == 'forest'
	assert scenename_from_fname('plain') == 'plain'

def test_find_datafile_scenes(tmp_path):
	(tmp_path / 'b.dat').write_bytes(b'b')
	(tmp_path / 'a.dat').write_bytes(b'a')
	(tmp_path / '.hidden').write_bytes(b'h')
	(tmp_path / 'subdir').mkdir()

	found = find_datafile_scenes(str(tmp_path))
	assert [s.scenename for s in found] == ['a', 'b']

	found = find_datafile_scenes(str(tmp_path), include_hidden=True)
	assert [s.scenename for s in found] == ['.hidden', 'a', 'b']

def test_find_datafile_scenes_missing_dir(tmp_path):
	assert find_datafile_scenes(str(tmp_path / 'nope')) is None

def test_scene_name_is_kept_whole():
	name = 'a_rather_long_scene_name_' * 4
	assert synthetic_scene(name, 0.5).scenename == name
