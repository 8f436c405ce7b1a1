# Virtual memory analysis scripts.
# Developed 2012-2014 by Peter Hornyack, pjh@cs.washington.edu
# Copyright (c) 2012-2014 Peter Hornyack and University of Washington

from conf.argparsers import bench_parser
from conf.benchmark_config import *
import conf.scenelist as scenelist
import conf.system_conf as sysconf
import pytest

def test_parser_defaults():
	args = bench_parser.parse_args([])
	assert args.scenes == []
	assert args.iterations == sysconf.DEFAULT_ITERATIONS
	assert args.sample_interval_ms == sysconf.DEFAULT_SAMPLE_INTERVAL_MS
	assert args.stabilization_ms == sysconf.DEFAULT_STABILIZATION_MS
	assert args.run_mode == 'auto'
	assert args.unload_unused is True
	assert args.force_gc_before_run is True
	assert args.debug is False

def test_parser_flags():
	args = bench_parser.parse_args(['large', 'small', '-n', '5', '-i',
		'20', '--no-unload', '--no-gc', '-m', 'process'])
	assert args.scenes == ['large', 'small']
	assert args.iterations == 5
	assert args.sample_interval_ms == 20.0
	assert args.unload_unused is False
	assert args.force_gc_before_run is False
	assert args.run_mode == 'process'

def test_parser_rejects_unknown_mode():
	with pytest.raises(SystemExit):
		bench_parser.parse_args(['-m', 'console'])

def test_defaults_when_no_scenes_named():
	config = benchmark_config()
	assert config.sync_scenes()
	assert config.scenes == scenelist.default_scenenames
	assert config.validate()

def test_named_scenes_are_kept(tmp_path):
	(tmp_path / 'cave.bin').write_bytes(b'c')
	config = benchmark_config(scenes=['large'], scenes_dir=str(tmp_path))
	assert config.sync_scenes()
	assert config.scenes == ['large']
	assert config.lookup_scene('cave').scenename == 'cave'
	assert config.lookup_scene('large') is scenelist.large_scene

def test_scenes_dir_replaces_defaults(tmp_path):
	(tmp_path / 'b.bin').write_bytes(b'b')
	(tmp_path / 'a.bin').write_bytes(b'a')
	config = benchmark_config(scenes_dir=str(tmp_path))
	assert config.sync_scenes()
	assert config.scenes == ['a', 'b']

def test_datafile_scene_shadows_builtin(tmp_path):
	(tmp_path / 'small.dat').write_bytes(b's')
	config = benchmark_config(scenes_dir=str(tmp_path))
	config.sync_scenes()
	assert config.lookup_scene('small') is not scenelist.small_scene

def test_no_autosync_leaves_scene_list_empty():
	config = benchmark_config(autosync_scenes=False)
	assert config.sync_scenes()
	assert config.scenes == []
	assert not config.validate()

def test_unknown_scene_lookup():
	assert benchmark_config().lookup_scene('nope') is None

@pytest.mark.parametrize('kwargs', [
	dict(iterations=0),
	dict(stabilization_ms=-1),
	dict(frame_ms=-1),
	dict(run_mode='console'),
])
def test_validate_rejects(kwargs):
	config = benchmark_config(scenes=['small'], **kwargs)
	assert not config.validate()

def test_validate_allows_tiny_interval():
	config = benchmark_config(scenes=['small'], sample_interval_ms=0)
	assert config.validate()
