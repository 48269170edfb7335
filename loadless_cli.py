#!/usr/bin/env python3

import argparse
import sys
import yaml
from loadlesslib.core import config
from loadlesslib.core import utils
from loadlesslib.core.errors import LoadLogError
from loadlesslib.core.project import LoadlessProject
from loadlesslib.media.ffmpeg import FfmpegEngine

#============================================

def parse_args(argv: list = None):
	"""
	Parse command-line arguments.
	"""
	parser = argparse.ArgumentParser(
		description="Load time statistics and load-free video recut for speedruns")
	parser.add_argument('log_file', nargs='?', default=None,
		help='load log file, first line is a column header')
	parser.add_argument('-i', '--input', dest='input_file',
		help='load log file (same as the positional argument)')
	parser.add_argument('-v', '--video', dest='video_file',
		help='source video of the run')
	parser.add_argument('-o', '--output', dest='report_file',
		help='report file to write, default output.txt')
	parser.add_argument('-c', '--config', dest='config_file',
		help='loadless config YAML')
	parser.add_argument('-r', '--recut', dest='recut', action='store_true',
		help='cut the loads out of the source video')
	parser.add_argument('-R', '--no-recut', dest='recut', action='store_false',
		help='only write the report')
	parser.add_argument('-e', '--double-encode', dest='double_encode',
		action='store_true', help='re-encode again while joining segments')
	parser.add_argument('-s', '--skip-split', dest='skip_split', action='store_true',
		help='reuse segment files from a previous run')
	parser.add_argument('-b', '--strict-boundaries', dest='strict_boundaries',
		action='store_true', help='reject duplicate Run start/Run end markers')
	parser.add_argument('-d', '--segment-dir', dest='segment_dir',
		help='directory for segment files')
	parser.add_argument('-O', '--output-video', dest='output_video',
		help='recut video file to write')
	parser.add_argument('-k', '--keep-segments', dest='keep_segments',
		help='keep segment files after joining', action='store_true')
	parser.add_argument('-K', '--no-keep-segments', dest='keep_segments',
		help='remove segment files after joining', action='store_false')
	parser.add_argument('-p', '--dump-plan', dest='dump_plan', action='store_true',
		help='print the segment plan and exit')
	parser.add_argument('-q', '--quiet', dest='quiet', action='store_true',
		help='no status output or progress bars')
	parser.set_defaults(recut=None, double_encode=None, skip_split=None,
		strict_boundaries=None, keep_segments=None)
	args = parser.parse_args(argv)
	return args

#============================================

def settings_from_args(args) -> dict:
	overrides = {
		'log_file': args.input_file or args.log_file,
		'video_file': args.video_file,
		'report_file': args.report_file,
		'recut': args.recut,
		'double_encode': args.double_encode,
		'skip_split': args.skip_split,
		'strict_boundaries': args.strict_boundaries,
		'segment_dir': args.segment_dir,
		'output_video': args.output_video,
		'keep_segments': args.keep_segments,
	}
	return config.build_settings(args.config_file, overrides)

#============================================

def dump_plan(project: LoadlessProject) -> None:
	plan = project.build_plan()
	data = {
		'segments': [segment.as_dict() for segment in plan.segments],
		'warnings': list(project.timeline.warnings) + list(plan.warnings),
	}
	print(yaml.safe_dump(data, sort_keys=False))

#============================================

def main(argv: list = None) -> int:
	args = parse_args(argv)
	if args.quiet:
		utils.set_quiet_mode(True)
	try:
		settings = settings_from_args(args)
		engine = None
		if settings['recut'] and not args.dump_plan:
			engine = FfmpegEngine(settings['video_codec'], settings['audio_codec'])
			engine.check_tools()
		project = LoadlessProject(settings, engine=engine)
		if args.dump_plan:
			dump_plan(project)
			return 0
		project.run()
	except LoadLogError as error:
		print(f"ERROR: {error}")
		print("Input file could not be parsed")
		return 1
	except (RuntimeError, OSError) as error:
		print(f"ERROR: {error}")
		return 1
	return 0


if __name__ == '__main__':
	sys.exit(main())
