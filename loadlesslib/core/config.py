#!/usr/bin/env python3

"""
Settings for a loadless run.

Precedence, lowest first: built-in defaults, the YAML config file,
LOADLESS_* environment variables, command-line overrides.
"""

import os
import yaml
from loadlesslib.core import utils

#============================================

CONFIG_HEADER_KEY = "loadless"
CONFIG_HEADER_VALUE = 1

BOOL_KEYS = ('recut', 'double_encode', 'skip_split', 'strict_boundaries',
	'keep_segments')
PATH_KEYS = ('log_file', 'video_file', 'report_file', 'segment_dir',
	'output_video')
STRING_KEYS = ('video_codec', 'audio_codec')

ENV_VARS = {
	'log_file': 'LOADLESS_LOG_FILE',
	'video_file': 'LOADLESS_VIDEO_FILE',
	'report_file': 'LOADLESS_REPORT_FILE',
	'recut': 'LOADLESS_RECUT',
	'double_encode': 'LOADLESS_DOUBLE_ENCODE',
	'skip_split': 'LOADLESS_SKIP_SPLIT',
	'strict_boundaries': 'LOADLESS_STRICT_BOUNDARIES',
	'segment_dir': 'LOADLESS_SEGMENT_DIR',
	'output_video': 'LOADLESS_OUTPUT_VIDEO',
	'keep_segments': 'LOADLESS_KEEP_SEGMENTS',
}

#============================================

def default_config() -> dict:
	"""
	Build the default config dictionary.

	Returns:
		dict: Default config.
	"""
	return {
		CONFIG_HEADER_KEY: CONFIG_HEADER_VALUE,
		"settings": {
			"log_file": None,
			"video_file": None,
			"report_file": "output.txt",
			"recut": False,
			"double_encode": False,
			"skip_split": False,
			"strict_boundaries": False,
			"segment_dir": None,
			"output_video": None,
			"keep_segments": False,
			"video_codec": "libx264",
			"audio_codec": "aac",
		},
	}

#============================================

def load_config(config_path: str) -> dict:
	"""
	Load a config file from disk.

	Args:
		config_path: Config file path.

	Returns:
		dict: Parsed config mapping.
	"""
	utils.ensure_file_exists(config_path)
	with open(config_path, "r", encoding="utf-8") as handle:
		data = yaml.safe_load(handle)
	if not isinstance(data, dict):
		raise RuntimeError("config file must be a mapping")
	if data.get(CONFIG_HEADER_KEY) != CONFIG_HEADER_VALUE:
		raise RuntimeError(
			f"config file must set {CONFIG_HEADER_KEY}: {CONFIG_HEADER_VALUE}"
		)
	settings = data.get("settings", {})
	if not isinstance(settings, dict):
		raise RuntimeError(f"config {config_path}: settings must be a mapping")
	unknown = sorted(set(settings) - set(default_config()["settings"]))
	if len(unknown) > 0:
		raise RuntimeError(f"config {config_path}: unknown settings: {', '.join(unknown)}")
	return data

#============================================

def environment_overrides(environ: dict = None) -> dict:
	if environ is None:
		environ = os.environ
	overrides = {}
	for key, env_name in ENV_VARS.items():
		value = environ.get(env_name)
		if value is None or value.strip() == "":
			continue
		overrides[key] = value
	return overrides

#============================================

def _coerce(key: str, value, source: str):
	if value is None:
		return None
	if key in BOOL_KEYS:
		return utils.parse_bool(value, f"{source}: {key}")
	if key in PATH_KEYS or key in STRING_KEYS:
		if not isinstance(value, str):
			raise RuntimeError(f"{source}: {key} must be a string")
		return value
	raise RuntimeError(f"{source}: unknown setting {key}")

#============================================

def _merge(settings: dict, overrides: dict, source: str) -> None:
	for key, value in overrides.items():
		if value is None:
			continue
		settings[key] = _coerce(key, value, source)
	return

#============================================

def build_settings(config_path: str = None, overrides: dict = None,
	environ: dict = None) -> dict:
	"""
	Normalize settings with defaults.

	Args:
		config_path: Optional YAML config file path.
		overrides: Command-line values; None entries are ignored.
		environ: Environment mapping, os.environ when None.

	Returns:
		dict: Normalized settings.
	"""
	settings = dict(default_config()["settings"])
	if config_path is not None:
		config = load_config(config_path)
		_merge(settings, config.get("settings", {}), f"config {config_path}")
	_merge(settings, environment_overrides(environ), "environment")
	if overrides is not None:
		_merge(settings, overrides, "command line")
	_fill_video_defaults(settings)
	validate_settings(settings)
	return settings

#============================================

def _fill_video_defaults(settings: dict) -> None:
	video_file = settings.get('video_file')
	if video_file is None:
		return
	(stem, extension) = os.path.splitext(video_file)
	if settings.get('segment_dir') is None:
		settings['segment_dir'] = stem + "-segments"
	if settings.get('output_video') is None:
		settings['output_video'] = stem + "-loadless" + (extension or ".mkv")
	return

#============================================

def validate_settings(settings: dict) -> None:
	if settings.get('log_file') is None:
		raise RuntimeError("no log file provided")
	if settings['recut'] and settings.get('video_file') is None:
		raise RuntimeError("recut requires a video file")
	if settings['skip_split'] and not settings['recut']:
		raise RuntimeError("skip_split only applies when recut is enabled")
	return
