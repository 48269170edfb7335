#!/usr/bin/env python3

import os
import sys
import tempfile
import unittest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

from loadlesslib.core import config

#============================================

def _write_config(path: str, lines: list) -> None:
	with open(path, "w") as config_file:
		config_file.write("\n".join(lines))
		config_file.write("\n")

#============================================

class BuildSettingsTest(unittest.TestCase):
	#============================================
	def test_defaults(self) -> None:
		settings = config.build_settings(overrides={'log_file': "loads.csv"},
			environ={})
		self.assertEqual(settings['report_file'], "output.txt")
		self.assertFalse(settings['recut'])
		self.assertFalse(settings['double_encode'])
		self.assertFalse(settings['skip_split'])
		self.assertIsNone(settings['segment_dir'])

	#============================================
	def test_log_file_required(self) -> None:
		with self.assertRaises(RuntimeError):
			config.build_settings(environ={})

	#============================================
	def test_video_paths_derived_from_source(self) -> None:
		settings = config.build_settings(
			overrides={'log_file': "loads.csv", 'video_file': "runs/run.mp4"},
			environ={})
		self.assertEqual(settings['segment_dir'], "runs/run-segments")
		self.assertEqual(settings['output_video'], "runs/run-loadless.mp4")

	#============================================
	def test_recut_requires_video(self) -> None:
		with self.assertRaises(RuntimeError):
			config.build_settings(overrides={'log_file': "loads.csv", 'recut': True},
				environ={})

	#============================================
	def test_skip_split_requires_recut(self) -> None:
		with self.assertRaises(RuntimeError):
			config.build_settings(
				overrides={'log_file': "loads.csv", 'skip_split': True},
				environ={})

	#============================================
	def test_environment_overrides(self) -> None:
		environ = {
			'LOADLESS_LOG_FILE': "env.csv",
			'LOADLESS_VIDEO_FILE': "run.mkv",
			'LOADLESS_RECUT': "yes",
			'LOADLESS_DOUBLE_ENCODE': "TRUE",
			'LOADLESS_SKIP_SPLIT': "",
		}
		settings = config.build_settings(environ=environ)
		self.assertEqual(settings['log_file'], "env.csv")
		self.assertTrue(settings['recut'])
		self.assertTrue(settings['double_encode'])
		self.assertFalse(settings['skip_split'])

	#============================================
	def test_bad_environment_boolean(self) -> None:
		environ = {'LOADLESS_LOG_FILE': "env.csv", 'LOADLESS_RECUT': "maybe"}
		with self.assertRaises(RuntimeError):
			config.build_settings(environ=environ)

	#============================================
	def test_precedence(self) -> None:
		"""Command line beats environment, environment beats the config file."""
		with tempfile.TemporaryDirectory() as temp_dir:
			config_path = os.path.join(temp_dir, "loadless.yaml")
			_write_config(config_path, [
				"loadless: 1",
				"settings:",
				"  log_file: from-config.csv",
				"  report_file: config-report.txt",
				"  strict_boundaries: true",
				"  video_codec: libx265",
			])
			environ = {'LOADLESS_REPORT_FILE': "env-report.txt"}
			settings = config.build_settings(config_path,
				overrides={'report_file': None, 'strict_boundaries': False},
				environ=environ)
		self.assertEqual(settings['log_file'], "from-config.csv")
		self.assertEqual(settings['report_file'], "env-report.txt")
		self.assertFalse(settings['strict_boundaries'])
		self.assertEqual(settings['video_codec'], "libx265")

	#============================================
	def test_config_header_required(self) -> None:
		with tempfile.TemporaryDirectory() as temp_dir:
			config_path = os.path.join(temp_dir, "loadless.yaml")
			_write_config(config_path, ["settings:", "  log_file: a.csv"])
			with self.assertRaises(RuntimeError):
				config.load_config(config_path)

	#============================================
	def test_unknown_setting_rejected(self) -> None:
		with tempfile.TemporaryDirectory() as temp_dir:
			config_path = os.path.join(temp_dir, "loadless.yaml")
			_write_config(config_path, ["loadless: 1", "settings:", "  speed: 2"])
			with self.assertRaises(RuntimeError):
				config.load_config(config_path)

#============================================

def main() -> None:
	"""Run the unit tests."""
	unittest.main()

#============================================

if __name__ == "__main__":
	main()
