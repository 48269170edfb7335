#!/usr/bin/env python3

import os
from tqdm import tqdm
from loadlesslib.core import utils
from loadlesslib.core.segments import Segment
from loadlesslib.core.segments import SegmentPlan
from loadlesslib.media.engine import MediaEngine

#============================================

class Renderer():
	def __init__(self, settings: dict, plan: SegmentPlan, engine: MediaEngine):
		self.settings = settings
		self.plan = plan
		self.engine = engine
		self.source_file = settings['video_file']
		self.segment_dir = settings['segment_dir']
		self.output_video = settings['output_video']

	#============================
	def render(self) -> str:
		utils.ensure_file_exists(self.source_file)
		kept_segments = self._kept_segments()
		if len(kept_segments) == 0:
			raise RuntimeError("segment plan keeps no footage")
		bitrate = self.engine.probe_bitrate(self.source_file)
		if bitrate is None:
			utils.print_warning(
				f"could not measure the bitrate of {self.source_file}, "
				"using encoder defaults"
			)
		if self.settings['skip_split']:
			unit_files = self._reuse_segment_files(kept_segments)
		else:
			unit_files = self._split_segments(kept_segments, bitrate)
		utils.print_status(f"Joining {len(unit_files)} segments into {self.output_video}")
		self._join_segments(kept_segments, unit_files, bitrate)
		if not self.settings['keep_segments']:
			self._cleanup_segments(unit_files)
		return self.output_video

	#============================
	def _kept_segments(self) -> list:
		kept = []
		for segment in sorted(self.plan.segments, key=lambda item: item.index):
			duration = segment.duration
			if duration is not None and duration <= 0:
				utils.print_status(f"Skipping empty segment {segment.index}")
				continue
			kept.append(segment)
		return kept

	#============================
	def segment_path(self, segment: Segment) -> str:
		extension = os.path.splitext(self.source_file)[1] or ".mkv"
		return os.path.join(self.segment_dir, f"segment-{segment.index:03d}{extension}")

	#============================
	def _reuse_segment_files(self, kept_segments: list) -> list:
		unit_files = []
		for segment in kept_segments:
			unit_file = self.segment_path(segment)
			utils.ensure_file_exists(unit_file)
			unit_files.append(unit_file)
		utils.print_status(f"Reusing {len(unit_files)} segments from {self.segment_dir}")
		return unit_files

	#============================
	def _split_segments(self, kept_segments: list, bitrate: int) -> list:
		os.makedirs(self.segment_dir, exist_ok=True)
		source_seconds = self.engine.probe_duration(self.source_file)
		total_seconds = self._total_seconds(kept_segments, source_seconds)
		unit_files = []
		with tqdm(total=round(total_seconds, 3), unit='s',
			disable=utils.is_quiet_mode()) as progress_bar:
			for segment in kept_segments:
				unit_file = self.segment_path(segment)
				reporter = SegmentProgress(progress_bar,
					self._segment_seconds(segment, source_seconds))
				self.engine.extract_segment(self.source_file, segment.start,
					segment.end, bitrate, unit_file, progress=reporter)
				reporter.finish()
				unit_files.append(unit_file)
		return unit_files

	#============================
	def _join_segments(self, kept_segments: list, unit_files: list, bitrate: int) -> None:
		source_seconds = self.engine.probe_duration(self.source_file)
		total_seconds = self._total_seconds(kept_segments, source_seconds)
		with tqdm(total=round(total_seconds, 3), unit='s',
			disable=utils.is_quiet_mode()) as progress_bar:
			reporter = SegmentProgress(progress_bar, total_seconds)
			self.engine.concatenate(unit_files, self.output_video,
				re_encode=self.settings['double_encode'], bitrate_hint=bitrate,
				progress=reporter)
			reporter.finish()

	#============================
	def _total_seconds(self, kept_segments: list, source_seconds: float) -> float:
		total_seconds = 0.0
		for segment in kept_segments:
			total_seconds += self._segment_seconds(segment, source_seconds)
		return total_seconds

	#============================
	def _segment_seconds(self, segment: Segment, source_seconds: float) -> float:
		if segment.end is None:
			return max(source_seconds - utils.to_seconds(segment.start), 0.0)
		return utils.to_seconds(segment.duration)

	#============================
	def _cleanup_segments(self, unit_files: list) -> None:
		for unit_file in unit_files:
			if os.path.exists(unit_file):
				os.remove(unit_file)
		if os.path.isdir(self.segment_dir) and len(os.listdir(self.segment_dir)) == 0:
			os.rmdir(self.segment_dir)

#============================================

class SegmentProgress():
	"""Feeds per-segment engine progress into one shared progress bar."""

	def __init__(self, progress_bar, segment_seconds: float):
		self.progress_bar = progress_bar
		self.segment_seconds = segment_seconds
		self.reported = 0.0

	#============================
	def __call__(self, seconds: float) -> None:
		seconds = min(seconds, self.segment_seconds)
		if seconds <= self.reported:
			return
		self.progress_bar.update(seconds - self.reported)
		self.reported = seconds

	#============================
	def finish(self) -> None:
		self(self.segment_seconds)
