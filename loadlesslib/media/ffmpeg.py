#!/usr/bin/env python3

from decimal import Decimal
from loadlesslib.core import utils
from loadlesslib.media.engine import MediaEngine
from loadlesslib.media.ffmpeg_extract import extractSegment
from loadlesslib.media.ffmpeg_probe import probeBitrate
from loadlesslib.media.ffmpeg_probe import probeDuration
from loadlesslib.media.ffmpeg_render import concatenateSegments

__all__ = [
	'FfmpegEngine',
	'extractSegment',
	'concatenateSegments',
	'probeBitrate',
	'probeDuration',
]

#============================================

class FfmpegEngine(MediaEngine):
	def __init__(self, video_codec: str = 'libx264', audio_codec: str = 'aac'):
		self.video_codec = video_codec
		self.audio_codec = audio_codec

	#============================
	def check_tools(self) -> None:
		utils.check_dependency("ffmpeg")
		utils.check_dependency("ffprobe")

	#============================
	def probe_bitrate(self, source_file: str) -> int:
		return probeBitrate(source_file)

	#============================
	def probe_duration(self, source_file: str) -> float:
		return probeDuration(source_file)

	#============================
	def extract_segment(self, source_file: str, start: Decimal, end: Decimal,
		bitrate_hint: int, out_file: str, progress=None) -> str:
		end_seconds = None
		if end is not None:
			end_seconds = utils.to_seconds(end)
		return extractSegment(source_file, out_file, utils.to_seconds(start),
			end_seconds, bitrate=bitrate_hint, video_codec=self.video_codec,
			audio_codec=self.audio_codec, progress=progress)

	#============================
	def concatenate(self, unit_files: list, out_file: str, re_encode: bool = False,
		bitrate_hint: int = None, progress=None) -> str:
		return concatenateSegments(unit_files, out_file, re_encode=re_encode,
			bitrate=bitrate_hint, video_codec=self.video_codec,
			audio_codec=self.audio_codec, progress=progress)
