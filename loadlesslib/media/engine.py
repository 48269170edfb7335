#!/usr/bin/env python3

"""
Interface between the segment plan and whatever tool cuts the video.

The planner never touches media; a renderer hands each kept segment to an
engine and concatenates the produced units in segment index order.
"""

from decimal import Decimal

#============================================

class MediaEngine():
	#============================
	def probe_bitrate(self, source_file: str) -> int:
		"""Measured video bitrate of source_file in bits per second, or None."""
		raise NotImplementedError

	#============================
	def probe_duration(self, source_file: str) -> float:
		"""Length of source_file in seconds."""
		raise NotImplementedError

	#============================
	def extract_segment(self, source_file: str, start: Decimal, end: Decimal,
		bitrate_hint: int, out_file: str, progress=None) -> str:
		"""
		Write source_file[start:end] to out_file.

		Args:
			source_file: Source video path.
			start: Seek offset.
			end: End offset, or None to run to the end of the source.
			bitrate_hint: Target video bitrate in bits per second, or None.
			out_file: Output unit path.
			progress: Optional callable receiving processed seconds,
				non-decreasing.

		Returns:
			str: out_file.
		"""
		raise NotImplementedError

	#============================
	def concatenate(self, unit_files: list, out_file: str, re_encode: bool = False,
		bitrate_hint: int = None, progress=None) -> str:
		"""
		Join unit_files, in list order, into out_file.

		With re_encode False the streams are copied; otherwise they are
		encoded again at bitrate_hint.
		"""
		raise NotImplementedError
