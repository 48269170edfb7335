#!/usr/bin/env python3

import os
from loadlesslib.core import utils

#============================================

FFMPEG_BASE = ["ffmpeg", "-y", "-nostdin", "-loglevel", "error",
	"-progress", "pipe:1", "-nostats"]

#============================================

def progressSeconds(line: str) -> float:
	"""
	Read the output position from one '-progress pipe:1' line.

	Returns None for lines that carry no position.
	"""
	(key, _, value) = line.partition('=')
	# out_time_ms is reported in microseconds as well
	if key not in ('out_time_us', 'out_time_ms'):
		return None
	value = value.strip()
	if value in ('', 'N/A'):
		return None
	return int(value) / 1000000.0

#============================================

def makeProgressHandler(progress):
	if progress is None:
		return None
	state = {'seconds': 0.0}

	def handle_line(line: str) -> None:
		seconds = progressSeconds(line)
		if seconds is None or seconds <= state['seconds']:
			return
		state['seconds'] = seconds
		progress(seconds)

	return handle_line

#============================================

def encoderArgs(video_codec: str, audio_codec: str, bitrate: int) -> list:
	args = ["-c:v", video_codec]
	if bitrate is not None:
		args += ["-b:v", str(int(bitrate))]
	args += ["-c:a", audio_codec]
	return args

#============================================

def buildExtractCommand(movfile: str, outfile: str, startseconds: float,
	endseconds: float = None, bitrate: int = None, video_codec: str = 'libx264',
	audio_codec: str = 'aac') -> list:
	cmd = list(FFMPEG_BASE)
	cmd += ["-ss", f"{startseconds:.3f}"]
	cmd += ["-i", movfile]
	if endseconds is not None:
		cmd += ["-t", f"{endseconds - startseconds:.3f}"]
	cmd += ["-map", "0:v:0", "-map", "0:a?", "-sn", "-map_chapters", "-1"]
	cmd += encoderArgs(video_codec, audio_codec, bitrate)
	cmd += [outfile]
	return cmd

#============================================

def extractSegment(movfile: str, outfile: str, startseconds: float,
	endseconds: float = None, bitrate: int = None, video_codec: str = 'libx264',
	audio_codec: str = 'aac', progress=None) -> str:
	cmd = buildExtractCommand(movfile, outfile, startseconds, endseconds,
		bitrate, video_codec, audio_codec)
	utils.run_streaming(cmd, makeProgressHandler(progress))
	if not os.path.isfile(outfile):
		raise RuntimeError(f"segment extraction failed: {outfile}")
	return outfile
