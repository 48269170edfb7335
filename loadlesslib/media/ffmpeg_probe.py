#!/usr/bin/env python3

import json
from loadlesslib.core import utils

#============================================

def probeMediaInfo(mediafile: str) -> dict:
	cmd = [
		"ffprobe", "-v", "error",
		"-select_streams", "v:0",
		"-show_entries", "stream=bit_rate:format=bit_rate,duration",
		"-of", "json",
		mediafile,
	]
	proc = utils.run_process(cmd, capture_output=True)
	data = json.loads(proc.stdout or "{}")
	if not isinstance(data, dict):
		raise RuntimeError(f"invalid ffprobe output for {mediafile}")
	return data

#============================================

def parseBitrate(data: dict) -> int:
	"""
	Pick the video stream bitrate, falling back to the container bitrate.
	"""
	for stream in data.get('streams', []):
		value = stream.get('bit_rate')
		if value not in (None, 'N/A'):
			return int(value)
	value = data.get('format', {}).get('bit_rate')
	if value not in (None, 'N/A'):
		return int(value)
	return None

#============================================

def probeBitrate(mediafile: str) -> int:
	return parseBitrate(probeMediaInfo(mediafile))

#============================================

def probeDuration(mediafile: str) -> float:
	data = probeMediaInfo(mediafile)
	value = data.get('format', {}).get('duration')
	if value in (None, 'N/A'):
		raise RuntimeError("ffprobe did not return duration")
	seconds = float(value)
	if seconds <= 0:
		raise RuntimeError("ffprobe returned non-positive duration")
	return seconds
