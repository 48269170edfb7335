#!/usr/bin/env python3

import os
import time
from loadlesslib.core import utils
from loadlesslib.media.ffmpeg_extract import FFMPEG_BASE
from loadlesslib.media.ffmpeg_extract import encoderArgs
from loadlesslib.media.ffmpeg_extract import makeProgressHandler

#============================================

def writeConcatList(unit_files: list, list_file: str) -> str:
	lines = []
	for unit_file in unit_files:
		path = os.path.abspath(unit_file).replace("'", "'\\''")
		lines.append(f"file '{path}'")
	with open(list_file, 'w', encoding='utf-8') as handle:
		handle.write("\n".join(lines))
		handle.write("\n")
	return list_file

#============================================

def buildConcatCommand(list_file: str, outfile: str, re_encode: bool = False,
	bitrate: int = None, video_codec: str = 'libx264',
	audio_codec: str = 'aac') -> list:
	cmd = list(FFMPEG_BASE)
	cmd += ["-f", "concat", "-safe", "0", "-i", list_file]
	if re_encode:
		cmd += encoderArgs(video_codec, audio_codec, bitrate)
	else:
		cmd += ["-c", "copy"]
	cmd += [outfile]
	return cmd

#============================================

def concatenateSegments(unit_files: list, outfile: str, re_encode: bool = False,
	bitrate: int = None, video_codec: str = 'libx264', audio_codec: str = 'aac',
	progress=None) -> str:
	if len(unit_files) == 0:
		raise RuntimeError("no segments to concatenate")
	t0 = time.time()
	list_file = os.path.splitext(outfile)[0] + "-concat.txt"
	writeConcatList(unit_files, list_file)
	cmd = buildConcatCommand(list_file, outfile, re_encode, bitrate,
		video_codec, audio_codec)
	try:
		utils.run_streaming(cmd, makeProgressHandler(progress))
	finally:
		os.remove(list_file)
	if not os.path.isfile(outfile):
		raise RuntimeError(f"concatenation failed: {outfile}")
	utils.print_status(f"Complete in {int(time.time() - t0)} seconds")
	return outfile
