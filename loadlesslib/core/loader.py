#!/usr/bin/env python3

import os
import re
from loadlesslib.core import utils
from loadlesslib.core.timeline import Timeline
from loadlesslib.core.timeline import TimelineBuilder
from loadlesslib.core.timeline import parse_records

#============================================

MAX_LOG_BYTES = 10 ** 7

# only CR, LF and CRLF end a record line
LINE_BREAK = re.compile(r"\r\n|\r|\n")

#============================================

def split_record_lines(text: str) -> list:
	lines = LINE_BREAK.split(text)
	if len(lines) > 0 and lines[-1] == '':
		lines.pop()
	return lines

#============================================

def read_record_lines(log_file: str) -> list:
	"""
	Read a load log and return its record lines, header removed.

	Args:
		log_file: Path to the log file.

	Returns:
		list: Record lines without line endings.
	"""
	utils.ensure_file_exists(log_file)
	file_size = os.path.getsize(log_file)
	if file_size > MAX_LOG_BYTES:
		raise RuntimeError("log file is larger than 10MB")
	try:
		with open(log_file, 'r', encoding='utf-8-sig', newline='') as data_file:
			text = data_file.read()
	except (OSError, UnicodeDecodeError) as error:
		raise RuntimeError(f"could not read {log_file}: {error}") from error
	lines = split_record_lines(text)
	# line 1 describes the columns
	return lines[1:]

#============================================

class LogLoader():
	def __init__(self, log_file: str, strict_boundaries: bool = False):
		self.log_file = log_file
		self.strict_boundaries = strict_boundaries

	#============================
	def load(self) -> Timeline:
		raw_lines = read_record_lines(self.log_file)
		parsed_events = parse_records(raw_lines)
		builder = TimelineBuilder(strict_boundaries=self.strict_boundaries)
		return builder.build(parsed_events)
