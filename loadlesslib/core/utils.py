#!/usr/bin/env python3

import collections
import os
import re
import shlex
import shutil
import subprocess
import sys
from decimal import Decimal

#============================================

# durations are Decimal seconds, kept at 100 ns tick resolution
TICK = Decimal("0.0000001")
ZERO = Decimal(0)

DURATION_PATTERN = re.compile(
	r"^\s*(-)?(?:(\d+)\.)?(\d{1,2}):(\d{1,2})(?::(\d{1,2})(?:\.(\d{1,7}))?)?\s*$"
)

TRUE_WORDS = ('1', 'true', 'yes', 'on')
FALSE_WORDS = ('0', 'false', 'no', 'off')

# output lines kept for the error message of a failed streaming command
STREAM_TAIL_LINES = 40

#============================================

def is_quiet_mode() -> bool:
	value = os.environ.get('LOADLESS_QUIET', '')
	return value.strip().lower() in TRUE_WORDS

#============================================

def set_quiet_mode(quiet: bool) -> None:
	if quiet:
		os.environ['LOADLESS_QUIET'] = '1'
	else:
		os.environ.pop('LOADLESS_QUIET', None)
	return

#============================================

def print_status(message: str) -> None:
	if not is_quiet_mode():
		print(message)
	return

#============================================

def print_warning(message: str) -> None:
	print(f"WARNING: {message}", file=sys.stderr)
	return

#============================================

def run_process(cmd: list, capture_output: bool = True) -> subprocess.CompletedProcess:
	"""
	Run a subprocess command, raising on a non-zero exit status.

	Args:
		cmd: Command list to execute.
		capture_output: Capture stdout and stderr when True.

	Returns:
		subprocess.CompletedProcess: Completed process.
	"""
	showcmd = shlex.join(cmd)
	print_status(f"CMD: '{showcmd}'")
	proc = subprocess.run(cmd, capture_output=capture_output, text=True)
	if proc.returncode != 0:
		stderr_text = (proc.stderr or "").strip()
		raise RuntimeError(f"command failed: {showcmd}\n{stderr_text}")
	return proc

#============================================

def ensure_file_exists(filepath: str) -> None:
	if not os.path.isfile(filepath):
		raise RuntimeError(f"file not found: {filepath}")
	return

#============================================

def check_dependency(cmd_name: str) -> None:
	if shutil.which(cmd_name) is None:
		raise RuntimeError(f"missing dependency: {cmd_name}")
	return

#============================================

def parse_bool(raw_value, key_name: str) -> bool:
	if isinstance(raw_value, bool):
		return raw_value
	if isinstance(raw_value, int):
		return raw_value != 0
	if isinstance(raw_value, str):
		value = raw_value.strip().lower()
		if value in TRUE_WORDS:
			return True
		if value in FALSE_WORDS:
			return False
	raise RuntimeError(f"{key_name} must be a boolean, got {raw_value!r}")

#============================================

def parse_duration(raw_text: str) -> Decimal:
	"""
	Parse a [-][d.]h:mm[:ss[.fffffff]] duration into Decimal seconds.

	Raises ValueError when the text is not a duration.
	"""
	match = DURATION_PATTERN.match(raw_text)
	if match is None:
		raise ValueError(f"not a duration: {raw_text!r}")
	(sign, days, hours, minutes, seconds, fraction) = match.groups()
	hours = int(hours)
	minutes = int(minutes)
	seconds = int(seconds) if seconds is not None else 0
	if hours > 23 or minutes > 59 or seconds > 59:
		raise ValueError(f"duration component out of range: {raw_text!r}")
	value = Decimal(int(days or 0) * 86400 + hours * 3600 + minutes * 60 + seconds)
	if fraction is not None:
		value += Decimal("0." + fraction)
	if sign == '-':
		value = -value
	return value

#============================================

def _clock_parts(value: Decimal) -> tuple:
	magnitude = abs(value)
	whole = int(magnitude)
	millis = int((magnitude - whole) * 1000)
	seconds = whole % 60
	minutes = (whole // 60) % 60
	hours = (whole // 3600) % 24
	sign = '-' if value < 0 else ''
	return (sign, hours, minutes, seconds, millis)

#============================================

def format_clock(value: Decimal) -> str:
	"""Render as hh:mm:ss.fff, milliseconds truncated."""
	(sign, hours, minutes, seconds, millis) = _clock_parts(value)
	return f"{sign}{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}"

#============================================

def format_short(value: Decimal) -> str:
	"""Render as ss.fff, the seconds component only."""
	(sign, _, _, seconds, millis) = _clock_parts(value)
	return f"{sign}{seconds:02d}.{millis:03d}"

#============================================

def to_milliseconds(value: Decimal) -> float:
	return float(value * 1000)

#============================================

def from_milliseconds(millis: float) -> Decimal:
	return (Decimal(str(millis)) / 1000).quantize(TICK)

#============================================

def to_seconds(value: Decimal) -> float:
	return float(value)

#============================================

def run_streaming(cmd: list, line_callback=None) -> None:
	"""
	Run a command, handing each output line to line_callback as it arrives.

	stderr is merged into stdout so a chatty child never blocks on a full
	pipe; the last lines are kept for the error message.

	Args:
		cmd: Command list to execute.
		line_callback: Called with each stripped output line.
	"""
	showcmd = shlex.join(cmd)
	print_status(f"CMD: '{showcmd}'")
	tail = collections.deque(maxlen=STREAM_TAIL_LINES)
	with subprocess.Popen(cmd, stdout=subprocess.PIPE, stderr=subprocess.STDOUT,
		text=True, errors='replace') as proc:
		try:
			for line in proc.stdout:
				line = line.strip()
				tail.append(line)
				if line_callback is not None:
					line_callback(line)
		except BaseException:
			proc.kill()
			raise
	if proc.returncode != 0:
		tail_text = "\n".join(tail)
		raise RuntimeError(f"command failed: {showcmd}\n{tail_text}")
	return
