#!/usr/bin/env python3

"""
Fatal errors raised while reading a load log.

Every error aborts the whole run; nothing is skipped and no partial
report is written.
"""

#============================================

class LoadLogError(RuntimeError):
	"""Base class for load log problems."""

	def __init__(self, reason: str, line_number: int = None, raw: str = None):
		self.reason = reason
		self.line_number = line_number
		self.raw = raw
		super().__init__(self._build_message())

	#============================
	def _build_message(self) -> str:
		message = self.reason
		if self.line_number is not None:
			message = f"line {self.line_number}: {message}"
		if self.raw is not None:
			message += f" ('{self.raw}')"
		return message

#============================================

class MalformedRecord(LoadLogError):
	"""Record does not hold exactly three comma separated values."""

#============================================

class UnknownCategory(LoadLogError):
	"""Record category is not one of the known labels."""

	def __init__(self, category_text: str, line_number: int = None, raw: str = None):
		self.category_text = category_text
		super().__init__(f"Line does not contain a known type ('{category_text}')",
			line_number=line_number, raw=raw)

#============================================

class InvalidStartTime(LoadLogError):
	"""Start field is not a duration."""

#============================================

class InvalidEndTime(LoadLogError):
	"""End field of a load record is not a duration."""

#============================================

class NegativeLoadDuration(LoadLogError):
	"""A load ends before it starts."""

	def __init__(self, index: int, line_number: int = None, raw: str = None):
		self.index = index
		super().__init__(
			f"Load #{index} is negative, please check the input data",
			line_number=line_number, raw=raw)

#============================================

class DuplicateBoundary(LoadLogError):
	"""A second Run start or Run end marker, rejected in strict mode."""
