#!/usr/bin/env python3

import dataclasses
import enum
from decimal import Decimal
from loadlesslib.core import errors
from loadlesslib.core import utils

#============================================

class Category(enum.Enum):
	RUN_START = 1
	RUN_END = 2
	MENU_LOAD = 3
	HUB_LOAD = 4
	LAB_LOAD = 5
	CUTSCENE_LOAD = 6
	LEVEL_LOAD = 7
	LEVEL_HUB_LOAD = 8
	BOSS_LOAD = 9
	TRANSFORMATION_LOAD = 10
	RESPAWN_LOAD = 11
	MISSION_LOAD = 12
	DARK_GAIA_LOAD = 13

	#============================
	@property
	def label(self) -> str:
		return CATEGORY_LABELS[self]

	#============================
	@property
	def is_boundary(self) -> bool:
		return self in BOUNDARY_CATEGORIES

#============================================

# adding a category means adding it to the enum and to this table
CATEGORY_LABELS = {
	Category.RUN_START: "Run start",
	Category.RUN_END: "Run end",
	Category.MENU_LOAD: "Menu load",
	Category.HUB_LOAD: "Hub load",
	Category.LAB_LOAD: "Lab load",
	Category.CUTSCENE_LOAD: "Cutscene load",
	Category.LEVEL_LOAD: "Level load",
	Category.LEVEL_HUB_LOAD: "Level hub load",
	Category.BOSS_LOAD: "Boss load",
	Category.TRANSFORMATION_LOAD: "Transformation load",
	Category.RESPAWN_LOAD: "Respawn load",
	Category.MISSION_LOAD: "Mission load",
	Category.DARK_GAIA_LOAD: "Dark gaia load",
}

LABEL_CATEGORIES = {label: category for category, label in CATEGORY_LABELS.items()}

BOUNDARY_CATEGORIES = frozenset((Category.RUN_START, Category.RUN_END))

LOAD_CATEGORIES = tuple(
	category for category in Category if category not in BOUNDARY_CATEGORIES
)

#============================================

@dataclasses.dataclass(frozen=True)
class Event:
	category: Category
	start: Decimal
	end: Decimal = None
	load_duration: Decimal = utils.ZERO
	line_number: int = dataclasses.field(default=None, compare=False)
	raw: str = dataclasses.field(default=None, compare=False)

	#============================
	@property
	def is_boundary(self) -> bool:
		return self.category.is_boundary

#============================================

def parse_category(category_text: str) -> Category:
	"""
	Look up a category by its exact display label.

	Returns None when the label is unknown.
	"""
	return LABEL_CATEGORIES.get(category_text)

#============================================

def parse_record(raw: str, line_number: int = None) -> Event:
	"""
	Parse one 'start,end,category' log record.

	Args:
		raw: Record text without its line ending.
		line_number: 1-based line number in the log file, for diagnostics.

	Returns:
		Event: The parsed event.
	"""
	parts = raw.split(',')
	if len(parts) != 3:
		raise errors.MalformedRecord(
			"Line does not contain exactly 3 values separated by a comma",
			line_number=line_number, raw=raw)
	(start_text, end_text, category_text) = parts
	category = parse_category(category_text)
	if category is None:
		raise errors.UnknownCategory(category_text, line_number=line_number, raw=raw)
	try:
		start = utils.parse_duration(start_text)
	except ValueError:
		raise errors.InvalidStartTime(
			f"Line does not contain a valid start time: ('{start_text}')",
			line_number=line_number, raw=raw) from None
	if category.is_boundary:
		return Event(category, start, line_number=line_number, raw=raw)
	try:
		end = utils.parse_duration(end_text)
	except ValueError:
		raise errors.InvalidEndTime(
			f"Line does not contain a valid end time: ('{end_text}')",
			line_number=line_number, raw=raw) from None
	return Event(category, start, end, end - start,
		line_number=line_number, raw=raw)

#============================================

def format_record(event: Event) -> str:
	"""Render an event back into log record text."""
	end_text = ""
	if event.end is not None:
		end_text = utils.format_clock(event.end)
	return f"{utils.format_clock(event.start)},{end_text},{event.category.label}"
