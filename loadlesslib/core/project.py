#!/usr/bin/env python3

from loadlesslib.core import report
from loadlesslib.core import stats
from loadlesslib.core import utils
from loadlesslib.core.loader import LogLoader
from loadlesslib.core.renderer import Renderer
from loadlesslib.core.segments import SegmentPlan
from loadlesslib.core.segments import plan_segments
from loadlesslib.media.engine import MediaEngine

#============================================

class LoadlessProject():
	def __init__(self, settings: dict, engine: MediaEngine = None):
		self.settings = settings
		self.engine = engine
		loader = LogLoader(settings['log_file'],
			strict_boundaries=settings.get('strict_boundaries', False))
		self.timeline = loader.load()
		self.log_file = settings['log_file']
		self.report_file = settings['report_file']
		self.recut = settings.get('recut', False)

	#============================
	def build_report(self) -> str:
		category_stats = stats.aggregate_categories(self.timeline)
		totals = stats.run_totals(self.timeline)
		return report.format_report(self.timeline, category_stats, totals)

	#============================
	def build_plan(self) -> SegmentPlan:
		return plan_segments(self.timeline)

	#============================
	def warnings(self) -> list:
		found = list(self.timeline.warnings)
		if self.recut:
			found.extend(self.build_plan().warnings)
		return found

	#============================
	def write_report(self, report_text: str) -> str:
		try:
			with open(self.report_file, 'w', encoding='utf-8') as handle:
				handle.write(report_text)
		except OSError as error:
			raise RuntimeError(f"could not write {self.report_file}: {error}") from error
		return self.report_file

	#============================
	def run(self) -> None:
		for warning in self.warnings():
			utils.print_warning(warning)
		report_text = self.build_report()
		plan = None
		if self.recut:
			plan = self.build_plan()
		self.write_report(report_text)
		utils.print_status(f"Success! Stats written to '{self.report_file}'")
		if plan is None:
			return
		if self.engine is None:
			raise RuntimeError("recut requires a media engine")
		renderer = Renderer(self.settings, plan, self.engine)
		output_video = renderer.render()
		utils.print_status(f"Success! Video written to '{output_video}'")
