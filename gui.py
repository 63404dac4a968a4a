"""Graphic Interface"""

import tkinter as tk
from tkinter import ttk, scrolledtext
from datetime import datetime
import threading

# Import modules
from api_client import RiotAPIClient
from config import (
	RIOT_API_KEY, TFT_REGION, FILTER_MODES, FILTER_LABELS, DEFAULT_FILTER_MODE,
	REFRESH_INTERVAL, COMMON_MATCH_DISPLAY_LIMIT, load_roster
)
from formatting import (
	CLASS_COLORS, common_match_line, placement_class, placement_strip, player_summary,
	point_table_lines, rank_color, rank_text, ranking_lines
)
from profile_icons import ProfileIconManager
from roster_fetcher import RosterFetcher
from tft_analyzer import RosterAnalyzer


class TFTDashboard:
	def __init__(self, root, fetcher: RosterFetcher, analyzer: RosterAnalyzer = None):
		self.root = root
		self.root.title("TFT Roster Tracker")
		self.root.geometry("900x700")
		self.root.resizable(True, True)

		self.fetcher = fetcher
		self.analyzer = analyzer or RosterAnalyzer()
		self.icon_manager = ProfileIconManager()

		# Snapshot of the last successful refresh, replaced wholesale
		self.players = []
		self.filter_mode = DEFAULT_FILTER_MODE
		self.refresh_generation = 0

		self.setup_ui()

	def setup_ui(self):
		""" Setup UI components"""
		style = ttk.Style()
		style.theme_use("default")

		main_frame = ttk.Frame(self.root, padding=10)
		main_frame.grid(row=0, column=0, sticky="nsew")

		self.root.columnconfigure(0, weight=1)
		self.root.rowconfigure(0, weight=1)
		main_frame.columnconfigure(0, weight=1)

		# Title
		title_label = ttk.Label(main_frame, text="TFT Roster Tracker", font=("Arial", 16, "bold"))
		title_label.grid(row=0, column=0, pady=(0, 10))

		self.setup_controls(main_frame, 1)

		# Player icons
		self.icon_frame = ttk.Frame(main_frame)
		self.icon_frame.grid(row=2, column=0, sticky=(tk.W, tk.E), pady=(10, 0))

		self.setup_results_area(main_frame, 3)
		self.setup_status_bar(main_frame, 4)

	def setup_controls(self, parent, row):
		"""Refresh button and filter selection"""
		controls = ttk.Frame(parent)
		controls.grid(row=row, column=0, sticky=(tk.W, tk.E))

		self.refresh_btn = ttk.Button(controls, text="Refresh Stats", command=self.refresh)
		self.refresh_btn.pack(side=tk.LEFT, padx=(0, 20))

		self.filter_var = tk.StringVar(value=self.filter_mode)
		for mode in FILTER_MODES:
			ttk.Radiobutton(
				controls, text=FILTER_LABELS[mode], value=mode,
				variable=self.filter_var, command=lambda m=mode: self.set_filter(m)
			).pack(side=tk.LEFT, padx=5)

	def setup_results_area(self, parent, row):
		self.results_text = scrolledtext.ScrolledText(parent, width=100, height=30, font=("Consolas", 10))
		self.results_text.grid(row=row, column=0, sticky=(tk.W, tk.E, tk.N, tk.S), pady=(10, 0))

		for tag, color in CLASS_COLORS.items():
			self.results_text.tag_configure(tag, foreground=color)
		self.results_text.tag_configure("header", font=("Consolas", 11, "bold"))

		parent.rowconfigure(row, weight=1)

	def setup_status_bar(self, parent, row):
		"""Status bar"""
		self.status_var = tk.StringVar(value="Ready")
		status_label = ttk.Label(parent, textvariable=self.status_var, relief=tk.SUNKEN)
		status_label.grid(row=row, column=0, sticky=(tk.W, tk.E), pady=(10, 0))

	def start(self):
		"""Initial load plus periodic re-poll"""
		self.refresh()
		self.root.after(REFRESH_INTERVAL * 1000, self._auto_refresh)

	def _auto_refresh(self):
		self.refresh()
		self.root.after(REFRESH_INTERVAL * 1000, self._auto_refresh)

	def refresh(self):
		"""Fetch a new snapshot on a worker thread"""
		self.refresh_generation += 1
		self.refresh_btn.state(["disabled"])
		self.status_var.set("Fetching player data...")

		# Launch fetch in a separate thread to avoid blocking the UI
		thread = threading.Thread(target=self._refresh_thread, args=(self.refresh_generation,))
		thread.daemon = True
		thread.start()

	def _refresh_thread(self, generation):
		"""Thread fetch roster"""
		try:
			players = self.fetcher.fetch_roster()
		except Exception as e:
			message = f"Error: {str(e)}"
			print(f"❌ Error during refresh: {str(e)}")
			self.root.after(0, lambda: self._show_error(generation, message))
			return

		self.root.after(0, lambda: self._apply_snapshot(generation, players))

	def _apply_snapshot(self, generation, players):
		if generation != self.refresh_generation:
			print(f"⚠️ Discarding stale snapshot from refresh #{generation}")
			return

		self.refresh_btn.state(["!disabled"])
		self.players = players

		if not players:
			self._show_error(generation, "No player data found.")
			return

		self._show_icons()
		self.render()
		self.status_var.set(f"Updated at {datetime.now().strftime('%H:%M:%S')}")

	def set_filter(self, mode):
		self.filter_mode = mode
		if self.players:
			self.render()

	def _show_icons(self):
		for widget in self.icon_frame.winfo_children():
			widget.destroy()

		for player in self.players:
			player_frame = tk.Frame(self.icon_frame)
			player_frame.pack(side=tk.LEFT, padx=10)

			icon = self.icon_manager.get_tkinter_icon(player.profile_icon_id, (48, 48))
			if icon:
				icon_label = tk.Label(player_frame, image=icon)
				icon_label.image = icon  # Keep reference
				icon_label.pack()

			tk.Label(player_frame, text=player.riot_id, font=("Arial", 9, "bold")).pack()
			tier = player.rank.tier if player.rank else None
			tk.Label(
				player_frame, text=rank_text(player), font=("Arial", 8),
				fg=CLASS_COLORS[rank_color(tier)]
			).pack()

	def _write(self, text, tag=None):
		if tag:
			self.results_text.insert(tk.END, text, tag)
		else:
			self.results_text.insert(tk.END, text)

	def render(self):
		"""Render the current snapshot for the active filter"""
		view = self.analyzer.analyze(self.players, self.filter_mode)

		self.results_text.delete(1.0, tk.END)

		self._write("=== POINT SYSTEM ===\n", "header")
		self._write("  ".join(point_table_lines()) + "\n\n")

		self._write(f"=== RANKING ({FILTER_LABELS[view.filter_mode]}) ===\n", "header")
		self._write("\n".join(ranking_lines(view.overall_ranking)) + "\n\n")

		self._write("=== SOLO POINTS ===\n", "header")
		self._write("\n".join(ranking_lines(view.solo_ranking, "solo")) + "\n\n")

		if view.shared_ranking is not None:
			self._write("=== SHARED POINTS ===\n", "header")
			self._write("\n".join(ranking_lines(view.shared_ranking, "shared")) + "\n\n")

		self._write("=== PLAYER DETAILS ===\n", "header")
		for entry in view.overall_ranking:
			self._write(player_summary(entry.stats) + "\n\n")

		if view.has_matches:
			self._write("=== MATCH HISTORY ===\n", "header")
			for entry in view.overall_ranking:
				player = entry.stats.player
				self._write(f"{player.name}: ")
				window = view.filtered_matches[player.puuid]
				if not window:
					self._write(placement_strip(window))
				for match in window:
					self._write(f"#{match.placement} ", placement_class(match.placement))
				self._write("\n")
			self._write("\n")

		if view.common_matches:
			self._write("=== HEAD TO HEAD ===\n", "header")
			players = [entry.stats.player for entry in view.overall_ranking]
			for match in view.common_matches[:COMMON_MATCH_DISPLAY_LIMIT]:
				self._write(common_match_line(match, players, view.filtered_matches) + "\n")

	def _show_error(self, generation, error_msg):
		"""Show error"""
		if generation != self.refresh_generation:
			return
		self.refresh_btn.state(["!disabled"])
		self.results_text.delete(1.0, tk.END)
		self.results_text.insert(1.0, f"❌ {error_msg}")
		self.status_var.set("Error")


def main():
	"""Launch application"""
	client = RiotAPIClient(RIOT_API_KEY, TFT_REGION)
	fetcher = RosterFetcher(client, load_roster())

	root = tk.Tk()
	app = TFTDashboard(root, fetcher)
	app.start()
	root.mainloop()

if __name__ == "__main__":
    main()
