"""
Log viewer dialog widget.
"""

import customtkinter as ctk
from typing import Optional
from pathlib import Path

from core.logger import _default_log_path, get_log_path


class LogViewer(ctk.CTkToplevel):
    """
    Dialog window for viewing the log file, optionally only problems.
    """

    def __init__(self, master, log_file: Optional[str] = None, **kwargs):
        super().__init__(master, **kwargs)

        self.log_file = log_file or get_log_path() or _default_log_path()
        self.title("Video Catalog Log")
        self.geometry("800x500")
        self.minsize(600, 300)

        # Make it stay on top initially
        self.transient(master)

        self._problems_only = ctk.BooleanVar(value=False)

        self._setup_ui()
        self.load_log()

    def _setup_ui(self) -> None:
        """Set up the UI components."""
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        self.text_widget = ctk.CTkTextbox(
            self,
            font=ctk.CTkFont(family="Consolas", size=11),
            wrap="none",
        )
        self.text_widget.grid(row=0, column=0, sticky="nsew", padx=10, pady=(10, 5))

        button_frame = ctk.CTkFrame(self, fg_color="transparent")
        button_frame.grid(row=1, column=0, sticky="ew", padx=10, pady=(5, 10))

        self.refresh_button = ctk.CTkButton(
            button_frame,
            text="Refresh",
            width=100,
            command=self.load_log,
        )
        self.refresh_button.pack(side="left", padx=(0, 5))

        self.problems_checkbox = ctk.CTkCheckBox(
            button_frame,
            text="Warnings and errors only",
            variable=self._problems_only,
            command=self.load_log,
        )
        self.problems_checkbox.pack(side="left", padx=(0, 5))

        self.close_button = ctk.CTkButton(
            button_frame,
            text="Close",
            width=80,
            fg_color="gray40",
            hover_color="gray50",
            command=self.destroy,
        )
        self.close_button.pack(side="right")

        self.path_label = ctk.CTkLabel(
            button_frame,
            text=f"Log file: {self.log_file}",
            font=ctk.CTkFont(size=10),
            text_color="gray60",
        )
        self.path_label.pack(side="left", padx=(20, 0))

    def _read_lines(self) -> str:
        path = Path(self.log_file)
        if not path.exists():
            return "Log file not found."
        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            return f"Error reading log file: {e}"

        if self._problems_only.get():
            content = "\n".join(
                line for line in content.splitlines()
                if "| WARNING" in line or "| ERROR" in line
            )
        return content

    def load_log(self) -> None:
        """Load and display the log file contents."""
        self.text_widget.configure(state="normal")
        self.text_widget.delete("1.0", "end")
        self.text_widget.insert("1.0", self._read_lines())
        self.text_widget.configure(state="disabled")
        self.text_widget.see("end")
