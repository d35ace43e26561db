"""
Graphical interface for converting a single SDF file.

The user picks an SDF file, converts its molecules to SMILES with a progress
bar, and copies the resulting list to the clipboard. The conversion runs in a
ConversionTask; the Tk event loop polls it for progress events.
"""

import argparse
import os
import tkinter as tk
from tkinter import filedialog, messagebox, ttk
from typing import Optional

from .converter import BatchConverter
from .exceptions import SourceUnreadable, ToolkitUnavailable
from .main import setup_logging
from .models import ConversionResult, MoleculeSet
from .tasks import ConversionTask
from .toolkits import TOOLKITS, get_toolkit

POLL_INTERVAL_MS = 50


class ConverterWindow:
    """Main window: file selection, conversion with progress, SMILES list."""

    def __init__(self, root: tk.Tk, converter: Optional[BatchConverter] = None):
        self.root = root
        self.converter = converter if converter is not None else BatchConverter()

        # Replaced as a whole on each successful file load, never while a task runs
        self.molecules: Optional[MoleculeSet] = None
        self.task: Optional[ConversionTask] = None
        self.result: Optional[ConversionResult] = None

        self.root.title("SDF to SMILES")
        self.root.minsize(480, 360)

        frame = ttk.Frame(root, padding=10)
        frame.grid(row=0, column=0, sticky=tk.NSEW)
        root.columnconfigure(0, weight=1)
        root.rowconfigure(0, weight=1)

        self.select_button = ttk.Button(frame, text="Select SDF File", command=self.select_file)
        self.select_button.grid(row=0, column=0, sticky=tk.W, pady=2)

        self.count_var = tk.StringVar(value="Molecules found: 0")
        ttk.Label(frame, textvariable=self.count_var).grid(row=0, column=1, sticky=tk.W, padx=10)

        self.convert_button = ttk.Button(frame, text="Convert to SMILES",
                                         command=self.convert, state=tk.DISABLED)
        self.convert_button.grid(row=1, column=0, sticky=tk.W, pady=2)

        self.progress = ttk.Progressbar(frame, orient=tk.HORIZONTAL, mode='determinate', maximum=100)
        self.progress.grid(row=1, column=1, sticky=tk.EW, padx=10)

        list_frame = ttk.Frame(frame)
        list_frame.grid(row=2, column=0, columnspan=2, sticky=tk.NSEW, pady=5)
        self.smiles_list = tk.Listbox(list_frame, font=('Courier', 10))
        scrollbar = ttk.Scrollbar(list_frame, orient=tk.VERTICAL, command=self.smiles_list.yview)
        self.smiles_list.configure(yscrollcommand=scrollbar.set)
        self.smiles_list.pack(side="left", fill="both", expand=True)
        scrollbar.pack(side="right", fill="y")

        self.copy_button = ttk.Button(frame, text="Copy to Clipboard",
                                      command=self.copy_to_clipboard, state=tk.DISABLED)
        self.copy_button.grid(row=3, column=0, sticky=tk.W, pady=2)

        frame.columnconfigure(1, weight=1)
        frame.rowconfigure(2, weight=1)

    def select_file(self) -> None:
        """Pick an SDF file and read its molecules."""
        path = filedialog.askopenfilename(
            title="Select SDF file",
            filetypes=[("SDF files", "*.sdf")],
            initialdir=os.getcwd()
        )
        if not path:
            return

        self.smiles_list.delete(0, tk.END)
        self.result = None

        try:
            molecules = self.converter.open_source(path)
        except SourceUnreadable as e:
            messagebox.showerror("Error", f"Error reading SDF file: {e.reason}")
            self.molecules = None
            self.count_var.set("Molecules found: 0")
            self.convert_button.configure(state=tk.DISABLED)
            self.copy_button.configure(state=tk.DISABLED)
            return

        self.molecules = molecules
        self.count_var.set(f"Molecules found: {molecules.parsed_count}")
        self.convert_button.configure(state=tk.NORMAL if molecules.parsed_count > 0 else tk.DISABLED)
        self.copy_button.configure(state=tk.DISABLED)

    def convert(self) -> None:
        """Start converting the loaded molecules in the background."""
        if self.molecules is None or self.molecules.parsed_count == 0:
            messagebox.showwarning("Warning", "No molecules to convert.")
            return

        self._set_busy(True)
        self.progress['value'] = 0
        self.smiles_list.delete(0, tk.END)
        self.copy_button.configure(state=tk.DISABLED)

        self.task = ConversionTask.start(self.converter, self.molecules)
        self.root.after(POLL_INTERVAL_MS, self._poll_task)

    def _poll_task(self) -> None:
        """Apply pending progress events; publish the result once the task is done."""
        done = self.task.done()
        for event in self.task.drain():
            self.progress['value'] = event.percent

        if not done:
            self.root.after(POLL_INTERVAL_MS, self._poll_task)
            return

        task, self.task = self.task, None
        error = task.exception()
        if error is not None:
            messagebox.showerror("Error", f"Error during conversion: {error}")
            self._set_busy(False)
            return

        self.result = task.result()
        for smiles in self.result.succeeded:
            self.smiles_list.insert(tk.END, smiles)

        self._set_busy(False)
        self.copy_button.configure(state=tk.NORMAL if self.result.succeeded else tk.DISABLED)

    def copy_to_clipboard(self) -> None:
        """Copy the converted SMILES, one per line."""
        if self.result is None:
            return
        text = self.result.as_text()
        try:
            self.root.clipboard_clear()
            self.root.clipboard_append(text)
            self.root.update()
        except tk.TclError as e:
            messagebox.showerror("Error", f"Error copying to clipboard: {e}")
            return
        messagebox.showinfo("Success", "SMILES copied to clipboard! Paste into Excel.")

    def _set_busy(self, busy: bool) -> None:
        state = tk.DISABLED if busy else tk.NORMAL
        self.convert_button.configure(state=state)
        self.select_button.configure(state=state)


def main():
    """Launch the converter window."""
    parser = argparse.ArgumentParser(description="Convert an SDF file to SMILES in a window.")
    parser.add_argument("--toolkit", choices=sorted(TOOLKITS), default="rdkit",
                        help="Chemistry toolkit used to read and encode molecules")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    args = parser.parse_args()

    setup_logging(args.verbose)

    try:
        converter = BatchConverter(get_toolkit(args.toolkit))
    except ToolkitUnavailable as e:
        parser.error(e.message)

    root = tk.Tk()
    ConverterWindow(root, converter)
    root.mainloop()


if __name__ == "__main__":
    main()
