"""The symbol recognition application: drawing, collecting samples, training."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Iterable
from pathlib import Path

from matplotlib.figure import Figure
from matplotlib.ticker import FormatStrFormatter

from .dataset import N_CLASSES, append_sample, load_samples
from .features import create_features
from .grid import PixelGrid
from .network import EpochMetrics, Network

logger = logging.getLogger(__name__)

LABEL_NAMES = {0: "Р", 1: "2", 2: "Б", -1: "Не распознано"}
DEFAULT_DATA_FILE = "train_data.txt"
DEFAULT_LABELS_FILE = "train_labels.txt"
DEFAULT_EPOCHS = 110


class Recognizer:
    """Collects labelled drawings and recognises new ones."""

    def __init__(
        self,
        data_path: str | Path = DEFAULT_DATA_FILE,
        labels_path: str | Path = DEFAULT_LABELS_FILE,
        grid: PixelGrid | None = None,
    ) -> None:
        self.data_path = Path(data_path)
        self.labels_path = Path(labels_path)
        self.grid = grid if grid is not None else PixelGrid()
        self.label = -1
        self.network: Network | None = None

    def select_label(self, label: int) -> None:
        """Choose the class that the next stored sample belongs to."""
        if label not in range(N_CLASSES):
            raise ValueError(f"label must be in 0..{N_CLASSES - 1}, got {label}")
        self.label = label

    def add_sample(self) -> None:
        """Store the current drawing with the selected label and clear the grid."""
        append_sample(self.data_path, self.labels_path, self.grid.to_string(), self.label)
        self.grid.clear()

    def fit(self, epochs: int = DEFAULT_EPOCHS) -> list[EpochMetrics]:
        """Train a fresh network on the stored samples, each used twice."""
        X, Y = load_samples(self.data_path, self.labels_path)
        X = X + X
        Y = Y + Y
        network = Network()
        history = network.fit(X, Y, epochs)
        logger.debug("cross_entropy: %f", network.cross_entropy(X, Y))
        logger.debug("accuracy: %f", network.accuracy(X, Y))
        self.network = network
        return history

    def recognize(self) -> str:
        """Return the name of the symbol currently drawn on the grid."""
        if self.network is None:
            raise RuntimeError("the network has not been trained yet")
        predicted = self.network.predict(create_features(self.grid.rows()))
        logger.debug("predicted class %d", predicted)
        return LABEL_NAMES.get(predicted, "")


def show_accuracy_plot(title: str, history: Iterable[tuple[int, float]]) -> Figure:
    """Build a figure plotting accuracy against epoch."""
    points = list(history)
    if not points:
        raise ValueError("no accuracy values to plot")
    epochs = [epoch for epoch, _ in points]
    values = [value for _, value in points]
    figure = Figure(figsize=(6.4, 4.8))
    axes = figure.add_subplot()
    axes.plot(epochs, values)
    axes.set_ylim(0, 1)
    axes.set_ylabel("Точность")
    axes.yaxis.set_major_formatter(FormatStrFormatter("%.2f"))
    axes.set_xlim(0, points[-1][0])
    axes.set_xlabel("Эпоха")
    axes.xaxis.set_major_formatter(FormatStrFormatter("%d"))
    axes.set_title(title)
    return figure


class MainWindow:
    """A window with the drawing grid and the training controls."""

    PIXEL_SIZE = 40
    MARGIN = 10
    LABEL_CHOICES = (("Р", 0), ("2", 1), ("Б", 2))

    def __init__(self, recognizer: Recognizer | None = None) -> None:
        self.recognizer = recognizer if recognizer is not None else Recognizer()
        self._cells: dict[int, tuple[int, int]] = {}

    def _cell_box(self, row: int, col: int) -> tuple[int, int, int, int]:
        step = self.PIXEL_SIZE + self.MARGIN
        left = self.MARGIN + col * step
        top = self.MARGIN + row * step
        return left, top, left + self.PIXEL_SIZE, top + self.PIXEL_SIZE

    def _redraw(self) -> None:
        grid = self.recognizer.grid
        for item, (row, col) in self._cells.items():
            fill = "black" if grid.value(row, col) else "white"
            self._canvas.itemconfigure(item, fill=fill)

    def _on_click(self, _event) -> None:
        for item in self._canvas.find_withtag("current"):
            if item in self._cells:
                self.recognizer.grid.toggle(*self._cells[item])
        self._redraw()

    def _on_add(self) -> None:
        self.recognizer.add_sample()
        self._redraw()

    def _on_fit(self) -> None:
        history = self.recognizer.fit()
        self._recognize_button.configure(state="normal")
        self._show_plot(
            "Тестовая выборка", [(m.epoch, m.test_accuracy) for m in history]
        )
        self._show_plot(
            "Тренировочная выборка", [(m.epoch, m.train_accuracy) for m in history]
        )

    def _on_recognize(self) -> None:
        self._prediction.set(self.recognizer.recognize())

    def _show_plot(self, title: str, history: list[tuple[int, float]]) -> None:
        import tkinter as tk

        from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg

        window = tk.Toplevel(self._root)
        window.title(title)
        canvas = FigureCanvasTkAgg(show_accuracy_plot(title, history), master=window)
        canvas.draw()
        canvas.get_tk_widget().pack(fill="both", expand=True)

    def run(self) -> None:
        """Open the window and run until it is closed."""
        import tkinter as tk

        self._root = root = tk.Tk()
        root.title("Symbol recognition")

        size = self.recognizer.grid.size
        side = (size + 1) * self.MARGIN + size * self.PIXEL_SIZE
        self._canvas = tk.Canvas(root, width=side, height=side, background="white")
        self._canvas.create_rectangle(1, 1, side - 1, side - 1, width=2)
        for row in range(size):
            for col in range(size):
                item = self._canvas.create_rectangle(
                    *self._cell_box(row, col), width=2, outline="black", fill="white"
                )
                self._cells[item] = (row, col)
        self._canvas.bind("<Button-1>", self._on_click)
        self._canvas.grid(row=0, column=0, rowspan=8, padx=20, pady=20)

        selected = tk.IntVar(value=self.recognizer.label)

        def choose() -> None:
            self.recognizer.select_label(selected.get())

        for offset, (name, label) in enumerate(self.LABEL_CHOICES):
            tk.Radiobutton(
                root, text=name, variable=selected, value=label, command=choose
            ).grid(row=offset, column=1, sticky="w")

        tk.Button(root, text="Add symbol", command=self._on_add).grid(
            row=3, column=1, sticky="ew"
        )
        tk.Button(root, text="Fit", command=self._on_fit).grid(
            row=4, column=1, sticky="ew"
        )
        self._recognize_button = tk.Button(
            root, text="Recognize", command=self._on_recognize, state="disabled"
        )
        self._recognize_button.grid(row=5, column=1, sticky="ew")
        self._prediction = tk.StringVar()
        tk.Entry(root, textvariable=self._prediction, state="readonly").grid(
            row=6, column=1, sticky="ew", padx=10
        )
        root.mainloop()


def main(argv: list[str] | None = None) -> int:
    """Start the application."""
    parser = argparse.ArgumentParser(description="Draw, collect and recognise symbols.")
    parser.add_argument("--data", default=DEFAULT_DATA_FILE, help="file of stored drawings")
    parser.add_argument("--labels", default=DEFAULT_LABELS_FILE, help="file of stored labels")
    args = parser.parse_args(argv)
    MainWindow(Recognizer(args.data, args.labels)).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())