# symbolnet

A small desktop tool for recognising hand-drawn symbols. You draw a symbol
on an 8×8 grid of pixels, label it, collect a set of examples, train a
two-layer neural network on them and then ask the network what a new
drawing is.

Three symbols can be labelled: `Р` (label 0), `2` (label 1) and `Б`
(label 2).

## Installation

```
pip install .
```

The window is built with `tkinter`, so a Python with Tk support is needed
to run the application. Plots are drawn with matplotlib.

Running the tests:

```
pip install ".[test]"
pytest
```

## Using the application

```
symbolnet [--data FILE] [--labels FILE]
```

opens the main window. `--data` names the file of stored drawings
(default `train_data.txt`) and `--labels` the file of stored labels
(default `train_labels.txt`), both relative to the working directory.

1. Click pixels on the grid to toggle them black or white.
2. Choose the symbol the drawing represents (`Р`, `2` or `Б`).
3. Press **Add symbol**. The drawing is appended to the data file, the
   label to the labels file, and the grid is cleared.
4. Press **Fit** to train a fresh network on all stored samples (each
   sample is used twice, 110 epochs). Two plot windows then show the
   accuracy per epoch on the test part and on the training part.
5. Draw a new symbol and press **Recognize**; the name of the predicted
   symbol appears in the text field. The button is enabled only after
   training.

The network has four outputs plus an extra "none of them" score. A
prediction of class 0, 1 or 2 is shown as its symbol; any other result
is shown as an empty field.

## Using the library

Each drawing is turned into four features by `symbolnet.features`: the
number of runs of two or more lit pixels along the rows, the columns,
the rising diagonals and the falling diagonals.

```python
from symbolnet.features import create_features
from symbolnet.dataset import parse_grid, load_samples
from symbolnet.network import Network

grid = parse_grid("0 1 1 1 0 0 0 0 " * 8)
print(create_features(grid))

X, Y = load_samples("train_data.txt", "train_labels.txt")
net = Network()
history = net.fit(X, Y, 110)
print(history[-1].test_accuracy)
print(net.accuracy(X, Y))
print(net.predict(create_features(grid)))
```

- `symbolnet.network` holds `Network`, a 4-16-4 perceptron with a sigmoid
  hidden layer and a softmax output. `fit` re-seeds its random generator
  (seed 579 by default), splits the data 70/30, trains by stochastic
  gradient descent and returns a list of `EpochMetrics` (epoch,
  cross-entropy, train and test accuracy). `predict_proba`, `predict`,
  `cross_entropy`, `accuracy`, `split` and `random_split` are also
  available, as are the `softmax`, `relu` and `sigmoid` functions and the
  `Activation`, `Neuron` and `Layer` classes.
- `symbolnet.grid` holds `PixelGrid`, the model behind the drawing area,
  with `toggle`, `value`, `clear`, `rows` and `to_string`.
- `symbolnet.dataset` reads and writes the sample files: `append_sample`,
  `load_samples`, `parse_grid` and `one_hot_label`. Malformed data raises
  `DataFormatError`; missing sample files are treated as empty.
- `symbolnet.app` holds `Recognizer`, which ties the grid, the sample
  files and the network together without any window (`select_label`,
  `add_sample`, `fit`, `recognize`), so the whole workflow can be driven
  from code. `show_accuracy_plot` returns a matplotlib `Figure` of
  accuracy against epoch; `MainWindow` and `main` start the application.

## Sample file format

Each drawing is stored as a length-prefixed string: a big-endian 32-bit
byte count followed by UTF-16BE text of space-separated `0`/`1` digits,
row by row. Each label is a big-endian signed 32-bit integer. Drawings
and labels are appended to their own files in the same order.
`write_qstring`, `read_qstring`, `write_int32` and `read_int32` in
`symbolnet.dataset` read and write these records.