"""A small two-layer perceptron trained by stochastic gradient descent."""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

Vector = Sequence[float]
Matrix = Sequence[Sequence[float]]

SOFTMAX_FLOOR = 0.001


def softmax(x: Vector) -> list[float]:
    """Numerically stable softmax with every probability floored at 0.001."""
    if not x:
        raise ValueError("softmax needs at least one value")
    peak = max(x)
    exps = [math.exp(e - peak) for e in x]
    total = sum(exps)
    return [max(e / total, SOFTMAX_FLOOR) for e in exps]


def relu(x: Vector) -> list[float]:
    """Rectified linear activation."""
    return [e if e > 0.0 else 0.0 for e in x]


def sigmoid(x: Vector) -> list[float]:
    """Logistic activation."""
    return [1.0 / (1.0 + math.exp(-e)) for e in x]


class Activation(str, Enum):
    """Activation function applied by a layer."""

    SOFTMAX = "softmax"
    RELU = "relu"
    SIGMOID = "sigmoid"

    def apply(self, x: Vector) -> list[float]:
        if self is Activation.SOFTMAX:
            return softmax(x)
        if self is Activation.RELU:
            return relu(x)
        return sigmoid(x)


class Neuron:
    """A linear unit with a bias ``w0`` and one weight per input."""

    def __init__(self, size: int = 65, learning_rate: float = 0.06) -> None:
        self.weights = [0.0] * size
        self.w0 = 0.0
        self.value = 0.0
        self.learning_rate = learning_rate

    def initialize(self, rng: random.Random) -> None:
        """Draw the bias and weights uniformly from [-0.1, 0.1]."""
        self.w0 = rng.uniform(-0.1, 0.1)
        self.weights = [rng.uniform(-0.1, 0.1) for _ in self.weights]

    def calculate(self, x: Vector) -> float:
        """Compute and store the weighted sum of ``x`` plus the bias."""
        self.value = self.w0 + sum(xi * wi for xi, wi in zip(x, self.weights))
        return self.value

    def step(self, err: float, x: Vector) -> None:
        """Move the parameters against the error gradient ``err * x``."""
        rate = self.learning_rate * err
        self.w0 -= rate
        self.weights = [w - rate * xi for w, xi in zip(self.weights, x)]


class Layer:
    """A fully connected layer of neurons sharing one activation."""

    def __init__(self, size: int, activation: Activation | str, input_dim: int) -> None:
        self.neurons = [Neuron(input_dim) for _ in range(size)]
        self.activation = Activation(activation)

    def initialize(self, rng: random.Random) -> None:
        for neuron in self.neurons:
            neuron.initialize(rng)

    def calculate(self, x: Vector) -> list[float]:
        """Return the pre-activation output of every neuron."""
        return [neuron.calculate(x) for neuron in self.neurons]

    def activate(self, x: Vector) -> list[float]:
        """Return the activated output of the layer."""
        return self.activation.apply(self.calculate(x))


@dataclass(frozen=True)
class EpochMetrics:
    """Metrics recorded after one training epoch."""

    epoch: int
    cross_entropy: float
    train_accuracy: float
    test_accuracy: float


def _check_pair(X: Matrix, Y: Matrix) -> None:
    if len(X) != len(Y):
        raise ValueError(
            f"features and labels differ in length: {len(X)} != {len(Y)}"
        )


def _padded(target: Vector, size: int) -> list[float]:
    """Truncate or zero-pad a target vector to ``size`` entries."""
    values = list(target[:size])
    return values + [0.0] * (size - len(values))


class Network:
    """A 4-16-4 perceptron: sigmoid hidden layer, softmax output."""

    N_INPUTS = 4
    N_HIDDEN = 16
    N_OUTPUTS = 4
    TEST_SIZE = 0.3

    def __init__(self, seed: int = 579) -> None:
        self.seed = seed
        self._rng = random.Random(seed)
        self.layers = [
            Layer(self.N_HIDDEN, Activation.SIGMOID, self.N_INPUTS),
            Layer(self.N_OUTPUTS, Activation.SOFTMAX, self.N_HIDDEN),
        ]

    def split(self, X: Matrix, Y: Matrix, test_size: float):
        """Split into (X_train, X_test, y_train, y_test) in shuffled order.

        Rows whose original position is below ``len(X) * (1 - test_size)``
        go to the training part, the rest to the test part.
        """
        _check_pair(X, Y)
        order = list(range(len(X)))
        self._rng.shuffle(order)
        border = int(len(X) * (1.0 - test_size))
        X_train, X_test, y_train, y_test = [], [], [], []
        for index in order:
            if index < border:
                X_train.append(X[index])
                y_train.append(Y[index])
            else:
                X_test.append(X[index])
                y_test.append(Y[index])
        return X_train, X_test, y_train, y_test

    def random_split(self, X: Matrix, Y: Matrix):
        """Draw 66% of the rows at random for training.

        Returns ``((train_X, train_Y), (test_X, test_Y))``; the test rows
        keep their original relative order.
        """
        _check_pair(X, Y)
        rest_X = list(X)
        rest_Y = list(Y)
        train_X, train_Y = [], []
        for _ in range(int(0.66 * len(X))):
            index = self._rng.randrange(len(rest_X))
            train_X.append(rest_X.pop(index))
            train_Y.append(rest_Y.pop(index))
        return (train_X, train_Y), (rest_X, rest_Y)

    def fit(self, X: Matrix, Y: Matrix, epochs: int = 100) -> list[EpochMetrics]:
        """Train on a fresh 70/30 split and return per-epoch metrics."""
        _check_pair(X, Y)
        self._rng = random.Random(self.seed)
        for layer in self.layers:
            layer.initialize(self._rng)
        X_train, X_test, y_train, y_test = self.split(X, Y, self.TEST_SIZE)
        hidden, output = self.layers
        history = []
        for epoch in range(epochs):
            for x, y in zip(X_train, y_train):
                a = hidden.activate(x)
                y_hat = output.activate(a)
                target = _padded(y, len(output.neurons))
                sigma2 = [p - t for p, t in zip(y_hat, target)]
                columns = zip(*(neuron.weights for neuron in output.neurons))
                sigma1 = [
                    sum(s * w for s, w in zip(sigma2, column)) for column in columns
                ]
                for neuron, err in zip(output.neurons, sigma2):
                    neuron.step(err, a)
                for neuron, err, ak in zip(hidden.neurons, sigma1, a):
                    neuron.step(err * ak * (1.0 - ak), x)
            metrics = EpochMetrics(
                epoch=epoch,
                cross_entropy=self.cross_entropy(X, Y),
                train_accuracy=self.accuracy(X_train, y_train),
                test_accuracy=self.accuracy(X_test, y_test),
            )
            logger.debug(
                "epoch %d: cross_entropy=%f train=%f test=%f",
                epoch,
                metrics.cross_entropy,
                metrics.train_accuracy,
                metrics.test_accuracy,
            )
            history.append(metrics)
        return history

    def predict_proba(self, x: Vector) -> list[float]:
        """Return the output-layer probabilities for ``x``."""
        hidden, output = self.layers
        return output.activate(hidden.activate(x))

    def predict(self, x: Vector) -> int:
        """Return the most likely class.

        An extra "none of them" score, the product of ``1 - p`` over all
        probabilities, competes with the classes; if it wins the result is
        ``N_OUTPUTS``.
        """
        scores = self.predict_proba(x)
        scores.append(math.prod(1.0 - p for p in scores))
        return max(enumerate(scores), key=lambda item: item[1])[0]

    def cross_entropy(self, X: Matrix, Y: Matrix) -> float:
        """Mean categorical cross-entropy over the rows of ``X``."""
        _check_pair(X, Y)
        if not X:
            return math.nan
        total = 0.0
        for x, y in zip(X, Y):
            probs = self.predict_proba(x)
            target = _padded(y, self.N_OUTPUTS)
            total -= sum(t * math.log(p) for t, p in zip(target, probs))
        return total / len(X)

    def accuracy(self, X: Matrix, Y: Matrix) -> float:
        """Share of rows whose predicted class matches the one-hot label."""
        _check_pair(X, Y)
        if not X:
            return math.nan
        hits = 0
        for x, y in zip(X, Y):
            target = _padded(y, self.N_OUTPUTS)
            label = max(
                (index for index, t in enumerate(target) if t == 1.0), default=0
            )
            hits += self.predict(x) == label
        return hits / len(X)