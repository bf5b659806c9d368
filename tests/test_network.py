import math
import random

import pytest

from symbolnet.network import (
    Activation,
    EpochMetrics,
    Layer,
    Network,
    Neuron,
    relu,
    sigmoid,
    softmax,
)


def toy_dataset(per_class=10, seed=1):
    rng = random.Random(seed)
    X, Y = [], []
    for _ in range(per_class):
        for label in range(4):
            x = [rng.uniform(0.0, 0.2) for _ in range(4)]
            x[label] += 2.0
            X.append(x)
            Y.append([1.0 if i == label else 0.0 for i in range(4)])
    return X, Y


def test_softmax_of_equal_values_is_uniform():
    assert softmax([0.0, 0.0]) == pytest.approx([0.5, 0.5])


def test_softmax_sums_to_one_and_preserves_order():
    probs = softmax([1.0, 2.0, 0.5])
    assert sum(probs) == pytest.approx(1.0)
    assert probs[1] > probs[0] > probs[2]


def test_softmax_floors_small_probabilities():
    probs = softmax([0.0, 100.0])
    assert probs[0] == 0.001
    assert min(softmax([-50.0, 0.0, 50.0])) >= 0.001


def test_softmax_of_empty_raises():
    with pytest.raises(ValueError):
        softmax([])


def test_relu_clips_negatives():
    assert relu([-1.5, 0.0, 2.5]) == [0.0, 0.0, 2.5]


def test_sigmoid_is_centred_and_symmetric():
    values = sigmoid([0.0, 3.0, -3.0])
    assert values[0] == 0.5
    assert values[1] + values[2] == pytest.approx(1.0)


def test_activation_accepts_names():
    assert Activation("softmax") is Activation.SOFTMAX
    with pytest.raises(ValueError):
        Activation("unknown")


def test_neuron_initialize_is_bounded_and_reproducible():
    first, second = Neuron(10), Neuron(10)
    first.initialize(random.Random(3))
    second.initialize(random.Random(3))
    assert first.weights == second.weights
    assert first.w0 == second.w0
    assert all(-0.1 <= w <= 0.1 for w in first.weights + [first.w0])


def test_neuron_with_zero_weights_outputs_bias():
    neuron = Neuron(3)
    neuron.w0 = 0.25
    assert neuron.calculate([5.0, -2.0, 7.0]) == 0.25
    assert neuron.value == 0.25


def test_neuron_step_reduces_output_for_positive_error():
    neuron = Neuron(3)
    neuron.initialize(random.Random(0))
    x = [1.0, 0.5, 2.0]
    before = neuron.calculate(x)
    neuron.step(1.0, x)
    assert neuron.calculate(x) < before


def test_layer_activate_matches_activation_of_calculate():
    layer = Layer(5, "relu", 3)
    layer.initialize(random.Random(2))
    x = [0.3, -1.0, 2.0]
    assert layer.activate(x) == relu(layer.calculate(x))
    assert len(layer.activate(x)) == 5


def test_predict_proba_shape_and_bounds():
    net = Network()
    for layer in net.layers:
        layer.initialize(random.Random(4))
    probs = net.predict_proba([1.0, 0.0, 2.0, 3.0])
    assert len(probs) == 4
    assert all(0.001 <= p <= 1.0 for p in probs)


def test_predict_returns_argmax_of_probabilities_or_reject():
    net = Network()
    for layer in net.layers:
        layer.initialize(random.Random(5))
    x = [2.0, 1.0, 0.0, 1.0]
    probs = net.predict_proba(x)
    reject = math.prod(1.0 - p for p in probs)
    result = net.predict(x)
    assert 0 <= result <= 4
    if result < 4:
        assert probs[result] == max(probs)
        assert probs[result] >= reject
    else:
        assert reject > max(probs)


def test_split_partitions_by_original_position():
    X = [[float(i)] * 4 for i in range(20)]
    Y = [[float(i)] for i in range(20)]
    X_train, X_test, y_train, y_test = Network().split(X, Y, 0.5)
    assert sorted(row[0] for row in X_train) == [float(i) for i in range(10)]
    assert sorted(row[0] for row in X_test) == [float(i) for i in range(10, 20)]
    assert all(x[0] == y[0] for x, y in zip(X_train + X_test, y_train + y_test))


def test_random_split_draws_two_thirds_without_replacement():
    X = [[float(i)] for i in range(50)]
    Y = [[float(i)] for i in range(50)]
    (train_X, train_Y), (test_X, test_Y) = Network(seed=7).random_split(X, Y)
    assert len(train_X) == 33
    assert sorted(train_X + test_X) == X
    assert train_X == train_Y
    assert test_X == test_Y
    assert test_X == sorted(test_X)


def test_mismatched_lengths_raise():
    net = Network()
    with pytest.raises(ValueError):
        net.split([[0.0] * 4], [], 0.3)
    with pytest.raises(ValueError):
        net.accuracy([[0.0] * 4], [[1.0], [0.0]])


def test_empty_metrics_are_nan():
    net = Network()
    accuracy = net.accuracy([], [])
    entropy = net.cross_entropy([], [])
    assert accuracy == pytest.approx(math.nan, nan_ok=True)
    assert entropy == pytest.approx(math.nan, nan_ok=True)


def test_fit_learns_separable_classes():
    X, Y = toy_dataset()
    net = Network()
    history = net.fit(X, Y, 100)
    assert [m.epoch for m in history] == list(range(100))
    assert history[-1].cross_entropy < history[0].cross_entropy
    assert history[-1].train_accuracy >= 0.9
    assert net.accuracy(X, Y) >= 0.9


def test_fit_is_deterministic_for_a_seed():
    X, Y = toy_dataset(per_class=5)
    first = Network(seed=11).fit(X, Y, 5)
    second = Network(seed=11).fit(X, Y, 5)
    assert first == second
    assert all(isinstance(m, EpochMetrics) for m in first)


def test_fit_accepts_three_entry_labels():
    X, Y = toy_dataset(per_class=5)
    short = [y[:3] for y in Y]
    history = Network().fit(X, short, 3)
    assert len(history) == 3
    assert all(m.cross_entropy >= 0.0 for m in history)
    assert all(0.0 <= m.train_accuracy <= 1.0 for m in history)