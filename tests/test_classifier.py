import pytest

from tanbayes import (LAPLACE, NAIVE, NONE, TAN, Dataset, DegenerateDenominatorError,
                      StructureError, ValueLookupError, accuracy, class_scores, classify, classify_all, learn,
                      predictions_frame)


def test_xor_naive_laplace_tie_goes_to_first_class(xor):
    model = learn(xor, NAIVE, LAPLACE)
    assert model.estimates.class_prior[0] == pytest.approx(0.5)
    ex = xor.with_examples([("a1", "b1", "yes")]).examples[0]
    prediction, posterior = classify(model, ex)
    assert prediction == 0
    assert posterior == pytest.approx(0.5)
    assert 0.0 <= posterior <= 1.0
    assert (ex.predicted_class_index, ex.posterior) == (prediction, posterior)


def test_xor_tan_uses_tree_parent(xor):
    model = learn(xor, TAN, LAPLACE)
    test = xor.with_examples([("a1", "b1", "yes"), ("a1", "b2", "no")])
    # yes: 1/2 * 1/2 * 2/3, no: 1/2 * 1/2 * 1/3
    assert classify(model, test.examples[0]) == (0, pytest.approx(2 / 3))
    assert classify(model, test.examples[1]) == (1, pytest.approx(2 / 3))


def test_weather_naive_maximum_likelihood(weather):
    model = learn(weather, NAIVE, NONE)
    ex = weather.with_examples([("sunny", "cool", "high", "TRUE", "no")]).examples[0]
    yes = 9 / 14 * 2 / 9 * 3 / 9 * 3 / 9 * 3 / 9
    no = 5 / 14 * 3 / 5 * 1 / 5 * 4 / 5 * 3 / 5
    prediction, posterior = classify(model, ex)
    assert prediction == 1
    assert posterior == pytest.approx(no / (yes + no))


def test_zero_scores_are_allowed_for_some_classes(weather):
    model = learn(weather, NAIVE, NONE)
    ex = weather.with_examples([("overcast", "hot", "high", "FALSE", "yes")]).examples[0]
    prediction, posterior = classify(model, ex)
    assert prediction == 0
    assert posterior == pytest.approx(1.0)


def test_all_zero_scores_raise():
    ds = Dataset.from_domains({"A": ["a1", "a2", "a3"]}, "class", ["yes", "no"],
                              [("a1", "yes"), ("a2", "no")])
    ex = ds.with_examples([("a3", "yes")]).examples[0]
    with pytest.raises(DegenerateDenominatorError):
        classify(learn(ds, NAIVE, NONE), ex)
    prediction, posterior = classify(learn(ds, NAIVE, LAPLACE), ex)
    assert posterior == pytest.approx(0.5)
    assert ex.predicted_class_index == prediction


@pytest.mark.parametrize("variant", [NAIVE, TAN])
def test_posteriors_are_probabilities(weather, variant):
    model = learn(weather, variant, LAPLACE)
    test = weather.with_examples([
        ("sunny", "hot", "normal", "TRUE", "no"),
        ("rainy", "cool", "high", "FALSE", "yes"),
    ])
    for prediction, posterior in classify_all(model, test.examples):
        assert prediction in (0, 1)
        assert 0.5 <= posterior <= 1.0
    assert class_scores(model, test.examples[0]).shape == (2,)


def test_comparing_models_needs_a_test_set_per_model(xor):
    rows = [("a1", "b2", "no")]
    naive = learn(xor, NAIVE, LAPLACE)
    tan = learn(xor, TAN, LAPLACE)
    shared = xor.with_examples(rows).examples[0]
    assert classify(naive, shared) == (0, pytest.approx(0.5))
    with pytest.raises(StructureError):
        classify(tan, shared)

    assert classify(tan, xor.with_examples(rows).examples[0]) == (1, pytest.approx(2 / 3))


def test_example_from_another_catalog_is_rejected(xor):
    other = Dataset.from_domains({"A": ["a1", "a2"], "B": ["b1", "b2"]},
                                 "class", ["yes", "no"], [("a1", "b1", "yes")])
    model = learn(xor, NAIVE, LAPLACE)
    with pytest.raises(ValueLookupError):
        classify(model, other.examples[0])


def test_predictions_frame_and_accuracy(weather):
    model = learn(weather, NAIVE, LAPLACE)
    test = weather.with_examples(
        [("overcast", "mild", "normal", "FALSE", "yes"), ("sunny", "hot", "high", "TRUE", "yes")])
    frame = predictions_frame(model, test.examples)
    assert list(frame.columns) == ["predicted", "actual", "posterior"]
    assert frame["predicted"].tolist() == ["yes", "no"]
    assert accuracy(frame) == (1, 0.5)
