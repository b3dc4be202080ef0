import pytest

from tanbayes import Dataset

WEATHER_DOMAINS = {
    "outlook": ["sunny", "overcast", "rainy"],
    "temperature": ["hot", "mild", "cool"],
    "humidity": ["high", "normal"],
    "windy": ["TRUE", "FALSE"],
}

WEATHER_ROWS = [
    ("sunny", "hot", "high", "FALSE", "no"),
    ("sunny", "hot", "high", "TRUE", "no"),
    ("overcast", "hot", "high", "FALSE", "yes"),
    ("rainy", "mild", "high", "FALSE", "yes"),
    ("rainy", "cool", "normal", "FALSE", "yes"),
    ("rainy", "cool", "normal", "TRUE", "no"),
    ("overcast", "cool", "normal", "TRUE", "yes"),
    ("sunny", "mild", "high", "FALSE", "no"),
    ("sunny", "cool", "normal", "FALSE", "yes"),
    ("rainy", "mild", "normal", "FALSE", "yes"),
    ("sunny", "mild", "normal", "TRUE", "yes"),
    ("overcast", "mild", "high", "TRUE", "yes"),
    ("overcast", "hot", "normal", "FALSE", "yes"),
    ("rainy", "mild", "high", "TRUE", "no"),
]

XOR_ROWS = [
    ("a1", "b1", "yes"),
    ("a1", "b2", "no"),
    ("a2", "b1", "no"),
    ("a2", "b2", "yes"),
]


@pytest.fixture
def xor():
    """Two binary attributes whose parity decides the class."""
    return Dataset.from_domains({"A": ["a1", "a2"], "B": ["b1", "b2"]},
                                "class", ["yes", "no"], XOR_ROWS)


@pytest.fixture
def weather():
    return Dataset.from_domains(WEATHER_DOMAINS, "play", ["yes", "no"], WEATHER_ROWS)


@pytest.fixture
def weather_arff():
    lines = ["% nominal weather data", "@relation weather", ""]
    for name, values in WEATHER_DOMAINS.items():
        lines.append(f"@attribute {name} {{{', '.join(values)}}}")
    lines += ["@attribute play {yes, no}", "", "@data"]
    lines += [",".join(row) for row in WEATHER_ROWS]
    return "\n".join(lines) + "\n"
