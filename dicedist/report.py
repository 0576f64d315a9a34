import io
import typing

import pandas
import plotly.express as px

from dicedist.distribution import Distribution


def to_dataframe(distribution: Distribution) -> pandas.DataFrame:
    records = [
        (value, occurrences, distribution.probability_f64(value))
        for value, occurrences in distribution.occurrences()
    ]
    return pandas.DataFrame.from_records(
        records, columns=["value", "occurrences", "probability"]
    )


def plot(distributions: typing.Mapping[str, Distribution]) -> bytes:
    """Bar chart of the labelled distributions, overlaid, as PNG data."""
    possible_values = set()
    for distribution in distributions.values():
        possible_values.update(value for value, _ in distribution.occurrences())
    possible_values = sorted(possible_values)

    data = pandas.DataFrame(
        {
            label: [distribution.probability_f64(v) for v in possible_values]
            for label, distribution in distributions.items()
        },
        index=pandas.Index(possible_values, name="value"),
    ).reset_index()

    fig = px.bar(data, x="value", y=list(data.columns[1:]), barmode="overlay")
    fig.update_xaxes(title_text="value")
    fig.update_yaxes(title_text="probability", tickformat="%")
    stream = io.BytesIO()
    fig.write_image(file=stream, format="png")
    return stream.getvalue()
