import plotly.graph_objects as go
import pytest

import dicedist.report as report
from dicedist.distribution import Distribution


def test_to_dataframe() -> None:
    d = Distribution.die(2) + Distribution.die(2)
    data = report.to_dataframe(d)

    assert list(data.columns) == ["value", "occurrences", "probability"]
    assert list(data["value"]) == [2, 3, 4]
    assert list(data["occurrences"]) == [1, 2, 1]
    assert list(data["probability"]) == pytest.approx([0.25, 0.5, 0.25])


def test_plot(monkeypatch) -> None:
    figures = []

    def write_image(self, file, format):
        figures.append(self)
        file.write(b"png")

    monkeypatch.setattr(go.Figure, "write_image", write_image)

    image = report.plot(
        {
            "1d4": Distribution.die(4),
            "1d6 - 1": Distribution.die(6) + Distribution.modifier(-1),
        }
    )

    assert image == b"png"
    (figure,) = figures
    assert [trace.name for trace in figure.data] == ["1d4", "1d6 - 1"]
    assert list(figure.data[0].x) == [0, 1, 2, 3, 4, 5]
    assert list(figure.data[0].y) == pytest.approx([0, 0.25, 0.25, 0.25, 0.25, 0])
