from __future__ import annotations

from typing import Any, Dict, Mapping

import altair as alt
import pandas as pd

alt.data_transformers.disable_max_rows()


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def split_donut(counts: Mapping[str, int], *, title: str = "") -> Dict[str, Any]:
    df = pd.DataFrame({"label": list(counts.keys()), "count": [int(v) for v in counts.values()]})
    chart = (
        alt.Chart(df, title=title)
        .mark_arc(innerRadius=50)
        .encode(
            theta=alt.Theta("count:Q"),
            color=alt.Color("label:N", title=None),
            tooltip=[alt.Tooltip("label:N", title=""), alt.Tooltip("count:Q", title="Count")],
        )
    )
    return to_vega_spec(chart)
