"""
BAC gauge: a bar from 0 to a maximum BAC, coloured by guidance tier.
Produces data for any frontend, or a PNG image via matplotlib.
"""

import io
from pathlib import Path

from drink_safer.drive import CAUTION, CAUTION_BAC, LEGAL_LIMIT_BAC, SAFE, UNSAFE, tier_for

DEFAULT_MAX_BAC = 0.3

BAND_COLORS = {
    SAFE: "#16a34a",
    CAUTION: "#eab308",
    UNSAFE: "#dc2626",
}


def gauge_data(bac: float, max_value: float = DEFAULT_MAX_BAC) -> dict:
    """Fill fraction (0 to 1) and colour band for a BAC value."""
    if max_value <= 0:
        raise ValueError("max_value must be > 0")
    fraction = max(0.0, min(bac / max_value, 1.0))
    band = tier_for(bac)
    return {
        "value": bac,
        "max_value": max_value,
        "fraction": fraction,
        "band": band,
        "color": BAND_COLORS[band],
    }


def _draw(bac: float, max_value: float):
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    gauge = gauge_data(bac, max_value)
    fig, ax = plt.subplots(figsize=(6, 1.2))
    ax.barh([0], [max_value], color="#9ca3af", alpha=0.3, height=0.6)
    ax.barh([0], [gauge["fraction"] * max_value], color=gauge["color"], height=0.6)
    for threshold in (CAUTION_BAC, LEGAL_LIMIT_BAC):
        if threshold < max_value:
            ax.axvline(x=threshold, color="#374151", linestyle="--", linewidth=1)
    ax.set_xlim(0, max_value)
    ax.set_yticks([])
    ax.set_xlabel("BAC (%)")
    ax.set_title(f"Current BAC: {bac:.3f}")
    fig.tight_layout()
    return fig, plt


def save_gauge_image(bac: float, output_path: str = "bac_gauge.png", max_value: float = DEFAULT_MAX_BAC) -> str:
    """Draw the gauge and save it. Returns the path written."""
    fig, plt = _draw(bac, max_value)
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path


def gauge_png(bac: float, max_value: float = DEFAULT_MAX_BAC) -> bytes:
    fig, plt = _draw(bac, max_value)
    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=100)
    plt.close(fig)
    return buf.getvalue()
