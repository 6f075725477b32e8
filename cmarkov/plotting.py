"""
Copyright (c) 2025 Ynosound.
All rights reserved.
"""
from io import BytesIO

import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg as FigureCanvas
from matplotlib.figure import Figure
from PIL import Image


def plot_layer_sizes(raw_sizes, final_sizes, output_file=None, figsize=(8, 3)):
    """Bar chart of the number of rows per layer, before the constraint and
    after pruning. Returns the image as an RGB numpy array."""
    fig = Figure(figsize=figsize)
    ax = fig.add_subplot()
    layers = np.arange(len(final_sizes))
    ax.bar(layers - 0.2, raw_sizes, width=0.4, label="raw", color="lightgray")
    ax.bar(layers + 0.2, final_sizes, width=0.4, label="pruned", color="steelblue")
    ax.set_xlabel("Layer")
    ax.set_ylabel("Rows")
    ax.set_title("Transition matrices sizes")
    ax.set_xticks(layers)
    ax.legend()

    canvas = FigureCanvas(fig)
    buf = BytesIO()
    canvas.print_png(buf)
    buf.seek(0)
    image = Image.open(buf).convert("RGB")
    if output_file is not None:
        image.save(output_file)
    return np.array(image)
