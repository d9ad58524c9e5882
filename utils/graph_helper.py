from typing import Sequence

import pyqtgraph as pg

from app.calculation import smooth


def setup_wpm_plot(plot_widget: pg.PlotWidget, line_color: str, time_limit: int = 60):
    plot_widget.setBackground(None)
    plot_widget.showGrid(x=False, y=True, alpha=0.15)
    plot_widget.setMenuEnabled(False)
    plot_widget.setMouseEnabled(x=False, y=False)
    plot_widget.hideButtons()
    plot_widget.setClipToView(True)
    plot_widget.setXRange(1, max(1, time_limit), padding=0.02)
    plot_widget.setLabel('left', 'WPM')
    plot_widget.getAxis('left').setStyle(tickLength=-5)
    curve = plot_widget.plot([], [], pen=pg.mkPen(line_color, width=2.5), antialias=True)
    return curve


def update_wpm_curve(curve, wpm_history: Sequence[int], smoothing: float = 0.35):
    # one sample per elapsed second, so x starts at 1
    y = smooth(wpm_history, smoothing) if smoothing else list(wpm_history)
    x = list(range(1, len(y) + 1))
    curve.setData(x, y)
