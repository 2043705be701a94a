"""
Visualization Engine
====================
Chart renderers for a Trajectory:
  1. Motion chart (x and v over t, twin axes)
  2. Series panel (x, v, a small multiples)
  3. Edit comparison (before/after a single-point edit)
  4. Dashboard with the run parameters

Renderers only read the trajectory they are given. Each function returns
the figure and optionally saves it as PNG.
"""

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import matplotlib.gridspec as gridspec
from typing import Optional
import os

from .parameters import KinematicParameters
from .trajectory import Trajectory


# ── Style Configuration ───────────────────────────────────────────────────
STYLE = {
    'bg_color': '#0a0a0a',
    'text_color': '#e0e0e0',
    'grid_color': '#333333',
    'font_family': 'monospace',
}

SERIES_STYLE = {
    'position': {'attr': 'positions', 'label': 'x (m)',
                 'title': 'x(t) — Displacement', 'color': '#ff9800'},
    'velocity': {'attr': 'velocities', 'label': 'v (m/s)',
                 'title': 'v(t) — Velocity', 'color': '#2196f3'},
    'acceleration': {'attr': 'accelerations', 'label': 'a (m/s²)',
                     'title': 'a(t) — Acceleration', 'color': '#f44336'},
}

LEGEND_STYLE = dict(facecolor='#1a1a1a', edgecolor='#444',
                    labelcolor=STYLE['text_color'])


def _apply_dark_style(fig, axes):
    """Apply consistent dark theme to figure and axes."""
    fig.patch.set_facecolor(STYLE['bg_color'])
    if not isinstance(axes, np.ndarray):
        axes = [axes]
    else:
        axes = axes.flatten()

    for ax in axes:
        ax.set_facecolor(STYLE['bg_color'])
        ax.tick_params(colors=STYLE['text_color'])
        ax.xaxis.label.set_color(STYLE['text_color'])
        ax.yaxis.label.set_color(STYLE['text_color'])
        ax.title.set_color(STYLE['text_color'])
        ax.grid(True, color=STYLE['grid_color'], alpha=0.4, linewidth=0.5)
        for spine in ax.spines.values():
            spine.set_color(STYLE['grid_color'])


def _require_data(trajectory: Trajectory):
    if trajectory.is_empty:
        raise ValueError('No data points generated – check time interval and dt.')


def _save(fig, save_path):
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight',
                    facecolor=STYLE['bg_color'])


def ensure_output_dir(path: str = 'outputs'):
    os.makedirs(path, exist_ok=True)
    return path


# ══════════════════════════════════════════════════════════════════════════
#  1. Motion Chart
# ══════════════════════════════════════════════════════════════════════════

def plot_motion(trajectory: Trajectory, save_path: str = None,
                show: bool = False) -> plt.Figure:
    """Displacement and velocity against time on twin y axes."""
    _require_data(trajectory)
    fig, ax = plt.subplots(figsize=(12, 6))
    ax_v = ax.twinx()
    _apply_dark_style(fig, ax)
    _apply_dark_style(fig, ax_v)

    pos, vel = SERIES_STYLE['position'], SERIES_STYLE['velocity']
    line_x, = ax.plot(trajectory.times, trajectory.positions,
                      color=pos['color'], linewidth=2.5, label=pos['title'] + ' (m)')
    line_v, = ax_v.plot(trajectory.times, trajectory.velocities,
                        color=vel['color'], linewidth=2.5, label=vel['title'] + ' (m/s)')
    ax_v.grid(False)

    ax.set_xlabel('t (s)', fontsize=12)
    ax.set_ylabel(pos['label'], fontsize=12)
    ax_v.set_ylabel(vel['label'], fontsize=12)
    ax.set_title(f'Motion — {trajectory.n_points} samples, dt={trajectory.dt:g} s',
                 fontsize=13, fontweight='bold')
    ax.legend(handles=[line_x, line_v], loc='upper left', fontsize=10,
              **LEGEND_STYLE)

    plt.tight_layout()
    _save(fig, save_path)
    if show:
        plt.show()
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  2. Series Panel
# ══════════════════════════════════════════════════════════════════════════

def plot_series(trajectory: Trajectory, save_path: str = None) -> plt.Figure:
    """One small chart per series, sharing the time axis."""
    _require_data(trajectory)
    fig, axes = plt.subplots(1, 3, figsize=(18, 5), sharex=True)
    _apply_dark_style(fig, axes)

    for ax, (key, style) in zip(axes, SERIES_STYLE.items()):
        ax.plot(trajectory.times, getattr(trajectory, style['attr']),
                'o-', color=style['color'], linewidth=2, markersize=3)
        ax.set_xlabel('t (s)')
        ax.set_ylabel(style['label'])
        ax.set_title(style['title'], fontweight='bold')

    plt.tight_layout()
    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  3. Edit Comparison
# ══════════════════════════════════════════════════════════════════════════

def plot_edit_comparison(before: Trajectory, after: Trajectory,
                         series: str, index: int,
                         save_path: str = None) -> plt.Figure:
    """Overlay all three series before and after editing ``series[index]``."""
    _require_data(before)
    _require_data(after)
    if series not in SERIES_STYLE:
        raise ValueError(
            f"Unknown series '{series}'. Available: {list(SERIES_STYLE)}"
        )

    fig, axes = plt.subplots(1, 3, figsize=(18, 5))
    _apply_dark_style(fig, axes)

    for ax, (key, style) in zip(axes, SERIES_STYLE.items()):
        ax.plot(before.times, getattr(before, style['attr']),
                color='#888888', linewidth=2, linestyle='--', label='Before')
        ax.plot(after.times, getattr(after, style['attr']),
                color=style['color'], linewidth=2, label='After')
        if key == series:
            ax.plot(after.times[index], getattr(after, style['attr'])[index],
                    'o', color='#ffeb3b', markersize=10, label='Edited point',
                    zorder=5)
        ax.set_xlabel('t (s)')
        ax.set_ylabel(style['label'])
        ax.set_title(style['title'], fontweight='bold')
        ax.legend(fontsize=9, **LEGEND_STYLE)

    fig.suptitle(f'Edit Propagation — {series}[{index}]',
                 fontsize=14, fontweight='bold', color=STYLE['text_color'], y=1.02)
    plt.tight_layout()
    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  4. Dashboard
# ══════════════════════════════════════════════════════════════════════════

def plot_dashboard(trajectory: Trajectory,
                   params: Optional[KinematicParameters] = None,
                   save_path: str = None) -> plt.Figure:
    """Motion chart, series panel and parameter readout on one figure."""
    _require_data(trajectory)
    fig = plt.figure(figsize=(18, 10))
    fig.patch.set_facecolor(STYLE['bg_color'])

    gs = gridspec.GridSpec(2, 3, figure=fig, hspace=0.35, wspace=0.3)

    # ── Motion (top, spans 2 cols) ──
    ax_main = fig.add_subplot(gs[0, :2])
    _apply_dark_style(fig, ax_main)
    ax_main.plot(trajectory.times, trajectory.positions,
                 color=SERIES_STYLE['position']['color'], linewidth=2.5)
    ax_main.set_xlabel('t (s)')
    ax_main.set_ylabel('x (m)')
    ax_main.set_title('DISPLACEMENT', fontweight='bold', fontsize=13)

    # ── Parameters panel (top-right) ──
    ax_info = fig.add_subplot(gs[0, 2])
    ax_info.set_facecolor('#111111')
    ax_info.axis('off')

    metrics = [('POINTS', f'{trajectory.n_points}'),
               ('STEP', f'{trajectory.dt:g} s'),
               ('WINDOW', f'{trajectory.times[0]:.2f} → {trajectory.times[-1]:.2f} s'),
               ('FINAL X', f'{trajectory.positions[-1]:.3f} m'),
               ('FINAL V', f'{trajectory.velocities[-1]:.3f} m/s')]
    if params is not None:
        metrics = [('x0', f'{params.x0:g} m'),
                   ('v0', f'{params.v0:g} m/s'),
                   ('a', f'{params.a:g} m/s²')] + metrics

    for i, (label, value) in enumerate(metrics):
        y_pos = 0.92 - i * 0.115
        ax_info.text(0.05, y_pos, label, fontsize=10, fontweight='bold',
                     color='#888888', transform=ax_info.transAxes, fontfamily='monospace')
        ax_info.text(0.95, y_pos, value, fontsize=11, fontweight='bold',
                     color='#00d4ff', transform=ax_info.transAxes,
                     ha='right', fontfamily='monospace')
    ax_info.set_title('RUN DATA', fontweight='bold',
                      color=STYLE['text_color'], fontsize=13, pad=10)

    # ── Small charts (bottom row) ──
    for col, style in enumerate(SERIES_STYLE.values()):
        ax = fig.add_subplot(gs[1, col])
        _apply_dark_style(fig, ax)
        ax.plot(trajectory.times, getattr(trajectory, style['attr']),
                color=style['color'], linewidth=2)
        ax.set_xlabel('t (s)')
        ax.set_ylabel(style['label'])
        ax.set_title(style['title'].upper(), fontweight='bold')

    fig.suptitle('KINEMATICS DASHBOARD', fontsize=16, fontweight='bold',
                 color='#00d4ff', y=0.98)
    _save(fig, save_path)
    return fig
